"""Raffle Service Interfaces"""

from raffle_admin.service.raffle.app.interface.i_raffle_gateway import IRaffleGateway
from raffle_admin.service.raffle.app.interface.i_receipt_writer import IReceiptWriter

__all__ = [
    'IRaffleGateway',
    'IReceiptWriter',
]
