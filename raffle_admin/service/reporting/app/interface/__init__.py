"""Reporting Service Interfaces"""

from raffle_admin.service.reporting.app.interface.i_draw_catalog_gateway import (
    IDrawCatalogGateway,
)
from raffle_admin.service.reporting.app.interface.i_report_gateway import IReportGateway

__all__ = [
    'IDrawCatalogGateway',
    'IReportGateway',
]
