from opentelemetry import trace

from raffle_admin.platform.logging.loguru_io import Logger
from raffle_admin.service.raffle.app.interface import IRaffleGateway
from raffle_admin.service.raffle.domain.entity.sale_entity import SaleSummary


class GetSaleSummaryUseCase:
    def __init__(self, *, gateway: IRaffleGateway) -> None:
        self.gateway = gateway
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def execute(self, *, sale_id: int) -> SaleSummary:
        with self.tracer.start_as_current_span(
            'use_case.get_sale_summary', attributes={'sale.id': sale_id}
        ):
            return await self.gateway.get_sale_summary(sale_id=sale_id)
