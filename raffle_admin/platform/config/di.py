"""
https://python-dependency-injector.ets-labs.org/index.html
"""

from typing import Optional

from dependency_injector import containers, providers

from raffle_admin.platform.cache.report_cache import ReportCache
from raffle_admin.platform.config.core_setting import Settings
from raffle_admin.platform.http.api_client import ApiClient
from raffle_admin.platform.http.token_store import TokenStore
from raffle_admin.service.raffle.app.query.get_sale_summary_use_case import GetSaleSummaryUseCase
from raffle_admin.service.raffle.app.query.resolve_active_draw_use_case import (
    ResolveActiveDrawUseCase,
)
from raffle_admin.service.raffle.app.state.seat_grid_session import SeatGridSession
from raffle_admin.service.raffle.domain.value_object.seat_capability import SeatPolicy
from raffle_admin.service.raffle.driven_adapter.http_raffle_gateway import HttpRaffleGateway
from raffle_admin.service.raffle.driven_adapter.receipt_file_writer import ReceiptFileWriter
from raffle_admin.service.reporting.app.command.draw_catalog_use_case import DrawCatalogUseCase
from raffle_admin.service.reporting.app.command.expense_ledger_use_case import (
    ExpenseLedgerUseCase,
)
from raffle_admin.service.reporting.app.query.draw_dashboard_use_case import DrawDashboardUseCase
from raffle_admin.service.reporting.app.query.list_receivables_use_case import (
    ListReceivablesUseCase,
)
from raffle_admin.service.reporting.app.query.productivity_report_use_case import (
    ProductivityReportUseCase,
)
from raffle_admin.service.reporting.driven_adapter.http_draw_catalog_gateway import (
    HttpDrawCatalogGateway,
)
from raffle_admin.service.reporting.driven_adapter.http_report_gateway import HttpReportGateway


def _initial_token(settings: Settings) -> Optional[str]:
    return settings.API_TOKEN.get_secret_value() if settings.API_TOKEN else None


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Backend access
    token_store = providers.Singleton(
        TokenStore, token=providers.Callable(_initial_token, config_service)
    )
    api_client = providers.Singleton(
        ApiClient,
        base_url=config_service.provided.API_BASE_URL,
        timeout_seconds=config_service.provided.REQUEST_TIMEOUT_SECONDS,
        token_store=token_store,
    )

    # Shared state (singleton for cache)
    report_cache = providers.Singleton(
        ReportCache, ttl_seconds=config_service.provided.REPORT_CACHE_TTL_SECONDS
    )
    seat_policy = providers.Singleton(
        SeatPolicy, void_is_resellable=config_service.provided.VOID_SEATS_RESELLABLE
    )

    # Gateways
    raffle_gateway = providers.Singleton(
        HttpRaffleGateway,
        api_client=api_client,
        seat_policy=seat_policy,
        api_prefix=config_service.provided.API_PREFIX,
    )
    report_gateway = providers.Singleton(
        HttpReportGateway, api_client=api_client, api_prefix=config_service.provided.API_PREFIX
    )
    draw_catalog_gateway = providers.Singleton(
        HttpDrawCatalogGateway,
        api_client=api_client,
        api_prefix=config_service.provided.API_PREFIX,
    )
    receipt_writer = providers.Singleton(
        ReceiptFileWriter, receipt_dir=config_service.provided.RECEIPT_DIR
    )

    # Seat grid: a fresh registry, cart and orchestrator per session
    seat_grid_session = providers.Factory(
        SeatGridSession.create,
        gateway=raffle_gateway,
        default_draw_id=config_service.provided.DEFAULT_DRAW_ID,
        seat_price=config_service.provided.SEAT_PRICE,
        receipt_writer=receipt_writer,
        report_cache=report_cache,
    )

    # Stateless use cases
    resolve_active_draw_use_case = providers.Factory(
        ResolveActiveDrawUseCase,
        gateway=raffle_gateway,
        default_draw_id=config_service.provided.DEFAULT_DRAW_ID,
    )
    get_sale_summary_use_case = providers.Factory(GetSaleSummaryUseCase, gateway=raffle_gateway)

    list_receivables_use_case = providers.Factory(
        ListReceivablesUseCase,
        gateway=report_gateway,
        report_cache=report_cache,
        retry_attempts=config_service.provided.REPORT_RETRY_ATTEMPTS,
        retry_backoff_seconds=config_service.provided.REPORT_RETRY_BACKOFF_SECONDS,
    )
    expense_ledger_use_case = providers.Factory(
        ExpenseLedgerUseCase,
        gateway=report_gateway,
        report_cache=report_cache,
        retry_attempts=config_service.provided.REPORT_RETRY_ATTEMPTS,
        retry_backoff_seconds=config_service.provided.REPORT_RETRY_BACKOFF_SECONDS,
    )
    productivity_report_use_case = providers.Factory(
        ProductivityReportUseCase,
        gateway=report_gateway,
        report_cache=report_cache,
        retry_attempts=config_service.provided.REPORT_RETRY_ATTEMPTS,
        retry_backoff_seconds=config_service.provided.REPORT_RETRY_BACKOFF_SECONDS,
    )
    draw_dashboard_use_case = providers.Factory(
        DrawDashboardUseCase,
        gateway=report_gateway,
        report_cache=report_cache,
        retry_attempts=config_service.provided.REPORT_RETRY_ATTEMPTS,
        retry_backoff_seconds=config_service.provided.REPORT_RETRY_BACKOFF_SECONDS,
    )
    draw_catalog_use_case = providers.Factory(
        DrawCatalogUseCase,
        gateway=draw_catalog_gateway,
        report_cache=report_cache,
        retry_attempts=config_service.provided.REPORT_RETRY_ATTEMPTS,
        retry_backoff_seconds=config_service.provided.REPORT_RETRY_BACKOFF_SECONDS,
    )


container = Container()


def setup() -> None:
    container.config_service()


async def cleanup() -> None:
    await container.api_client().aclose()
    container.reset_singletons()
