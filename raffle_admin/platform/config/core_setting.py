from pathlib import Path
from typing import Optional

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Raffle Admin'
    VERSION: str = '0.1.0'
    DEBUG: bool = False

    # Backend
    API_BASE_URL: str = 'http://127.0.0.1:8000'
    API_PREFIX: str = '/api'
    API_TOKEN: Optional[SecretStr] = None
    REQUEST_TIMEOUT_SECONDS: float = 10.0

    @field_validator('API_BASE_URL', mode='before')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        if isinstance(v, str):
            return v.strip().rstrip('/')
        return v

    @field_validator('API_PREFIX', mode='before')
    @classmethod
    def normalize_prefix(cls, v: str) -> str:
        if isinstance(v, str):
            v = v.strip().strip('/')
            return f'/{v}' if v else ''
        return v

    # Draw defaults (used when the active draw cannot be resolved)
    DEFAULT_DRAW_ID: int = 1
    SEAT_PRICE: int = 35000

    # Whether an annulled (VOID) seat may be sold again; confirm with the business owner
    VOID_SEATS_RESELLABLE: bool = False

    # Reporting views (receivables, expenses, productivity, draw list)
    REPORT_CACHE_TTL_SECONDS: float = 30.0
    REPORT_RETRY_ATTEMPTS: int = 3
    REPORT_RETRY_BACKOFF_SECONDS: float = 0.6

    # Receipts (comprobantes)
    RECEIPT_DIR: Path = _PROJECT_ROOT / 'receipts'


settings = Settings()  # type: ignore
