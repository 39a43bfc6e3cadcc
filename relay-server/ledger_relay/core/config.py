"""Relay server settings, one nested section per concern.

Environment variables use `__` between section and field, e.g.
`CHAIN__RPC_URL` or `RELAY__REPLAY_WINDOW_SECONDS`.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 7569
    reload: bool = False


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./relay.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None
    auto_create: bool = True


class ChainSettings(BaseModel):
    rpc_url: str = ""
    chain_id: int = 84532
    contract_address: str = ""
    abi_path: Optional[Path] = None
    private_key: str = Field(default="", repr=False)
    request_timeout: int = 30
    confirmation_timeout: float = 120.0
    poll_latency: float = 2.0


class RelaySettings(BaseModel):
    replay_window_seconds: int = Field(default=300, ge=0)
    reject_duplicate_signatures: bool = False
    transactions_page_size: int = Field(default=100, ge=1)


class SecuritySettings(BaseModel):
    admin_token: Optional[str] = Field(default=None, repr=False)


class LoggingSettings(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Settings(BaseSettings):
    """Process settings, read from the environment and an optional `.env` file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    project_name: str = "Ledger Relay Server"
    api_prefix: str = "/api"
    cors_origins: list[str] = ["*"]

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    chain: ChainSettings = ChainSettings()
    relay: RelaySettings = RelaySettings()
    security: SecuritySettings = SecuritySettings()
    logging: LoggingSettings = LoggingSettings()

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port

    @property
    def replay_window(self) -> int:
        return self.relay.replay_window_seconds

    @property
    def admin_token(self) -> Optional[str]:
        return self.security.admin_token


@lru_cache()
def get_settings() -> Settings:
    return Settings()
