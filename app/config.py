"""Environment-based configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

from sqlalchemy.engine import URL


def resolve_database_url() -> str:
    """Resolve DB connection string.

    Priority:
      1) DATABASE_URL (explicit)
      2) Build from PG* env vars (common Postgres convention)
      3) Fallback to local sqlite
    """

    explicit = os.getenv("DATABASE_URL")
    if explicit:
        return explicit

    host = os.getenv("PGHOST")
    user = os.getenv("PGUSER")
    database = os.getenv("PGDATABASE")
    port_raw = os.getenv("PGPORT")

    if host and user and database:
        password = os.getenv("PGPASSWORD")
        sslmode = os.getenv("PGSSLMODE", "require")

        try:
            port = int(port_raw) if port_raw else 5432
        except ValueError:
            port = 5432

        query = {"sslmode": sslmode} if sslmode else {}
        url = URL.create(
            drivername="postgresql+psycopg2",
            username=user,
            password=password,
            host=host,
            port=port,
            database=database,
            query=query,
        )
        return str(url)

    return "sqlite:///./app.db"


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class BaseConfig:
    """Base configuration shared by all environments."""

    APP_ENV: str = os.getenv("APP_ENV", "development")
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret")

    DATABASE_URL: str = resolve_database_url()
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Pricing. Amounts are decimal strings; parsed with app.domain helpers.
    BET_COST: str = os.getenv("BET_COST", "3.50")
    PRIZE_TABLE: str = os.getenv("PRIZE_TABLE", "11:6,12:12,13:30,14:1500,15:1000000")

    # Result sources, tried in this order.
    RESULT_SOURCES: str = os.getenv("RESULT_SOURCES", "google,api_caixa,loterias_api")
    SOURCE_TIMEOUT_SECONDS: float = _float_env("SOURCE_TIMEOUT_SECONDS", 10.0)
    CAIXA_API_URL: str = os.getenv(
        "CAIXA_API_URL",
        "https://servicebus2.caixa.gov.br/portaldeloterias/api/lotofacil",
    )
    LOTERIAS_API_URL: str = os.getenv(
        "LOTERIAS_API_URL",
        "https://loteriascaixa-api.herokuapp.com/api/lotofacil/latest",
    )
    GOOGLE_SEARCH_URL: str = os.getenv(
        "GOOGLE_SEARCH_URL",
        "https://www.google.com/search?q=resultado+lotofacil+de+hoje",
    )

    TIMEZONE: str = os.getenv("TIMEZONE", "America/Sao_Paulo")


@dataclass(frozen=True)
class DevelopmentConfig(BaseConfig):
    """Development configuration."""

    DEBUG: bool = True


@dataclass(frozen=True)
class ProductionConfig(BaseConfig):
    """Production configuration."""

    DEBUG: bool = False


def get_config() -> type[BaseConfig]:
    """Resolve configuration class based on APP_ENV."""

    env = os.getenv("APP_ENV", "development").lower().strip()
    if env == "production":
        return ProductionConfig
    return DevelopmentConfig


def load_settings(config: object | None = None) -> dict[str, object]:
    """Uppercase settings of ``config`` with the environment re-read now.

    Class attributes above are evaluated at import time, which can precede
    loading of .env files (scripts load them inside ``main``). Values present
    in the environment at call time win.
    """

    cfg = config if config is not None else get_config()
    settings = {name: getattr(cfg, name) for name in dir(cfg) if name.isupper()}

    for name, value in settings.items():
        if isinstance(value, bool) or not isinstance(value, (str, float)):
            continue
        raw = os.getenv(name)
        if not raw:
            continue
        settings[name] = _float_env(name, value) if isinstance(value, float) else raw

    settings["DATABASE_URL"] = resolve_database_url()
    return settings
