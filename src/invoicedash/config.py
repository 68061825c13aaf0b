import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load the appropriate .env file on module import
env = os.environ.get("INVOICEDASH_ENV", "development").lower()
env_file = f".env.{env}"
if os.path.exists(env_file):
    load_dotenv(env_file)
else:
    # Fall back to the default .env file
    load_dotenv()


class ConfigurationError(RuntimeError):
    """Raised when required process configuration is missing."""


@dataclass
class Config:
    environment: str
    database_url: str
    locale: str
    currency: str
    log_level: str
    log_format: str
    statement_timeout_ms: int | None

    @classmethod
    def from_env(cls) -> "Config":
        database_url = os.environ.get("DATABASE_URL", "").strip()
        if not database_url:
            raise ConfigurationError(
                f"DATABASE_URL is not set (environment: {env}, env file: {env_file})"
            )

        timeout = os.environ.get("STATEMENT_TIMEOUT_MS", "").strip()

        return cls(
            environment=env,
            database_url=database_url,
            locale=os.environ.get("INVOICEDASH_LOCALE", "en_US"),
            currency=os.environ.get("INVOICEDASH_CURRENCY", "USD").upper(),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
            log_format=os.environ.get("LOG_FORMAT", "console").lower(),
            statement_timeout_ms=int(timeout) if timeout else None,
        )


config = Config.from_env()
