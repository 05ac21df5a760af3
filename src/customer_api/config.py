import os
from dataclasses import dataclass, field

from dotenv import load_dotenv


load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    """Application settings read from the environment (and ``.env``)."""

    database_url: str = field(
        default_factory=lambda: os.getenv("DATABASE_URL", "postgresql://localhost:5432/customers")
    )
    title: str = field(default_factory=lambda: os.getenv("APP_TITLE", "Customer API"))
    version: str = field(default_factory=lambda: os.getenv("APP_VERSION", "0.1.0"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    create_schema: bool = field(default_factory=lambda: _env_flag("CREATE_SCHEMA", "true"))


settings = Settings()
