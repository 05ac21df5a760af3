from pathlib import Path
from typing import Optional

import psycopg2
import psycopg2.extras

from .config import settings


SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"


def get_conn(database_url: Optional[str] = None):
    return psycopg2.connect(
        database_url or settings.database_url,
        cursor_factory=psycopg2.extras.RealDictCursor,
    )


def load_schema() -> str:
    return SCHEMA_PATH.read_text(encoding="utf-8")
