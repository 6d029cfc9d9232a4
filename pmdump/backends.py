"""Opening a database connection for a given application version."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlsplit

from pmdump import sqlite_legacy, sqlite_modern
from pmdump.versions import AppVersion


class DatabaseKind(str, Enum):
    """Kind of database engine behind a connection."""

    SQLITE = "sqlite"
    POSTGRES = "postgres"

    def __str__(self) -> str:
        return self.value


@dataclass
class Connection:
    """An open database together with the application version it belongs to."""

    app_version: AppVersion
    kind: DatabaseKind
    db: sqlite3.Connection

    def close(self) -> None:
        self.db.close()

    def __enter__(self) -> Connection:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def open_connection(dburl: str, app_version: AppVersion | str) -> Connection:
    """Open the database named by ``dburl``.

    Raises ValueError for an unknown version or an unsupported database URL
    and OSError when a SQLite file cannot be read.
    """
    version = AppVersion(app_version)
    try:
        parsed = urlsplit(dburl)
    except ValueError as exc:
        raise ValueError(f"Error parsing dburl {dburl}: {exc}") from exc

    if parsed.scheme.startswith("sqlite"):
        opener = (
            sqlite_legacy.open_sqlite
            if version is AppVersion.V2_0
            else sqlite_modern.open_sqlite
        )
        return Connection(
            app_version=version, kind=DatabaseKind.SQLITE, db=opener(parsed.path)
        )

    if parsed.scheme.startswith("postgres") and version is not AppVersion.V2_0:
        raise ValueError(
            f'database open: db type "{DatabaseKind.POSTGRES}" not supported'
        )

    raise ValueError(f'database open: app version "{version}" not supported')