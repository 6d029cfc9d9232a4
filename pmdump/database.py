"""Version-aware reading from a source database."""

from __future__ import annotations

from pmdump import sqlite_legacy, sqlite_modern
from pmdump.backends import Connection, DatabaseKind, open_connection
from pmdump.records import DocumentPageRow, FlatNode, LegacyUser, User
from pmdump.versions import AppVersion

_MODERN_VERSIONS = frozenset({AppVersion.V2_1, AppVersion.V3_2})


def _unsupported_version(operation: str, conn: Connection) -> ValueError:
    return ValueError(
        f'database {operation}: app version "{conn.app_version}" not supported'
    )


def _require_sqlite(operation: str, conn: Connection) -> None:
    if conn.kind is not DatabaseKind.SQLITE:
        raise ValueError(f'database {operation}: db type "{conn.kind}" not supported')


def open_database(dburl: str, app_version: AppVersion | str) -> Connection:
    """Open the database at ``dburl`` for the given application version.

    Raises ValueError for an unknown version or unsupported URL and OSError
    when a SQLite file cannot be read.
    """
    try:
        version = AppVersion(app_version)
    except ValueError:
        raise ValueError(
            f'database open: app version "{app_version}" not supported'
        ) from None
    return open_connection(dburl, version)


def get_users(conn: Connection) -> list[LegacyUser] | list[User]:
    """All users of the source database."""
    if conn.app_version is AppVersion.V2_0:
        _require_sqlite("GetUsers", conn)
        return sqlite_legacy.get_users(conn.db)
    if conn.app_version in _MODERN_VERSIONS:
        _require_sqlite("GetUsers", conn)
        return sqlite_modern.get_users(conn.db)
    raise _unsupported_version("GetUsers", conn)


def get_home_flat_nodes(conn: Connection, user_id: object) -> list[FlatNode]:
    """Nodes of the user's home tree, shortest paths first."""
    if conn.app_version is AppVersion.V2_0:
        _require_sqlite("GetHomeFlatNodes", conn)
        return sqlite_legacy.get_home_flat_nodes(conn.db, user_id)
    if conn.app_version in _MODERN_VERSIONS:
        _require_sqlite("GetHomeFlatNodes", conn)
        return sqlite_modern.get_home_flat_nodes(conn.db, user_id)
    raise _unsupported_version("GetHomeFlatNodes", conn)


def get_inbox_flat_nodes(conn: Connection, user_id: object) -> list[FlatNode]:
    """Nodes of the user's inbox tree, shortest paths first."""
    if conn.app_version is AppVersion.V2_0:
        _require_sqlite("GetInboxFlatNodes", conn)
        return sqlite_legacy.get_inbox_flat_nodes(conn.db, user_id)
    if conn.app_version in _MODERN_VERSIONS:
        _require_sqlite("GetInboxFlatNodes", conn)
        return sqlite_modern.get_inbox_flat_nodes(conn.db, user_id)
    raise _unsupported_version("GetInboxFlatNodes", conn)


def get_document_page_rows(conn: Connection, user_id: object) -> list[DocumentPageRow]:
    """Pages of all the user's documents; only legacy databases keep them this way."""
    if conn.app_version is AppVersion.V2_0:
        _require_sqlite("GetDocumentPageRows", conn)
        return sqlite_legacy.get_document_page_rows(conn.db, user_id)
    raise _unsupported_version("GetDocumentPageRows", conn)