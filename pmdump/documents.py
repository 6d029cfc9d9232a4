"""Loading the versions and pages of a single document."""

from __future__ import annotations

from pmdump import sqlite_modern
from pmdump.backends import Connection, DatabaseKind
from pmdump.records import DocumentVersion
from pmdump.versions import AppVersion

_SUPPORTED_VERSIONS = frozenset({AppVersion.V2_1, AppVersion.V3_2})


def load_document_versions(conn: Connection, node_id: object) -> list[DocumentVersion]:
    """All versions of the document ``node_id``, each holding its pages.

    Versions come in order of first appearance in the database. Raises
    ValueError when the connection's version or database kind keeps
    document versions in a way that is not supported.
    """
    if conn.app_version not in _SUPPORTED_VERSIONS:
        raise ValueError(
            "database InsertDocVersionsAndPages: "
            f'app version "{conn.app_version}" not supported'
        )
    if conn.kind is not DatabaseKind.SQLITE:
        raise ValueError(
            f'database InsertDocVersionsAndPages: db type "{conn.kind}" not supported'
        )
    rows = sqlite_modern.get_document_versions_for_node(conn.db, node_id)
    return sqlite_modern.group_document_versions(rows)