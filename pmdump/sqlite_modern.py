"""Reading users, folder trees and document versions from a version 2.1/3.2 SQLite database."""

from __future__ import annotations

import os
import sqlite3
import uuid
from collections.abc import Iterable
from os import PathLike

from pmdump.records import DocumentVersion, DocumentVersionPageRow, FlatNode, User

_INBOX_ROOT = ".inbox"
_HOME_ROOT = ".home"

_USERS_QUERY = (
    "SELECT id, home_folder_id, inbox_folder_id, username, email FROM core_user"
)

_FLAT_NODES_QUERY = """
    WITH RECURSIVE node_tree AS (
      SELECT
        n.id,
        n.title,
        n.ctype AS model,
        n.title AS full_path
      FROM core_basetreenode n
      WHERE parent_id IS NULL AND title = '{root}' AND user_id = ?

      UNION ALL

      SELECT
        n.id,
        n.title,
        n.ctype AS model,
        CAST(nt.full_path || '/' || n.title AS VARCHAR(200)) AS full_path
      FROM core_basetreenode n
      INNER JOIN node_tree nt ON n.parent_id = nt.id
      LEFT JOIN core_document doc ON doc.basetreenode_ptr_id = n.id
      WHERE n.user_id = ?
    )
    SELECT
      id,
      title,
      model,
      full_path,
      LENGTH(full_path) AS path_len
    FROM node_tree
    ORDER BY path_len ASC
"""

_INBOX_QUERY = _FLAT_NODES_QUERY.format(root=_INBOX_ROOT)
_HOME_QUERY = _FLAT_NODES_QUERY.format(root=_HOME_ROOT)

_DOCUMENT_VERSIONS_QUERY = """
    SELECT
      d.basetreenode_ptr_id AS document_id,
      dv.id AS document_version_id,
      dv.number AS document_version_number,
      dv.text AS document_text,
      dv.file_name AS file_name,
      dv.lang AS lang,
      dv.size AS size,
      p.id AS page_id,
      p.number AS page_number,
      p.text AS page_text
    FROM core_documentversion dv
    JOIN core_page p ON p.document_version_id = dv.id
    JOIN core_document d ON d.basetreenode_ptr_id = dv.document_id
    WHERE d.basetreenode_ptr_id = ?
"""


def _uuid_param(value: object) -> object:
    """Identifier as stored by the database: 32 hex digits without hyphens."""
    if isinstance(value, uuid.UUID):
        return value.hex
    if isinstance(value, str):
        try:
            return uuid.UUID(value).hex
        except ValueError:
            return value
    return value


def _to_uuid(value: object) -> uuid.UUID | None:
    """A UUID read from a column; NULL stays None."""
    if value is None or isinstance(value, uuid.UUID):
        return value
    if isinstance(value, (bytes, bytearray)) and len(value) == 16:
        return uuid.UUID(bytes=bytes(value))
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("ascii")
    return uuid.UUID(str(value))


def open_sqlite(path: str | PathLike) -> sqlite3.Connection:
    """Open an existing SQLite database file.

    Raises OSError when ``path`` is not a readable regular file, instead of
    letting SQLite create a new, empty database there.
    """
    if not (os.path.isfile(path) and os.access(path, os.R_OK)):
        raise OSError(f'"{os.fspath(path)}" is not a readable file')
    return sqlite3.connect(path)


def without_inbox_prefix(path: str) -> str:
    """Strip the leading ``.inbox`` from a full path."""
    return path[len(_INBOX_ROOT):]


def without_home_prefix(path: str) -> str:
    """Strip the leading ``.home`` from a full path."""
    return path[len(_HOME_ROOT):]


def get_users(db: sqlite3.Connection) -> list[User]:
    """All users with their home and inbox folder identifiers."""
    return [
        User(
            id=_to_uuid(user_id),
            home_folder_id=_to_uuid(home_id),
            inbox_folder_id=_to_uuid(inbox_id),
            username=username,
            email=email,
        )
        for user_id, home_id, inbox_id, username, email in db.execute(_USERS_QUERY)
    ]


def _flat_nodes(db: sqlite3.Connection, query: str, user_id: object) -> list[FlatNode]:
    param = _uuid_param(user_id)
    return [
        FlatNode(id=_to_uuid(node_id), title=title, model=model, full_path=full_path)
        for node_id, title, model, full_path, _path_len in db.execute(
            query, (param, param)
        )
    ]


def get_home_flat_nodes(db: sqlite3.Connection, user_id: object) -> list[FlatNode]:
    """Nodes under the user's ``.home`` root, including the root, shortest paths first."""
    return _flat_nodes(db, _HOME_QUERY, user_id)


def get_inbox_flat_nodes(db: sqlite3.Connection, user_id: object) -> list[FlatNode]:
    """Nodes under the user's ``.inbox`` root, including the root, shortest paths first."""
    return _flat_nodes(db, _INBOX_QUERY, user_id)


def get_document_versions_for_node(
    db: sqlite3.Connection, node_id: object
) -> list[DocumentVersionPageRow]:
    """One row per page of every version of the given document."""
    return [
        DocumentVersionPageRow(
            document_id=_to_uuid(document_id),
            document_version_id=_to_uuid(version_id),
            document_version_number=version_number,
            document_version_text=version_text,
            file_name=file_name,
            lang=lang,
            size=size,
            page_id=_to_uuid(page_id),
            page_number=page_number,
            page_text=page_text,
        )
        for (
            document_id,
            version_id,
            version_number,
            version_text,
            file_name,
            lang,
            size,
            page_id,
            page_number,
            page_text,
        ) in db.execute(_DOCUMENT_VERSIONS_QUERY, (_uuid_param(node_id),))
    ]


def group_document_versions(
    rows: Iterable[DocumentVersionPageRow],
) -> list[DocumentVersion]:
    """Collect page rows into document versions, in order of first appearance."""
    versions: dict[object, DocumentVersion] = {}
    for row in rows:
        existing = versions.get(row.document_version_id)
        if existing is None:
            versions[row.document_version_id] = row.to_document_version()
        else:
            existing.pages.append(row.to_page())
    return list(versions.values())