"""Reading users, folder trees and pages from a version 2.0 SQLite database."""

from __future__ import annotations

import os
import sqlite3
from os import PathLike

from pmdump.records import DocumentPageRow, FlatNode, LegacyUser

_USERS_QUERY = "SELECT id, username, email FROM core_user"

_FLAT_NODES_QUERY = """
    WITH RECURSIVE node_tree AS (
      SELECT
        n.id,
        n.title,
        ct.model AS model,
        n.title AS full_path,
        doc.version,
        doc.file_name,
        doc.page_count
      FROM core_basetreenode n
      INNER JOIN django_content_type ct ON ct.id = n.polymorphic_ctype_id
      LEFT JOIN core_document doc ON doc.basetreenode_ptr_id = n.id
      WHERE parent_id IS NULL AND {root_condition} AND user_id = ?

      UNION ALL

      SELECT
        n.id,
        n.title,
        ct.model AS model,
        nt.full_path || '/' || n.title AS full_path,
        doc.version,
        doc.file_name,
        doc.page_count
      FROM core_basetreenode n
      INNER JOIN node_tree nt ON n.parent_id = nt.id
      INNER JOIN django_content_type ct ON ct.id = n.polymorphic_ctype_id
      LEFT JOIN core_document doc ON doc.basetreenode_ptr_id = n.id
      WHERE n.user_id = ?
    )
    SELECT
      id,
      title,
      model,
      full_path,
      LENGTH(full_path) AS path_len,
      version,
      file_name,
      page_count
    FROM node_tree
    ORDER BY path_len ASC
"""

_INBOX_QUERY = _FLAT_NODES_QUERY.format(root_condition="title = '.inbox'")
_HOME_QUERY = _FLAT_NODES_QUERY.format(root_condition="title != '.inbox'")

_PAGE_ROWS_QUERY = """
    SELECT p.id,
      p.number,
      p.text,
      p.document_id,
      doc.version
    FROM core_page p
    JOIN core_document doc
      ON p.document_id = doc.basetreenode_ptr_id
    JOIN core_basetreenode node ON node.id = doc.basetreenode_ptr_id
    WHERE node.user_id = ?
"""


def open_sqlite(path: str | PathLike) -> sqlite3.Connection:
    """Open an existing SQLite database file.

    Raises OSError when ``path`` is not a readable regular file, instead of
    letting SQLite create a new, empty database there.
    """
    if not (os.path.isfile(path) and os.access(path, os.R_OK)):
        raise OSError(f'"{os.fspath(path)}" is not a readable file')
    return sqlite3.connect(path)


def get_users(db: sqlite3.Connection) -> list[LegacyUser]:
    """All users, each given a fresh UUID next to its legacy integer id."""
    return [
        LegacyUser(legacy_id=legacy_id, username=username, email=email)
        for legacy_id, username, email in db.execute(_USERS_QUERY)
    ]


def _flat_nodes(db: sqlite3.Connection, query: str, user_id: object) -> list[FlatNode]:
    return [
        FlatNode(
            id=node_id,
            title=title,
            model=model,
            full_path=full_path,
            version=version,
            file_name=file_name,
            page_count=page_count,
        )
        for node_id, title, model, full_path, _path_len, version, file_name, page_count
        in db.execute(query, (user_id, user_id))
    ]


def get_home_flat_nodes(db: sqlite3.Connection, user_id: object) -> list[FlatNode]:
    """Nodes of the user's home tree (every root but ``.inbox``), shortest paths first."""
    return _flat_nodes(db, _HOME_QUERY, user_id)


def get_inbox_flat_nodes(db: sqlite3.Connection, user_id: object) -> list[FlatNode]:
    """Nodes under the user's ``.inbox`` root, including the root, shortest paths first."""
    return _flat_nodes(db, _INBOX_QUERY, user_id)


def get_document_page_rows(
    db: sqlite3.Connection, user_id: object
) -> list[DocumentPageRow]:
    """Pages of all the user's documents, each with fresh page and document UUIDs."""
    return [
        DocumentPageRow(
            page_legacy_id=page_id,
            page_number=number,
            text=text,
            document_legacy_id=document_id,
            document_version=version,
        )
        for page_id, number, text, document_id, version in db.execute(
            _PAGE_ROWS_QUERY, (user_id,)
        )
    ]