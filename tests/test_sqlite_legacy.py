import sqlite3
import uuid

import pytest

from pmdump.sqlite_legacy import (
    get_document_page_rows,
    get_home_flat_nodes,
    get_inbox_flat_nodes,
    get_users,
    open_sqlite,
)

SCHEMA = """
CREATE TABLE core_user (id INTEGER PRIMARY KEY, username TEXT, email TEXT);
CREATE TABLE django_content_type (id INTEGER PRIMARY KEY, model TEXT);
CREATE TABLE core_basetreenode (
    id INTEGER PRIMARY KEY, title TEXT, polymorphic_ctype_id INTEGER,
    parent_id INTEGER, user_id INTEGER
);
CREATE TABLE core_document (
    basetreenode_ptr_id INTEGER PRIMARY KEY, version INTEGER,
    file_name TEXT, page_count INTEGER
);
CREATE TABLE core_page (
    id INTEGER PRIMARY KEY, number INTEGER, text TEXT, document_id INTEGER
);
"""

FOLDER_CT = 1
DOCUMENT_CT = 2


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "legacy.sqlite3"
    conn = sqlite3.connect(path)
    conn.executescript(SCHEMA)
    conn.executemany(
        "INSERT INTO core_user VALUES (?, ?, ?)",
        [(1, "alice", "alice@example.com"), (2, "bob", "bob@example.com")],
    )
    conn.executemany(
        "INSERT INTO django_content_type VALUES (?, ?)",
        [(FOLDER_CT, "folder"), (DOCUMENT_CT, "document")],
    )
    conn.executemany(
        "INSERT INTO core_basetreenode VALUES (?, ?, ?, ?, ?)",
        [
            (10, ".inbox", FOLDER_CT, None, 1),
            (11, "scan.pdf", DOCUMENT_CT, 10, 1),
            (20, "Invoices", FOLDER_CT, None, 1),
            (21, "march.pdf", DOCUMENT_CT, 20, 1),
            (22, "Archive", FOLDER_CT, 20, 1),
            (23, "old.pdf", DOCUMENT_CT, 22, 1),
            (30, ".inbox", FOLDER_CT, None, 2),
            (31, "Notes", FOLDER_CT, None, 2),
        ],
    )
    conn.executemany(
        "INSERT INTO core_document VALUES (?, ?, ?, ?)",
        [(11, 1, "scan.pdf", 1), (21, 2, "march.pdf", 2), (23, 1, "old.pdf", 1)],
    )
    conn.executemany(
        "INSERT INTO core_page VALUES (?, ?, ?, ?)",
        [
            (100, 1, "scan text", 11),
            (101, 1, "march one", 21),
            (102, 2, "march two", 21),
            (103, 1, "old text", 23),
        ],
    )
    conn.commit()
    conn.close()
    return path


@pytest.fixture
def db(db_path):
    conn = open_sqlite(db_path)
    yield conn
    conn.close()


def test_open_missing_file_raises(tmp_path):
    with pytest.raises(OSError, match="is not a readable file"):
        open_sqlite(tmp_path / "missing.sqlite3")


def test_open_directory_raises(tmp_path):
    with pytest.raises(OSError, match="is not a readable file"):
        open_sqlite(tmp_path)


def test_open_does_not_create_file(tmp_path):
    path = tmp_path / "absent.db"
    with pytest.raises(OSError):
        open_sqlite(path)
    assert not path.exists()


def test_get_users(db):
    users = get_users(db)
    assert [(u.legacy_id, u.username, u.email) for u in users] == [
        (1, "alice", "alice@example.com"),
        (2, "bob", "bob@example.com"),
    ]
    assert all(isinstance(u.id, uuid.UUID) for u in users)
    assert len({u.id for u in users}) == len(users)


def test_home_flat_nodes_paths(db):
    nodes = get_home_flat_nodes(db, 1)
    assert {n.full_path for n in nodes} == {
        "Invoices",
        "Invoices/march.pdf",
        "Invoices/Archive",
        "Invoices/Archive/old.pdf",
    }


def test_home_flat_nodes_sorted_by_path_length(db):
    lengths = [len(n.full_path) for n in get_home_flat_nodes(db, 1)]
    assert lengths == sorted(lengths)


def test_home_flat_nodes_document_fields(db):
    by_path = {n.full_path: n for n in get_home_flat_nodes(db, 1)}
    doc = by_path["Invoices/march.pdf"]
    assert doc.is_document
    assert (doc.id, doc.version, doc.file_name, doc.page_count) == (
        21,
        2,
        "march.pdf",
        2,
    )
    folder = by_path["Invoices"]
    assert folder.is_folder
    assert folder.version is None and folder.file_name is None


def test_home_excludes_other_users(db):
    nodes = get_home_flat_nodes(db, 2)
    assert [n.full_path for n in nodes] == ["Notes"]


def test_inbox_flat_nodes(db):
    nodes = get_inbox_flat_nodes(db, 1)
    assert [n.full_path for n in nodes] == [".inbox", ".inbox/scan.pdf"]
    assert nodes[1].file_name == "scan.pdf"


def test_inbox_of_user_without_documents(db):
    nodes = get_inbox_flat_nodes(db, 2)
    assert [(n.id, n.full_path) for n in nodes] == [(30, ".inbox")]


def test_unknown_user_has_no_nodes(db):
    assert get_home_flat_nodes(db, 99) == []
    assert get_inbox_flat_nodes(db, 99) == []


def test_document_page_rows(db):
    rows = get_document_page_rows(db, 1)
    assert sorted(
        (r.page_legacy_id, r.page_number, r.text, r.document_legacy_id, r.document_version)
        for r in rows
    ) == [
        (100, 1, "scan text", 11, 1),
        (101, 1, "march one", 21, 2),
        (102, 2, "march two", 21, 2),
        (103, 1, "old text", 23, 1),
    ]


def test_document_page_rows_have_fresh_ids(db):
    rows = get_document_page_rows(db, 1)
    ids = [r.page_id for r in rows] + [r.document_id for r in rows]
    assert len(set(ids)) == len(ids)


def test_document_page_rows_other_user_empty(db):
    assert get_document_page_rows(db, 2) == []