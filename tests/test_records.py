import uuid

import pytest

from pmdump.records import (
    DocumentPageRow,
    DocumentVersion,
    DocumentVersionPageRow,
    FilePath,
    FlatNode,
    LegacyUser,
    NodeKind,
    Page,
    User,
)


def test_node_kind_values_from_source():
    assert NodeKind("folder") is NodeKind.FOLDER
    assert NodeKind("document") is NodeKind.DOCUMENT
    assert str(NodeKind.FOLDER) == "folder"


@pytest.mark.parametrize(
    "model,kind",
    [("folder", NodeKind.FOLDER), ("document", NodeKind.DOCUMENT), ("Folder", NodeKind.FOLDER)],
)
def test_flat_node_kind(model, kind):
    node = FlatNode(id=1, title="x", model=model, full_path="x")
    assert node.kind is kind
    assert node.is_document == (kind is NodeKind.DOCUMENT)
    assert node.is_folder == (kind is NodeKind.FOLDER)


def test_flat_node_unknown_model_raises():
    with pytest.raises(ValueError):
        FlatNode(model="basetreenode").kind


def test_row_to_page_and_version():
    doc_id, ver_id, page_id = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()
    row = DocumentVersionPageRow(
        document_id=doc_id,
        document_version_id=ver_id,
        document_version_number=2,
        document_version_text="body",
        file_name="a.pdf",
        lang="deu",
        size=10,
        page_id=page_id,
        page_number=1,
        page_text="page body",
    )
    assert row.to_page() == Page(id=page_id, number=1, text="page body")
    version = row.to_document_version()
    assert version.id == ver_id
    assert version.number == 2
    assert version.file_name == "a.pdf"
    assert version.lang == "deu"
    assert version.size == 10
    assert version.text == "body"
    assert version.pages == [row.to_page()]
    assert version.page_count == 1


def test_document_version_page_count_tracks_pages():
    version = DocumentVersion()
    assert version.page_count == 0
    version.pages.append(Page(number=1))
    version.pages.append(Page(number=2))
    assert version.page_count == len(version.pages)


def test_document_versions_do_not_share_pages():
    first, second = DocumentVersion(), DocumentVersion()
    first.pages.append(Page())
    assert second.pages == []


def test_fresh_identifiers_are_unique():
    rows = [DocumentPageRow() for _ in range(3)]
    ids = {r.page_id for r in rows} | {r.document_id for r in rows}
    assert len(ids) == 6
    users = [LegacyUser(legacy_id=i, username=f"u{i}") for i in range(3)]
    assert len({u.id for u in users}) == 3


def test_user_fields_roundtrip():
    home, inbox = uuid.uuid4(), uuid.uuid4()
    user = User(id=uuid.uuid4(), home_folder_id=home, inbox_folder_id=inbox,
                username="john", email="john@example.com")
    assert user.home_folder_id == home
    assert user.inbox_folder_id == inbox
    assert user.email == "john@example.com"


def test_file_path_is_hashable_and_frozen():
    path = FilePath(source="/media/x", dest="docvers/x")
    assert {path, FilePath(source="/media/x", dest="docvers/x")} == {path}
    with pytest.raises(AttributeError):
        path.dest = "other"