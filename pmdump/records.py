"""Plain records shared by the export and import code."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum

INBOX = "inbox"
HOME = "home"
ENG = "eng"  # default OCR language
UNKNOWN = "UNKNOWN"  # default OCR status


class NodeKind(str, Enum):
    """Kind of a node in a user's folder tree."""

    FOLDER = "folder"
    DOCUMENT = "document"

    def __str__(self) -> str:
        return self.value


@dataclass
class FlatNode:
    """One row of a recursive node query: a node together with its full path."""

    id: object = None
    title: str = ""
    model: str = ""
    full_path: str = ""
    version: int | None = None
    file_name: str | None = None
    page_count: int | None = None

    @property
    def kind(self) -> NodeKind:
        """The node kind named by ``model``; raises ValueError if unknown."""
        return NodeKind(self.model.lower())

    @property
    def is_document(self) -> bool:
        return self.kind is NodeKind.DOCUMENT

    @property
    def is_folder(self) -> bool:
        return self.kind is NodeKind.FOLDER


@dataclass
class Page:
    """A single page of a document version."""

    id: object = None
    number: int = 0
    text: str | None = None


@dataclass
class DocumentVersion:
    """A version of a document with its pages."""

    id: object = None
    number: int = 0
    file_name: str | None = None
    lang: str | None = None
    size: int = 0
    text: str | None = None
    pages: list[Page] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages)


@dataclass
class DocumentVersionPageRow:
    """One row joining a document version with one of its pages."""

    document_id: object = None
    document_version_id: object = None
    document_version_number: int = 0
    document_version_text: str | None = None
    file_name: str | None = None
    lang: str | None = None
    size: int = 0
    page_id: object = None
    page_number: int = 0
    page_text: str | None = None

    def to_page(self) -> Page:
        """The page described by this row."""
        return Page(id=self.page_id, number=self.page_number, text=self.page_text)

    def to_document_version(self) -> DocumentVersion:
        """The document version described by this row, holding just this row's page."""
        return DocumentVersion(
            id=self.document_version_id,
            number=self.document_version_number,
            file_name=self.file_name,
            lang=self.lang,
            size=self.size,
            text=self.document_version_text,
            pages=[self.to_page()],
        )


@dataclass
class DocumentPageRow:
    """A page row of a legacy database, with fresh identifiers for the target."""

    page_legacy_id: int = 0
    page_number: int = 0
    text: str | None = None
    document_legacy_id: int = 0
    document_version: int = 0
    page_id: uuid.UUID = field(default_factory=uuid.uuid4)
    document_id: uuid.UUID = field(default_factory=uuid.uuid4)


@dataclass
class LegacyUser:
    """A user of a legacy installation, keyed by an integer id."""

    legacy_id: int = 0
    username: str = ""
    email: str | None = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)


@dataclass
class User:
    """A user with its home and inbox folder identifiers."""

    id: object = None
    home_folder_id: object = None
    inbox_folder_id: object = None
    username: str = ""
    email: str | None = None


@dataclass(frozen=True)
class FilePath:
    """A file to archive: where it is on disk and where it goes in the archive."""

    source: str
    dest: str