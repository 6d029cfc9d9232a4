"""Where document files live on disk and where they go in the archive."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from pmdump.records import FilePath


class _Version(Protocol):
    id: object
    number: int
    file_name: str | None


class _Document(Protocol):
    id: object
    versions: Iterable[_Version]


def docver_dest(version_id: object, file_name: str | None) -> str:
    """Archive path of a document version's file, sharded by its identifier."""
    uid = str(version_id)
    return f"docvers/{uid[0:2]}/{uid[2:4]}/{uid}/{file_name}"


def get_file_paths(
    docs: Iterable[_Document], user_id: object, media_root: str
) -> list[FilePath]:
    """Source and archive paths of every version file of the given documents.

    Each document needs ``id`` and ``versions``; each version needs ``id``,
    ``number`` and ``file_name``.
    """
    return [
        FilePath(
            source=(
                f"{media_root}/docs/user_{user_id}/document_{doc.id}"
                f"/v{version.number}/{version.file_name}"
            ),
            dest=docver_dest(version.id, version.file_name),
        )
        for doc in docs
        for version in doc.versions
    ]