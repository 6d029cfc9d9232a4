"""Supported application versions and validation of settings against them."""

from __future__ import annotations

from enum import Enum
from urllib.parse import urlsplit

from pmdump.config import Config


class AppVersion(str, Enum):
    """Version of the document management system a database belongs to."""

    V2_0 = "2.0"
    V2_1 = "2.1"
    V3_2 = "3.2"
    V3_3 = "3.3"
    V3_4 = "3.4"

    def __str__(self) -> str:
        return self.value


EXPORT_VERSIONS = (AppVersion.V2_0, AppVersion.V2_1, AppVersion.V3_2, AppVersion.V3_3)
IMPORT_VERSIONS = (AppVersion.V3_4,)

# Database scheme prefixes that version 2.0 dumps do not support.
_V2_0_UNSUPPORTED = (
    ("postgres", "Postgres"),
    ("maria", "MariaDB"),
    ("my", "MySQL"),
)


class ConfigValidationError(ValueError):
    """Settings that cannot be used for the requested operation."""


def _unsupported(version: str) -> ConfigValidationError:
    return ConfigValidationError(f'AppVersion "{version}" not supported')


def validate_export_config(settings: Config) -> AppVersion:
    """Check that settings allow an export; return the version to export."""
    try:
        version = AppVersion(settings.app_version)
    except ValueError:
        raise _unsupported(settings.app_version) from None
    if version not in EXPORT_VERSIONS:
        raise _unsupported(settings.app_version)

    try:
        scheme = urlsplit(settings.database_url).scheme
    except ValueError as exc:
        raise ConfigValidationError(
            f"Error parsing dburl {settings.database_url}: {exc}"
        ) from exc

    if version is AppVersion.V2_0:
        for prefix, name in _V2_0_UNSUPPORTED:
            if scheme.startswith(prefix):
                raise ConfigValidationError(
                    f"Export of Papermerge DMS v2.0 and {name} database is not implemented.\n"
                    "In case you need this feature please open a ticket in the project's "
                    "issue tracker.\n"
                    "In the ticket post docker compose file with your configurations."
                )
    return version


def validate_import_config(settings: Config) -> AppVersion:
    """Check that settings allow an import; return the target version."""
    if settings.app_version != AppVersion.V3_4.value:
        raise _unsupported(settings.app_version)
    return AppVersion.V3_4