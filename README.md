# pmdump

`pmdump` reads the SQLite database of a document management installation
and collects what is needed to move its content elsewhere: users, their
home and inbox folder trees, documents with their versions and pages, and
the paths of the files on disk that belong to each document version.

## Installation

```
pip install .
```

## Configuration

Settings come from a YAML file. Every value is read as a string, so
`app_version: 3.10` stays `"3.10"`. Unknown keys are ignored.

```yaml
database_url: sqlite:///var/lib/dms/db.sqlite3
media_root: /var/lib/dms/media
target_file: /tmp/export.tar.gz
app_version: "3.2"
```

| key            | meaning                                              |
|----------------|------------------------------------------------------|
| `database_url` | URL of the source database (`sqlite://` + path)      |
| `media_root`   | directory that holds the document files              |
| `target_file`  | full path of the archive to produce                  |
| `app_version`  | version of the application the database belongs to   |

`pmdump.config.read_config(file_name)` returns these settings as a
`Config` dataclass.

## Command line

```
pmdump [-c CONFIG] [-f TARGET] list
```

`list` prints the settings read from the configuration file:

```
Configuration file: config.yaml
Database URL: sqlite:///var/lib/dms/db.sqlite3
Media Root: /var/lib/dms/media
Target File: /tmp/export.tar.gz
App Version: 3.2
```

- `-c`, `--config`: settings file, `pmdump.yaml` by default.
- `-f`, `--file`: archive path to show instead of `target_file`.

If the file cannot be read or parsed, the error is printed to standard
error and the exit status is 1. Run `pmdump --help` for the full usage.

## Library use

```python
from pmdump.config import read_config
from pmdump.versions import validate_export_config
from pmdump.database import open_database, get_users

settings = read_config("config.yaml")
validate_export_config(settings)

with open_database(settings.database_url, settings.app_version) as conn:
    for user in get_users(conn):
        print(user.username, user.email)
```

### Versions and validation

`pmdump.versions.AppVersion` lists the known versions: 2.0, 2.1, 3.2, 3.3
and 3.4. `validate_export_config(settings)` accepts 2.0, 2.1, 3.2 and 3.3,
and rejects version 2.0 together with a Postgres, MariaDB or MySQL URL.
`validate_import_config(settings)` accepts only 3.4. Both return the
`AppVersion` and raise `ConfigValidationError` (a `ValueError`) otherwise.

### Reading a database

`pmdump.database.open_database(dburl, app_version)` opens a SQLite file
named by a `sqlite://` URL and returns a `pmdump.backends.Connection`, which
closes itself when used as a context manager. A path that is not a
readable file raises `OSError` rather than creating an empty database.

With that connection, `pmdump.database` offers:

| function                              | versions       | returns                                  |
|---------------------------------------|----------------|------------------------------------------|
| `get_users(conn)`                     | 2.0, 2.1, 3.2  | `LegacyUser` (2.0) or `User` records     |
| `get_home_flat_nodes(conn, user_id)`  | 2.0, 2.1, 3.2  | `FlatNode` records, shortest paths first |
| `get_inbox_flat_nodes(conn, user_id)` | 2.0, 2.1, 3.2  | `FlatNode` records, shortest paths first |
| `get_document_page_rows(conn, user_id)` | 2.0          | `DocumentPageRow` records                |

Version 2.0 users and page rows get fresh UUIDs next to their legacy
integer ids. Other versions raise `ValueError`.

`pmdump.documents.load_document_versions(conn, node_id)` returns the
versions of one document (2.1 and 3.2), each a `DocumentVersion` holding
its `Page` records, in order of first appearance.

The lower-level readers live in `pmdump.sqlite_legacy` (version 2.0) and
`pmdump.sqlite_modern` (versions 2.1 and 3.2); the latter also has
`without_home_prefix`, `without_inbox_prefix` and
`group_document_versions`.

### File paths

`pmdump.paths.get_file_paths(docs, user_id, media_root)` maps every
version of the given documents to a `FilePath` with

- `source`: `<media_root>/docs/user_<user_id>/document_<doc id>/v<number>/<file name>`
- `dest`: `docvers/<first two id chars>/<next two>/<id>/<file name>`,
  as built by `docver_dest(version_id, file_name)`.

## What pmdump does not do

- It does not write the tar.gz archive or a YAML dump; `target_file` is
  only read and shown.
- It does not import data into a target database; `validate_import_config`
  only checks the settings.
- Only SQLite databases can be read. Postgres URLs are rejected, and
  version 3.3 databases can be opened but not read.
- The command line has only the `list` command.

## Running the tests

```
pip install .[test]
pytest
```