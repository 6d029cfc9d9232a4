"""Read users, folder trees, document versions and file paths from a document management SQLite database."""

__version__ = "0.1.0"