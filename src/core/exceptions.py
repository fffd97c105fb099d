"""Custom exceptions for the simulated business search."""

from pathlib import Path


class SearchError(Exception):
    """Base exception for the business search."""

    pass


class ValidationError(SearchError):
    """A search input was empty or whitespace-only."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Please enter a {field} (got an empty value)")


class EmptyExportError(SearchError):
    """Export requested before any record was collected."""

    def __init__(self, fmt: str):
        self.fmt = fmt
        super().__init__(f"No data to export to {fmt.upper()}")


class ExportError(SearchError):
    """Writing an export file failed."""

    def __init__(self, path: Path, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to write {path}: {cause}")
