# app/errors.py

from __future__ import annotations


class AdminError(Exception):
    """Base class for every error the admin core raises."""


class ConfigurationError(AdminError):
    """Required external credentials are missing."""


class NotFoundError(AdminError):
    def __init__(self, table: str, row_id: str):
        super().__init__(f"No row in '{table}' with id {row_id!r}")
        self.table = table
        self.row_id = row_id


class StorageError(AdminError):
    """A Supabase table or storage operation failed."""


class ReviewImportError(AdminError):
    """The Google Places fetch failed or returned something unusable."""


class ValidationError(AdminError):
    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
