"""Exception hierarchy for identifier annotation.

Only :class:`ConfigurationError` and :class:`ServiceError` abort an
annotation run. Identifiers without a mapping are not errors; they are
reported and handled by the merge step.
"""

from __future__ import annotations

from collections.abc import Sequence

__all__ = [
    "ProteinIdMapError",
    "ConfigurationError",
    "ServiceError",
    "MappingTableError",
]


class ProteinIdMapError(Exception):
    """Base class for all errors raised by ``protein_idmap``."""


class ConfigurationError(ProteinIdMapError):
    """Raised when the input table or the settings cannot be used."""

    def __init__(
        self,
        message: str,
        *,
        column: str | None = None,
        available_columns: Sequence[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.column = column
        self.available_columns = list(available_columns or [])

    @classmethod
    def missing_column(cls, column: str, available: Sequence[str]) -> ConfigurationError:
        names = ", ".join(str(name) for name in available)
        return cls(
            f"Column name does not exist in data: {column!r}. Available columns: {names}",
            column=column,
            available_columns=[str(name) for name in available],
        )


class ServiceError(ProteinIdMapError):
    """Raised when the annotation service fails or cannot be reached."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class MappingTableError(ProteinIdMapError):
    """Raised when a mapping table does not have unique source keys."""
