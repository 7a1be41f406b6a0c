"""Custom exceptions for docpress."""

from typing import Optional


class DocPressError(Exception):
    """Base exception for docpress errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class InvalidInputError(DocPressError):
    """Raised when content handed to a generator is null, empty or oversized."""

    pass


class LayoutError(DocPressError):
    """Raised when a block cannot be laid out, e.g. it has an unknown kind."""

    pass


class AssemblyError(DocPressError):
    """Raised when an internal PDF invariant is broken during assembly.

    A corrupt file is never returned: offsets, ``/Length`` values and object
    numbers are checked while the buffer is built and any mismatch aborts
    generation with this error.
    """

    pass


class OutputError(DocPressError):
    """Raised when a finished PDF cannot be written to storage."""

    pass
