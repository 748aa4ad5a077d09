"""Internal error types for cratedocs.

These never cross the public operation boundary: ``CrateDocsService`` catches
them and returns ``str(error)`` as the text payload.
"""

from typing import Optional


class CrateDocsError(Exception):
    """Base class for all documentation lookup failures."""


class TransportError(CrateDocsError):
    """Connection, DNS or protocol failure before a response arrived."""


class BodyReadError(CrateDocsError):
    """The response arrived but its body could not be read."""

    def __str__(self) -> str:
        return f"Failed to read response body: {self.args[0]}"


class HTTPStatusError(CrateDocsError):
    """Non-2xx response from an upstream host."""

    def __init__(self, status_code: int, reason: str = ""):
        self.status_code = status_code
        self.reason = reason
        super().__init__(self.status)

    @property
    def status(self) -> str:
        return f"{self.status_code} {self.reason}".strip()


class InvalidItemPathError(CrateDocsError):
    """Item path is empty once split into segments."""

    def __str__(self) -> str:
        return "Invalid item path. Expected format: module::path::ItemName"


class ItemNotFoundError(CrateDocsError):
    """Every candidate item kind failed to resolve."""

    def __init__(self, last_error: Optional[str] = None):
        self.last_error = last_error
        super().__init__(last_error)

    def __str__(self) -> str:
        return (
            "Failed to fetch item documentation. No matching item found. "
            f"Last error: {self.last_error or 'Unknown error'}"
        )
