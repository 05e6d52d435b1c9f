"""Error taxonomy shared by the engine and the HTTP layer."""

from __future__ import annotations


class MatchingError(Exception):
    """Base class for failures surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict[str, str]:
        return {"error": self.message}


class InvalidInputError(MatchingError):
    """Malformed identifier, pagination parameter or action."""

    status_code = 400


class NotFoundError(MatchingError):
    """A referenced user or profile does not exist."""

    status_code = 404


class ConflictError(MatchingError):
    """A uniqueness rule rejected the write, e.g. a repeated swipe."""

    status_code = 409


class RecordFormatError(MatchingError):
    """A stored record failed strict parsing into a domain entity."""

    status_code = 500

    def __init__(self, message: str = "Server failure") -> None:
        super().__init__(message)


__all__ = [
    "ConflictError",
    "InvalidInputError",
    "MatchingError",
    "NotFoundError",
    "RecordFormatError",
]
