"""
Error taxonomy shared by the core, the store binding and the API.

The API layer maps these onto HTTP responses in `freshtrack.main`.
"""


class FreshTrackError(Exception):
    """Base class for all inventory errors."""


class InvalidInput(FreshTrackError, ValueError):
    """Malformed input rejected before any derived computation."""


class InsufficientInput(FreshTrackError):
    """Recipe synthesis was asked to work with no candidate items.

    Kept apart from InvalidInput so callers can retry with a broader
    candidate set.
    """


class GenerationFailed(FreshTrackError):
    """A model-backed recipe strategy could not produce a usable draft."""


class NotFound(FreshTrackError):
    """A record does not exist for the requesting owner."""

    def __init__(self, kind: str, record_id) -> None:
        super().__init__(f"{kind} {record_id} not found")
        self.kind = kind
        self.record_id = record_id
