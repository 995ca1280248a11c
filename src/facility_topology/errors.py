"""Exception types raised by the topology package."""
from __future__ import annotations

from typing import Iterable


class TopologyError(RuntimeError):
    """Base class for topology failures."""


class ConfigurationError(TopologyError):
    """Raised when required configuration or catalog data is unavailable."""


class TypeResolutionError(ConfigurationError):
    """Raised when one or more required space types never received a numeric id."""

    def __init__(self, missing_names: Iterable[str]) -> None:
        self.missing_names = tuple(missing_names)
        super().__init__(f"Missing the following type ids: {', '.join(self.missing_names)}")


class InvalidInputError(TopologyError):
    """Raised when space records break the strict-tree invariants."""


class DigitalTwinsRequestError(TopologyError):
    """Raised when the Digital Twins management API answers with a non-success status."""

    def __init__(self, status: int, body: str, request_uri: str) -> None:
        super().__init__(f"Error when calling Digital Twins with request ({request_uri}): {status} {body[:512]}")
        self.status = status
        self.body = body
        self.request_uri = request_uri
