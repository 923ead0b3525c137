"""Errors raised at the catalog fetch boundary."""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for failures talking to the upstream catalog API."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class NetworkFailure(CatalogError):
    """The request was rejected, timed out or returned a non-2xx status."""


class MalformedResponse(CatalogError):
    """The body was not JSON or did not have the expected shape."""
