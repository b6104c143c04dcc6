# wikitags/http/errors.py

from __future__ import annotations


class WikiTagsError(Exception):
    """Base class for failures that abort a category lookup."""

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class NetworkError(WikiTagsError):
    """Transport-level failure: connection refused, DNS, timeout, non-2xx status."""


class MalformedResponseError(WikiTagsError):
    """A response body did not have the structure the caller relies on."""
