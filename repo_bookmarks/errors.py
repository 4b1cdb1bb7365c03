"""Exception types shared across modules."""

from __future__ import annotations


class MissingArgumentError(ValueError):
    """A required argument (such as a folder name) was empty or absent."""


class MalformedInputError(ValueError):
    """Structured input (props, serialized bookmarks) could not be parsed."""


class UpstreamUnavailableError(RuntimeError):
    """A repository data source was unreachable or returned a failure."""
