"""Exceptions raised by the fleet core."""

from __future__ import annotations


class OpsHubError(Exception):
    """Base class for OpsHub errors."""


class DataIntegrityError(OpsHubError, ValueError):
    """A workflow record violates the data contract (unknown status, missing fields, ...)."""
