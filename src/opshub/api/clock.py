"""Reference clock dependency; overridden in tests for deterministic labels."""

from __future__ import annotations

from datetime import UTC, datetime


def get_now() -> datetime:
    return datetime.now(UTC)
