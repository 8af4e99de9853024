"""Read-only HTTP API over the fleet core."""
