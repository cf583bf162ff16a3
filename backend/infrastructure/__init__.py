from __future__ import annotations

"""
Infrastructure layer for the watchlist core.

Concrete store adapters (in-memory and asyncpg-backed Postgres) plus the
bootstrap that wires them into the application services.
"""

__all__ = [
    "bootstrap",
    "persistence",
]
