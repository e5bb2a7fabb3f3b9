# src/gigs/core/__init__.py
"""Core infrastructure: tabular ingestion, configuration, logging."""

from gigs.core.config import GigsSettings, load_settings
from gigs.core.logging import configure_logging

__all__ = [
    "GigsSettings",
    "configure_logging",
    "load_settings",
]
