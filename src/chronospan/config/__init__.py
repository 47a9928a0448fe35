# src/chronospan/config/__init__.py
"""
chronospan.config
~~~~~~~~~~~~~~~~~

Engine settings (read from ``CHRONOSPAN_*`` environment variables) and
structlog setup for applications embedding the engine.

Basic usage::

    from chronospan.config import configure_logging, get_settings

    configure_logging(verbose=True)
    settings = get_settings()
    settings.skip_ahead                 # → False unless CHRONOSPAN_SKIP_AHEAD=1
"""

from __future__ import annotations

from chronospan.config.logging import configure_logging
from chronospan.config.settings import EngineSettings, get_settings

__all__ = [
    "EngineSettings",
    "configure_logging",
    "get_settings",
]
