"""Logging micro API for ui-layer-builder."""

from .lib import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
