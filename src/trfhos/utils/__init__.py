"""Utility functions (trf-hos-finder)."""

from trfhos.utils.logging import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
