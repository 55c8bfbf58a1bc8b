"""Utility modules for location review."""

from .retry import async_retry

__all__ = ["async_retry"]
