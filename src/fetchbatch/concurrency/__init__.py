"""Bridging between synchronous callers and async resources."""

from .interop import run_sync

__all__ = ["run_sync"]
