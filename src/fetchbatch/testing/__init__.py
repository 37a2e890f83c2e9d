"""Test doubles for code built on fetchbatch."""

from .mock import AsyncRecordingResource, Call, RecordingResource

__all__ = ["RecordingResource", "AsyncRecordingResource", "Call"]
