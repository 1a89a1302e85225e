"""
Test utilities for distinct_value.

Shared upstream sources, listener recorders and memory assertions.
"""

from .memory_utils import assert_collected, assert_no_object_leak, count_types
from .sources import Recorder, TrackingSource

__all__ = [
    "assert_collected",
    "assert_no_object_leak",
    "count_types",
    "Recorder",
    "TrackingSource",
]
