"""
DistinctValue Types Module
==========================

Abstract stream types shared across the package.
"""

from .distinct_value_stream import DistinctValueStream

__all__ = ["DistinctValueStream"]
