"""
DistinctValue Subject Module
============================

This module contains the broadcast primitive every adapter fans out through.
"""

from .value_subject import ValueSubject

__all__ = ["ValueSubject"]
