"""Segment test backends."""

from pyworkbench.hypothesis.backends.cpu import CPUSegmentTestBackend

__all__ = ['CPUSegmentTestBackend']
