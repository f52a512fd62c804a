"""Testing utilities for TreeWalker consumers."""

from .fixtures import VisitRecorder, resolve_later

__all__ = ['VisitRecorder', 'resolve_later']
