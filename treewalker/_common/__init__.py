"""Common helpers shared across TreeWalker modules.

This internal package contains pure computation with no knowledge of the
walk itself. It should NOT be imported directly by users.

Important: This package must NEVER import from aio to avoid circular
dependencies.
"""

from .calling import call_with_arity, positional_arity

__all__ = [
    'call_with_arity',
    'positional_arity',
]
