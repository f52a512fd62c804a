"""Calling user callables with a flexible positional contract."""

import inspect
from typing import Any, Callable, Optional


def positional_arity(func: Callable) -> Optional[int]:
    """Number of positional parameters ``func`` accepts.

    Returns:
        The count, or None when the callable takes ``*args`` or its
        signature cannot be read
    """
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return None

    count = 0
    for param in signature.parameters.values():
        if param.kind == param.VAR_POSITIONAL:
            return None
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
            count += 1
    return count


def call_with_arity(func: Callable, *args: Any) -> Any:
    """Call ``func`` with as many leading ``args`` as it accepts positionally.

    Lets ``def producer(props)`` stand in for ``def producer(props, context)``.
    """
    arity = positional_arity(func)
    if arity is None:
        return func(*args)
    return func(*args[:arity])
