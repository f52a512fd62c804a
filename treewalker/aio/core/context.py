"""Context channels threaded through a walk.

Two independent channels reach every node:

- The overlay channel: an immutable chain mapping a provider identity to
  its published value. Entering a provider builds a new link; siblings and
  the caller keep the overlay they already hold.
- The legacy channel: a flat dictionary that stateful producers extend
  for their children by returning extra keys from ``get_child_context()``.
"""

from collections.abc import Mapping
from typing import Any, Iterator, Optional

_MISSING = object()


class ContextOverlay(Mapping):
    """Persistent identity-keyed context mapping.

    Each overlay is one link: an identity, its value and the overlay it
    shadows. Lookups walk from the newest link outwards, so the closest
    enclosing provider always wins.

    Example:
        >>> root = ContextOverlay.empty()
        >>> inner = root.push(theme, 'dark')
        >>> inner.lookup(theme, 'light'), root.lookup(theme, 'light')
        ('dark', 'light')
    """

    __slots__ = ('_identity', '_value', '_parent', '_depth')

    def __init__(self, identity: Any = _MISSING, value: Any = None,
                 parent: Optional['ContextOverlay'] = None):
        self._identity = identity
        self._value = value
        self._parent = parent
        self._depth = 0 if parent is None else parent._depth + 1

    @classmethod
    def empty(cls) -> 'ContextOverlay':
        return cls()

    def push(self, identity: Any, value: Any) -> 'ContextOverlay':
        """Return a new overlay where ``identity`` resolves to ``value``.

        ``self`` is left untouched.
        """
        return ContextOverlay(identity, value, self)

    def lookup(self, identity: Any, fallback: Any = None) -> Any:
        """Return the newest value pushed for ``identity`` or ``fallback``."""
        link = self
        while link is not None and link._identity is not _MISSING:
            if link._identity is identity:
                return link._value
            link = link._parent
        return fallback

    def _links(self) -> Iterator['ContextOverlay']:
        link = self
        while link is not None and link._identity is not _MISSING:
            yield link
            link = link._parent

    # Mapping interface, for visitors that want to inspect the overlay

    def __getitem__(self, identity: Any) -> Any:
        value = self.lookup(identity, _MISSING)
        if value is _MISSING:
            raise KeyError(identity)
        return value

    def __iter__(self) -> Iterator[Any]:
        seen = []
        for link in self._links():
            if not any(link._identity is s for s in seen):
                seen.append(link._identity)
                yield link._identity

    def __len__(self) -> int:
        return sum(1 for _ in self)

    @property
    def depth(self) -> int:
        """Number of provider pushes between this overlay and the empty one."""
        return self._depth

    def __repr__(self) -> str:
        return f"ContextOverlay(depth={self._depth}, identities={len(self)})"


def resolve_consumer_value(overlay: ContextOverlay, context: Any) -> Any:
    """Value a consumer of ``context`` sees under ``overlay``.

    Falls back to the context's ``default_value`` when no enclosing
    provider published one.
    """
    return overlay.lookup(context, getattr(context, 'default_value', None))


def merge_legacy_context(inbound: Optional[Mapping], extra: Optional[Mapping]) -> dict:
    """Merge ``extra`` on top of ``inbound`` into a new dictionary."""
    merged = dict(inbound or {})
    merged.update(extra or {})
    return merged
