"""Declarative node authoring surface.

A minimal way to build trees the walker understands. The walker itself only
relies on the attribute protocol documented on each class, so any object
exposing the same attributes can be walked.
"""

from typing import Any, Callable, Dict, Mapping, Optional

from .aio.core.classifier import CONSUMER_KIND, FORWARD_REF_KIND, PROVIDER_KIND
from .aio.core.instance import set_state


class Element:
    """A composite node: a producer reference plus an attribute bag.

    Attributes:
        type: Producer (function, Component subclass, descriptor) or any
            opaque tag such as a string for plain composites
        props: Attribute mapping; ``props['children']`` holds resolved children
        key: Optional sibling identity, never inspected by the walker
        ref: Optional reference handed to ref-forwarding producers
    """

    __slots__ = ('type', 'props', 'key', 'ref')

    def __init__(
        self,
        type: Any,
        props: Optional[Mapping[str, Any]] = None,
        key: Any = None,
        ref: Any = None,
    ):
        self.type = type
        self.props = dict(props or {})
        self.key = key
        self.ref = ref

    def __repr__(self) -> str:
        name = getattr(self.type, '__name__', None) or repr(self.type)
        return f"Element({name}, props={sorted(self.props)})"


def h(type: Any, props: Optional[Mapping[str, Any]] = None, *children: Any) -> Element:
    """Create an element.

    Positional children override ``props['children']``; a single child is
    stored as-is, several are stored as a list. ``key`` and ``ref`` are
    lifted out of props.

    Example:
        >>> h('div', None, h('span', None, 'hi'), 'there')
    """
    props = dict(props or {})
    key = props.pop('key', None)
    ref = props.pop('ref', None)
    if len(children) == 1:
        props['children'] = children[0]
    elif children:
        props['children'] = list(children)
    return Element(type, props, key=key, ref=ref)


class Component:
    """Base class for stateful producers.

    Subclasses override ``render()``. The walker creates one instance per
    element per walk and drives the lifecycle hooks a subclass declares:
    ``get_derived_state_from_props`` (static), ``UNSAFE_component_will_mount``
    or ``component_will_mount``, ``get_child_context`` and
    ``component_will_unmount``.
    """

    default_props: Dict[str, Any] = {}

    def __init__(self, props: Optional[Mapping[str, Any]] = None, context: Any = None):
        self.props = props if props is not None else {}
        self.context = context
        self.state = None

    def set_state(self, update: Any) -> None:
        """Merge a partial state (or the result of ``update(state, props, context)``)."""
        set_state(self, update)

    def render(self) -> Any:
        """Return this component's children.

        Must return synchronously. An awaitable result fails the walk with
        TypeError; fetch data in the visitor instead.
        """
        return None


class _ContextDescriptor:
    def __init__(self, context: 'Context'):
        self.context = context

    def __repr__(self) -> str:
        return f"<{self.__element_kind__} of {self.context!r}>"


class ContextProvider(_ContextDescriptor):
    """Publishes ``props['value']`` for its context to every descendant."""

    __element_kind__ = PROVIDER_KIND


class ContextConsumer(_ContextDescriptor):
    """Calls ``props['children'](value)`` with the nearest published value."""

    __element_kind__ = CONSUMER_KIND


class Context:
    """Identity token shared by a provider/consumer pair."""

    def __init__(self, default_value: Any = None, name: Optional[str] = None):
        self.default_value = default_value
        self.name = name
        self.provider = ContextProvider(self)
        self.consumer = ContextConsumer(self)

    def __repr__(self) -> str:
        return f"Context({self.name or hex(id(self))})"


def create_context(default_value: Any = None, name: Optional[str] = None) -> Context:
    return Context(default_value, name)


class ForwardRef:
    """Producer descriptor whose render receives ``(props, ref)``."""

    __element_kind__ = FORWARD_REF_KIND

    def __init__(self, render: Callable[[Mapping[str, Any], Any], Any]):
        self.render = render
        self.__name__ = getattr(render, '__name__', 'ForwardRef')

    def __repr__(self) -> str:
        return f"ForwardRef({self.__name__})"


def forward_ref(render: Callable[[Mapping[str, Any], Any], Any]) -> ForwardRef:
    return ForwardRef(render)


class Portal:
    """Side-channel subtree.

    ``container`` is an opaque placement the walker never inspects;
    ``children`` is walked as if the portal were not there.
    """

    __slots__ = ('children', 'container')

    def __init__(self, children: Any, container: Any = None):
        self.children = children
        self.container = container

    def __repr__(self) -> str:
        return f"Portal(container={self.container!r})"


def create_portal(children: Any, container: Any = None) -> Portal:
    return Portal(children, container)

