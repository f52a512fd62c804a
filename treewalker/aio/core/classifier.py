"""Node classification.

Maps an opaque node onto one closed set of categories so the walker never
has to probe node shapes itself. Classification is pure: it reads
attributes and never calls into the node.
"""

import inspect
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

PROVIDER_KIND = "provider"
CONSUMER_KIND = "consumer"
FORWARD_REF_KIND = "forward_ref"


class Category(Enum):
    """Every shape a node can take during a walk."""
    EMPTY = "empty"
    LEAF = "leaf"
    COLLECTION = "collection"
    SIDE_CHANNEL = "side_channel"
    PROVIDER = "provider"
    CONSUMER = "consumer"
    REF_FORWARDING = "ref_forwarding"
    FUNCTION_PRODUCER = "function_producer"
    STATEFUL_PRODUCER = "stateful_producer"
    PLAIN_COMPOSITE = "plain_composite"


def is_element(node: Any) -> bool:
    """Check whether a node follows the element protocol (type + props)."""
    return hasattr(node, 'type') and hasattr(node, 'props')


def is_collection(node: Any) -> bool:
    """Check if a value is a finite sequence of nodes.

    Strings, bytes and mappings are iterable but never collections.
    """
    if isinstance(node, (list, tuple)):
        return True
    if isinstance(node, (str, bytes, bytearray, Mapping)) or is_element(node):
        return False
    return isinstance(node, Iterable)


def is_stateful_producer(producer: Any) -> bool:
    """A stateful producer is a class exposing a render method."""
    return inspect.isclass(producer) and callable(getattr(producer, 'render', None))


def element_kind(producer: Any) -> Any:
    return getattr(producer, '__element_kind__', None)


def is_instance_shaped(node: Any) -> bool:
    """Check if a value is an already-built instance that must be rendered.

    Such values expose ``render()`` but are not elements, classes or
    descriptors.
    """
    if node is None or inspect.isclass(node) or is_element(node):
        return False
    if element_kind(node) is not None:
        return False
    return callable(getattr(node, 'render', None))


def unwrap(node: Any) -> Any:
    """Call ``render()`` on instance-shaped values until a plain node remains."""
    while is_instance_shaped(node):
        node = node.render()
    return node


def classify(node: Any) -> Category:
    """Classify a node.

    Rules apply in priority order; anything matching no rule is EMPTY.
    Callers unwrap instance-shaped values first (see ``unwrap``).

    Args:
        node: Any value found in a tree

    Returns:
        The node's Category
    """
    if is_collection(node):
        return Category.COLLECTION

    if node is None or isinstance(node, bool):
        return Category.EMPTY

    if isinstance(node, (str, int, float)):
        return Category.LEAF

    if is_element(node):
        producer = node.type
        kind = element_kind(producer)
        if kind == PROVIDER_KIND:
            return Category.PROVIDER
        if kind == CONSUMER_KIND:
            return Category.CONSUMER
        if kind == FORWARD_REF_KIND:
            return Category.REF_FORWARDING
        if is_stateful_producer(producer):
            return Category.STATEFUL_PRODUCER
        if callable(producer):
            return Category.FUNCTION_PRODUCER
        return Category.PLAIN_COMPOSITE

    if hasattr(node, 'container') and hasattr(node, 'children'):
        return Category.SIDE_CHANNEL

    return Category.EMPTY


def resolve_props(node: Any) -> dict:
    """Merge the producer's ``default_props`` under the element's props."""
    defaults = getattr(node.type, 'default_props', None) or {}
    return {**defaults, **(node.props or {})}


def side_channel_children(node: Any) -> Any:
    """Return what a side-channel node embeds.

    When the embedded value is an element its own children are walked and
    the wrapper itself is skipped.
    """
    embedded = node.children
    if is_element(embedded):
        return (embedded.props or {}).get('children')
    return embedded
