"""Instance management for stateful producers.

An instance backs exactly one element for exactly one walk. Everything
here is synchronous: state updates merge immediately so the next read,
including the first ``render()``, already sees them.
"""

import functools
import logging
from typing import Any, Mapping

from ..._common import call_with_arity
from .context import merge_legacy_context

logger = logging.getLogger(__name__)

# Pre-expansion hooks, first one found wins
WILL_MOUNT_HOOKS = ('UNSAFE_component_will_mount', 'component_will_mount')


def set_state(instance: Any, update: Any) -> None:
    """Shallow-merge a state update into ``instance.state`` right away.

    Args:
        instance: The instance to update
        update: A partial state mapping, or a callable receiving
            ``(state, props, context)`` and returning one
    """
    if callable(update):
        update = call_with_arity(update, instance.state, instance.props, instance.context)
    if update is None:
        return
    instance.state = {**(instance.state or {}), **update}


def instantiate(component: type, props: Mapping[str, Any], context: Any) -> Any:
    """Create and prepare the instance backing a stateful producer.

    Steps run in order: construct, fix up ``props``/``context``/``state``,
    bind the synchronous ``set_state``, apply derived state, run the
    pre-expansion hook.

    Args:
        component: The stateful producer class
        props: Resolved attributes (defaults already merged)
        context: Inbound legacy context

    Returns:
        The prepared instance
    """
    instance = component(props, context)

    # Constructors are free to skip the base initialiser
    if getattr(instance, 'props', None) is None:
        instance.props = props
    if getattr(instance, 'context', None) is None:
        instance.context = context
    if not hasattr(instance, 'state'):
        instance.state = None

    instance.set_state = functools.partial(set_state, instance)

    derive = getattr(component, 'get_derived_state_from_props', None)
    if derive is not None:
        partial = derive(instance.props, instance.state)
        if partial is not None:
            instance.state = {**(instance.state or {}), **partial}

    for hook_name in WILL_MOUNT_HOOKS:
        hook = getattr(instance, hook_name, None)
        if callable(hook):
            hook()
            break

    return instance


def child_context(instance: Any, inbound: Any) -> Any:
    """Legacy context handed to an instance's children.

    Returns ``inbound`` unchanged when the instance does not define
    ``get_child_context``.
    """
    provide = getattr(instance, 'get_child_context', None)
    if not callable(provide):
        return inbound
    return merge_legacy_context(inbound, provide())


def teardown(instance: Any) -> bool:
    """Call the instance's ``component_will_unmount`` hook if it has one.

    Returns:
        True if a hook was called
    """
    hook = getattr(instance, 'component_will_unmount', None)
    if not callable(hook):
        return False
    logger.debug("Tearing down %s", type(instance).__name__)
    hook()
    return True
