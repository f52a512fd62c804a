"""Sample trees and producers shared by the test modules."""

from treewalker import Component, h
from treewalker.testing import resolve_later


class Stateful(Component):
    """Stateful producer exposing its ``data`` prop through get_data()."""

    def get_data(self):
        data = self.props.get('data')
        return data() if callable(data) else data

    def render(self):
        return h('div', None, self.props.get('children'))


def Stateless(props, context=None):
    return h('div', None, props.get('children'))


def build_tree(asynchronous: bool = False):
    """Build the sample tree.

    Structure (data values in parentheses):
        div
        ├── h1 "Hello World!"
        ├── Stateful (1)
        ├── Stateful (2)
        │   └── div
        │       ├── Stateless
        │       │   └── Stateful (4)
        │       │       ├── Stateful (5)
        │       │       └── Stateful (6)
        │       └── div "hi!"
        └── Stateful (3)
    """
    def data(value):
        if asynchronous:
            return lambda: resolve_later(value)
        return value

    return h('div', None, [
        h('h1', None, 'Hello World!'),
        h(Stateful, {'data': data(1)}),
        h(
            Stateful,
            {'data': data(2)},
            h('div', None, [
                h(
                    Stateless,
                    None,
                    h(Stateful, {
                        'children': [
                            h(Stateful, {'data': data(5)}),
                            h(Stateful, {'data': data(6)}),
                        ],
                        'data': data(4),
                    }),
                ),
                h('div', None, 'hi!'),
            ]),
        ),
        h(Stateful, {'data': data(3)}),
    ])


def build_single_child_tree(asynchronous: bool = False, wrap: bool = False):
    """Build the sample ordering tree where one producer has a lone child.

    Structure (data values in parentheses):
        div
        ├── Stateful (1)
        ├── Stateful (2)
        │   └── Stateful (4)
        │       ├── Stateful (5)
        │       └── Stateful (6)
        └── Stateful (3)

    With ``wrap`` the lone child of (2) is given inside a one-item list.
    """
    def data(value):
        if asynchronous:
            return lambda: resolve_later(value)
        return value

    lone = h(
        Stateful,
        {'data': data(4)},
        h(Stateful, {'data': data(5)}),
        h(Stateful, {'data': data(6)}),
    )
    return h(
        'div',
        None,
        h(Stateful, {'data': data(1)}),
        h(Stateful, {'data': data(2)}, [lone] if wrap else lone),
        h(Stateful, {'data': data(3)}),
    )
