#!/usr/bin/env python3
"""
Basic async walk example showing data prefetching with TreeWalker.

This example demonstrates:
- Stateful producers that fetch data asynchronously
- A visitor that awaits each instance's fetch before descending
- Stopping descent below a node with STOP
"""

import asyncio
import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from treewalker import STOP, Component, create_context, h, walk_tree


Theme = create_context('light', name='theme')


class Section(Component):
    async def fetch(self):
        await asyncio.sleep(0.01 * self.props['delay'])
        return f"{self.props['title']} loaded"

    def render(self):
        return h('section', None, self.props.get('children'))


def Title(props):
    return h(Theme.consumer, None, lambda theme: f"[{theme}] {props['text']}")


def build_app():
    return h(Theme.provider, {'value': 'dark'}, h('main', None, [
        h(Title, {'text': 'Dashboard'}),
        h(Section, {'title': 'Reports', 'delay': 3}, [
            h(Section, {'title': 'Monthly', 'delay': 1}),
            h(Section, {'title': 'Private', 'delay': 1, 'hidden': True}, 'never walked'),
        ]),
        h(Section, {'title': 'Users', 'delay': 2}),
    ]))


async def main():
    """Prefetch every section's data in one walk."""
    fetched = []
    texts = []

    async def visitor(node, instance):
        if isinstance(node, str):
            texts.append(node)
        if instance is not None:
            fetched.append(await instance.fetch())
            if instance.props.get('hidden'):
                return STOP

    await walk_tree(build_app(), visitor)

    print("\nFetched (completion order):")
    for line in fetched:
        print(f"  {line}")

    print("\nText leaves:")
    for text in texts:
        print(f"  {text}")


if __name__ == "__main__":
    print("TreeWalker - Basic Async Walk Example")
    print("=" * 50)
    asyncio.run(main())
