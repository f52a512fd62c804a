"""Configuration system for TreeWalker.

This module defines how users tune a walk: whether instance teardown hooks
run and how the members of a collection are scheduled.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, List, Mapping, Union


class ChildScheduling(Enum):
    """How the members of a collection are walked.

    Both strategies initiate visitor calls in declared order; they differ
    in when member i+1 starts relative to member i's subtree.
    """
    CONCURRENT = "concurrent"   # Start every member, await them together
    SEQUENTIAL = "sequential"   # Member subtree settles before the next starts


@dataclass
class WalkOptions:
    """Complete configuration for a single walk.

    This is the primary way users adjust a traversal. Defaults reproduce
    the reference behaviour: no teardown calls, concurrent members.
    """

    # Instance lifecycle
    invoke_teardown: bool = False

    # Collection scheduling
    scheduling: ChildScheduling = ChildScheduling.CONCURRENT

    @classmethod
    def from_value(cls, value: Union['WalkOptions', Mapping[str, Any], None]) -> 'WalkOptions':
        """Build options from None, an existing instance or a mapping.

        Args:
            value: Options in any accepted form

        Returns:
            A validated WalkOptions instance

        Raises:
            ValueError: If a key is unknown or validation fails
        """
        if value is None:
            options = cls()
        elif isinstance(value, cls):
            options = value
        elif isinstance(value, Mapping):
            known = {f.name for f in fields(cls)}
            unknown = sorted(set(value) - known)
            if unknown:
                raise ValueError(f"Unknown walk options: {', '.join(unknown)}")
            kwargs = dict(value)
            if isinstance(kwargs.get('scheduling'), str):
                kwargs['scheduling'] = ChildScheduling(kwargs['scheduling'])
            options = cls(**kwargs)
        else:
            raise ValueError(f"Unsupported options value: {value!r}")

        errors = options.validate()
        if errors:
            raise ValueError("Invalid walk options: " + "; ".join(errors))
        return options

    @classmethod
    def depth_first(cls, invoke_teardown: bool = False) -> 'WalkOptions':
        """Create options that settle each member before starting the next.

        Args:
            invoke_teardown: Whether to call teardown hooks

        Returns:
            WalkOptions using sequential scheduling
        """
        return cls(
            invoke_teardown=invoke_teardown,
            scheduling=ChildScheduling.SEQUENTIAL,
        )

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.invoke_teardown, bool):
            errors.append("invoke_teardown must be a bool")

        if not isinstance(self.scheduling, ChildScheduling):
            errors.append(f"scheduling must be a ChildScheduling, got {self.scheduling!r}")

        return errors
