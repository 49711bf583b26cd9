"""Deployment props for actors.

A props chain describes how an actor is deployed, e.g. which executor it runs
on or how large its mailbox is. The chain is an immutable singly-linked list
of configuration nodes terminated by :data:`EMPTY_PROPS`. A chain *is* its
head node; there is no container object around it.

For each type of setting (e.g. :class:`DispatcherSelector` or
:class:`MailboxCapacity`) the FIRST occurrence is used when creating the actor,
so adding configuration with the ``with_*`` methods overrides what was
configured before. Nodes are never mutated: replacing a ``next`` reference
produces a new node, which lets many chains share a common suffix.

Example:
    >>> props = EMPTY_PROPS.with_mailbox_capacity(50).with_dispatcher_from_config("io")
    >>> props.first_or_else(MailboxCapacity, MailboxCapacity(capacity=1)).capacity
    50
"""

from __future__ import annotations

import asyncio
from concurrent.futures import Executor
from itertools import zip_longest
from typing import ClassVar, Iterator, List, Literal, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from deployprops.core.exceptions import EmptyChainError
from deployprops.registry import register_props_kind


T = TypeVar("T", bound="Props")


class Props(BaseModel):
    """Base of every props node and of the terminal marker.

    Deliberately open so the framework can add node kinds; not intended to be
    subclassed by user code.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    # Whether nodes of this kind can be loaded from / dumped to configuration data.
    configurable: ClassVar[bool] = True

    @property
    def is_empty(self) -> bool:
        return False

    def _payload(self) -> tuple:
        return tuple((name, value) for name, value in self.__dict__.items() if name != "next")

    def __eq__(self, other: object) -> bool:
        """Chains are equal when their nodes match pairwise in type and payload.

        Walks both chains iteratively, so long chains compare without recursion.
        """
        if not isinstance(other, Props):
            return NotImplemented
        for left, right in zip_longest(self.nodes(), other.nodes()):
            if left is right:
                # Shared suffix, or both chains exhausted.
                return True
            if left is None or right is None:
                return False
            if type(left) is not type(right) or left._payload() != right._payload():
                return False
        return True

    def __hash__(self) -> int:
        return hash(tuple((type(node), node._payload()) for node in self.nodes()))

    def with_next(self, tail: Props) -> Props:
        """Copy of this node with its ``next`` reference replaced by ``tail``.

        This does NOT append ``tail`` to the current chain.
        """
        return self.model_copy(update={"next": tail})

    def prepend(self, node: Props) -> Props:
        """Return a new chain with ``node`` as head and this chain as its tail."""
        return node.with_next(self)

    def with_dispatcher_default(self) -> Props:
        """Prepend a selection of the runtime's default executor."""
        return self.prepend(DispatcherDefault.empty())

    def with_dispatcher_from_config(self, path: str) -> Props:
        """Prepend a selection of the executor defined at ``path``.

        The path is relative to the configuration root of the runtime that
        looks the executor up.
        """
        return self.prepend(DispatcherFromConfig(path=path))

    def with_dispatcher_from_executor(self, executor: Executor) -> Props:
        """Prepend a selection of the given executor."""
        return self.prepend(DispatcherFromExecutor(executor=executor))

    def with_dispatcher_from_event_loop(self, loop: asyncio.AbstractEventLoop) -> Props:
        """Prepend a selection of the given event loop."""
        return self.prepend(DispatcherFromEventLoop(loop=loop))

    def with_mailbox_capacity(self, capacity: int) -> Props:
        """Prepend the given mailbox capacity."""
        return self.prepend(MailboxCapacity(capacity=capacity))

    def nodes(self) -> Iterator[Props]:
        """Yield the nodes of this chain head to tail, excluding the terminal marker."""
        node: Props = self
        while not node.is_empty:
            yield node
            node = node.next  # type: ignore[attr-defined]

    def first_or_else(self, kind: Type[T], default: T) -> T:
        """Find the first node of the given kind, falling back to ``default``."""
        for node in self.nodes():
            if isinstance(node, kind):
                return node
        return default

    def all_of(self, kind: Type[T]) -> List[T]:
        """All nodes of the given kind in chain order.

        The ``next`` reference of every returned node is :data:`EMPTY_PROPS`.
        """
        return [node.with_next(EMPTY_PROPS) for node in self.nodes() if isinstance(node, kind)]

    def filter_not(self, kind: Type[Props]) -> Props:
        """Remove all nodes of the given kind and return the resulting chain."""
        survivors: List[Props] = []
        relink_count = 0
        # Suffix after the last removed node; it contains no matches and is shared as is.
        tail: Props = self
        for node in self.nodes():
            if isinstance(node, kind):
                relink_count = len(survivors)
                tail = node.next  # type: ignore[attr-defined]
            else:
                survivors.append(node)

        chain = tail
        for node in reversed(survivors[:relink_count]):
            chain = node.with_next(chain)
        return chain


class EmptyProps(Props):
    """The terminal marker of every props chain. Use :data:`EMPTY_PROPS`."""

    @property
    def is_empty(self) -> bool:
        return True

    @property
    def next(self) -> Props:
        raise EmptyChainError("EmptyProps has no next")

    def with_next(self, tail: Props) -> Props:
        return tail


EMPTY_PROPS = EmptyProps()


class PropsNode(Props):
    """A payload-carrying node linked to the rest of its chain."""

    next: Props = Field(default_factory=lambda: EMPTY_PROPS, repr=False)


@register_props_kind()
class MailboxCapacity(PropsNode):
    """Maximum mailbox capacity for the actor.

    Messages enqueued beyond this capacity are dropped. When absent, the
    runtime's ``default_mailbox_capacity`` setting applies.
    """

    kind: Literal["mailbox_capacity"] = Field(default="mailbox_capacity", repr=False)
    capacity: int = Field(gt=0)


class DispatcherSelector(PropsNode):
    """Selects the executor the actor runs on.

    Without any selector the actor runs on the default executor.
    """


@register_props_kind()
class DispatcherDefault(DispatcherSelector):
    """Use the runtime's default executor."""

    kind: Literal["dispatcher_default"] = Field(default="dispatcher_default", repr=False)

    @classmethod
    def empty(cls) -> DispatcherDefault:
        """Shared instance with an empty ``next`` reference."""
        return _DISPATCHER_DEFAULT


@register_props_kind()
class DispatcherFromConfig(DispatcherSelector):
    """Look up an executor definition at ``path`` in the runtime's configuration.

    Executors created this way are shut down together with the runtime.
    """

    kind: Literal["dispatcher_from_config"] = Field(default="dispatcher_from_config", repr=False)
    path: str = Field(min_length=1)


@register_props_kind()
class DispatcherFromExecutor(DispatcherSelector):
    """Run the actor on the given executor. It is never shut down by the runtime."""

    configurable: ClassVar[bool] = False

    kind: Literal["dispatcher_from_executor"] = Field(default="dispatcher_from_executor", repr=False)
    executor: Executor


@register_props_kind()
class DispatcherFromEventLoop(DispatcherSelector):
    """Run the actor on the given event loop. It is never closed by the runtime."""

    configurable: ClassVar[bool] = False

    kind: Literal["dispatcher_from_event_loop"] = Field(default="dispatcher_from_event_loop", repr=False)
    loop: asyncio.AbstractEventLoop


_DISPATCHER_DEFAULT = DispatcherDefault()
