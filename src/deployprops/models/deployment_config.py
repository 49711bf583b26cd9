from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, Field, field_validator

from deployprops.core.exceptions import PropsConfigError
from deployprops.models.props import EMPTY_PROPS, Props
from deployprops.registry import PropsRegistry


class DeploymentSettings(BaseModel):
    """Runtime-wide defaults applied when a props chain does not set a kind."""

    default_mailbox_capacity: int = Field(default=1000, gt=0)


class DeploymentConfig(BaseModel):
    """A props chain described as data.

    Entries are listed head first, so the first entry of a kind wins:

        {
            "name": "worker",
            "props": [
                {"kind": "mailbox_capacity", "capacity": 10},
                {"kind": "dispatcher_from_config", "path": "dispatchers.io"}
            ]
        }
    """

    name: str = "unnamed"
    props: List[Props] = Field(default_factory=list)
    settings: DeploymentSettings = Field(default_factory=DeploymentSettings)

    @field_validator("props", mode="before")
    @classmethod
    def _build_nodes(cls, value: Any) -> List[Props]:
        if not isinstance(value, list):
            raise ValueError("props must be a list of entries")
        return [_entry_to_node(entry) for entry in value]

    def to_props(self) -> Props:
        """Build the props chain, first entry at the head."""
        chain: Props = EMPTY_PROPS
        for node in reversed(self.props):
            chain = chain.prepend(node)
        return chain


def _entry_to_node(entry: Any) -> Props:
    if isinstance(entry, Props):
        if entry.is_empty:
            raise ValueError("EmptyProps is not a props entry")
        return entry.with_next(EMPTY_PROPS)
    if not isinstance(entry, dict):
        raise ValueError(f"props entry must be a mapping, got {type(entry).__name__}")

    kind = entry.get("kind")
    if not kind:
        raise ValueError("props entry is missing 'kind'")
    if not isinstance(kind, str):
        raise ValueError(f"props entry 'kind' must be a string, got {type(kind).__name__}")
    if "next" in entry:
        raise ValueError("props entries are linked by list order; 'next' is not allowed")

    node_class = PropsRegistry.try_get(kind)
    if node_class is None:
        raise ValueError(f"Unknown props kind {kind!r}; known kinds: {sorted(PropsRegistry.kinds())}")
    if not node_class.configurable:
        raise ValueError(f"Props kind {kind!r} carries a runtime handle and cannot be loaded from configuration")
    return node_class.model_validate(entry)


def props_to_config(props: Props) -> List[Dict[str, Any]]:
    """Dump a props chain into configuration entries, head first.

    Raises:
        PropsConfigError: If a node carries a runtime handle (executor, event loop).
    """
    entries: List[Dict[str, Any]] = []
    for position, node in enumerate(props.nodes()):
        if not node.configurable:
            raise PropsConfigError(
                reason="Props node cannot be expressed as configuration",
                details={"position": position, "node": type(node).__name__},
            )
        entries.append(node.model_dump(mode="json", exclude={"next"}))
    return entries
