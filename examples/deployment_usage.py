"""
Example: Building props for a parent actor and deriving props for its children.

This shows the separation between:
- Design-time props: loaded from a deployment config (JSON/dict)
- Runtime props: executor handles added in code, which config cannot express
"""

from concurrent.futures import ThreadPoolExecutor

from deployprops import (
    DeploymentConfig,
    DispatcherSelector,
    MailboxCapacity,
    derive_child_props,
    resolve_deployment,
)
from deployprops.core.logger import configure_root_logger

configure_root_logger("DEBUG")

config_dict = {
    "name": "ingest-supervisor",
    "props": [
        {"kind": "mailbox_capacity", "capacity": 500},
        {"kind": "dispatcher_from_config", "path": "dispatchers.blocking-io"},
    ],
    "settings": {"default_mailbox_capacity": 1000},
}

cfg = DeploymentConfig.model_validate(config_dict)
parent_props = cfg.to_props()


# =============================================================================
# Example 1: Resolve the parent's effective deployment
# =============================================================================
parent = resolve_deployment(parent_props, cfg.settings, actor_name=cfg.name)
print(f"Parent mailbox capacity: {parent.mailbox_capacity}")
print(f"Parent dispatcher: {parent.dispatcher!r}")


# =============================================================================
# Example 2: Override at runtime; the head-most node wins
# =============================================================================
with ThreadPoolExecutor(max_workers=4) as pool:
    overridden = parent_props.with_dispatcher_from_executor(pool)
    resolved = resolve_deployment(overridden, cfg.settings, actor_name=cfg.name)
    print(f"Overridden dispatcher: {type(resolved.dispatcher).__name__}")
    print(f"Shadowed selectors: {len(overridden.all_of(DispatcherSelector)) - 1}")


# =============================================================================
# Example 3: Children keep the mailbox but not the dispatcher
# =============================================================================
child_props = derive_child_props(parent_props, DispatcherSelector)
child = resolve_deployment(child_props, cfg.settings, actor_name=f"{cfg.name}/child")
print(f"Child mailbox capacity: {child.mailbox_capacity}")
print(f"Child dispatcher: {child.dispatcher!r}")
print(f"Child capacities: {[n.capacity for n in child_props.all_of(MailboxCapacity)]}")
