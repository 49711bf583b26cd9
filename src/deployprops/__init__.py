"""deployprops.

Immutable, typed deployment props for actors: a chain of configuration nodes
where the head-most node of each kind wins.

Public API for runtimes that create actors from props.
"""

from deployprops.core.exceptions import DeployPropsException, EmptyChainError, PropsConfigError
from deployprops.models.deployment_config import DeploymentConfig, DeploymentSettings, props_to_config
from deployprops.models.props import (
    EMPTY_PROPS,
    DispatcherDefault,
    DispatcherFromConfig,
    DispatcherFromEventLoop,
    DispatcherFromExecutor,
    DispatcherSelector,
    EmptyProps,
    MailboxCapacity,
    Props,
    PropsNode,
)
from deployprops.registry import PropsRegistry, PropsRegistryError, register_props_kind
from deployprops.resolver import ResolvedDeployment, derive_child_props, resolve_deployment

__version__ = "0.1.0"

__all__ = [
    "EMPTY_PROPS",
    "DeployPropsException",
    "DeploymentConfig",
    "DeploymentSettings",
    "DispatcherDefault",
    "DispatcherFromConfig",
    "DispatcherFromEventLoop",
    "DispatcherFromExecutor",
    "DispatcherSelector",
    "EmptyChainError",
    "EmptyProps",
    "MailboxCapacity",
    "Props",
    "PropsConfigError",
    "PropsNode",
    "PropsRegistry",
    "PropsRegistryError",
    "ResolvedDeployment",
    "derive_child_props",
    "props_to_config",
    "register_props_kind",
    "resolve_deployment",
]
