from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Type

from deployprops.core.logger import get_logger, push_actor, reset_actor
from deployprops.models.deployment_config import DeploymentSettings
from deployprops.models.props import (
    EMPTY_PROPS,
    DispatcherDefault,
    DispatcherSelector,
    MailboxCapacity,
    Props,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class ResolvedDeployment:
    """Effective deployment of one actor after shadowing has been applied.

    Acquiring the selected executor is left to the runtime.
    """

    mailbox_capacity: int
    dispatcher: DispatcherSelector


def resolve_deployment(
    props: Props,
    settings: Optional[DeploymentSettings] = None,
    *,
    actor_name: Optional[str] = None,
) -> ResolvedDeployment:
    """
    Resolve each recognized setting kind of a props chain exactly once.

    Args:
        props: The props chain of the actor being created.
        settings: Runtime defaults; ``DeploymentSettings()`` when omitted.
        actor_name: Name attached to log records emitted during resolution.

    Returns:
        The head-most mailbox capacity and dispatcher selector, or the defaults.

    Example:
        >>> resolve_deployment(EMPTY_PROPS.with_mailbox_capacity(10)).mailbox_capacity
        10
    """
    settings = settings or DeploymentSettings()
    token = push_actor(actor_name)
    try:
        capacity = props.first_or_else(
            MailboxCapacity, MailboxCapacity(capacity=settings.default_mailbox_capacity)
        )
        dispatcher = props.first_or_else(DispatcherSelector, DispatcherDefault.empty())
        resolved = ResolvedDeployment(
            mailbox_capacity=capacity.capacity,
            dispatcher=dispatcher.with_next(EMPTY_PROPS),
        )
        logger.debug(
            f"Resolved deployment: mailbox_capacity={resolved.mailbox_capacity}, "
            f"dispatcher={resolved.dispatcher!r}"
        )
        return resolved
    finally:
        reset_actor(token)


def derive_child_props(props: Props, *kinds: Type[Props]) -> Props:
    """Strip the given setting kinds so a child actor does not inherit them."""
    child = props
    for kind in kinds:
        child = child.filter_not(kind)
    logger.debug(f"Derived child props without {[k.__name__ for k in kinds]}")
    return child
