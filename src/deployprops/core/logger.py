import logging
import sys
import contextvars
from typing import Optional

# Name of the actor whose props are being resolved
_ACTOR: contextvars.ContextVar[str] = contextvars.ContextVar("actor", default="-")


class _ActorFilter(logging.Filter):
    """Inject the current actor name into each record."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        record.actor = _ACTOR.get()
        return True


def configure_root_logger(level: Optional[str] = None) -> None:
    """
    Install the stdout handler once and set the ``deployprops`` level.

    Without a level, an already configured namespace keeps its level.
    """
    package_logger = logging.getLogger("deployprops")
    root = logging.getLogger()

    if not any(isinstance(f, _ActorFilter) for h in root.handlers for f in h.filters):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s | %(levelname)-8s | %(name)s | actor=%(actor)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        handler.addFilter(_ActorFilter())
        root.addHandler(handler)
        root.setLevel(logging.INFO)
        level = level or "INFO"

    if level:
        package_logger.setLevel(getattr(logging, level.upper(), logging.INFO))


def get_logger(name: str = "deployprops") -> logging.Logger:
    configure_root_logger()
    return logging.getLogger(name)


def push_actor(actor_name: Optional[str]) -> Optional[contextvars.Token]:
    """Set the current actor name and return a token for :func:`reset_actor`."""
    if not actor_name:
        return None
    return _ACTOR.set(actor_name)


def reset_actor(token: Optional[contextvars.Token]) -> None:
    if token is not None:
        _ACTOR.reset(token)
