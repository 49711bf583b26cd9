from __future__ import annotations

from typing import Callable, ClassVar, Dict, Optional, Type, TypeVar


P = TypeVar("P", bound=type)


class PropsRegistryError(RuntimeError):
    pass


class PropsRegistry:
    """Maps each node ``kind`` discriminator to the node class carrying it.

    The set of node kinds stays open: framework modules add new kinds by
    decorating their node classes with :func:`register_props_kind`.
    """

    _registry: ClassVar[Dict[str, type]] = {}

    @classmethod
    def register(cls, *, kind: str, node_class: type, overwrite: bool = False) -> None:
        if not overwrite and kind in cls._registry:
            existing = cls._registry[kind]
            raise PropsRegistryError(f"Props kind already registered for kind={kind!r}: {existing}")
        cls._registry[kind] = node_class

    @classmethod
    def get(cls, kind: str) -> type:
        try:
            return cls._registry[kind]
        except KeyError as exc:
            raise PropsRegistryError(f"No props class registered for kind={kind!r}") from exc

    @classmethod
    def try_get(cls, kind: str) -> Optional[type]:
        return cls._registry.get(kind)

    @classmethod
    def kinds(cls) -> tuple[str, ...]:
        return tuple(cls._registry)

    @classmethod
    def unregister(cls, kind: str) -> None:
        cls._registry.pop(kind, None)


def register_props_kind(*, overwrite: bool = False) -> Callable[[Type[P]], Type[P]]:
    """Register a node class under the default value of its ``kind`` field."""

    def decorator(node_class: Type[P]) -> Type[P]:
        kind_field = node_class.model_fields.get("kind")
        kind = kind_field.default if kind_field is not None else None
        if not isinstance(kind, str):
            raise PropsRegistryError(f"{node_class.__name__} does not declare a string 'kind' default")
        PropsRegistry.register(kind=kind, node_class=node_class, overwrite=overwrite)
        return node_class

    return decorator
