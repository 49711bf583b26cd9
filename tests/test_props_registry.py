from typing import Literal

import pytest
from pydantic import Field

from deployprops.models.props import EMPTY_PROPS, MailboxCapacity, PropsNode
from deployprops.registry import PropsRegistry, PropsRegistryError, register_props_kind


def teardown_function() -> None:
    PropsRegistry.unregister("test_throughput")


def test_builtin_kinds_are_registered():
    assert set(PropsRegistry.kinds()) >= {
        "mailbox_capacity",
        "dispatcher_default",
        "dispatcher_from_config",
        "dispatcher_from_executor",
        "dispatcher_from_event_loop",
    }
    assert PropsRegistry.get("mailbox_capacity") is MailboxCapacity


def test_get_missing_raises_helpful_error():
    with pytest.raises(PropsRegistryError, match="No props class registered"):
        PropsRegistry.get("test_throughput")


def test_try_get_missing_returns_none():
    assert PropsRegistry.try_get("test_throughput") is None


def test_duplicate_registration_raises_by_default():
    class OtherCapacity(PropsNode):
        kind: Literal["mailbox_capacity"] = "mailbox_capacity"

    with pytest.raises(PropsRegistryError, match="already registered"):
        register_props_kind()(OtherCapacity)

    assert PropsRegistry.get("mailbox_capacity") is MailboxCapacity


def test_decorator_registers_new_kind_usable_in_chains():
    @register_props_kind()
    class Throughput(PropsNode):
        kind: Literal["test_throughput"] = Field(default="test_throughput", repr=False)
        messages: int

    chain = EMPTY_PROPS.prepend(Throughput(messages=5)).with_mailbox_capacity(3)

    assert PropsRegistry.get("test_throughput") is Throughput
    assert chain.first_or_else(Throughput, Throughput(messages=1)).messages == 5
    assert [type(n) for n in chain.filter_not(Throughput).nodes()] == [MailboxCapacity]


def test_overwrite_allows_re_registration():
    class First(PropsNode):
        kind: Literal["test_throughput"] = "test_throughput"

    class Second(PropsNode):
        kind: Literal["test_throughput"] = "test_throughput"

    register_props_kind()(First)
    register_props_kind(overwrite=True)(Second)

    assert PropsRegistry.get("test_throughput") is Second


def test_class_without_kind_default_is_rejected():
    class NoKind(PropsNode):
        kind: str

    with pytest.raises(PropsRegistryError, match="does not declare"):
        register_props_kind()(NoKind)


def test_class_without_kind_field_is_rejected():
    class NoKindField(PropsNode):
        messages: int = 1

    with pytest.raises(PropsRegistryError, match="does not declare"):
        register_props_kind()(NoKindField)
