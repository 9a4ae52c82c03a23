from __future__ import annotations

import pytest

from tcp_emitter.core import ListenerRegistry


def _noop(*_args):
    return None


def test_listeners_keep_insertion_order_and_duplicates():
    registry = ListenerRegistry()
    first, second = (lambda: 1), (lambda: 2)
    registry.add("e", first)
    registry.add("e", second)
    registry.add("e", first)
    assert registry.listeners("e") == [first, second, first]
    assert registry.listener_count("e") == 3


def test_prepend_puts_listener_first():
    registry = ListenerRegistry()
    first, second = (lambda: 1), (lambda: 2)
    registry.add("e", first)
    registry.add("e", second, prepend=True)
    assert registry.listeners("e") == [second, first]


def test_remove_drops_latest_duplicate_and_prunes_event():
    registry = ListenerRegistry()
    other = lambda: None  # noqa: E731
    registry.add("e", _noop)
    registry.add("e", other)
    registry.add("e", _noop)

    assert registry.remove("e", _noop) is True
    assert registry.listeners("e") == [_noop, other]
    assert registry.remove("e", _noop) is True
    assert registry.remove("e", _noop) is False
    assert registry.remove("e", other) is True
    assert registry.event_names() == []


def test_discard_targets_one_entry():
    registry = ListenerRegistry()
    kept = registry.add("e", _noop)
    dropped = registry.add("e", _noop, once=True)
    assert registry.discard("e", dropped) is True
    assert registry.discard("e", dropped) is False
    assert registry.entries("e") == [kept]


def test_event_names_follow_first_registration():
    registry = ListenerRegistry()
    for event in ("b", "a", "c"):
        registry.add(event, _noop)
    registry.remove("a", _noop)
    registry.add("a", _noop)
    assert registry.event_names() == ["b", "c", "a"]


def test_remove_all():
    registry = ListenerRegistry()
    registry.add("a", _noop)
    registry.add("b", _noop)
    assert registry.remove_all("a") == ["a"]
    assert registry.remove_all("missing") == []
    registry.add("c", _noop)
    assert registry.remove_all() == ["b", "c"]
    assert registry.event_names() == []


def test_rejects_non_callable_listener():
    with pytest.raises(TypeError):
        ListenerRegistry().add("e", "not callable")
