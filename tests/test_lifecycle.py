import pytest

from tcp_emitter.core import ConnectionLifecycle, ConnectionState


def test_lifecycle_transitions():
    lifecycle = ConnectionLifecycle()
    assert lifecycle.state is ConnectionState.DISCONNECTED
    assert lifecycle.mark_disconnected() is False

    lifecycle.begin_connect()
    assert lifecycle.state is ConnectionState.CONNECTING
    assert lifecycle.is_connected is False

    assert lifecycle.mark_connected() is True
    assert lifecycle.mark_connected() is False
    assert lifecycle.connections == 1

    with pytest.raises(RuntimeError):
        lifecycle.begin_connect()

    assert lifecycle.mark_disconnected() is True
    lifecycle.begin_connect()
    lifecycle.mark_connected()
    assert lifecycle.connections == 2
