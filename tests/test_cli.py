from __future__ import annotations

from tcp_emitter.main import EmitterCLI
from tcp_emitter.protocol import encode_subscribe, encode_unsubscribe


def test_on_emit_off(connected, transport, capsys):
    cli = EmitterCLI(connected)

    cli._handle_on(["on", "greet"])
    cli._handle_on(["on", "greet"])
    assert connected.listener_count("greet") == 1
    assert transport.writes == [encode_subscribe("greet")]

    cli._handle_emit(["emit", "greet", '["bob", 2]'])
    assert transport.writes[-1] == '{"type":"broadcast","event":"greet","args":["bob",2]}@@@'
    assert "[greet] bob 2" in capsys.readouterr().out

    cli._handle_off(["off", "greet"])
    assert transport.writes[-1] == encode_unsubscribe("greet")
    assert connected.event_names() == []


def test_emit_wraps_scalar_and_rejects_bad_json(connected, transport, capsys):
    cli = EmitterCLI(connected)
    cli._handle_emit(["emit", "n", "5"])
    assert transport.writes == ['{"type":"broadcast","event":"n","args":[5]}@@@']

    cli._handle_emit(["emit", "n", "{oops"])
    assert "Arguments must be JSON" in capsys.readouterr().out
    assert len(transport.writes) == 1
