from __future__ import annotations

import asyncio
import json
import logging

from tcp_emitter.config import CLIENT_CONFIG, load_config
from tcp_emitter.core import EmitterClient, create_client
from tcp_emitter.core.registry import Listener
from tcp_emitter.protocol.errors import ProtocolError

logger = logging.getLogger(__name__)


class EmitterCLI:
    """Line-oriented console for poking at an emitter server."""

    def __init__(self, client: EmitterClient) -> None:
        self.client = client
        self._printers: dict[str, Listener] = {}

    async def run(self) -> None:
        logger.info("CLI ready. Type 'help' for commands.")
        loop = asyncio.get_running_loop()
        while True:
            try:
                line = await loop.run_in_executor(None, input, "> ")
            except EOFError:
                break
            parts = line.strip().split(maxsplit=2)
            if not parts:
                continue
            match parts[0]:
                case "help":
                    self._show_help()
                case "on":
                    self._handle_on(parts)
                case "off":
                    self._handle_off(parts)
                case "emit":
                    self._handle_emit(parts)
                case "events":
                    print("Subscribed:", ", ".join(self.client.subscribed_events()) or "-")
                case "quit":
                    break
                case _:
                    print("Unknown command")

    def _show_help(self) -> None:
        print("Commands: on <event>, off <event>, emit <event> [json-array], events, quit")

    def _handle_on(self, parts: list[str]) -> None:
        if len(parts) < 2:
            print("Usage: on <event>")
            return
        event = parts[1]
        if event in self._printers:
            return

        def printer(*args: object) -> None:
            print(f"[{event}]", *args)

        self._printers[event] = printer
        self.client.on(event, printer)

    def _handle_off(self, parts: list[str]) -> None:
        if len(parts) < 2:
            print("Usage: off <event>")
            return
        printer = self._printers.pop(parts[1], None)
        if printer is not None:
            self.client.remove_listener(parts[1], printer)

    def _handle_emit(self, parts: list[str]) -> None:
        if len(parts) < 2:
            print("Usage: emit <event> [json-array]")
            return
        args: list = []
        if len(parts) == 3:
            try:
                args = json.loads(parts[2])
            except ValueError as exc:
                print(f"Arguments must be JSON: {exc}")
                return
            if not isinstance(args, list):
                args = [args]
        try:
            self.client.emit(parts[1], *args)
        except ProtocolError as exc:
            print(f"Emit failed: {exc.message}")


async def run_client() -> None:
    load_config()
    logging.basicConfig(level=CLIENT_CONFIG["log_level"])
    client = create_client()
    cli = EmitterCLI(client)

    await client.connect(CLIENT_CONFIG["server_host"], CLIENT_CONFIG["server_port"])
    try:
        await cli.run()
    finally:
        await client.close()


def main() -> None:
    asyncio.run(run_client())


if __name__ == "__main__":
    main()
