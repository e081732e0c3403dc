from __future__ import annotations

import argparse
import asyncio
import logging

from console_bridge import RelayClient, RelaySettings, create_registry

logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)


async def console_roundtrip(settings: RelaySettings, window: str) -> None:
    """
    Drive the console tools once against a running host.

    1) Inject the capture script
    2) Run some JavaScript that logs
    3) Read the captured output back
    """
    registry = create_registry()

    async with RelayClient(settings) as relay:
        for name, arguments in (
            ("setup_console_capture", {"window_label": window}),
            ("execute_with_console", {"window_label": window, "code": "console.log('hello from python')"}),
            ("get_console_output", {"window_label": window, "clear_after_read": True}),
        ):
            response = await registry.dispatch(relay, name, arguments)
            level = logging.ERROR if response.is_error else logging.INFO
            logger.log(level, "%s ->\n%s", name, response.first_text)


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=4000)
    parser.add_argument("--window", default="main")
    args = parser.parse_args()

    settings = RelaySettings(connection_type="tcp", host=args.host, port=args.port)
    asyncio.run(console_roundtrip(settings, args.window))
