"""Tests for tool adapters: validation, forwarding and rendering."""

from __future__ import annotations

import json
import logging

import pytest

from console_bridge import ErrorKind, Err, InvalidArgumentError, Ok
from console_bridge.adapters import (
    DEFAULT_ADAPTERS,
    DIRECT_EVAL,
    EXECUTE_WITH_CONSOLE,
    GET_CONSOLE_OUTPUT,
    SETUP_CONSOLE_CAPTURE,
)

from fakes import FakeRelay


class TestScenarios:
    """End-to-end adapter behaviour with a fake relay."""

    @pytest.mark.asyncio
    async def test_get_console_output_with_empty_args(self):
        relay = FakeRelay(Ok({"lines": []}))

        response = await GET_CONSOLE_OUTPUT.invoke(relay, {})

        assert relay.calls == [("get_console_output", {})]
        assert response.is_error is False
        assert len(response.content) == 1
        assert response.content[0].text == 'Console Output Retrieved:\n{\n  "lines": []\n}'

    @pytest.mark.asyncio
    async def test_execute_without_code_fails_before_relay(self):
        relay = FakeRelay(Ok({}))

        with pytest.raises(InvalidArgumentError) as info:
            await EXECUTE_WITH_CONSOLE.invoke(relay, {})

        assert info.value.operation == "execute_with_console"
        assert any(err["loc"] == ("code",) for err in info.value.errors)
        assert relay.calls == []

    @pytest.mark.asyncio
    async def test_setup_capture_remote_error(self):
        relay = FakeRelay(Err("channel closed"))

        response = await SETUP_CONSOLE_CAPTURE.invoke(relay, {})

        assert response.is_error is True
        assert response.as_dict() == {
            "content": [{"type": "text", "text": "Failed to setup console capture: channel closed"}],
            "isError": True,
        }


class TestRendering:
    """Every adapter renders Ok and Err the same way."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("adapter", DEFAULT_ADAPTERS, ids=lambda a: str(a.name))
    async def test_ok_payload_round_trips(self, adapter):
        data = {"entries": [{"level": "warn", "message": "ünïcode \"quoted\""}], "total_count": 1, "flag": None}
        relay = FakeRelay(Ok(data))

        response = await adapter.invoke(relay, {"code": "return 1"})

        prefix, _, body = response.first_text.partition("\n")
        assert response.is_error is False
        assert prefix == adapter.success_prefix
        assert json.loads(body) == data

    @pytest.mark.asyncio
    @pytest.mark.parametrize("adapter", DEFAULT_ADAPTERS, ids=lambda a: str(a.name))
    async def test_err_message_is_verbatim(self, adapter):
        relay = FakeRelay(Err("Window 'devtools' not found", ErrorKind.REMOTE_FAILURE))

        response = await adapter.invoke(relay, {"code": "1"})

        assert response.is_error is True
        assert response.first_text == f"{adapter.failure_prefix} Window 'devtools' not found"

    @pytest.mark.asyncio
    async def test_err_without_message_uses_placeholder(self):
        response = await GET_CONSOLE_OUTPUT.invoke(FakeRelay(Err("")), {})
        assert response.first_text == "Failed to get console output: Unknown error"

    @pytest.mark.asyncio
    async def test_timeout_err_is_rendered(self):
        relay = FakeRelay(Err("Timed out after 5s waiting for reply to direct_eval", ErrorKind.TIMEOUT))

        response = await DIRECT_EVAL.invoke(relay, {"code": "1 + 1"})

        assert response.is_error is True
        assert "Timed out after 5s" in response.first_text

    def test_success_prefixes_are_unique(self):
        prefixes = [a.success_prefix for a in DEFAULT_ADAPTERS]
        assert len(prefixes) == len(set(prefixes))


class TestFaults:
    """Exceptions escaping the relay are converted at the adapter boundary."""

    @pytest.mark.asyncio
    async def test_unexpected_exception_becomes_error_response(self):
        relay = FakeRelay(exc=RuntimeError("socket client exploded"))

        response = await GET_CONSOLE_OUTPUT.invoke(relay, {"window_label": "main"})

        assert response.is_error is True
        assert response.first_text.startswith("Failed to get console output: ")
        assert "socket client exploded" in response.first_text

    @pytest.mark.asyncio
    async def test_connection_error_becomes_error_response(self):
        relay = FakeRelay(exc=ConnectionResetError("peer reset"))

        response = await SETUP_CONSOLE_CAPTURE.invoke(relay, {})

        assert response.is_error is True
        assert "peer reset" in response.first_text

    @pytest.mark.asyncio
    async def test_raised_error_keeps_its_classified_kind(self, caplog):
        relay = FakeRelay(exc=ConnectionResetError("peer reset"))

        with caplog.at_level(logging.INFO, logger="console_bridge.adapters.base"):
            response = await SETUP_CONSOLE_CAPTURE.invoke(relay, {})

        assert response.first_text == "Failed to setup console capture: Connection error: peer reset"
        assert "setup_console_capture failed (transport_failure)" in caplog.text
        assert "unexpected_fault" not in caplog.text

    @pytest.mark.asyncio
    async def test_unserializable_payload_becomes_error_response(self):
        relay = FakeRelay(Ok({"when": object()}))

        response = await GET_CONSOLE_OUTPUT.invoke(relay, {})

        assert response.is_error is True
        assert response.first_text.startswith("Failed to get console output: Unable to render reply: TypeError")


class TestValidation:
    """Argument records sent to the relay."""

    @pytest.mark.asyncio
    async def test_none_fields_and_unknown_keys_are_dropped(self):
        relay = FakeRelay(Ok(None))

        await GET_CONSOLE_OUTPUT.invoke(
            relay, {"window_label": "main", "session_id": None, "clear_after_read": True, "bogus": 1}
        )

        assert relay.calls == [("get_console_output", {"window_label": "main", "clear_after_read": True})]

    @pytest.mark.asyncio
    async def test_execute_forwards_all_fields(self):
        relay = FakeRelay(Ok({"message": "ok"}))

        await EXECUTE_WITH_CONSOLE.invoke(
            relay, {"window_label": "main", "code": "console.log('hi')", "capture_output": False}
        )

        assert relay.calls == [
            ("execute_with_console", {"window_label": "main", "code": "console.log('hi')", "capture_output": False})
        ]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "adapter, args",
        [
            (EXECUTE_WITH_CONSOLE, {"code": ""}),
            (EXECUTE_WITH_CONSOLE, {"code": 42}),
            (DIRECT_EVAL, {}),
            (GET_CONSOLE_OUTPUT, {"clear_after_read": "maybe"}),
            (SETUP_CONSOLE_CAPTURE, {"window_label": ["main"]}),
        ],
    )
    async def test_invalid_arguments_raise(self, adapter, args):
        relay = FakeRelay(Ok({}))

        with pytest.raises(InvalidArgumentError):
            await adapter.invoke(relay, args)
        assert relay.calls == []

    def test_input_schema_marks_code_required(self):
        schema = EXECUTE_WITH_CONSOLE.input_schema()

        assert schema["type"] == "object"
        assert schema["required"] == ["code"]
        assert set(schema["properties"]) == {"window_label", "code", "capture_output"}

    def test_optional_only_schema_has_no_required(self):
        schema = GET_CONSOLE_OUTPUT.input_schema()
        assert "required" not in schema
        assert set(schema["properties"]) == {"window_label", "session_id", "clear_after_read"}
