"""
Tests for FreeMobileClient.

Covers construction, pre-flight validation, the full send pipeline and
metrics, with fake transports or httpx.MockTransport.
"""

import logging
from contextlib import asynccontextmanager
from unittest.mock import patch

import httpx
import pytest

from freesms import (
    DispatchError,
    ErrorKind,
    FreeMobileClient,
    GatewayConfig,
    GatewayResponse,
    HttpxTransport,
    TransportFailure,
)

CREDENTIALS = {"user": "12345678", "pass": "api-key-value"}
GRINNING = "\U0001F600"


class RecordingTransport:
    """Fake transport that records chunks and can fail on one of them."""

    def __init__(self, fail_at=None, failure=None):
        self.calls = []
        self.fail_at = fail_at
        self.failure = failure
        self.closed = False

    async def send_one(self, credentials, chunk):
        index = len(self.calls)
        self.calls.append(chunk)
        if index == self.fail_at:
            raise self.failure
        return GatewayResponse(status_code=200)

    async def aclose(self):
        self.closed = True


@asynccontextmanager
async def gateway_client(handler, config=None):
    """Client whose default-style transport talks to a mocked gateway."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
        transport = HttpxTransport("https://gateway.test/sendmsg", client=http_client)
        yield FreeMobileClient(CREDENTIALS, config or GatewayConfig(), transport)


class TestClientConstruction:
    """Test credential validation at construction."""

    def test_valid_credentials(self):
        """Test creating a client."""
        client = FreeMobileClient(CREDENTIALS, transport=RecordingTransport())
        assert client.credentials.user == "12345678"
        assert "api-key-value" not in repr(client)

    def test_empty_user(self):
        """Test that an empty user is rejected."""
        with pytest.raises(DispatchError) as exc_info:
            FreeMobileClient({"user": "", "pass": "x"})
        assert exc_info.value.kind == ErrorKind.INVALID_USER

    def test_null_credentials(self):
        """Test that null credentials are rejected."""
        with pytest.raises(DispatchError) as exc_info:
            FreeMobileClient(None)
        assert exc_info.value.kind == ErrorKind.INVALID_CREDENTIALS

    @patch('freesms.client.HttpxTransport')
    def test_no_transport_built_for_invalid_credentials(self, mock_transport):
        """Test that validation happens before any transport exists."""
        with pytest.raises(DispatchError):
            FreeMobileClient({"user": "u", "pass": ""})
        mock_transport.assert_not_called()

    @patch('freesms.client.HttpxTransport')
    def test_default_transport_uses_config(self, mock_transport):
        """Test that the default transport is built from the configuration."""
        config = GatewayConfig(http_method="GET", request_timeout_seconds=3.0)
        FreeMobileClient(CREDENTIALS, config)

        mock_transport.assert_called_once_with(
            endpoint_url=config.endpoint_url,
            method="GET",
            timeout_seconds=3.0,
        )


class TestPrepare:
    """Test message preparation without sending."""

    def setup_method(self):
        """Set up test fixtures."""
        self.client = FreeMobileClient(CREDENTIALS, GatewayConfig(), RecordingTransport())

    def test_short_message(self):
        """Test that a short message is one chunk."""
        assert self.client.prepare("Hello") == ["Hello"]

    def test_long_message_chunked(self):
        """Test splitting at the gateway limit."""
        chunks = self.client.prepare("a" * 2500)
        assert [len(c) for c in chunks] == [999, 999, 502]

    def test_symbols_sanitized_before_chunking(self):
        """Test that chunking works on the sanitized text."""
        chunks = self.client.prepare(GRINNING * 500)
        assert "".join(chunks) == "[]" * 500
        assert [len(c) for c in chunks] == [999, 1]

    def test_custom_chunk_length(self):
        """Test a smaller configured chunk size."""
        client = FreeMobileClient(
            CREDENTIALS, GatewayConfig(max_chunk_length=10), RecordingTransport()
        )
        assert client.prepare("x" * 25) == ["x" * 10, "x" * 10, "x" * 5]

    def test_invalid_type(self):
        """Test that non-string messages are rejected."""
        for message in (123, None, b"bytes", ["a"]):
            with pytest.raises(DispatchError) as exc_info:
                self.client.prepare(message)
            assert exc_info.value.kind == ErrorKind.INVALID_MESSAGE_TYPE

    def test_blank_message(self):
        """Test that empty and whitespace-only messages are rejected."""
        for message in ("", "   ", "\n\t "):
            with pytest.raises(DispatchError) as exc_info:
                self.client.prepare(message)
            assert exc_info.value.kind == ErrorKind.EMPTY_MESSAGE

    def test_notice_disabled_by_default(self):
        """Test that no notice is appended unless configured."""
        assert self.client.prepare(f"Hi {GRINNING}") == ["Hi []"]

    def test_notice_appended_after_replacement(self):
        """Test the optional explanatory notice."""
        config = GatewayConfig(append_notice=True, notice_text="[] = unsupported")
        client = FreeMobileClient(CREDENTIALS, config, RecordingTransport())

        assert client.prepare(f"Hi {GRINNING}") == ["Hi []\n\n[] = unsupported"]
        assert client.prepare("Hi") == ["Hi"]


class TestSend:
    """Test the send pipeline."""

    @pytest.mark.asyncio
    async def test_non_string_makes_no_network_call(self):
        """Test that send(123) fails before the transport is used."""
        transport = RecordingTransport()
        client = FreeMobileClient(CREDENTIALS, GatewayConfig(), transport)

        with pytest.raises(DispatchError) as exc_info:
            await client.send(123)

        assert exc_info.value.kind == ErrorKind.INVALID_MESSAGE_TYPE
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_blank_makes_no_network_call(self):
        """Test that send of a blank message fails before the transport is used."""
        transport = RecordingTransport()
        client = FreeMobileClient(CREDENTIALS, GatewayConfig(), transport)

        with pytest.raises(DispatchError) as exc_info:
            await client.send("   ")

        assert exc_info.value.kind == ErrorKind.EMPTY_MESSAGE
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_successful_send(self):
        """Test a single-chunk message."""
        transport = RecordingTransport()
        client = FreeMobileClient(CREDENTIALS, GatewayConfig(), transport)

        result = await client.send(f"Backup done {GRINNING}")

        assert transport.calls == ["Backup done []"]
        assert result.chunk_count == 1
        assert result.sanitized_message == "Backup done []"
        assert result.replaced_symbols == 1
        assert result.last_response.status_code == 200

    @pytest.mark.asyncio
    async def test_ordering_and_fail_fast(self):
        """Test a 3-chunk message whose second chunk is refused with 403."""
        transport = RecordingTransport(
            fail_at=1, failure=TransportFailure("Gateway answered 403", status_code=403)
        )
        client = FreeMobileClient(CREDENTIALS, GatewayConfig(), transport)
        message = "a" * 999 + "b" * 999 + "c" * 502

        with pytest.raises(DispatchError) as exc_info:
            await client.send(message)

        error = exc_info.value
        assert error.kind == ErrorKind.ACCESS_DENIED
        assert error.delivered_chunks == 1
        assert error.total_chunks == 3
        assert error.is_partial_delivery is True
        assert transport.calls == ["a" * 999, "b" * 999]

    @pytest.mark.asyncio
    async def test_all_chunks_delivered(self):
        """Test that every response is returned in send order."""
        transport = RecordingTransport()
        client = FreeMobileClient(CREDENTIALS, GatewayConfig(), transport)

        result = await client.send("z" * 2500)

        assert [len(c) for c in transport.calls] == [999, 999, 502]
        assert [r.chunk_index for r in result.responses] == [0, 1, 2]
        assert result.last_response is result.responses[-1]

    @pytest.mark.asyncio
    async def test_gateway_statuses(self):
        """Test status mapping through the httpx transport."""
        expected = {
            400: ErrorKind.BAD_REQUEST,
            402: ErrorKind.RATE_LIMITED,
            403: ErrorKind.ACCESS_DENIED,
            500: ErrorKind.SERVER_ERROR,
            503: ErrorKind.HTTP_ERROR,
        }

        for status, kind in expected.items():
            def handler(request, status=status):
                return httpx.Response(status)

            async with gateway_client(handler) as client:
                with pytest.raises(DispatchError) as exc_info:
                    await client.send("Hello")

            assert exc_info.value.kind == kind
            assert exc_info.value.http_status == status

    @pytest.mark.asyncio
    async def test_no_response_is_network_error(self):
        """Test that a connection failure yields NETWORK_ERROR."""
        def handler(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        async with gateway_client(handler) as client:
            with pytest.raises(DispatchError) as exc_info:
                await client.send("Hello")

        assert exc_info.value.kind == ErrorKind.NETWORK_ERROR
        assert exc_info.value.http_status is None
        assert "timed out" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_end_to_end_success(self):
        """Test a full send against the mocked gateway."""
        received = []

        def handler(request):
            received.append(request)
            return httpx.Response(200)

        async with gateway_client(handler, GatewayConfig(max_chunk_length=5)) as client:
            result = await client.send("Hello world")
            http_client = client.transport._client

        assert http_client.is_closed is True
        assert len(received) == 3
        assert result.chunk_count == 3
        assert all(r.status_code == 200 for r in result.responses)


class TestMetricsAndLogging:
    """Test client metrics and log hygiene."""

    @pytest.mark.asyncio
    async def test_metrics(self):
        """Test counters after a success, a rejection and a partial delivery."""
        transport = RecordingTransport(
            fail_at=2, failure=TransportFailure("Gateway answered 500", status_code=500)
        )
        client = FreeMobileClient(CREDENTIALS, GatewayConfig(max_chunk_length=3), transport)

        await client.send("abc")
        with pytest.raises(DispatchError):
            await client.send("   ")
        with pytest.raises(DispatchError):
            await client.send("defghi")

        metrics = client.get_metrics()
        assert metrics['total_sends'] == 3
        assert metrics['successful_sends'] == 1
        assert metrics['failed_sends'] == 2
        assert metrics['chunks_delivered'] == 2
        assert metrics['partial_deliveries'] == 1
        assert metrics['last_send_time'] is not None

        client.reset_metrics()
        assert client.get_metrics()['total_sends'] == 0
        assert client.get_metrics()['success_rate'] == 0.0

    @pytest.mark.asyncio
    async def test_content_and_secret_not_logged(self, caplog):
        """Test that message text and API key stay out of the logs by default."""
        client = FreeMobileClient(CREDENTIALS, GatewayConfig(), RecordingTransport())

        with caplog.at_level(logging.DEBUG, logger="freesms"):
            await client.send("private text")

        assert "Sending message in 1 chunk(s)" in caplog.text
        assert "private text" not in caplog.text
        assert "api-key-value" not in caplog.text

    @pytest.mark.asyncio
    async def test_content_logged_when_enabled(self, caplog):
        """Test opt-in content logging."""
        config = GatewayConfig(log_message_content=True)
        client = FreeMobileClient(CREDENTIALS, config, RecordingTransport())

        with caplog.at_level(logging.INFO, logger="freesms"):
            await client.send("visible text")

        assert "visible text" in caplog.text


class TestLifecycle:
    """Test closing the client."""

    @pytest.mark.asyncio
    async def test_injected_transport_left_open(self):
        """Test that the client does not close a transport it was given."""
        transport = RecordingTransport()

        async with FreeMobileClient(CREDENTIALS, GatewayConfig(), transport) as client:
            await client.send("Hello")

        assert transport.closed is False

    @pytest.mark.asyncio
    async def test_default_transport_closed(self):
        """Test that the default transport is closed on exit."""
        async with FreeMobileClient(CREDENTIALS, GatewayConfig()) as client:
            transport = client.transport
            transport._get_client()

        assert transport._client is None
