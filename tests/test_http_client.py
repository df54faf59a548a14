# ruff: noqa: S101
import httpx
import pytest

from courier.http_client import RequestExecutor, _validate_method, _validate_url, perform_http_request
from courier.models import RequestDescriptor, RequestFailure, ResponseRecord


@pytest.mark.asyncio
async def test_execute_sends_method_headers_and_body(mock_executor, recording_handler):
    descriptor = RequestDescriptor(
        method="POST",
        url="https://api.test/items",
        headers=(("X-Trace", "1"), ("Content-Type", "application/json")),
        body='{"x": 1}',
    )

    record = await mock_executor.execute(descriptor)

    assert isinstance(record, ResponseRecord)
    sent = recording_handler.requests[0]
    assert sent.method == "POST"
    assert str(sent.url) == "https://api.test/items"
    assert sent.headers["X-Trace"] == "1"
    assert sent.content == b'{"x": 1}'


@pytest.mark.asyncio
async def test_execute_builds_record(mock_executor, recording_handler):
    recording_handler.response = httpx.Response(
        201,
        headers=[("content-type", "application/json"), ("x-name", "café".encode("utf-8"))],
        content='{"msg": "hé"}'.encode("utf-8"),
    )
    descriptor = RequestDescriptor(method="GET", url="https://api.test/items?q=a%20b")

    record = await mock_executor.execute(descriptor)

    assert record.status == 201
    assert record.source_url == "https://api.test/items?q=a%20b"
    assert record.source_method == "GET"
    assert record.body == '{"msg": "hé"}'
    assert record.size == len('{"msg": "hé"}'.encode("utf-8"))
    assert ("content-type", "application/json") in record.headers
    assert ("x-name", "") in record.headers
    assert record.duration >= record.network_duration


@pytest.mark.asyncio
async def test_execute_without_body_sends_no_content(mock_executor, recording_handler):
    await mock_executor.execute(RequestDescriptor(method="DELETE", url="https://api.test/items/1"))
    assert recording_handler.requests[0].content == b""


@pytest.mark.asyncio
async def test_transport_error_becomes_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with RequestExecutor(httpx.AsyncClient(transport=httpx.MockTransport(handler))) as executor:
        outcome = await executor.execute(RequestDescriptor(method="GET", url="https://down.test"))

    assert outcome == RequestFailure("connection refused")


@pytest.mark.asyncio
async def test_empty_url_becomes_failure(mock_executor, recording_handler):
    outcome = await mock_executor.execute(RequestDescriptor(method="GET", url=""))
    assert isinstance(outcome, RequestFailure)
    assert "Unsupported URL scheme" in outcome.message
    assert recording_handler.requests == []


@pytest.mark.asyncio
async def test_invalid_method_becomes_failure(mock_executor):
    outcome = await mock_executor.execute(RequestDescriptor(method="GE T", url="https://api.test"))
    assert isinstance(outcome, RequestFailure)
    assert "Invalid HTTP method" in outcome.message


@pytest.mark.asyncio
async def test_perform_http_request_with_requester_override(record_factory):
    async def requester(descriptor):
        return record_factory(descriptor.url, status=418, body="teapot")

    record = await perform_http_request(
        RequestDescriptor(method="GET", url="https://example.com"),
        requester=requester,
    )
    assert record.status == 418
    assert record.body == "teapot"


@pytest.mark.asyncio
async def test_executor_uses_requester(record_factory):
    async def requester(descriptor):
        return record_factory(descriptor.url, status=204, body="")

    executor = RequestExecutor(requester=requester)
    record = await executor.execute(RequestDescriptor(method="HEAD", url="https://example.com"))
    assert record.status == 204


@pytest.mark.asyncio
async def test_executor_reuses_one_client():
    executor = RequestExecutor(timeout=5)
    try:
        assert executor.client is executor.client
    finally:
        await executor.aclose()
    assert executor._client is None


def test_validate_url_rejects_invalid_scheme():
    with pytest.raises(ValueError, match="Unsupported URL scheme"):
        _validate_url("ftp://example.com")
    with pytest.raises(ValueError, match="Missing host"):
        _validate_url("https://")


def test_validate_method_accepts_tokens():
    _validate_method("PURGE")
    with pytest.raises(ValueError, match="Invalid HTTP method"):
        _validate_method("")
