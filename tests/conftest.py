import asyncio
import sys
from datetime import timedelta
from pathlib import Path

import httpx
import pytest
import pytest_asyncio

# Ensure pytest-asyncio plugin is loaded so @pytest.mark.asyncio works with pytest>=9.
pytest_plugins = ["pytest_asyncio"]


# Ensure project root is on sys.path for local test runs without installation.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from courier.database import EnvironmentStore  # noqa: E402
from courier.http_client import RequestExecutor  # noqa: E402
from courier.models import RequestDescriptor, ResponseRecord  # noqa: E402


@pytest.fixture
def tmp_config_dir(tmp_path, monkeypatch):
    cfg = tmp_path / "config"
    cfg.mkdir()
    monkeypatch.setenv("HTTP_COURIER_CONFIG_DIR", str(cfg))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    return cfg


@pytest.fixture
def store(tmp_path):
    env_store = EnvironmentStore(tmp_path / "data" / "courier.db").init()
    yield env_store
    env_store.close()


@pytest.fixture
def clipboard_spy():
    calls: list[str] = []

    async def copier(text: str) -> None:
        calls.append(text)

    return calls, copier


def make_record(url: str, status: int = 200, body: str = "{}", headers=None, method: str = "GET") -> ResponseRecord:
    return ResponseRecord(
        source_url=url,
        source_method=method,
        status=status,
        headers=tuple(headers or (("content-type", "application/json"),)),
        body=body,
        duration=timedelta(milliseconds=5),
        size=len(body.encode("utf-8")),
    )


@pytest.fixture
def record_factory():
    return make_record


class GatedExecutor:
    """Executor whose requests finish only when the test releases their URL."""

    def __init__(self) -> None:
        self.sent: list[RequestDescriptor] = []
        self._gates: dict[str, asyncio.Event] = {}

    def _gate(self, url: str) -> asyncio.Event:
        return self._gates.setdefault(url, asyncio.Event())

    def release(self, url: str) -> None:
        self._gate(url).set()

    async def execute(self, descriptor: RequestDescriptor) -> ResponseRecord:
        self.sent.append(descriptor)
        await self._gate(descriptor.url).wait()
        return make_record(descriptor.url, body=f'{{"url": "{descriptor.url}"}}', method=descriptor.method)


@pytest.fixture
def gated_executor():
    return GatedExecutor()


class RecordingHandler:
    """MockTransport handler that records requests and replays one response."""

    def __init__(self, response: httpx.Response | None = None) -> None:
        self.requests: list[httpx.Request] = []
        self.response = response or httpx.Response(200, headers={"content-type": "application/json"}, content=b"{}")

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response


@pytest.fixture
def recording_handler():
    return RecordingHandler()


@pytest_asyncio.fixture
async def mock_executor(recording_handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(recording_handler))
    executor = RequestExecutor(client)
    yield executor
    await executor.aclose()
