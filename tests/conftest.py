import base64

import httpx
import pytest

from avatarcache.config.schema import build_config
from avatarcache.fetch.client import AvatarFetcher
from avatarcache.pipeline.engine import AvatarPipeline

PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR4"
    "nGP4z8BQDwAEgAF/pooBPQAAAABJRU5ErkJggg=="
)


class RecordingResponder:
    """Stands in for a host response object."""

    def __init__(self):
        self.sent = []
        self.errors = []

    def send_file(self, path):
        self.sent.append(path)

    def send_error(self, status_code, detail):
        self.errors.append((status_code, detail))


@pytest.fixture
def sample_image_bytes():
    """Minimal valid PNG for testing (1x1 white pixel)."""
    return PNG_BYTES


@pytest.fixture
def responder():
    return RecordingResponder()


@pytest.fixture
def http_requests():
    """Every request seen by the mock transport, in order."""
    return []


@pytest.fixture
def http_handler(http_requests, sample_image_bytes):
    def handler(request: httpx.Request) -> httpx.Response:
        http_requests.append(request)
        return httpx.Response(
            200, content=sample_image_bytes, headers={"content-type": "image/png"}
        )

    return handler


@pytest.fixture
async def http_client(http_handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(http_handler))
    yield client
    await client.aclose()


@pytest.fixture
def make_pipeline(tmp_path, http_client):
    """Build a pipeline over a temp cache root and the mock HTTP client."""

    def _make(**overrides):
        overrides.setdefault("cache_root", tmp_path / "avatars")
        config = build_config(**overrides)
        return AvatarPipeline(config, fetcher=AvatarFetcher(client=http_client))

    return _make


@pytest.fixture
def sample_config_yaml(tmp_path):
    """Write a minimal avatar config YAML and return its path."""
    content = """
avatar:
  entity_id: username
  order: [gravatar, fallback_url]
  size: 64
  gravatar:
    style: retro
  fallback_url: https://example.com/default.png
"""
    path = tmp_path / "avatar.yaml"
    path.write_text(content)
    return path
