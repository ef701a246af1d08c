import json
from contextlib import ExitStack
from typing import Any, Dict, List
from unittest.mock import AsyncMock

import httpx
import pytest
import pytest_asyncio

from src.config.config import Config, EndPoints, StringParamConfig
from src.models.city import CityWeatherRecord
from src.services.city_info_service import CityInfoService
from src.services.lookup_client import LookupClient

ZIPCODE_ENDPOINT = "https://test.com/zipcode/"
WEATHER_ENDPOINT = "https://test.com/weather/"


@pytest.fixture
def string_params():
    """Valid zip code length bounds."""
    return StringParamConfig(min_length=4, max_length=5)


@pytest.fixture
def end_points():
    """Configured upstream endpoints."""
    return EndPoints(zipcode=ZIPCODE_ENDPOINT, weather=WEATHER_ENDPOINT)


@pytest.fixture
def test_config(string_params, end_points):
    """Settings with valid lookup configuration, ignoring any .env file."""
    return Config(
        string_param_config=string_params,
        end_points=end_points,
        _env_file=None,
    )


@pytest.fixture
def city_record():
    """Record returned by the zip lookup service."""
    return CityWeatherRecord(city_name="TestCity", zip_code="12345")


@pytest.fixture
def weather_record():
    """Record returned by the weather service."""
    return CityWeatherRecord(city_name="TestCity", current_weather="Sunny")


@pytest.fixture
def mock_lookup_client():
    """Mock lookup client for service testing."""
    mock_client = AsyncMock()
    mock_client.get_record = AsyncMock()
    return mock_client


@pytest.fixture
def make_service(mock_lookup_client, string_params, end_points):
    """Build a CityInfoService around the mock lookup client."""

    def _make(string_params=string_params, end_points=end_points) -> CityInfoService:
        return CityInfoService(
            lookup_client=mock_lookup_client,
            string_params=string_params,
            end_points=end_points,
        )

    return _make


class FakeUpstream:
    """
    Upstream services served through httpx.MockTransport.

    Routes map a URL to either a JSON-serializable body with an optional
    status, or an exception to raise. Every request is recorded.
    """

    def __init__(self):
        self.routes: Dict[str, Any] = {}
        self.requests: List[httpx.Request] = []

    def respond(self, url: str, body: Any, status_code: int = 200):
        self.routes[url] = (status_code, body)

    def fail(self, url: str, exc: Exception):
        self.routes[url] = exc

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(str(request.url))
        if route is None:
            return httpx.Response(404, text="Not Found")
        if isinstance(route, Exception):
            raise route
        status_code, body = route
        content = body if isinstance(body, (bytes, str)) else json.dumps(body)
        return httpx.Response(
            status_code,
            content=content,
            headers={"Content-Type": "application/json"},
        )

    @property
    def requested_urls(self) -> List[str]:
        return [str(request.url) for request in self.requests]


@pytest.fixture
def fake_upstream():
    """Fake zip lookup and weather services."""
    return FakeUpstream()


@pytest.fixture
def upstream_client(fake_upstream) -> httpx.AsyncClient:
    """
    httpx client wired to the fake upstream services.

    Closed by the app lifespan in route tests and by the lookup_client
    fixture in client tests.
    """
    return httpx.AsyncClient(transport=httpx.MockTransport(fake_upstream.handler))


@pytest_asyncio.fixture
async def lookup_client(upstream_client):
    """LookupClient over the fake upstreams; closes the httpx client afterwards."""
    yield LookupClient(upstream_client)
    await upstream_client.aclose()


@pytest.fixture
def make_test_client(test_config, upstream_client):
    """
    Build started TestClients for apps using the fake upstreams.

    Each client runs the app lifespan, which closes the upstream client on
    shutdown at teardown.
    """
    from fastapi.testclient import TestClient

    from main import create_app

    with ExitStack() as stack:

        def _make(settings: Config = test_config, **kwargs) -> TestClient:
            client = TestClient(create_app(settings=settings, http_client=upstream_client), **kwargs)
            return stack.enter_context(client)

        yield _make
