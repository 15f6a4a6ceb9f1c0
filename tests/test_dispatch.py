"""Tests for the httpx-backed dispatcher."""

import json

import httpx
import pytest

from contract_fuzzer.config import FuzzerConfig
from contract_fuzzer.dispatch import HttpxDispatcher
from contract_fuzzer.executor import Outcome, Scenario, ScenarioExecutor
from contract_fuzzer.models import HttpRequest
from contract_fuzzer.rate_limiter import RateLimiter
from contract_fuzzer.response_family import ResponseFamily
from contract_fuzzer.serializer import BoundedSerializer


@pytest.fixture
def captured():
    """Requests seen by the mock transport."""
    return []


@pytest.fixture
def transport(captured):
    """Mock transport rejecting bodies without a string name."""

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        if request.url.path == "/down":
            raise httpx.ConnectError("connection refused", request=request)
        try:
            body = json.loads(request.content or b"{}")
        except ValueError:
            return httpx.Response(400, json={"error": "malformed json"})
        if not isinstance(body.get("name"), str):
            return httpx.Response(422, json={"error": "name must be a string"})
        return httpx.Response(201, json=body, headers={"X-Id": "42"})

    return httpx.MockTransport(handler)


class TestHttpxDispatcher:
    """Test HttpxDispatcher."""

    @pytest.mark.asyncio
    async def test_sends_request(self, transport, captured):
        async with HttpxDispatcher(base_url="http://api.test", transport=transport) as dispatcher:
            response = await dispatcher(
                HttpRequest(
                    method="POST",
                    path="/pets",
                    headers={"X-Trace": "abc"},
                    query_params={"dryRun": "true"},
                    body='{"name": "rex"}',
                )
            )

        assert response.status_code == 201
        assert response.headers["x-id"] == "42"
        assert json.loads(response.body) == {"name": "rex"}
        assert response.elapsed >= 0

        sent = captured[0]
        assert sent.method == "POST"
        assert str(sent.url) == "http://api.test/pets?dryRun=true"
        assert sent.headers["x-trace"] == "abc"

    @pytest.mark.asyncio
    async def test_transport_error_propagates(self, transport):
        async with HttpxDispatcher(base_url="http://api.test", transport=transport) as dispatcher:
            with pytest.raises(httpx.ConnectError):
                await dispatcher(HttpRequest(method="GET", path="/down"))

    @pytest.mark.asyncio
    async def test_from_config(self, transport):
        config = FuzzerConfig(base_url="http://api.test", request_timeout=2.5)

        dispatcher = HttpxDispatcher.from_config(config, transport=transport)
        try:
            assert dispatcher.client.base_url.host == "api.test"
            assert dispatcher.client.timeout.read == 2.5
        finally:
            await dispatcher.aclose()


class TestEndToEnd:
    """Test executor and dispatcher together."""

    @pytest.mark.asyncio
    async def test_mutated_payloads(self, transport):
        async with HttpxDispatcher(base_url="http://api.test", transport=transport) as dispatcher:
            executor = ScenarioExecutor(
                dispatcher=dispatcher,
                rate_limiter=RateLimiter(600000),
                serializer=BoundedSerializer(4),
            )
            scenarios = [
                Scenario(ResponseFamily.FOURXX, "POST", "/pets", payload={"name": 12}),
                Scenario(ResponseFamily.FOURXX, "POST", "/pets", payload='{"name": '),
                Scenario(ResponseFamily.FOURXX, "POST", "/pets", payload={"name": "rex"}),
                Scenario(ResponseFamily.FOURXX, "POST", "/down", payload={"name": "rex"}),
            ]

            results = await executor.execute_all(scenarios)

        assert [r.outcome for r in results] == [
            Outcome.PASS,
            Outcome.PASS,
            Outcome.FAIL,
            Outcome.ERROR,
        ]
        assert [r.status_code for r in results] == [422, 400, 201, None]
