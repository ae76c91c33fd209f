"""Tests for the Apify actor client."""

import json

import httpx
import pytest

from saas_pricing_mcp.utils.actor_client import ActorClient, ExtractionError

ACTOR_RUNS_PATH = "/v2/acts/apricot_blackberry~saas-pricing-intelligence/runs"


class ApifyStub:
    """Minimal stand-in for the Apify API routes the client uses."""

    def __init__(self, run_states, items=None, dataset_status=200):
        self.run_states = list(run_states)
        self.items = items if items is not None else []
        self.dataset_status = dataset_status
        self.requests = []

    def _next_run(self):
        state = self.run_states.pop(0)
        return {"id": "run-1", "defaultDatasetId": "ds-1", **state}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if request.method == "POST" and path == ACTOR_RUNS_PATH:
            return httpx.Response(201, json={"data": self._next_run()})
        if request.method == "GET" and path == "/v2/actor-runs/run-1":
            return httpx.Response(200, json={"data": self._next_run()})
        if request.method == "GET" and path == "/v2/datasets/ds-1/items":
            return httpx.Response(self.dataset_status, json=self.items)
        return httpx.Response(404, json={"error": {"type": "record-not-found", "message": "Not found"}})

    def paths(self):
        return [request.url.path for request in self.requests]


def _client(stub) -> ActorClient:
    return ActorClient(
        token="test_token",
        base_url="https://api.apify.test",
        wait_secs=5,
        transport=httpx.MockTransport(stub),
    )


class TestActorRun:
    """Tests for a full run-and-fetch cycle."""

    @pytest.mark.asyncio
    async def test_successful_run(self):
        """Test that the run input is sent and dataset items returned."""
        items = [{"productName": "Notion", "url": "https://notion.so/pricing", "tiers": []}]
        stub = ApifyStub([{"status": "SUCCEEDED"}], items=items)

        result = await _client(stub).invoke(
            ["https://notion.so/pricing"],
            {"proxyTier": "datacenter", "maxRequestsPerCrawl": 6},
        )

        assert result == items
        assert stub.paths() == [ACTOR_RUNS_PATH, "/v2/datasets/ds-1/items"]

        start = stub.requests[0]
        assert start.headers["Authorization"] == "Bearer test_token"
        assert start.url.params["waitForFinish"] == "5"
        assert json.loads(start.content) == {
            "startUrls": [{"url": "https://notion.so/pricing"}],
            "proxyTier": "datacenter",
            "maxRequestsPerCrawl": 6,
        }

        fetch = stub.requests[1]
        assert fetch.url.params["clean"] == "true"
        assert fetch.url.params["format"] == "json"

    @pytest.mark.asyncio
    async def test_waits_until_run_finishes(self):
        """Test polling while the run is still in progress."""
        stub = ApifyStub(
            [{"status": "READY"}, {"status": "RUNNING"}, {"status": "SUCCEEDED"}],
            items=[{"url": "https://x.com/pricing"}],
        )

        result = await _client(stub).invoke(["https://x.com"], {})

        assert result == [{"url": "https://x.com/pricing"}]
        assert stub.paths() == [
            ACTOR_RUNS_PATH,
            "/v2/actor-runs/run-1",
            "/v2/actor-runs/run-1",
            "/v2/datasets/ds-1/items",
        ]

    @pytest.mark.asyncio
    async def test_custom_actor_id(self):
        """Test that the actor id is made URL-safe."""
        stub = ApifyStub([{"status": "SUCCEEDED"}])
        client = ActorClient(
            token="t",
            actor_id="someone/other-actor",
            base_url="https://api.apify.test/",
            transport=httpx.MockTransport(stub),
        )

        with pytest.raises(ExtractionError):
            await client.invoke(["https://x.com"], {})

        assert stub.paths() == ["/v2/acts/someone~other-actor/runs"]


class TestActorErrors:
    """Tests for failure reporting."""

    @pytest.mark.asyncio
    async def test_failed_run(self):
        """Test that a failed run raises with the remote message."""
        stub = ApifyStub([{"status": "FAILED", "statusMessage": "Site unreachable"}])

        with pytest.raises(ExtractionError) as exc_info:
            await _client(stub).invoke(["https://down.example"], {})

        assert str(exc_info.value) == "Actor run run-1 finished with status FAILED: Site unreachable"
        assert "/v2/datasets/ds-1/items" not in stub.paths()

    @pytest.mark.asyncio
    async def test_timed_out_run(self):
        """Test that a timed-out run is a failure."""
        stub = ApifyStub([{"status": "RUNNING"}, {"status": "TIMED-OUT"}])

        with pytest.raises(ExtractionError, match="TIMED-OUT"):
            await _client(stub).invoke(["https://slow.example"], {})

    @pytest.mark.asyncio
    async def test_http_error_message(self):
        """Test that Apify's error message is surfaced."""

        def handler(request):
            return httpx.Response(
                401,
                json={"error": {"type": "token-not-valid", "message": "Authentication token is not valid"}},
            )

        client = ActorClient(token="bad", transport=httpx.MockTransport(handler))

        with pytest.raises(ExtractionError) as exc_info:
            await client.invoke(["https://x.com"], {})

        assert str(exc_info.value) == "Apify API returned 401: Authentication token is not valid"

    @pytest.mark.asyncio
    async def test_transport_error(self):
        """Test that connection failures become extraction errors."""

        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = ActorClient(token="t", transport=httpx.MockTransport(handler))

        with pytest.raises(ExtractionError, match="Request to Apify failed"):
            await client.invoke(["https://x.com"], {})

    @pytest.mark.asyncio
    async def test_dataset_not_a_list(self):
        """Test rejection of a malformed dataset response."""
        stub = ApifyStub([{"status": "SUCCEEDED"}], items={"items": []})

        with pytest.raises(ExtractionError, match="did not return a list"):
            await _client(stub).invoke(["https://x.com"], {})

    @pytest.mark.asyncio
    async def test_dataset_fetch_failure(self):
        """Test that a failed dataset fetch raises."""
        stub = ApifyStub([{"status": "SUCCEEDED"}], dataset_status=500)

        with pytest.raises(ExtractionError, match="returned 500"):
            await _client(stub).invoke(["https://x.com"], {})


class TestClientConfiguration:
    """Tests for building the client from settings."""

    def test_from_settings(self, test_settings):
        """Test that settings flow into the client."""
        client = ActorClient.from_settings(test_settings)

        assert client.token == "test_token"
        assert client.actor_id == "apricot_blackberry/saas-pricing-intelligence"
        assert client.base_url == "https://api.apify.test"
        assert client.timeout == 90
        assert client.wait_secs == 1
