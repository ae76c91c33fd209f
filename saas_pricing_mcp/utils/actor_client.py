"""Client for running the hosted pricing-extraction actor on Apify.

A single call submits an actor run, blocks until Apify reports it finished,
then reads every item from the run's default dataset.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

import httpx

from ..config import Settings

logger = logging.getLogger(__name__)

DEFAULT_ACTOR_ID = "apricot_blackberry/saas-pricing-intelligence"
DEFAULT_BASE_URL = "https://api.apify.com"

RUN_SUCCEEDED = "SUCCEEDED"
TERMINAL_RUN_STATUSES = {RUN_SUCCEEDED, "FAILED", "TIMED-OUT", "ABORTED"}


class ExtractionError(Exception):
    """Exception raised when an actor run or its dataset fetch fails."""

    pass


class ExtractionInvoker(ABC):
    """Runs an extraction job for a list of seed URLs."""

    @abstractmethod
    async def invoke(
        self,
        urls: Sequence[str],
        options: Dict[str, Any],
    ) -> List[Dict[str, Any]]:
        """Run one job over ``urls`` and return the records it produced."""
        pass


def _error_message(response: httpx.Response) -> str:
    """Pull Apify's error message out of a response, falling back to the body."""
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return body["error"].get("message") or response.text
    return response.text


class ActorClient(ExtractionInvoker):
    """Apify REST client bound to one actor.

    The client holds only read-only configuration, so one instance can
    serve every tool call for the life of the process.
    """

    def __init__(
        self,
        token: str,
        actor_id: str = DEFAULT_ACTOR_ID,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 90,
        wait_secs: int = 60,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the actor client.

        Args:
            token: Apify API token.
            actor_id: Actor to run, as ``username/actor-name``.
            base_url: Apify API root.
            timeout: Transport timeout in seconds for each API request.
            wait_secs: How long Apify may hold each run request open
                waiting for the run to finish.
            transport: Optional httpx transport, mainly for tests.
        """
        self.token = token
        self.actor_id = actor_id
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.wait_secs = wait_secs
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "ActorClient":
        """Build a client from application settings."""
        return cls(
            token=settings.APIFY_TOKEN,
            actor_id=settings.APIFY_ACTOR_ID,
            base_url=settings.APIFY_BASE_URL,
            timeout=settings.REQUEST_TIMEOUT,
            wait_secs=settings.RUN_WAIT_SECS,
            **kwargs,
        )

    async def invoke(
        self,
        urls: Sequence[str],
        options: Dict[str, Any],
    ) -> List[Dict[str, Any]]:
        """Run the actor over ``urls`` and return its dataset items.

        Args:
            urls: Seed URLs, sent as ``startUrls``.
            options: Remaining actor input fields.

        Returns:
            List of dataset items, in dataset order.

        Raises:
            ExtractionError: If the run does not succeed or any API
                request fails.
        """
        run_input = {"startUrls": [{"url": url} for url in urls], **options}

        async with httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Authorization": f"Bearer {self.token}"},
            timeout=self.timeout,
            transport=self._transport,
        ) as client:
            run = await self._start_run(client, run_input)
            run = await self._wait_for_run(client, run)

            status = run.get("status")
            if status != RUN_SUCCEEDED:
                detail = run.get("statusMessage") or "no status message"
                raise ExtractionError(
                    f"Actor run {run.get('id')} finished with status {status}: {detail}"
                )

            dataset_id = run.get("defaultDatasetId")
            if not dataset_id:
                raise ExtractionError(f"Actor run {run.get('id')} has no default dataset")

            items = await self._list_items(client, dataset_id)

        logger.info(f"Actor run {run.get('id')} returned {len(items)} items")
        return items

    async def _request(
        self,
        client: httpx.AsyncClient,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> Any:
        """Send one API request and decode its JSON body.

        Raises:
            ExtractionError: On HTTP error status, transport failure or a
                body that is not JSON.
        """
        try:
            response = await client.request(method, path, **kwargs)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            message = _error_message(e.response)
            logger.error(f"Apify API error: {e.response.status_code} - {message}")
            raise ExtractionError(f"Apify API returned {e.response.status_code}: {message}")
        except httpx.RequestError as e:
            logger.error(f"Apify request failed: {e}")
            raise ExtractionError(f"Request to Apify failed: {str(e)}")
        except ValueError:
            raise ExtractionError(f"Apify returned a non-JSON response for {path}")

    async def _start_run(
        self,
        client: httpx.AsyncClient,
        run_input: Dict[str, Any],
    ) -> Dict[str, Any]:
        actor_path = self.actor_id.replace("/", "~")
        logger.info(f"Starting actor {self.actor_id} with {len(run_input['startUrls'])} start URLs")

        body = await self._request(
            client,
            "POST",
            f"/v2/acts/{actor_path}/runs",
            json=run_input,
            params={"waitForFinish": self.wait_secs},
        )
        return self._run_from(body)

    async def _wait_for_run(
        self,
        client: httpx.AsyncClient,
        run: Dict[str, Any],
    ) -> Dict[str, Any]:
        while run.get("status") not in TERMINAL_RUN_STATUSES:
            logger.debug(f"Actor run {run.get('id')} is {run.get('status')}, waiting")
            body = await self._request(
                client,
                "GET",
                f"/v2/actor-runs/{run['id']}",
                params={"waitForFinish": self.wait_secs},
            )
            run = self._run_from(body)
        return run

    async def _list_items(
        self,
        client: httpx.AsyncClient,
        dataset_id: str,
    ) -> List[Dict[str, Any]]:
        items = await self._request(
            client,
            "GET",
            f"/v2/datasets/{dataset_id}/items",
            params={"clean": "true", "format": "json"},
        )
        if not isinstance(items, list):
            raise ExtractionError(f"Dataset {dataset_id} did not return a list of items")
        return items

    @staticmethod
    def _run_from(body: Any) -> Dict[str, Any]:
        run = body.get("data") if isinstance(body, dict) else None
        if not isinstance(run, dict) or not run.get("id"):
            raise ExtractionError("Apify returned a malformed actor run object")
        return run
