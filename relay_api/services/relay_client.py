import asyncio
from typing import Optional

import httpx
from fastapi import Request
from pydantic import BaseModel, ValidationError

from relay_api.config.settings import Settings

RELAY_TIMEOUT_SECONDS = 30.0
GENERATE_PATH = "/api/generate"


class RelayRequest(BaseModel):
    """Body of a generation request sent to the Ollama server."""

    model: str
    prompt: str
    stream: bool = False


class RelayResponse(BaseModel):
    """Non-streaming generation result returned by the Ollama server."""

    response: str
    done: bool = False


class RelayError(Exception):
    """
    Raised when a message could not be relayed to the Ollama server.

    Covers connection failures, timeouts, non-success statuses and
    unparseable response bodies. The underlying exception, if any, is kept
    as `__cause__`.
    """


class RelayClient:
    """
    Forwards chat messages to the Ollama `/api/generate` endpoint.

    The client holds nothing but immutable configuration; every call opens
    its own `httpx.AsyncClient`, so instances are safe to share between
    concurrent requests.
    """

    def __init__(
        self,
        settings: Settings,
        timeout: float = RELAY_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.model_name = settings.OLLAMA_MODEL
        self.base_url = settings.OLLAMA_BASE_URL.rstrip("/")
        self.generate_endpoint = f"{self.base_url}{GENERATE_PATH}"
        self.timeout = timeout
        self._transport = transport

    def build_request(self, message: str) -> RelayRequest:
        return RelayRequest(model=self.model_name, prompt=message, stream=False)

    async def _post(self, payload: RelayRequest) -> httpx.Response:
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout), transport=self._transport
        ) as client:
            return await client.post(
                self.generate_endpoint,
                json=payload.model_dump(),
                headers={"Accept": "application/json"},
            )

    async def send(self, message: str) -> str:
        """
        Relays a single message and returns the generated text.

        Args:
            message: The prompt to submit to the model.

        Returns:
            The `response` field of the Ollama reply, unmodified. An empty
            string is a valid result.

        Raises:
            RelayError: If the call fails, times out, returns a non-success
                status than 200, or an unparseable body. The call is never retried.
        """
        payload = self.build_request(message)

        try:
            response = await asyncio.wait_for(self._post(payload), self.timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            reason = f"Ollama API request timed out after {self.timeout:g}s"
            if str(e):
                reason = f"{reason}: {e}"
            raise RelayError(reason) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise RelayError(f"Failed to call Ollama API: {e}") from e

        if response.status_code != httpx.codes.OK:
            raise RelayError(
                f"Ollama API returned status {response.status_code}: {response.text}"
            )

        try:
            result = RelayResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise RelayError(f"Failed to decode Ollama response: {e}") from e

        return result.response


def get_relay_client(request: Request) -> RelayClient:
    """
    Dependency provider for the RelayClient.

    Returns the instance created alongside the application, so handlers never
    construct clients or read settings themselves.
    """
    return request.app.state.relay_client
