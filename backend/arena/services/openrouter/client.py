from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from .config import OpenRouterConfig
from .exceptions import (
    OpenRouterAPIError,
    OpenRouterAuthError,
    OpenRouterRateLimitError,
    OpenRouterResponseError,
)
from .models import ChatCompletionRequest, ChatCompletionResponse, ChatMessage

logger = logging.getLogger(__name__)


class OpenRouterClient:
    """Async client for the OpenRouter chat-completions API."""

    def __init__(
        self,
        api_key: str,
        config: OpenRouterConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.config = config or OpenRouterConfig()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        logger.info(f"Initialized OpenRouterClient (model={self.config.model})")

    async def __aenter__(self) -> OpenRouterClient:
        self._client = httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout_seconds,
            headers=self._headers(),
            transport=self._transport,
        )
        return self

    async def __aexit__(
        self,
        exc_type: type | None,
        exc_val: Exception | None,
        exc_tb: Any,
    ) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("Closed OpenRouterClient")

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError(
                "OpenRouterClient must be used as async context manager"
            )
        return self._client

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "HTTP-Referer": self.config.referer,
            "X-Title": self.config.title,
            "Content-Type": "application/json",
        }

    async def _post(self, endpoint: str, json_data: dict[str, Any]) -> dict[str, Any]:
        retry_count = 0
        last_error: Exception | None = None

        while retry_count < self.config.max_retries:
            try:
                response = await self.client.post(endpoint, json=json_data)

                if response.status_code == 401:
                    raise OpenRouterAuthError("Authentication failed", status_code=401)
                elif response.status_code == 429:
                    last_error = OpenRouterRateLimitError(
                        "Rate limit exceeded", status_code=429
                    )
                    wait_time = 2 ** retry_count
                    logger.warning(f"Rate limited, waiting {wait_time}s...")
                    await asyncio.sleep(wait_time)
                    retry_count += 1
                    continue
                elif response.status_code >= 500:
                    last_error = OpenRouterAPIError(
                        f"Server error {response.status_code}",
                        status_code=response.status_code,
                    )
                    wait_time = 2 ** retry_count
                    logger.warning(
                        f"Server error {response.status_code}, "
                        f"retrying in {wait_time}s..."
                    )
                    await asyncio.sleep(wait_time)
                    retry_count += 1
                    continue
                elif response.status_code >= 400:
                    raise OpenRouterAPIError(
                        f"Request rejected: {_error_message(response)}",
                        status_code=response.status_code,
                    )

                return response.json()

            except httpx.TimeoutException as e:
                last_error = e
                retry_count += 1
                if retry_count < self.config.max_retries:
                    logger.warning(f"Timeout, retrying ({retry_count})...")
                    await asyncio.sleep(2)

            except httpx.RequestError as e:
                last_error = e
                logger.error(f"Network error: {e}")
                break

        raise OpenRouterAPIError(
            f"Request failed after {retry_count} retries: {last_error}",
            status_code=getattr(last_error, "status_code", None),
        )

    async def complete(self, prompt: str, model: str | None = None) -> str:
        """Send a single user message and return the reply text."""
        request = ChatCompletionRequest(
            model=model or self.config.model,
            messages=[ChatMessage(role="user", content=prompt)],
        )
        data = await self._post("chat/completions", request.model_dump(exclude_none=True))

        try:
            completion = ChatCompletionResponse.model_validate(data)
        except ValidationError as e:
            raise OpenRouterResponseError(f"Unexpected completion payload: {e}")

        content = completion.content
        if content is None:
            raise OpenRouterResponseError("Completion has no message content")
        return content


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or "Unknown error"
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict):
        return error.get("message") or "Unknown error"
    return "Unknown error"
