"""HTTP client that commits reorder requests to the API."""

import logging
from dataclasses import dataclass
from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from app.client.errors import TransientFailure, Unauthorized, ValidationFailed
from app.config import settings
from app.schemas.reorder import ReorderRequest

logger = logging.getLogger(__name__)

REJECTED_STATUSES = {400, 404, 409, 422}
UNAUTHORIZED_STATUSES = {401, 403}


@dataclass(frozen=True)
class Confirmed:
    """Server accepted the batch."""

    request: ReorderRequest
    payload: Any = None


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    detail = body.get("detail", body) if isinstance(body, dict) else body
    if isinstance(detail, dict):
        return str(detail.get("message", detail))
    return str(detail)


class OrderGatewayClient:
    """Sends :data:`ReorderRequest` variants to their endpoints.

    Transient failures are retried with exponential backoff; rejections
    are raised immediately.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        cookies: dict[str, str] | None = None,
        max_retries: int | None = None,
        retry_delay: float | None = None,
        max_backoff: float | None = None,
    ):
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            base_url=base_url or settings.api_base_url,
            cookies=cookies,
            timeout=settings.client_timeout,
        )
        self.max_retries = max_retries if max_retries is not None else settings.client_max_retries
        self.retry_delay = retry_delay if retry_delay is not None else settings.client_retry_delay
        self.max_backoff = max_backoff if max_backoff is not None else settings.client_max_backoff

    async def __aenter__(self) -> "OrderGatewayClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def commit(self, request: ReorderRequest) -> Confirmed:
        """Commit one request, retrying transient failures."""
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=self.retry_delay, max=self.max_backoff),
            retry=retry_if_exception_type(TransientFailure),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                return await self._send(request)
        raise TransientFailure("Order commit was not attempted")

    async def _send(self, request: ReorderRequest) -> Confirmed:
        try:
            response = await self.client.request(
                request.method(), request.path(), json=request.body()
            )
        except httpx.TransportError as e:
            raise TransientFailure(f"Network error: {e}") from e

        if response.is_success:
            payload = response.json() if response.content else None
            return Confirmed(request=request, payload=payload)

        message = _error_message(response)
        if response.status_code in UNAUTHORIZED_STATUSES:
            raise Unauthorized(message, response.status_code)
        if response.status_code in REJECTED_STATUSES:
            raise ValidationFailed(message, response.status_code)
        raise TransientFailure(message, response.status_code)
