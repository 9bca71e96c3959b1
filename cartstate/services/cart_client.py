"""Cart Service Client - httpx adapter for the remote cart API.

Every response body is normalized into a CartResponse here, so the store and
reconciler never inspect raw payload shapes.
"""

from typing import Any
from urllib.parse import quote

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from cartstate.cart.models import CartResponse, parse_cart_response
from cartstate.config import CartSettings
from cartstate.errors import ERROR_SERVICE_UNAVAILABLE, CartServiceError
from cartstate.logging import get_logger, loggable_id

from .models import AddToCartRequest, UpdateCartItemRequest

logger = get_logger(__name__)

# POST is excluded: replaying an add could double the quantity
IDEMPOTENT_METHODS = frozenset({"GET", "PUT", "DELETE"})


def _segment(value: Any) -> str:
    return quote(str(value), safe="")


def _response_payload(response: httpx.Response) -> Any:
    """Parsed JSON body, raw text when not JSON, None when empty."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text or None


class HttpCartService:
    """Cart service over HTTP"""

    def __init__(
        self,
        settings: CartSettings | None = None,
        http_client: httpx.AsyncClient | None = None,
        retry_wait: float = 0.5,
    ):
        self.settings = settings or CartSettings.from_env()
        self.retry_wait = retry_wait

        # HTTP client (lazy init unless injected)
        self._http_client = http_client
        self._owns_client = http_client is None

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Lazy creation of shared httpx client with timeouts."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.settings.timeout, connect=self.settings.connect_timeout),
                limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
                headers={"Accept": "application/json"},
            )
        return self._http_client

    async def aclose(self) -> None:
        """Close the HTTP client if this service created it."""
        if self._http_client is not None and self._owns_client:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "HttpCartService":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    @staticmethod
    def _log_retry(retry_state: RetryCallState) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            "Cart API request failed (attempt %d), retrying: %s",
            retry_state.attempt_number,
            exc,
        )

    async def _send(self, method: str, url: str, body: dict | None) -> httpx.Response:
        client = await self._get_http_client()
        response = await client.request(method, url, json=body)
        response.raise_for_status()
        return response

    async def _request(self, method: str, path: str, body: dict | None = None) -> Any:
        """
        Send a request and return the parsed body.

        Transport errors on idempotent methods are retried with exponential
        backoff. Status errors are never retried.

        Raises:
            CartServiceError: On non-2xx status or exhausted transport retries
        """
        url = f"{self.settings.api_url}{path}"
        attempts = self.settings.max_retries if method in IDEMPOTENT_METHODS else 1

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(attempts),
                wait=wait_exponential(multiplier=self.retry_wait, max=10),
                retry=retry_if_exception_type(httpx.TransportError),
                before_sleep=self._log_retry,
                reraise=True,
            ):
                with attempt:
                    response = await self._send(method, url, body)
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error("Cart API %s %s returned %s", method, path, status)
            raise CartServiceError(
                f"Cart service returned HTTP {status}",
                payload=_response_payload(e.response),
                status_code=status,
            ) from e
        except httpx.TransportError as e:
            logger.error("Cart API %s %s unreachable: %s", method, path, e)
            raise CartServiceError(f"{ERROR_SERVICE_UNAVAILABLE}: {e}") from e

        return _response_payload(response)

    # ==================== CART API ====================

    async def get_cart(self, user_id: str) -> CartResponse:
        """Fetch the user's full cart."""
        logger.debug("Fetching cart for user %s", loggable_id(user_id))
        body = await self._request("GET", f"/cart/{_segment(user_id)}")
        return parse_cart_response(body)

    async def add_to_cart(self, user_id: str, product_id: str, quantity: int) -> CartResponse:
        """Add a product. Backends answer with the full cart or the single item."""
        request = AddToCartRequest(product_id=product_id, quantity=quantity)
        body = await self._request(
            "POST",
            f"/cart/{_segment(user_id)}/items",
            request.model_dump(by_alias=True),
        )
        return parse_cart_response(body)

    async def update_cart_item(
        self,
        user_id: str,
        product_id: str,
        quantity: int,
        cart_item_id: str | None = None,
    ) -> CartResponse:
        """
        Set an item's quantity.

        Args:
            user_id: Cart owner
            product_id: Product being updated
            quantity: New quantity
            cart_item_id: Cart entry ID; addresses the item when given, else product_id does
        """
        request = UpdateCartItemRequest(
            product_id=product_id,
            quantity=quantity,
            cart_item_id=cart_item_id,
        )
        item_ref = cart_item_id or product_id
        body = await self._request(
            "PUT",
            f"/cart/{_segment(user_id)}/items/{_segment(item_ref)}",
            request.model_dump(by_alias=True, exclude_none=True),
        )
        return parse_cart_response(body)

    async def remove_from_cart(self, user_id: str, product_id: str) -> CartResponse:
        """Remove a product. An empty reply means the caller filters locally."""
        body = await self._request(
            "DELETE",
            f"/cart/{_segment(user_id)}/items/{_segment(product_id)}",
        )
        return parse_cart_response(body)
