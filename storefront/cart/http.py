"""
HTTP Cart Service

Talks to the storefront REST API with httpx. Responses are validated with
pydantic before they reach the store; every failure (transport, status code,
malformed body) surfaces as RemoteOperationFailed.
"""

from typing import Any, Optional, Union

import httpx
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from storefront.config import CartClientConfig
from storefront.errors import (
    ERROR_INVALID_RESPONSE,
    ERROR_NETWORK,
    ERROR_TIMEOUT,
    RemoteOperationFailed,
)
from storefront.logging import get_logger, sanitize_string_for_logging

from .models import CartItem, ItemId
from .service import RemoteCartService

logger = get_logger(__name__)

CART_ITEMS_PATH = "/cart/items"
NO_RESPONSE_BODY = "No response body"
# Envelope keys used by list endpoints
LIST_ENVELOPE_KEYS = ("data", "items")
ERROR_MESSAGE_KEYS = ("message", "detail", "error")


class CartItemPayload(BaseModel):
    """Cart line as returned by the API."""
    model_config = ConfigDict(extra="ignore")

    id: Union[int, str] = Field(validation_alias=AliasChoices("id", "Id"))
    product_id: Union[int, str] = Field(validation_alias=AliasChoices("productId", "product_id"))
    quantity: int = Field(ge=1)

    def to_item(self) -> CartItem:
        return CartItem(id=self.id, product_id=self.product_id, quantity=self.quantity)


def _extract_error_message(response: httpx.Response) -> str:
    """Best human-readable message from an error response."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for key in ERROR_MESSAGE_KEYS:
            value = body.get(key)
            if value:
                return value if isinstance(value, str) else str(value)

    text = response.text[:200] if response.text else NO_RESPONSE_BODY
    return f"Cart service error ({response.status_code}): {text}"


def _unwrap_list(body: Any) -> list:
    if isinstance(body, list):
        return body
    if isinstance(body, dict):
        for key in LIST_ENVELOPE_KEYS:
            if isinstance(body.get(key), list):
                return body[key]
    raise RemoteOperationFailed(ERROR_INVALID_RESPONSE)


def _acknowledged_item(body: Any) -> Optional[CartItem]:
    """Cart line from a 2xx write response, or None when the body is not one.

    Write endpoints may answer with a bare acknowledgement or the whole cart.
    """
    if isinstance(body, dict) and isinstance(body.get("data"), dict):
        # {"data": {...}} envelope
        body = body["data"]
    if not isinstance(body, dict):
        return None
    try:
        return CartItemPayload.model_validate(body).to_item()
    except ValidationError:
        logger.info("Write acknowledged without a cart line in the response")
        return None


def _parse_item(data: dict) -> CartItem:
    try:
        return CartItemPayload.model_validate(data).to_item()
    except ValidationError as e:
        logger.warning(f"Invalid cart item payload: {sanitize_string_for_logging(str(e), 200)}")
        raise RemoteOperationFailed(ERROR_INVALID_RESPONSE)


class HttpCartService(RemoteCartService):
    """Cart backend reached over HTTP.

    Endpoints (relative to ``api_url``):
    - GET    /cart/items
    - POST   /cart/items          {"productId", "quantity"}
    - PATCH  /cart/items/{id}     {"quantity"}
    - DELETE /cart/items/{id}
    - DELETE /cart/items
    """

    def __init__(self, config: CartClientConfig, client: Optional[httpx.AsyncClient] = None):
        self.config = config
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=config.api_url,
            headers=self._build_headers(),
            timeout=config.timeout,
        )

    @classmethod
    def from_env(cls) -> "HttpCartService":
        return cls(CartClientConfig.from_env())

    def _build_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.config.api_token:
            headers["Authorization"] = f"Bearer {self.config.api_token}"
        return headers

    async def __aenter__(self) -> "HttpCartService":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying client if this adapter created it."""
        if self._owns_client:
            await self._client.aclose()

    async def _request(self, method: str, path: str, json: Optional[dict] = None) -> Any:
        """Perform one request. Returns decoded JSON or None for empty bodies."""
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.TimeoutException as e:
            logger.warning(f"{method} {path} timed out: {e}")
            raise RemoteOperationFailed(ERROR_TIMEOUT)
        except httpx.RequestError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise RemoteOperationFailed(f"{ERROR_NETWORK}: {e}")

        if response.is_error:
            message = _extract_error_message(response)
            logger.warning(
                f"{method} {path} returned {response.status_code}: "
                f"{sanitize_string_for_logging(message, 200)}"
            )
            raise RemoteOperationFailed(message, status_code=response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            raise RemoteOperationFailed(ERROR_INVALID_RESPONSE, status_code=response.status_code)

    async def get_cart_items(self) -> list[CartItem]:
        body = await self._request("GET", CART_ITEMS_PATH)
        return [_parse_item(entry) for entry in _unwrap_list(body)]

    async def add_to_cart(self, product_id: ItemId, quantity: int) -> Optional[CartItem]:
        body = await self._request(
            "POST", CART_ITEMS_PATH, json={"productId": product_id, "quantity": quantity}
        )
        # None makes the store refetch
        return _acknowledged_item(body)

    async def update_cart_item(self, item_id: ItemId, fields: dict) -> Optional[CartItem]:
        body = await self._request("PATCH", f"{CART_ITEMS_PATH}/{item_id}", json=fields)
        # None keeps the local line as last known
        return _acknowledged_item(body)

    async def remove_from_cart(self, item_id: ItemId) -> None:
        await self._request("DELETE", f"{CART_ITEMS_PATH}/{item_id}")

    async def clear_cart(self) -> None:
        await self._request("DELETE", CART_ITEMS_PATH)
