"""
Transport I/O Boundary

This module holds the HTTP clients that move finished boards to and from a
display. Each one reduces to "send a board, get a status back" (and, where the
API allows it, "read the current board"). None of them know anything about
layout.

Three APIs are covered:
- Read/Write API (cloud, one board per key)
- Subscription API (cloud, many boards per installable)
- Local API (on the device, LAN only)
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from .board import Board
from .config import (
    LOCAL_DEVICE_PORT,
    LocalConfig,
    ReadWriteConfig,
    SubscriptionConfig,
    TransportConfig,
)
from .validation import BoardFormatError

logger = logging.getLogger(__name__)

RW_API_URI = "https://rw.vestaboard.com/"
RW_API_HEADER = "X-Vestaboard-Read-Write-Key"

SUBSCRIPTION_API_URI = "https://subscriptions.vestaboard.com/subscriptions"
SUBSCRIPTION_API_KEY_HEADER = "X-Vestaboard-Api-Key"
SUBSCRIPTION_API_SECRET_HEADER = "X-Vestaboard-Api-Secret"

LOCAL_API_KEY_HEADER = "X-Vestaboard-Local-Api-Key"
LOCAL_ENABLEMENT_TOKEN_HEADER = "X-Vestaboard-Local-Api-Enablement-Token"
LOCAL_API_MESSAGE_URI = "/local-api/message"
LOCAL_API_ENABLEMENT_URI = "/local-api/enablement"


class TransportError(Exception):
    """Base exception for transport errors."""

    pass


class TransportConnectionError(TransportError):
    """Raised when the request never got a response."""

    pass


class TransportApiError(TransportError):
    """Raised when the API answered with an error."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        self.message = message
        super().__init__(
            f"api error ({status_code}): {message}" if status_code else f"api error: {message}"
        )


@dataclass(frozen=True)
class ReadWriteMessage:
    id: str
    layout: str
    board: Board


@dataclass(frozen=True)
class WriteResponse:
    status: str
    id: str
    created: int


@dataclass(frozen=True)
class Subscription:
    id: str
    board_id: str


@dataclass(frozen=True)
class SubscriptionMessage:
    id: str
    created: str
    muted: bool


def _json_headers(extra: Dict[str, str]) -> Dict[str, str]:
    return {"Content-Type": "application/json", **extra}


class Transport(ABC):
    """
    Abstract base class for sending boards to a display.

    Implementations own an ``httpx.AsyncClient``; an ``http_transport`` can be
    passed to route requests elsewhere (``httpx.MockTransport`` in tests).
    """

    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    @abstractmethod
    async def send(self, board: Board) -> str:
        """
        Send a board to the display.

        Returns:
            str: a short status or message id

        Raises:
            TransportError: If the board couldn't be delivered
        """
        pass

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise TransportConnectionError(f"{method} {url} failed: {e}") from e

        if not response.is_success:
            logger.error(f"{method} {url} returned {response.status_code}")
            raise TransportApiError(response.text, response.status_code)
        return response


def _decode(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise TransportApiError(f"failed to parse response: {e}", response.status_code) from e


class ReadWriteClient(Transport):
    """Client for the cloud Read/Write API of a single board."""

    def __init__(
        self,
        config: ReadWriteConfig,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        super().__init__(
            httpx.AsyncClient(
                headers=_json_headers({RW_API_HEADER: config.read_write_key}),
                timeout=timeout,
                transport=http_transport,
            )
        )
        self.config = config

    async def read(self, rows: int = 6, cols: int = 22) -> ReadWriteMessage:
        """Read the message currently on the board."""
        body = _decode(await self._request("GET", RW_API_URI))
        try:
            message = body["currentMessage"]
            layout = str(message["layout"])
            board = Board.parse(layout, rows, cols)
            return ReadWriteMessage(id=str(message["id"]), layout=layout, board=board)
        except (KeyError, TypeError) as e:
            raise TransportApiError(f"unexpected read response: {body!r}") from e
        except BoardFormatError as e:
            raise TransportApiError(f"failed to parse message layout: {e}") from e

    async def write(self, board: Board) -> WriteResponse:
        body = _decode(await self._request("POST", RW_API_URI, json=board.to_rows()))
        try:
            return WriteResponse(
                status=str(body["status"]), id=str(body["id"]), created=int(body["created"])
            )
        except (KeyError, TypeError, ValueError) as e:
            raise TransportApiError(f"unexpected write response: {body!r}") from e

    async def send(self, board: Board) -> str:
        response = await self.write(board)
        logger.info(f"Read/Write API accepted message {response.id}")
        return response.id


class SubscriptionClient(Transport):
    """Client for the cloud Subscription API."""

    def __init__(
        self,
        config: SubscriptionConfig,
        subscription_id: Optional[str] = None,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        super().__init__(
            httpx.AsyncClient(
                headers=_json_headers(
                    {
                        SUBSCRIPTION_API_KEY_HEADER: config.api_key,
                        SUBSCRIPTION_API_SECRET_HEADER: config.api_secret,
                    }
                ),
                timeout=timeout,
                transport=http_transport,
            )
        )
        self.config = config
        self.subscription_id = subscription_id

    async def list_subscriptions(self) -> List[Subscription]:
        body = _decode(await self._request("GET", SUBSCRIPTION_API_URI))
        try:
            return [Subscription(id=str(s["id"]), board_id=str(s["boardId"])) for s in body]
        except (KeyError, TypeError) as e:
            raise TransportApiError(f"unexpected subscriptions response: {body!r}") from e

    async def write(self, subscription_id: str, board: Board) -> SubscriptionMessage:
        url = f"{SUBSCRIPTION_API_URI}/{subscription_id}/message"
        body = _decode(await self._request("POST", url, json={"characters": board.to_rows()}))
        try:
            return SubscriptionMessage(
                id=str(body["id"]), created=str(body["created"]), muted=bool(body["muted"])
            )
        except (KeyError, TypeError) as e:
            raise TransportApiError(f"unexpected message response: {body!r}") from e

    async def send(self, board: Board) -> str:
        if not self.subscription_id:
            raise TransportError("No subscription_id configured for SubscriptionClient")
        message = await self.write(self.subscription_id, board)
        logger.info(f"Subscription {self.subscription_id} accepted message {message.id}")
        return message.id


class LocalClient(Transport):
    """Client for the Local API served by the device itself."""

    def __init__(
        self,
        config: LocalConfig,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        super().__init__(
            httpx.AsyncClient(
                headers=_json_headers({LOCAL_API_KEY_HEADER: config.api_key}),
                timeout=timeout,
                transport=http_transport,
            )
        )
        self.config = config
        self.url = f"{config.base_url}{LOCAL_API_MESSAGE_URI}"

    async def read(self, rows: int = 6, cols: int = 22) -> Board:
        body = _decode(await self._request("GET", self.url))
        try:
            return Board.from_rows(body, rows, cols)
        except (BoardFormatError, TypeError) as e:
            raise TransportApiError(f"failed to parse board: {e}") from e

    async def write(self, board: Board) -> None:
        await self._request("POST", self.url, json=board.to_rows())

    async def send(self, board: Board) -> str:
        await self.write(board)
        logger.info(f"Local API at {self.config.ip_address} accepted board")
        return "ok"


async def get_local_api_key(
    ip_address: Optional[str] = None,
    enablement_token: Optional[str] = None,
    http_transport: Optional[httpx.AsyncBaseTransport] = None,
    port: int = LOCAL_DEVICE_PORT,
) -> str:
    """
    Exchange a local enablement token for the device's Local API key.

    The device hands out the key only once per token, so store it. Missing
    arguments fall back to the LOCAL_DEVICE_IP and LOCAL_ENABLEMENT_TOKEN
    environment variables.

    Raises:
        ValueError: If the token or address is missing or the address is invalid
        TransportError: If the request fails or the device refuses
    """
    token = enablement_token or os.getenv("LOCAL_ENABLEMENT_TOKEN")
    if not token:
        raise ValueError("missing local enablement token; pass it or set LOCAL_ENABLEMENT_TOKEN")

    ip = ip_address or os.getenv("LOCAL_DEVICE_IP")
    if not ip:
        raise ValueError("missing device ip; pass it or set LOCAL_DEVICE_IP")

    # reuse LocalConfig's address validation; the key isn't known yet
    base_url = LocalConfig(api_key="pending", ip_address=ip, port=port).base_url
    url = f"{base_url}{LOCAL_API_ENABLEMENT_URI}"
    headers = _json_headers({LOCAL_ENABLEMENT_TOKEN_HEADER: token})

    async with httpx.AsyncClient(transport=http_transport) as client:
        try:
            response = await client.post(url, headers=headers)
        except httpx.HTTPError as e:
            raise TransportConnectionError(f"POST {url} failed: {e}") from e
    body = _decode(response)

    api_key = body.get("apiKey") if isinstance(body, dict) else None
    if not api_key:
        message = body.get("message", "") if isinstance(body, dict) else str(body)
        raise TransportApiError(message, response.status_code)
    return str(api_key)


def create_transport(
    config: TransportConfig, http_transport: Optional[httpx.AsyncBaseTransport] = None
) -> Optional[Transport]:
    """Build the transport selected by ``config.kind``; ``None`` when kind is "none"."""
    if config.kind == "rw" and config.rw is not None:
        return ReadWriteClient(config.rw, http_transport=http_transport, timeout=config.timeout)
    if config.kind == "subscription" and config.subscription is not None:
        return SubscriptionClient(
            config.subscription,
            subscription_id=config.subscription_id,
            http_transport=http_transport,
            timeout=config.timeout,
        )
    if config.kind == "local" and config.local is not None:
        return LocalClient(config.local, http_transport=http_transport, timeout=config.timeout)
    return None
