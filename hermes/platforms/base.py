"""Common types and the adapter interface for messaging platforms."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

import httpx


@dataclass
class MediaAttachment:
    """A media item attached to an incoming message."""

    media_type: str
    url: str
    mime_type: Optional[str] = None


@dataclass
class MessageEvent:
    """A message received from a platform."""

    text: str
    source: str
    user_id: str
    chat_id: str
    chat_type: str
    reply_to: Optional[str] = None
    media: Optional[MediaAttachment] = None


@dataclass
class SendMessage:
    """A text message to send to a chat."""

    text: str
    chat_id: str
    parse_mode: Optional[str] = None
    reply_to: Optional[str] = None


class PlatformError(Exception):
    """Raised when a messaging platform rejects a request."""


def _json_text(value: Any) -> str:
    """Render a JSON value compactly with sorted keys."""
    return json.dumps(value, separators=(",", ":"), sort_keys=True, ensure_ascii=False)


def _get(obj: Any, key: str) -> Any:
    """Return ``obj[key]`` when ``obj`` is a JSON object, else None."""
    return obj.get(key) if isinstance(obj, dict) else None


def _as_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _is_ok(result: Any) -> bool:
    """Return whether an API reply carries ``"ok": true``."""
    return _get(result, "ok") is True


class PlatformAdapter(ABC):
    """Connection to one messaging platform."""

    name: str = ""

    def __init__(self, client: Optional[httpx.AsyncClient] = None) -> None:
        self._owns_client = client is None
        self.client = client if client is not None else httpx.AsyncClient()

    async def __aenter__(self) -> "PlatformAdapter":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        if self._owns_client:
            await self.client.aclose()

    @abstractmethod
    async def connect(self) -> None:
        """Verify credentials and mark the adapter connected."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Mark the adapter disconnected."""

    @abstractmethod
    async def send(self, message: SendMessage) -> None:
        """Send a text message."""

    @abstractmethod
    async def send_image(
        self, chat_id: str, image_url: str, caption: Optional[str] = None
    ) -> None:
        """Send an image by URL."""

    @abstractmethod
    async def send_document(
        self, chat_id: str, file_path: str, caption: Optional[str] = None
    ) -> None:
        """Send a document."""

    @abstractmethod
    async def send_typing(self, chat_id: str) -> None:
        """Show a typing indicator in a chat."""

    @abstractmethod
    async def edit_message(self, chat_id: str, message_id: str, text: str) -> None:
        """Replace the text of a sent message."""

    @abstractmethod
    def is_connected(self) -> bool:
        """Return whether the adapter is connected."""