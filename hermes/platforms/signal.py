"""Signal adapter talking to a signal-cli REST daemon."""

from __future__ import annotations

from typing import Any, Optional

import httpx

from hermes.platforms.base import (
    MediaAttachment,
    MessageEvent,
    PlatformAdapter,
    PlatformError,
    SendMessage,
    _as_int,
    _as_str,
    _get,
)

_MEDIA_PREFIXES = (("image/", "photo"), ("audio/", "voice"))


def _parse_attachment(data_message: Any) -> Optional[MediaAttachment]:
    attachments = _get(data_message, "attachments")
    if not isinstance(attachments, list) or not attachments:
        return None
    first = attachments[0]
    content_type = _as_str(_get(first, "contentType")) or ""
    attachment_id = _as_str(_get(first, "id")) or ""
    for prefix, media_type in _MEDIA_PREFIXES:
        if content_type.startswith(prefix):
            return MediaAttachment(
                media_type=media_type, url=attachment_id, mime_type=content_type
            )
    return None


def _parse_envelope(msg: Any) -> Optional[MessageEvent]:
    envelope = msg["envelope"] if isinstance(msg, dict) and "envelope" in msg else msg
    data_message = _get(envelope, "dataMessage")
    text = _as_str(_get(data_message, "message")) or ""
    media = _parse_attachment(data_message)
    if not text and media is None:
        return None
    timestamp = _as_int(_get(data_message, "timestamp"))
    group_id = _as_str(_get(_get(data_message, "groupInfo"), "groupId"))
    return MessageEvent(
        text=text,
        source="signal",
        user_id=_as_str(_get(envelope, "source")) or "unknown",
        chat_id=group_id if group_id is not None else "direct",
        chat_type="private",
        reply_to=str(timestamp if timestamp is not None else 0),
        media=media,
    )


class SignalAdapter(PlatformAdapter):
    """Sends and polls messages through a Signal REST daemon."""

    name = "signal"

    def __init__(
        self, http_url: str, account: str, client: Optional[httpx.AsyncClient] = None
    ) -> None:
        super().__init__(client)
        self.http_url = http_url.rstrip("/")
        self.account = account
        self._connected = False

    @staticmethod
    def _add_recipient(body: dict[str, Any], chat_id: str) -> None:
        if chat_id and chat_id != "direct":
            body["recipient"] = chat_id

    async def _post_send(self, body: dict[str, Any], failure: str) -> None:
        resp = await self.client.post(f"{self.http_url}/v2/send", json=body)
        if not resp.is_success:
            raise PlatformError(f"{failure}: {resp.text}")

    def _attachment_body(
        self, chat_id: str, url: str, caption: Optional[str]
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"account": self.account, "attachments": [{"url": url}]}
        if caption is not None:
            body["message"] = caption
        self._add_recipient(body, chat_id)
        return body

    async def poll_messages(self) -> list[MessageEvent]:
        """Fetch pending messages and return those with text or supported media."""
        resp = await self.client.get(f"{self.http_url}/v1/receive/{self.account}")
        messages = resp.json()
        if not isinstance(messages, list):
            return []
        return [event for event in map(_parse_envelope, messages) if event is not None]

    async def connect(self) -> None:
        resp = await self.client.get(f"{self.http_url}/v1/about")
        if not resp.is_success:
            raise PlatformError(
                f"Signal daemon not reachable at {self.http_url}: {resp.text}"
            )
        self._connected = True

    async def disconnect(self) -> None:
        self._connected = False

    async def send(self, message: SendMessage) -> None:
        body: dict[str, Any] = {"account": self.account, "message": message.text}
        self._add_recipient(body, message.chat_id)
        await self._post_send(body, "Signal send failed")

    async def send_image(
        self, chat_id: str, image_url: str, caption: Optional[str] = None
    ) -> None:
        body = self._attachment_body(chat_id, image_url, caption)
        await self._post_send(body, "Signal send image failed")

    async def send_document(
        self, chat_id: str, file_path: str, caption: Optional[str] = None
    ) -> None:
        body = self._attachment_body(chat_id, file_path, caption)
        await self._post_send(body, "Signal send document failed")

    async def send_typing(self, chat_id: str) -> None:
        await self.client.put(
            f"{self.http_url}/v1/typing/{self.account}", json={"recipient": chat_id}
        )

    async def edit_message(self, chat_id: str, message_id: str, text: str) -> None:
        """Signal messages cannot be edited here; this does nothing."""

    def is_connected(self) -> bool:
        return self._connected