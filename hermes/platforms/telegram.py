"""Telegram bot adapter using the Bot API with long polling."""

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
    _is_ok,
    _json_text,
)


def _parse_media(message: Any) -> Optional[MediaAttachment]:
    photo = _get(message, "photo")
    if isinstance(photo, list):
        if not photo:
            return None
        largest = photo[-1]
        return MediaAttachment(
            media_type="photo",
            url=_as_str(_get(largest, "file_id")) or "",
            mime_type="image/jpeg",
        )
    for key, media_type in (("voice", "voice"), ("document", "document")):
        item = _get(message, key)
        if item is not None:
            return MediaAttachment(
                media_type=media_type,
                url=_as_str(_get(item, "file_id")) or "",
                mime_type=_as_str(_get(item, "mime_type")),
            )
    return None


def _int_text(value: Any) -> str:
    number = _as_int(value)
    return str(number if number is not None else 0)


def _parse_message(message: Any) -> Optional[MessageEvent]:
    chat = _get(message, "chat")
    text = _as_str(_get(message, "text")) or ""
    reply_id = _as_int(_get(_get(message, "reply_to_message"), "message_id"))
    media = _parse_media(message)
    if not text and media is None:
        return None
    return MessageEvent(
        text=text,
        source="telegram",
        user_id=_int_text(_get(_get(message, "from"), "id")),
        chat_id=_int_text(_get(chat, "id")),
        chat_type=_as_str(_get(chat, "type")) or "private",
        reply_to=str(reply_id) if reply_id is not None else None,
        media=media,
    )


class TelegramAdapter(PlatformAdapter):
    """Receives updates by long polling and sends through the Bot API."""

    name = "telegram"

    def __init__(self, bot_token: str, client: Optional[httpx.AsyncClient] = None) -> None:
        super().__init__(client)
        self.bot_token = bot_token
        self.api_base = f"https://api.telegram.org/bot{bot_token}"
        self.last_update_id = 0
        self._connected = False

    async def _call(self, method: str, body: dict[str, Any], failure: str) -> None:
        resp = await self.client.post(f"{self.api_base}/{method}", json=body)
        result = resp.json()
        if not _is_ok(result):
            raise PlatformError(f"{failure}: {_json_text(result)}")

    async def poll_updates(self) -> list[MessageEvent]:
        """Fetch new updates and return the text or media messages among them."""
        url = f"{self.api_base}/getUpdates?offset={self.last_update_id + 1}&timeout=30"
        resp = await self.client.get(url)
        updates = _get(resp.json(), "result")
        if not isinstance(updates, list):
            return []
        events = []
        for update in updates:
            update_id = _as_int(_get(update, "update_id"))
            if update_id is not None:
                self.last_update_id = update_id
            message = _get(update, "message")
            if message is None:
                continue
            event = _parse_message(message)
            if event is not None:
                events.append(event)
        return events

    async def get_me(self) -> Any:
        """Return the raw ``getMe`` reply."""
        resp = await self.client.get(f"{self.api_base}/getMe")
        return resp.json()

    async def connect(self) -> None:
        result = await self.get_me()
        if not _is_ok(result):
            raise PlatformError(f"Telegram getMe failed: {_json_text(result)}")
        self._connected = True

    async def disconnect(self) -> None:
        self._connected = False

    async def send(self, message: SendMessage) -> None:
        body: dict[str, Any] = {"chat_id": message.chat_id, "text": message.text}
        if message.parse_mode is not None:
            body["parse_mode"] = message.parse_mode
        if message.reply_to is not None:
            body["reply_to_message_id"] = message.reply_to
        await self._call("sendMessage", body, "sendMessage failed")

    async def send_image(
        self, chat_id: str, image_url: str, caption: Optional[str] = None
    ) -> None:
        body: dict[str, Any] = {"chat_id": chat_id, "photo": image_url}
        if caption is not None:
            body["caption"] = caption
        await self._call("sendPhoto", body, "sendPhoto failed")

    async def send_document(
        self, chat_id: str, file_path: str, caption: Optional[str] = None
    ) -> None:
        body: dict[str, Any] = {"chat_id": chat_id, "document": file_path}
        if caption is not None:
            body["caption"] = caption
        await self._call("sendDocument", body, "sendDocument failed")

    async def send_typing(self, chat_id: str) -> None:
        await self.client.post(
            f"{self.api_base}/sendChatAction",
            json={"chat_id": chat_id, "action": "typing"},
        )

    async def edit_message(self, chat_id: str, message_id: str, text: str) -> None:
        body = {"chat_id": chat_id, "message_id": message_id, "text": text}
        await self._call("editMessageText", body, "editMessageText failed")

    def is_connected(self) -> bool:
        return self._connected