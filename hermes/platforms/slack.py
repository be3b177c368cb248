"""Slack bot adapter using the Web API."""

from __future__ import annotations

from typing import Any, Optional

import httpx

from hermes.platforms.base import (
    PlatformAdapter,
    PlatformError,
    SendMessage,
    _is_ok,
    _json_text,
)

API_BASE = "https://slack.com/api"


class SlackAdapter(PlatformAdapter):
    """Sends messages through a Slack bot token."""

    name = "slack"

    def __init__(self, bot_token: str, client: Optional[httpx.AsyncClient] = None) -> None:
        super().__init__(client)
        self.bot_token = bot_token
        self._connected = False

    async def _call(self, method: str, body: Optional[dict[str, Any]], failure: str) -> None:
        resp = await self.client.post(
            f"{API_BASE}/{method}",
            headers={"Authorization": f"Bearer {self.bot_token}"},
            json=body,
        )
        result = resp.json()
        if not _is_ok(result):
            raise PlatformError(f"{failure}: {_json_text(result)}")

    async def connect(self) -> None:
        await self._call("auth.test", None, "Slack auth.test failed")
        self._connected = True

    async def disconnect(self) -> None:
        self._connected = False

    async def send(self, message: SendMessage) -> None:
        body: dict[str, Any] = {"channel": message.chat_id, "text": message.text}
        if message.reply_to is not None:
            body["thread_ts"] = message.reply_to
        await self._call("chat.postMessage", body, "chat.postMessage failed")

    async def send_image(
        self, chat_id: str, image_url: str, caption: Optional[str] = None
    ) -> None:
        body: dict[str, Any] = {
            "channel": chat_id,
            "blocks": [
                {
                    "type": "image",
                    "image_url": image_url,
                    "alt_text": caption if caption is not None else "image",
                }
            ],
        }
        if caption is not None:
            body["text"] = caption
        await self._call("chat.postMessage", body, "send image failed")

    async def send_document(
        self, chat_id: str, file_path: str, caption: Optional[str] = None
    ) -> None:
        """Post a link to the file in a message section."""
        label = caption if caption is not None else "Download file"
        body = {
            "channel": chat_id,
            "text": caption if caption is not None else "Document",
            "blocks": [
                {
                    "type": "section",
                    "text": {"type": "mrkdwn", "text": f"<{file_path}|{label}>"},
                }
            ],
        }
        await self._call("chat.postMessage", body, "send document failed")

    async def send_typing(self, chat_id: str) -> None:
        """Slack bots have no typing indicator; this does nothing."""

    async def edit_message(self, chat_id: str, message_id: str, text: str) -> None:
        body = {"channel": chat_id, "ts": message_id, "text": text}
        await self._call("chat.update", body, "chat.update failed")

    def is_connected(self) -> bool:
        return self._connected