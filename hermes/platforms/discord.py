"""Discord bot adapter using the REST API."""

from __future__ import annotations

from typing import Any, Optional

import httpx

from hermes.platforms.base import PlatformAdapter, PlatformError, SendMessage

API_BASE = "https://discord.com/api/v10"


class DiscordAdapter(PlatformAdapter):
    """Sends messages through a Discord bot account."""

    name = "discord"

    def __init__(self, bot_token: str, client: Optional[httpx.AsyncClient] = None) -> None:
        super().__init__(client)
        self.bot_token = bot_token
        self._connected = False

    @property
    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bot {self.bot_token}"}

    def _messages_url(self, chat_id: str) -> str:
        return f"{API_BASE}/channels/{chat_id}/messages"

    async def _post_message(self, chat_id: str, body: dict[str, Any], failure: str) -> None:
        resp = await self.client.post(
            self._messages_url(chat_id), headers=self._headers, json=body
        )
        if not resp.is_success:
            raise PlatformError(f"{failure}: {resp.text}")

    async def connect(self) -> None:
        resp = await self.client.get(f"{API_BASE}/users/@me", headers=self._headers)
        if not resp.is_success:
            raise PlatformError(f"Discord auth failed: {resp.text}")
        self._connected = True

    async def disconnect(self) -> None:
        self._connected = False

    async def send(self, message: SendMessage) -> None:
        await self._post_message(
            message.chat_id, {"content": message.text}, "Discord send failed"
        )

    async def send_image(
        self, chat_id: str, image_url: str, caption: Optional[str] = None
    ) -> None:
        body: dict[str, Any] = {"embed": {"image": {"url": image_url}}}
        if caption is not None:
            body["content"] = caption
        await self._post_message(chat_id, body, "Discord send image failed")

    async def send_document(
        self, chat_id: str, file_path: str, caption: Optional[str] = None
    ) -> None:
        """Post the caption as a message; the file itself is not uploaded."""
        body = {"content": caption if caption is not None else "Document"}
        await self._post_message(chat_id, body, "Discord send document failed")

    async def send_typing(self, chat_id: str) -> None:
        await self.client.post(f"{API_BASE}/channels/{chat_id}/typing", headers=self._headers)

    async def edit_message(self, chat_id: str, message_id: str, text: str) -> None:
        resp = await self.client.patch(
            f"{self._messages_url(chat_id)}/{message_id}",
            headers=self._headers,
            json={"content": text},
        )
        if not resp.is_success:
            raise PlatformError(f"Discord edit failed: {resp.text}")

    def is_connected(self) -> bool:
        return self._connected