"""Async adapters for Discord, Slack, Telegram and Signal."""

__all__ = ["base", "discord", "slack", "telegram", "signal"]