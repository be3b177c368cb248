"""Exception hierarchy shared across the agent."""

from __future__ import annotations


class HermesError(Exception):
    """Base class for agent errors."""


class ToolNotFoundError(HermesError, LookupError):
    """Raised when a tool name is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Tool not found: {name}")
        self.name = name


class IterationBudgetExceededError(HermesError):
    """Raised when the agent runs out of iterations."""

    def __init__(self) -> None:
        super().__init__("Iteration budget exceeded")


class AgentInterruptedError(HermesError):
    """Raised when a run is interrupted."""

    def __init__(self) -> None:
        super().__init__("Interrupted")


class ConfigError(HermesError):
    """Raised for invalid or missing configuration."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Configuration error: {detail}")
        self.detail = detail