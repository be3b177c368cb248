"""Registry of callable tools and their schemas."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from hermes.errors import ToolNotFoundError

ToolHandler = Callable[[Any], Any]


@dataclass
class ToolParameter:
    """One parameter a tool accepts."""

    name: str
    description: str
    param_type: str
    required: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "type": self.param_type,
            "required": self.required,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ToolParameter":
        return cls(
            name=data["name"],
            description=data["description"],
            param_type=data["type"],
            required=bool(data.get("required", False)),
        )


@dataclass
class ToolSchema:
    """Public description of a tool."""

    name: str
    description: str
    parameters: list[ToolParameter] = field(default_factory=list)


@dataclass
class ToolDef:
    """A tool together with its handler."""

    name: str
    description: str
    parameters: list[ToolParameter]
    handler: ToolHandler


class ToolRegistry:
    """Holds tools by name and dispatches calls to them."""

    def __init__(self) -> None:
        self._tools: dict[str, ToolDef] = {}

    def register(self, tool: ToolDef) -> None:
        """Add a tool, replacing any tool with the same name."""
        self._tools[tool.name] = tool

    def get(self, name: str) -> Optional[ToolDef]:
        return self._tools.get(name)

    def get_schemas(self) -> list[ToolSchema]:
        return [
            ToolSchema(t.name, t.description, list(t.parameters))
            for t in self._tools.values()
        ]

    def dispatch(self, name: str, args: Any) -> Any:
        """Call the named tool's handler with ``args``."""
        tool = self._tools.get(name)
        if tool is None:
            raise ToolNotFoundError(name)
        return tool.handler(args)

    def names(self) -> list[str]:
        return list(self._tools)

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools