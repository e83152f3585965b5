"""
Type definitions for tool results, call context and tool specs.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

from pydantic import BaseModel

if TYPE_CHECKING:
    from playwright.async_api import Browser, BrowserContext, Page

    from ..state import SessionState


@dataclass(slots=True)
class ToolResult:
    """Result of a tool execution."""

    text: str
    is_error: bool = False
    structured_content: Optional[dict[str, Any]] = None

    @classmethod
    def ok(cls, text: str, structured: Optional[dict[str, Any]] = None) -> ToolResult:
        return cls(text=text, structured_content=structured)

    @classmethod
    def error(cls, text: str, structured: Optional[dict[str, Any]] = None) -> ToolResult:
        return cls(text=text, is_error=True, structured_content=structured)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the MCP ``CallToolResult`` wire shape."""
        data: dict[str, Any] = {
            "content": [{"type": "text", "text": self.text}],
            "isError": self.is_error,
        }
        if self.structured_content is not None:
            data["structuredContent"] = self.structured_content
        return data


@dataclass(slots=True)
class ToolContext:
    """Everything a handler may touch during one call.

    ``page`` and ``tab_index`` are resolved by the dispatcher right before
    the call and describe the focused tab at that moment.
    """

    browser: Browser
    page: Optional[Page]
    tab_index: int
    state: SessionState
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("remote_tabs.tools"))
    on_new_context: Optional[Callable[[BrowserContext], None]] = None


HandlerFunc = Callable[[ToolContext, Any], Awaitable[ToolResult]]


class NoArgs(BaseModel):
    """Tools that take no arguments."""


@dataclass(slots=True, frozen=True)
class ToolSpec:
    """Specification for a registered tool."""

    name: str
    description: str
    handler: HandlerFunc
    input_model: type[BaseModel] = NoArgs
    output_model: Optional[type[BaseModel]] = None

    def input_schema(self) -> dict[str, Any]:
        return self.input_model.model_json_schema()

    def output_schema(self) -> Optional[dict[str, Any]]:
        if self.output_model is None:
            return None
        return self.output_model.model_json_schema()
