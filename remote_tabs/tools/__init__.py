"""Tab tools and their dispatcher."""
from .registry import ToolRegistry, create_default_registry
from .tabs import TAB_TOOLS, close_tab, new_tab, switch_tab, tab_list
from .types import ToolContext, ToolResult, ToolSpec

__all__ = [
    "ToolRegistry",
    "create_default_registry",
    "TAB_TOOLS",
    "new_tab",
    "tab_list",
    "switch_tab",
    "close_tab",
    "ToolContext",
    "ToolResult",
    "ToolSpec",
]
