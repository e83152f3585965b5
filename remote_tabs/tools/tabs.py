"""
Tab management tool handlers.

Every handler catches its own failures and answers with an error result;
nothing raised by the browser escapes to the dispatcher.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..browser.tabs import TabEntry, format_tab_lines, get_tab_list, list_pages, open_page
from ..core.errors import ToolOperationError
from .types import NoArgs, ToolContext, ToolResult, ToolSpec


class NewTabArgs(BaseModel):
    url: str = Field(description="URL to open in the new tab")


class SwitchTabArgs(BaseModel):
    index: int = Field(description="Tab index to switch to")


class TabRecord(BaseModel):
    index: int
    active: bool
    title: str
    url: str


class TabListOutput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tab_list: list[TabRecord] = Field(alias="tabList")


def _tab_list_payload(tabs: list[TabEntry]) -> dict[str, Any]:
    records = [TabRecord(**tab.to_record()) for tab in tabs]
    return TabListOutput(tab_list=records).model_dump(by_alias=True)


async def new_tab(ctx: ToolContext, args: NewTabArgs) -> ToolResult:
    try:
        page = await open_page(ctx.browser, ctx.on_new_context)
        # "commit" returns as soon as navigation starts; load is not awaited
        await page.goto(args.url, wait_until="commit")
        await page.bring_to_front()
    except Exception as e:
        ctx.logger.error(f"Failed to open new tab: {e}")
        return ToolResult.error(f"Failed to open new tab: {e}")

    ctx.state.set(browser=ctx.browser, page=page)
    return ToolResult.ok(f"Opened new tab with URL: {args.url}")


async def tab_list(ctx: ToolContext, args: NoArgs) -> ToolResult:
    try:
        tabs = await get_tab_list(ctx.browser, ctx.tab_index)
    except Exception as e:
        ctx.logger.error(f"Failed to browser_tab_list: {e}")
        return ToolResult.error("Failed to get tab list", {"tabList": []})

    summary = ""
    if tabs:
        current = tabs[ctx.tab_index].title if 0 <= ctx.tab_index < len(tabs) else ""
        summary = (
            f"Current Tab: [{ctx.tab_index}] {current}\n"
            f"All Tabs: \n{format_tab_lines(tabs)}"
        )
    return ToolResult.ok(summary, _tab_list_payload(tabs))


async def switch_tab(ctx: ToolContext, args: SwitchTabArgs) -> ToolResult:
    try:
        pages = list_pages(ctx.browser)
        if not 0 <= args.index < len(pages):
            raise ToolOperationError(f"Invalid tab index: {args.index}")
        page = pages[args.index]
        await page.bring_to_front()
        tabs = await get_tab_list(ctx.browser, args.index)
    except ToolOperationError as e:
        ctx.logger.warning(str(e))
        return ToolResult.error(str(e))
    except Exception as e:
        ctx.logger.error(f"Failed to browser_switch_tab: {e}")
        return ToolResult.error(f"Failed to switch tab: {e}")

    ctx.state.set(browser=ctx.browser, page=page)
    summary = f"All Tabs: \n{format_tab_lines(tabs, labelled=False)}" if tabs else ""
    return ToolResult.ok(f"Switched to tab {args.index}, {summary}")


async def close_tab(ctx: ToolContext, args: NoArgs) -> ToolResult:
    page = ctx.page
    index = ctx.tab_index
    was_focused = page is not None and page is ctx.state.page
    try:
        if page is None:
            raise ToolOperationError("no tab is open")
        await page.close()
    except Exception as e:
        ctx.logger.error(f"Failed to browser_close_tab: [{index}] {e}")
        return ToolResult.error(f"Failed to close tab [{index}]: {e}")
    finally:
        # A close that throws midway may still have closed the tab
        if was_focused:
            ctx.state.set(page=None)

    return ToolResult.ok(f"Closed current tab [{index}]")


TAB_TOOLS: list[ToolSpec] = [
    ToolSpec(
        name="browser_new_tab",
        description="Open a new tab",
        handler=new_tab,
        input_model=NewTabArgs,
    ),
    ToolSpec(
        name="browser_tab_list",
        description="Get the list of tabs",
        handler=tab_list,
        output_model=TabListOutput,
    ),
    ToolSpec(
        name="browser_switch_tab",
        description="Switch to a specific tab",
        handler=switch_tab,
        input_model=SwitchTabArgs,
    ),
    ToolSpec(
        name="browser_close_tab",
        description="Close the current tab",
        handler=close_tab,
    ),
]
