from __future__ import annotations

from pydantic import BaseModel, Field


class RequestContext(BaseModel):
    """Request state assembled by the host before any replacement happens."""

    is_ajax: bool = False
    is_admin: bool = False
    is_connected: bool = True
    is_enabled: bool = True
    is_customize_preview: bool = False
    query: dict[str, str] = Field(default_factory=dict)


def _query_flag(query: dict[str, str], key: str) -> bool:
    return query.get(key) == "true"


def should_replace(ctx: RequestContext) -> bool:
    if ctx.is_ajax:
        return True
    if ctx.is_admin or not ctx.is_connected or not ctx.is_enabled or ctx.is_customize_preview:
        return False
    if _query_flag(ctx.query, "preview"):
        return False
    if _query_flag(ctx.query, "optml_off"):
        return False
    elementor_preview = ctx.query.get("elementor-preview")
    if elementor_preview and elementor_preview != "0":
        return False
    return True
