"""Display ordering for parameter lists."""

from x_api_explorer.catalog.base import ParamSchema


def display_order(params: list[ParamSchema] | tuple[ParamSchema, ...]) -> list[ParamSchema]:
    """Required parameters first, then by name. Cosmetic only."""
    return sorted(params, key=lambda p: (not p.required, p.name))
