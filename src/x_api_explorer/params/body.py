"""Body parameter collector.

Values are kept as the strings an input widget produces; booleans are stored
as ``"true"``/``"false"`` and coerced back by the request compiler.
"""

from x_api_explorer.catalog.base import ParamSchema


class BodyParamCollector:
    def __init__(self, params: tuple[ParamSchema, ...]):
        self.params = params
        self._values: dict[str, str] = {p.name: "" for p in params}
        self.raw_body = ""

    def set(self, name: str, value: str | bool) -> None:
        if name not in self._values:
            raise ValueError(f"Unknown body parameter: {name}")
        if isinstance(value, bool):
            value = "true" if value else "false"
        self._values[name] = value

    def values(self) -> dict[str, str]:
        return dict(self._values)

    def missing_required(self) -> list[str]:
        return [p.name for p in self.params if p.required and self._values[p.name] == ""]
