"""Path parameter collector. Every declared path parameter is mandatory."""

from x_api_explorer.catalog.base import ParamSchema


class PathParamCollector:
    def __init__(self, params: tuple[ParamSchema, ...]):
        self.params = params
        self._values: dict[str, str] = {}

    def set(self, name: str, value: str) -> None:
        if name not in {p.name for p in self.params}:
            raise ValueError(f"Unknown path parameter: {name}")
        self._values[name] = value

    def values(self) -> dict[str, str]:
        return {name: value for name, value in self._values.items() if value}

    def missing(self) -> list[str]:
        return [p.name for p in self.params if not self._values.get(p.name)]
