"""Query parameter collector.

Each parameter carries an activation toggle. Required parameters are always
active and cannot be switched off; switching a parameter off clears its value.
"""

import logging

from x_api_explorer.catalog.base import ParamSchema

logger = logging.getLogger("x_api_explorer.params")


class QueryParamCollector:
    def __init__(self, params: tuple[ParamSchema, ...]):
        self.params = params
        self._active: dict[str, bool] = {p.name: p.required for p in params}
        self._values: dict[str, str] = {p.name: "" for p in params}

    def _schema(self, name: str) -> ParamSchema:
        for param in self.params:
            if param.name == name:
                return param
        raise ValueError(f"Unknown query parameter: {name}")

    def toggle(self, name: str, active: bool) -> None:
        param = self._schema(name)
        if param.required:
            logger.debug("ignoring toggle of required query param %s", name)
            return
        self._active[name] = active
        if not active:
            self._values[name] = ""

    def set(self, name: str, value: str) -> None:
        """Store a value, activating the parameter if needed."""
        self._schema(name)
        self._active[name] = True
        self._values[name] = value

    def is_active(self, name: str) -> bool:
        self._schema(name)
        return self._active[name]

    @property
    def active_count(self) -> int:
        return sum(1 for active in self._active.values() if active)

    def values(self) -> dict[str, str]:
        """Values of active parameters only, in declaration order."""
        return {p.name: self._values[p.name] for p in self.params if self._active[p.name]}

    def missing_required(self) -> list[str]:
        return [p.name for p in self.params if p.required and not self._values[p.name]]
