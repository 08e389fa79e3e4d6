"""Expansion selector: independent checkboxes plus a select-all toggle."""

from x_api_explorer.catalog.base import ExpansionOption


class ExpansionCollector:
    def __init__(self, options: tuple[ExpansionOption, ...]):
        self.options = options
        self._selected: set[str] = set()

    def toggle(self, name: str, selected: bool) -> None:
        if name not in {o.name for o in self.options}:
            raise ValueError(f"Unknown expansion: {name}")
        if selected:
            self._selected.add(name)
        else:
            self._selected.discard(name)

    def set_all(self, selected: bool) -> None:
        self._selected = {o.name for o in self.options} if selected else set()

    @property
    def selected_count(self) -> int:
        return len(self._selected)

    @property
    def all_selected(self) -> bool:
        return bool(self.options) and self._selected == {o.name for o in self.options}

    def value(self) -> str:
        """Comma-joined selected names in catalog order, or ``""``."""
        names = dict.fromkeys(o.name for o in self.options if o.name in self._selected)
        return ",".join(names)
