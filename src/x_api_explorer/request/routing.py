"""Advanced routing directives: Dtab overrides, tracing and environment."""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field

from x_api_explorer.auth.profiles import Environment

STAGING_ENVIRONMENTS = ("staging1", "staging2")


class DtabPair(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: str = Field(default="", alias="from")
    to: str = ""

    @property
    def is_active(self) -> bool:
        return bool(self.from_.strip() and self.to.strip())

    @property
    def is_blank(self) -> bool:
        return not (self.from_.strip() or self.to.strip())

    def render(self) -> str:
        return f"{self.from_}=>{self.to}"


def parse_dtab(text: str) -> DtabPair:
    """Parse ``from=>to``; text without ``=>`` becomes the ``from`` side."""
    source, sep, target = text.partition("=>")
    if not sep:
        return DtabPair(from_=text)
    return DtabPair(from_=source.strip(), to=target.strip())


class RoutingDirectives(BaseModel):
    dtabs: list[DtabPair] = Field(default_factory=lambda: [DtabPair()])
    tracing: bool = False
    environment: Environment = "prod"

    def add_dtab(self, pair: DtabPair | None = None) -> None:
        self.dtabs.append(pair or DtabPair())

    def update_dtab(self, index: int, from_: str | None = None, to: str | None = None) -> None:
        current = self.dtabs[index]
        if from_ is not None and "=>" in from_:
            # A pasted "from=>to" line fills both sides.
            self.dtabs[index] = parse_dtab(from_)
            return
        self.dtabs[index] = DtabPair(
            from_=current.from_ if from_ is None else from_,
            to=current.to if to is None else to,
        )

    def remove_dtab(self, index: int) -> None:
        if len(self.dtabs) == 1:
            self.dtabs[0] = DtabPair()
            return
        del self.dtabs[index]

    def active_dtabs(self) -> list[DtabPair]:
        return [d for d in self.dtabs if d.is_active]


def routing_headers(directives: RoutingDirectives) -> dict[str, str]:
    """Headers that carry the routing directives, in a stable order."""
    headers: dict[str, str] = {}
    active = directives.active_dtabs()
    if active:
        headers["Dtab-Local"] = ";".join(d.render() for d in active)
    if directives.tracing:
        headers["X-B3-Flags"] = "1"
    if directives.environment in STAGING_ENVIRONMENTS:
        headers["X-TFE-Experiment-environment"] = directives.environment
        headers["X-Decider-Overrides"] = f"tfe_route:des_apiservice_{directives.environment}=on"
    return headers


class DtabSetStore:
    """Named Dtab presets persisted to a YAML file. Last write wins."""

    def __init__(self, file_path: Path):
        self.file_path = file_path

    def get(self) -> dict[str, list[DtabPair]]:
        if not self.file_path.exists():
            return {}
        doc = yaml.safe_load(self.file_path.read_text(encoding="utf-8")) or {}
        return {name: [DtabPair(**pair) for pair in pairs] for name, pairs in doc.items()}

    def set(self, sets: dict[str, list[DtabPair]]) -> None:
        data = {
            name: [pair.model_dump(by_alias=True) for pair in pairs]
            for name, pairs in sets.items()
        }
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        self.file_path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
