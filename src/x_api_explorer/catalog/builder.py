"""Immutable catalog composition.

Sections are declared statically and combined with ``CatalogBuilder``; each
``with_section`` call returns a new builder, so the built-in sections are never
patched in place.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, model_validator

from .base import Endpoint


class Section(BaseModel):
    """A named API surface and the endpoints it exposes."""

    model_config = ConfigDict(frozen=True)

    name: str
    label: str
    endpoints: tuple[Endpoint, ...] = ()

    @model_validator(mode="after")
    def _unique_ids(self) -> "Section":
        seen: set[str] = set()
        for ep in self.endpoints:
            if ep.id in seen:
                raise ValueError(f"Duplicate endpoint id '{ep.id}' in section '{self.name}'")
            seen.add(ep.id)
        return self


class NavItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    type: Literal["header", "link"]
    view_id: str | None = None


class Catalog(BaseModel):
    """The built catalog: read-only lookup over every section."""

    model_config = ConfigDict(frozen=True)

    sections: tuple[Section, ...] = ()

    def section(self, name: str) -> Section:
        for section in self.sections:
            if section.name == name:
                return section
        raise KeyError(f"Unknown section: {name}")

    def endpoints(self) -> list[Endpoint]:
        return [ep for section in self.sections for ep in section.endpoints]

    def endpoint(self, endpoint_id: str) -> Endpoint:
        for ep in self.endpoints():
            if ep.id == endpoint_id:
                return ep
        raise KeyError(f"Unknown endpoint: {endpoint_id}")

    def section_of(self, endpoint_id: str) -> Section:
        for section in self.sections:
            if any(ep.id == endpoint_id for ep in section.endpoints):
                return section
        raise KeyError(f"Unknown endpoint: {endpoint_id}")

    def navigation(self) -> list[NavItem]:
        items = [
            NavItem(label="Home", type="header"),
            NavItem(label="Dashboard", type="link", view_id="dashboard"),
            NavItem(label="API", type="header"),
        ]
        items.extend(NavItem(label=s.label, type="link", view_id=s.name) for s in self.sections)
        return items


class CatalogBuilder:
    """Composes sections declaratively into a ``Catalog``."""

    def __init__(self, sections: tuple[Section, ...] = ()):
        self._sections = sections

    def with_section(self, section: Section) -> "CatalogBuilder":
        if any(s.name == section.name for s in self._sections):
            raise ValueError(f"Duplicate section: {section.name}")
        # Endpoint ids are looked up across every section.
        known = {ep.id: s.name for s in self._sections for ep in s.endpoints}
        for ep in section.endpoints:
            if ep.id in known:
                raise ValueError(
                    f"Duplicate endpoint id '{ep.id}' in section '{section.name}' (already in '{known[ep.id]}')"
                )
        return CatalogBuilder(self._sections + (section,))

    def with_sections(self, sections: list[Section]) -> "CatalogBuilder":
        builder = self
        for section in sections:
            builder = builder.with_section(section)
        return builder

    def build(self) -> Catalog:
        return Catalog(sections=self._sections)
