"""Endpoint catalog data models.

Every surface (Tweets, Users, Account Activity, ...) describes its endpoints
with these models; the parameter collectors, the request compiler and the
code generators all read them and never mutate them.
"""

import re
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

ParamType = Literal["string", "number", "boolean", "array", "object"]
AuthType = Literal["bearer", "oauth1a"]

HTTP_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS")

PATH_PLACEHOLDER = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")


class ParamSchema(BaseModel):
    """A single path, query or body parameter."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: ParamType = "string"
    required: bool = False
    example: str | None = None
    description: str = ""


class ExpansionOption(BaseModel):
    """A field name that can be expanded in the response."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""


class Endpoint(BaseModel):
    """A single API endpoint with all its metadata."""

    model_config = ConfigDict(frozen=True)

    id: str
    method: str  # GET / POST / PUT / DELETE / PATCH
    path: str  # /2/tweets/:id
    summary: str = ""
    path_params: tuple[ParamSchema, ...] = ()
    query_params: tuple[ParamSchema, ...] = ()
    body_params: tuple[ParamSchema, ...] = ()
    expansion_options: tuple[ExpansionOption, ...] = ()
    auth_type: AuthType = "bearer"
    category: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _declare_path_placeholders(cls, data: Any) -> Any:
        # A ":name" segment in the path declares a path parameter.
        if not isinstance(data, dict) or not isinstance(data.get("path"), str):
            return data
        params = list(data.get("path_params") or ())
        declared = {p.get("name") if isinstance(p, dict) else getattr(p, "name", None) for p in params}
        for name in PATH_PLACEHOLDER.findall(data["path"]):
            if name not in declared:
                params.append(ParamSchema(name=name, required=True))
                declared.add(name)
        return {**data, "path_params": params}

    @field_validator("method")
    @classmethod
    def _normalize_method(cls, value: str) -> str:
        method = value.upper()
        if method not in HTTP_METHODS:
            raise ValueError(f"Unsupported HTTP method: {value}")
        return method

    @field_validator("path_params")
    @classmethod
    def _require_path_params(cls, params: tuple[ParamSchema, ...]) -> tuple[ParamSchema, ...]:
        # Path params are required by construction.
        return tuple(p if p.required else p.model_copy(update={"required": True}) for p in params)

    @model_validator(mode="after")
    def _check_path_params(self) -> "Endpoint":
        placeholders = set(PATH_PLACEHOLDER.findall(self.path))
        for param in self.path_params:
            if param.name not in placeholders:
                raise ValueError(f"Path parameter '{param.name}' does not appear in {self.path}")
        return self

    @property
    def accepts_body(self) -> bool:
        return self.method in ("POST", "PUT", "PATCH")
