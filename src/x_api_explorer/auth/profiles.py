"""Projects, applications and their credential bundles.

The profile store is owned by the project/app management side; the explorer
only reads it. Profiles live in a YAML file::

    projects:
      - id: 1
        name: Project Alpha
        apps:
          - id: 101
            name: Alpha Web App
            environment: prod
            credentials:
              bearer_token: AAAA...
              oauth1: {api_key: ..., api_secret: ..., access_token: ..., access_secret: ...}
"""

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel

Environment = Literal["prod", "staging1", "staging2"]

MASK = "**********"


class OAuth1Keys(BaseModel):
    """OAuth 1.0a material as stored; any field may be missing."""

    api_key: str | None = None
    api_secret: str | None = None
    access_token: str | None = None
    access_secret: str | None = None


class CredentialBundle(BaseModel):
    bearer_token: str | None = None
    oauth1: OAuth1Keys | None = None


class Application(BaseModel):
    id: int
    name: str
    environment: Environment = "prod"
    description: str = ""
    credentials: CredentialBundle = CredentialBundle()


class Project(BaseModel):
    id: int
    name: str
    usage: int = 0
    cap: int = 0
    package: str = ""
    apps: list[Application] = []


def mask_secret(value: str | None, reveal: bool = False) -> str:
    """Hide a secret for display unless the operator asked to reveal it."""
    if not value:
        return ""
    return value if reveal else MASK


class ProfileStore:
    """Read-only lookup of application -> credentials / environment."""

    def __init__(self, projects: list[Project] | None = None):
        self.projects = projects or []

    @classmethod
    def from_yaml(cls, file_path: Path) -> "ProfileStore":
        if not file_path.exists():
            return cls()
        doc = yaml.safe_load(file_path.read_text(encoding="utf-8")) or {}
        return cls([Project(**p) for p in doc.get("projects", [])])

    def applications(self) -> list[Application]:
        return [app for project in self.projects for app in project.apps]

    def application(self, app_id: int) -> Application:
        for app in self.applications():
            if app.id == app_id:
                return app
        raise KeyError(f"Unknown application: {app_id}")

    def project_of(self, app_id: int) -> Project:
        for project in self.projects:
            if any(app.id == app_id for app in project.apps):
                return project
        raise KeyError(f"Unknown application: {app_id}")

    def credentials(self, app_id: int) -> CredentialBundle:
        return self.application(app_id).credentials

    def environment(self, app_id: int) -> Environment:
        return self.application(app_id).environment
