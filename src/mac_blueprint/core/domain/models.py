"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Gives the canonical blueprint shape a self-documenting definition (Field)
  without coupling the core to file or process I/O.
- The diff report serializes to the same camelCase wire names the rest of
  the tooling reads.

Note:
- These models describe *what* a blueprint is, not *how* it is captured.
- Validation of untrusted documents lives in `core.schema.validator`; the
  models here are never used to reject input.
"""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, Field, computed_field
from pydantic.config import ConfigDict

SCHEMA_VERSION = "2.0"
LEGACY_SCHEMA_VERSION = "1.0"
GLOBAL_PACKAGE_MANAGERS: tuple[str, ...] = ("npm", "bun", "dart", "ruby")
HOMEBREW_CATEGORIES: tuple[str, ...] = ("formulae", "casks", "taps")


def name_of(ref: Any) -> str:
    """Canonical name of a package reference.

    A package reference is either a bare name (`"git"`) or an object carrying
    at least `name` (`{"name": "git", "version": "2.44.0"}`). Every comparison
    path goes through here.
    """

    if isinstance(ref, str) and ref:
        return ref
    if isinstance(ref, Mapping):
        name = ref.get("name")
        if isinstance(name, str) and name:
            return name
    raise TypeError(f"Not a package reference: {ref!r}")


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")


class SystemInfo(_WireModel):
    """Machine identity at capture time."""

    hostname: str = Field(default="unknown", description="Host name of the captured machine.")
    macos_version: str = Field(default="unknown", alias="macosVersion")
    architecture: str = Field(default="unknown", description="CPU architecture (`uname -m`).")
    homebrew_version: str = Field(default="unknown", alias="homebrewVersion")
    capture_date: str = Field(
        ...,
        alias="captureDate",
        description="ISO-8601 instant the snapshot was taken.",
    )


class HomebrewSection(_WireModel):
    taps: list[Any] = Field(default_factory=list)
    casks: list[Any] = Field(default_factory=list)
    formulae: list[Any] = Field(default_factory=list)


class GlobalPackages(_WireModel):
    npm: list[Any] = Field(default_factory=list)
    bun: list[Any] = Field(default_factory=list)
    dart: list[Any] = Field(default_factory=list)
    ruby: list[Any] = Field(default_factory=list)


class GitConfig(_WireModel):
    user: dict[str, Any] = Field(default_factory=dict)
    settings: list[Any] = Field(default_factory=list)


class VersionManager(_WireModel):
    installed: bool = False
    versions: list[str] = Field(default_factory=list)


class VersionManagers(_WireModel):
    nvm: VersionManager = Field(default_factory=VersionManager)
    pyenv: VersionManager = Field(default_factory=VersionManager)
    rbenv: VersionManager = Field(default_factory=VersionManager)


class MenubarConfig(_WireModel):
    login_items: list[Any] = Field(default_factory=list, alias="loginItems")
    running_apps: list[Any] = Field(default_factory=list, alias="runningApps")
    launch_agents: list[Any] = Field(default_factory=list, alias="launchAgents")


class BlueprintDocument(_WireModel):
    """Root entity: a snapshot of a machine's software and configuration.

    `binaries`, `homeBin`, `versionManagers` and `menubarConfig` are carried
    along but opaque to validation and diffing.
    """

    version: str = Field(default=SCHEMA_VERSION, description="Schema version `<major>.<minor>`.")
    system: SystemInfo
    applications: list[Any] = Field(default_factory=list)
    homebrew: HomebrewSection = Field(default_factory=HomebrewSection)
    binaries: list[Any] = Field(default_factory=list)
    home_bin: list[Any] = Field(default_factory=list, alias="homeBin")
    github_repos: list[Any] = Field(default_factory=list, alias="githubRepos")
    global_packages: GlobalPackages = Field(default_factory=GlobalPackages, alias="globalPackages")
    shell_configs: list[Any] = Field(default_factory=list, alias="shellConfigs")
    git_config: GitConfig = Field(default_factory=GitConfig, alias="gitConfig")
    version_managers: VersionManagers = Field(default_factory=VersionManagers, alias="versionManagers")
    menubar_config: MenubarConfig = Field(default_factory=MenubarConfig, alias="menubarConfig")

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class AppVersionChange(_WireModel):
    """An application present on both sides with a different version string."""

    name: str
    old_version: Any = Field(default=None, alias="oldVersion")
    new_version: Any = Field(default=None, alias="newVersion")


class ApplicationsDiff(_WireModel):
    added: list[dict[str, Any]] = Field(default_factory=list)
    removed: list[dict[str, Any]] = Field(default_factory=list)
    updated: list[AppVersionChange] = Field(default_factory=list)


class NameDiff(_WireModel):
    added: list[str] = Field(default_factory=list)
    removed: list[str] = Field(default_factory=list)


class HomebrewDiff(_WireModel):
    formulae: NameDiff = Field(default_factory=NameDiff)
    casks: NameDiff = Field(default_factory=NameDiff)
    taps: NameDiff = Field(default_factory=NameDiff)


class GlobalPackagesDiff(_WireModel):
    npm: NameDiff = Field(default_factory=NameDiff)
    bun: NameDiff = Field(default_factory=NameDiff)
    dart: NameDiff = Field(default_factory=NameDiff)
    ruby: NameDiff = Field(default_factory=NameDiff)


class DiffTotals(BaseModel):
    added: int = Field(default=0, ge=0)
    removed: int = Field(default=0, ge=0)
    updated: int = Field(default=0, ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> int:
        return self.added + self.removed + self.updated


class DiffReport(_WireModel):
    """Structural difference between two blueprint documents.

    Read-only by convention: the engine builds a fresh report per call and
    never shares lists with its inputs.
    """

    applications: ApplicationsDiff = Field(default_factory=ApplicationsDiff)
    homebrew: HomebrewDiff = Field(default_factory=HomebrewDiff)
    global_packages: GlobalPackagesDiff = Field(default_factory=GlobalPackagesDiff, alias="globalPackages")

    def name_diffs(self) -> list[NameDiff]:
        homebrew = [getattr(self.homebrew, category) for category in HOMEBREW_CATEGORIES]
        managers = [getattr(self.global_packages, manager) for manager in GLOBAL_PACKAGE_MANAGERS]
        return homebrew + managers

    def totals(self) -> DiffTotals:
        """Change counts across every category (updates are applications only)."""

        name_diffs = self.name_diffs()
        return DiffTotals(
            added=len(self.applications.added) + sum(len(d.added) for d in name_diffs),
            removed=len(self.applications.removed) + sum(len(d.removed) for d in name_diffs),
            updated=len(self.applications.updated),
        )

    @property
    def is_empty(self) -> bool:
        return self.totals().total == 0

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
