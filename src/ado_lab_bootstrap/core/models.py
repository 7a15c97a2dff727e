"""Core data models for lab project bootstrapping.

This module defines the data models used throughout the bootstrap workflow. Two
families of models live here:

Classes:
    Configuration and Results:
        BootstrapConfig: Immutable run configuration resolved once by the CLI
        RepositoryReference: Name/id pair of the repository created by the initial push
        ProjectStatus: Operation status returned by the project creation call
        RegisteredPipeline: A pipeline created during the run
        PipelineKind: Enum distinguishing YAML pipelines from classic build definitions
        BootstrapResult: Summary of everything a run created

    Request Payloads (pydantic, serialized with camelCase aliases):
        ProjectCreatePayload: Body of POST /_apis/projects
        PushPayload: Body of POST /_apis/git/repositories/{repo}/pushes
        PipelineCreatePayload: Body of POST /_apis/pipelines

Example:
    ```python
    from ado_lab_bootstrap.core.models import (
        BootstrapConfig,
        PushPayload,
        RepositoryReference,
    )

    config = BootstrapConfig(
        organization="my-organization",
        project="LabProject",
        access_token="pat",
    )

    payload = PushPayload.initial_commit([("/src/App.cs", "class App {}")])
    body = payload.model_dump(by_alias=True)
    # body["refUpdates"][0]["name"] == "refs/heads/main"
    ```

Raises:
    ConfigurationError: When required configuration values are missing or invalid
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .exceptions import ConfigurationError

ROOT_DIR_ENV_VAR = "ADO_LAB_BOOTSTRAP_ROOT"
ROOT_DIR_SUBPATH = "azure_devops"


def default_root_dir() -> Path:
    """Resolve the working root directory from the environment."""
    root = os.environ.get(ROOT_DIR_ENV_VAR)
    if root:
        return Path(root)
    return Path(os.environ.get("HOME", Path.home())) / ROOT_DIR_SUBPATH


@dataclass(frozen=True)
class BootstrapConfig:
    """
    Configuration for a single bootstrap run.

    Attributes:
        organization: Azure DevOps organization name
        project: Name of the project to create or reuse
        access_token: Personal access token used for basic authentication
        asset_file: Name of the asset archive inside root_dir
        pipeline_dir: Name of the pipeline assets directory (both in the archive and in root_dir)
        root_dir: Working root directory holding the archive and classic pipelines
        forecast_file: Name of the forecast data file to refresh
        post_delay: Seconds to wait after every successful POST
        assume_yes: Continue without prompting when the project already exists
        keep_temp: Keep the extraction directory after the run
    """

    organization: str
    project: str
    access_token: str = field(repr=False)
    asset_file: str = "azure_devops.tgz"
    pipeline_dir: str = "pipelines"
    root_dir: Path = field(default_factory=default_root_dir)
    forecast_file: str = "jobs.json"
    post_delay: float = 3.0
    assume_yes: bool = False
    keep_temp: bool = False

    def __post_init__(self) -> None:
        """Validates the configuration values."""
        for name in ("organization", "project", "access_token"):
            if not getattr(self, name):
                msg = f"Missing required configuration value: {name}"
                raise ConfigurationError(msg)
        if self.post_delay < 0:
            msg = f"Post delay must be non-negative, got {self.post_delay}"
            raise ConfigurationError(msg)
        # Accept plain strings for the root directory
        object.__setattr__(self, "root_dir", Path(self.root_dir))

    @property
    def archive_path(self) -> Path:
        """Path of the asset archive."""
        return self.root_dir / self.asset_file

    @property
    def classic_pipeline_dir(self) -> Path:
        """Directory holding the classic build definitions."""
        return self.root_dir / self.pipeline_dir / "classic"

    @property
    def forecast_output_path(self) -> Path:
        """Destination of the refreshed forecast file."""
        return self.root_dir / self.forecast_file


@dataclass(frozen=True)
class RepositoryReference:
    """Identity of the repository the initial commit was pushed to."""

    name: str
    id: str

    @classmethod
    def from_push_response(cls, data: dict[str, Any]) -> "RepositoryReference":
        """Creates a RepositoryReference from the push API response."""
        repository = data["repository"]
        return cls(name=repository["name"], id=repository["id"])


@dataclass(frozen=True)
class ProjectStatus:
    """Operation status returned when a project creation is queued."""

    id: str | None
    status: str | None
    url: str | None = None

    @classmethod
    def from_create_response(cls, data: dict[str, Any]) -> "ProjectStatus":
        """Creates a ProjectStatus from the project creation API response."""
        return cls(
            id=data.get("id"),
            status=data.get("status"),
            url=data.get("url"),
        )


class PipelineKind(Enum):
    """Represents the kind of pipeline registered."""

    YAML = "yaml"
    CLASSIC = "classic"

    def __str__(self) -> str:
        """Return the string value of the enum."""
        return self.value


@dataclass(frozen=True)
class RegisteredPipeline:
    """A pipeline created during the bootstrap run."""

    id: int | None
    name: str
    kind: PipelineKind

    @classmethod
    def from_create_response(
        cls,
        data: dict[str, Any],
        kind: PipelineKind,
        fallback_name: str,
    ) -> "RegisteredPipeline":
        """Creates a RegisteredPipeline from a pipeline or build definition creation response."""
        return cls(id=data.get("id"), name=data.get("name", fallback_name), kind=kind)


@dataclass
class BootstrapResult:
    """
    Summary of a bootstrap run.

    Attributes:
        organization: Azure DevOps organization name
        project: Project name
        project_created: Whether the project was created by this run
        repository: Repository the initial commit was pushed to
        pushed_files: Number of files in the initial commit
        pipelines: Pipelines registered, YAML first then classic
        forecast_path: Where the refreshed forecast file was written
        forecast_replacements: Number of dates rewritten in the forecast file
    """

    organization: str
    project: str
    project_created: bool = False
    repository: RepositoryReference | None = None
    pushed_files: int = 0
    pipelines: list[RegisteredPipeline] = field(default_factory=list)
    forecast_path: Path | None = None
    forecast_replacements: int = 0

    @property
    def yaml_pipelines(self) -> list[RegisteredPipeline]:
        """YAML pipelines registered during the run."""
        return [p for p in self.pipelines if p.kind == PipelineKind.YAML]

    @property
    def classic_pipelines(self) -> list[RegisteredPipeline]:
        """Classic build definitions registered during the run."""
        return [p for p in self.pipelines if p.kind == PipelineKind.CLASSIC]


### Request payloads
class Payload(BaseModel):
    """Base class for request bodies serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def to_request_body(self) -> dict[str, Any]:
        """Serializes the payload the way the REST API expects it."""
        return self.model_dump(by_alias=True, exclude_none=True)


class VersionControlCapability(Payload):
    source_control_type: str = "Git"


class ProcessTemplateCapability(Payload):
    template_type_id: str


class ProjectCapabilities(Payload):
    versioncontrol: VersionControlCapability = Field(default_factory=VersionControlCapability)
    process_template: ProcessTemplateCapability


class ProjectCreatePayload(Payload):
    """Body of the project creation request."""

    AGILE_PROCESS_TEMPLATE_ID: ClassVar[str] = "adcc42ab-9882-485e-a3ed-7678f01f66bc"
    DEFAULT_DESCRIPTION: ClassVar[str] = "Lab environment project created by ado-lab-bootstrap"

    name: str
    description: str
    capabilities: ProjectCapabilities

    @classmethod
    def for_project(cls, name: str) -> "ProjectCreatePayload":
        """Git project using the Agile process template."""
        return cls(
            name=name,
            description=cls.DEFAULT_DESCRIPTION,
            capabilities=ProjectCapabilities(
                process_template=ProcessTemplateCapability(template_type_id=cls.AGILE_PROCESS_TEMPLATE_ID),
            ),
        )


class RefUpdate(Payload):
    name: str
    old_object_id: str


class ItemPath(Payload):
    path: str


class NewContent(Payload):
    content: str
    content_type: str = "rawtext"


class Change(Payload):
    change_type: str = "add"
    item: ItemPath
    new_content: NewContent


class Commit(Payload):
    comment: str
    changes: list[Change] = Field(default_factory=list)


class PushPayload(Payload):
    """Body of the git push request."""

    NULL_OBJECT_ID: ClassVar[str] = "0" * 40
    DEFAULT_BRANCH: ClassVar[str] = "refs/heads/main"

    ref_updates: list[RefUpdate]
    commits: list[Commit]

    @classmethod
    def initial_commit(
        cls,
        files: list[tuple[str, str]],
        comment: str = "Initial commit",
    ) -> "PushPayload":
        """
        Builds a push creating the main branch of an empty repository.

        Args:
            files: List of (repository_path, content) tuples, each becoming an "add" change
            comment: Commit message

        Returns:
            PushPayload with a single ref update and a single commit
        """
        changes = [Change(item=ItemPath(path=path), new_content=NewContent(content=content)) for path, content in files]
        return cls(
            ref_updates=[RefUpdate(name=cls.DEFAULT_BRANCH, old_object_id=cls.NULL_OBJECT_ID)],
            commits=[Commit(comment=comment, changes=changes)],
        )


class PipelineRepository(Payload):
    id: str
    name: str
    type: str = "azureReposGit"


class PipelineConfiguration(Payload):
    type: str = "yaml"
    path: str
    repository: PipelineRepository


class PipelineCreatePayload(Payload):
    """Body of the YAML pipeline creation request."""

    DEFAULT_FOLDER: ClassVar[str] = "\\"

    folder: str = DEFAULT_FOLDER
    name: str
    configuration: PipelineConfiguration

    @classmethod
    def for_yaml_file(cls, name: str, path: str, repository: RepositoryReference) -> "PipelineCreatePayload":
        """YAML pipeline definition bound to the pushed repository."""
        return cls(
            name=name,
            configuration=PipelineConfiguration(
                path=path,
                repository=PipelineRepository(id=repository.id, name=repository.name),
            ),
        )
