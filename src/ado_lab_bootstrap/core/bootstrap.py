"""Lab project bootstrapping workflow.

This module drives the bootstrap of an Azure DevOps project for a lab environment.
The workflow is a strictly forward sequence of steps; every failure raises and
nothing already created remotely is rolled back.

Workflow:
    1. Check whether the project exists. If it does, ask for confirmation to
       continue; otherwise create it.
    2. Extract the asset archive into a temporary directory.
    3. Push the extracted source files as the initial commit of the project's
       default repository (named after the project).
    4. Register one YAML pipeline per file in the extracted ``yml`` folder and one
       classic build definition per file in the root directory's ``classic`` folder,
       all bound to the pushed repository.
    5. Refresh the dates of the forecast data file and write it to the root directory.

Key Components:
    ProjectBootstrapper: Orchestrates the workflow for one configuration
    bind_classic_definition: Points a classic build definition at a repository

Example:
    ```python
    from ado_lab_bootstrap.core import AzureDevOpsClient, BootstrapConfig, ProjectBootstrapper

    config = BootstrapConfig(
        organization="my-organization",
        project="LabProject",
        access_token="pat",
    )

    with AzureDevOpsClient(config.organization, config.access_token) as client:
        bootstrapper = ProjectBootstrapper(client, config, confirm=lambda project: True)
        result = bootstrapper.run()

    print(f"Registered {len(result.pipelines)} pipelines in {result.project}")
    ```

Raises:
    BootstrapAbortedError: When the user declines to continue with an existing project
    ArchiveExtractionError: When the asset archive cannot be extracted
    PipelineAssetError: When a pipeline definition cannot be parsed
    APIError: When any Azure DevOps API call fails
"""

import copy
import logging
import tempfile
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from typing import Any

from ado_lab_bootstrap.core.client import AzureDevOpsClient
from ado_lab_bootstrap.core.exceptions import BootstrapAbortedError
from ado_lab_bootstrap.core.models import (
    BootstrapConfig,
    BootstrapResult,
    PipelineKind,
    RegisteredPipeline,
    RepositoryReference,
)
from ado_lab_bootstrap.utils.forecast import refresh_forecast
from ado_lab_bootstrap.utils.scanner import AssetScanner


def bind_classic_definition(definition: dict[str, Any], repository: RepositoryReference) -> dict[str, Any]:
    """Returns a copy of a classic build definition pointing at the given repository."""
    bound = copy.deepcopy(definition)
    if not isinstance(bound.get("repository"), dict):
        bound["repository"] = {}
    bound["repository"]["name"] = repository.name
    bound["repository"]["id"] = repository.id
    return bound


class ProjectBootstrapper:
    """Bootstraps an Azure DevOps project from the lab asset bundle."""

    def __init__(
        self,
        client: AzureDevOpsClient,
        config: BootstrapConfig,
        confirm: Callable[[str], bool] | None = None,
        today: date | None = None,
    ) -> None:
        """
        Initialize the bootstrapper.

        Args:
            client: Azure DevOps client instance
            config: Run configuration
            confirm: Called with the project name when the project already exists;
                returning False aborts the run. Ignored when config.assume_yes is set.
            today: Date written into the forecast file, defaults to the current date
        """
        self.client = client
        self.config = config
        self.confirm = confirm
        self.today = today
        self.scanner = AssetScanner(pipeline_dir=config.pipeline_dir)

    def run(self) -> BootstrapResult:
        """Run the whole workflow and return what was created."""
        result = BootstrapResult(organization=self.config.organization, project=self.config.project)

        # Step 1: Ensure the project exists
        result.project_created = self.ensure_project()

        with self._extraction_directory() as workdir:
            # Step 2: Extract the asset bundle
            self.scanner.extract(self.config.archive_path, workdir)

            # Step 3: Push the initial commit
            repository, pushed_files = self.push_repository(workdir)
            result.repository = repository
            result.pushed_files = pushed_files

            # Step 4: Register pipelines
            result.pipelines.extend(self.register_yaml_pipelines(workdir, repository))
            result.pipelines.extend(self.register_classic_pipelines(repository))

            # Step 5: Refresh the forecast data
            result.forecast_path = self.config.forecast_output_path
            result.forecast_replacements = refresh_forecast(
                workdir / self.config.forecast_file,
                result.forecast_path,
                self.today,
            )

        logging.info("bootstrap: project '%s' bootstrapped", self.config.project)
        return result

    ### Steps ###
    def ensure_project(self) -> bool:
        """
        Create the project unless it already exists.

        Returns:
            True if the project was created, False if an existing project is reused
        """
        project = self.config.project
        if self.client.project_exists(project):
            if not self.config.assume_yes and not (self.confirm and self.confirm(project)):
                raise BootstrapAbortedError(project)
            logging.info("bootstrap: continuing with existing project '%s'", project)
            return False

        status = self.client.create_project(project)
        logging.info("bootstrap: project '%s' creation queued (status: %s)", project, status.status)
        return True

    def push_repository(self, workdir: Path) -> tuple[RepositoryReference, int]:
        """Push the extracted source files to the default repository."""
        files = self.scanner.find_source_files(workdir)
        repository = self.client.push_initial_commit(self.config.project, self.config.project, files)
        logging.info("bootstrap: pushed %d files to repository '%s' (%s)", len(files), repository.name, repository.id)
        return repository, len(files)

    def register_yaml_pipelines(self, workdir: Path, repository: RepositoryReference) -> list[RegisteredPipeline]:
        """Register a YAML pipeline for every definition in the extracted bundle."""
        registered = []
        for name, path in self.scanner.find_yaml_pipelines(workdir):
            data = self.client.create_yaml_pipeline(self.config.project, name, path, repository)
            registered.append(RegisteredPipeline.from_create_response(data, PipelineKind.YAML, name))
            logging.info("bootstrap: created YAML pipeline '%s'", name)
        return registered

    def register_classic_pipelines(self, repository: RepositoryReference) -> list[RegisteredPipeline]:
        """Register a classic build definition for every file in the root directory."""
        registered = []
        for path, definition in self.scanner.find_classic_pipelines(self.config.classic_pipeline_dir):
            data = self.client.create_build_definition(
                self.config.project,
                bind_classic_definition(definition, repository),
            )
            pipeline = RegisteredPipeline.from_create_response(
                data,
                PipelineKind.CLASSIC,
                definition.get("name", path.stem),
            )
            registered.append(pipeline)
            logging.info("bootstrap: created classic pipeline '%s'", pipeline.name)
        return registered

    @contextmanager
    def _extraction_directory(self) -> Iterator[Path]:
        """Temporary directory for the asset bundle, removed on exit unless keep_temp is set."""
        if self.config.keep_temp:
            path = Path(tempfile.mkdtemp(prefix="ado-lab-bootstrap-"))
            logging.warning("bootstrap: keeping extracted assets in %s", path)
            yield path
            return

        with tempfile.TemporaryDirectory(prefix="ado-lab-bootstrap-") as path:
            yield Path(path)
