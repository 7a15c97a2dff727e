"""Core subpackage for Azure DevOps lab project bootstrapping.

This subpackage provides the core components for bootstrapping a lab project:
API interactions, configuration and payload models, error types and the
workflow driver.

Modules:
    bootstrap: The linear bootstrap workflow
    client: Azure DevOps API client
    models: Configuration, result and request payload models
    exceptions: Error types for graceful error handling

Components:
    API Client:
        AzureDevOpsClient: Handles API interactions with Azure DevOps

    Workflow:
        ProjectBootstrapper: Orchestrates the bootstrap steps

    Configuration and Results:
        BootstrapConfig: Immutable run configuration
        BootstrapResult: Summary of what a run created
        RepositoryReference: Repository the initial commit was pushed to
        RegisteredPipeline: Pipeline created during the run
        PipelineKind: YAML or classic pipeline

Example:
    >>> from ado_lab_bootstrap.core import (
    ...     AzureDevOpsClient,
    ...     BootstrapConfig,
    ...     ProjectBootstrapper,
    ... )
    >>>
    >>> config = BootstrapConfig("MyOrg", "LabProject", "pat", assume_yes=True)
    >>> with AzureDevOpsClient(config.organization, config.access_token) as client:
    ...     result = ProjectBootstrapper(client, config).run()
    ...     print(f"Pushed {result.pushed_files} files to {result.repository.name}")
"""

from ado_lab_bootstrap.core.bootstrap import ProjectBootstrapper, bind_classic_definition
from ado_lab_bootstrap.core.client import AzureDevOpsClient
from ado_lab_bootstrap.core.exceptions import (
    ADOLabBootstrapError,
    APIError,
    ArchiveExtractionError,
    AuthenticationError,
    BootstrapAbortedError,
    ConfigurationError,
    NotFoundError,
    PipelineAssetError,
    RedirectError,
)
from ado_lab_bootstrap.core.models import (
    BootstrapConfig,
    BootstrapResult,
    PipelineKind,
    ProjectStatus,
    RegisteredPipeline,
    RepositoryReference,
)

__all__ = [  # noqa: RUF022
    # Main components
    "AzureDevOpsClient",
    "ProjectBootstrapper",
    "bind_classic_definition",
    # Models
    "BootstrapConfig",
    "BootstrapResult",
    "PipelineKind",
    "ProjectStatus",
    "RegisteredPipeline",
    "RepositoryReference",
    # Exceptions
    "ADOLabBootstrapError",
    "APIError",
    "ArchiveExtractionError",
    "AuthenticationError",
    "BootstrapAbortedError",
    "ConfigurationError",
    "NotFoundError",
    "PipelineAssetError",
    "RedirectError",
]
