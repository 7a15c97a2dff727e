"""Azure DevOps Lab Bootstrap.

A tool for bootstrapping Azure DevOps projects for demo and lab environments:
it creates the project, pushes the lab source code as the initial commit,
registers YAML and classic build pipelines and refreshes the lab's forecast data.

Package Structure:
    core: Core functionality for the bootstrap workflow and API interactions
        - client: Azure DevOps API client with authentication handling
        - models: Configuration, result and request payload models
        - bootstrap: The bootstrap workflow
        - exceptions: Error types for graceful error handling

    cli: Command-line interface components
        - commands: CLI argument parsing and execution
        - printer: Output formatting in various formats (plain, rich, JSON)

    utils: Utility functions and helpers
        - scanner: Asset archive extraction and pipeline discovery
        - forecast: Forecast data date refresh

Examples:
    CLI Usage:
        ```bash
        $ ado-lab-bootstrap \\
            --organization myorg \\
            --project LabProject \\
            --access-token mytoken
        ```

    Programmatic Usage:
        ```python
        import os
        from ado_lab_bootstrap import (
            AzureDevOpsClient,
            BootstrapConfig,
            ProjectBootstrapper,
        )

        config = BootstrapConfig(
            organization=os.getenv("ADO_ORGANIZATION"),
            project="LabProject",
            access_token=os.getenv("ADO_TOKEN"),
            root_dir="./lab",
        )

        with AzureDevOpsClient(config.organization, config.access_token) as client:
            bootstrapper = ProjectBootstrapper(
                client=client,
                config=config,
                confirm=lambda project: True,
            )
            result = bootstrapper.run()

        for pipeline in result.pipelines:
            print(pipeline.kind, pipeline.name, pipeline.id)
        ```
"""

__version__ = "0.1.0"

from ado_lab_bootstrap.core import (
    AzureDevOpsClient,
    BootstrapConfig,
    BootstrapResult,
    PipelineKind,
    ProjectBootstrapper,
    RegisteredPipeline,
    RepositoryReference,
)

__all__ = [
    "AzureDevOpsClient",
    "BootstrapConfig",
    "BootstrapResult",
    "PipelineKind",
    "ProjectBootstrapper",
    "RegisteredPipeline",
    "RepositoryReference",
    "__version__",
]
