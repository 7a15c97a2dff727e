"""Custom exceptions for lab project bootstrapping.

This module defines the exception hierarchy used throughout the bootstrap workflow.
Every failure is terminal: the workflow never retries or rolls back, so each
exception carries enough context for the command-line driver to print a single
descriptive line before exiting.

Exception Categories:
    Configuration: Errors related to missing or invalid configuration values
    Authentication: Errors related to Azure DevOps credentials and permissions
    API: Errors returned by the Azure DevOps REST API
    Assets: Errors extracting the asset archive or reading pipeline definitions
    Workflow: The user declining to continue with an existing project

Exception Hierarchy:
    ADOLabBootstrapError
    ├── ConfigurationError
    ├── APIError
    │   ├── AuthenticationError
    │   ├── RedirectError
    │   └── NotFoundError
    ├── ArchiveExtractionError
    ├── PipelineAssetError
    └── BootstrapAbortedError

Usage:
    ```python
    from ado_lab_bootstrap.core.exceptions import (
        ADOLabBootstrapError,
        APIError,
        AuthenticationError,
    )

    try:
        bootstrapper.run()
    except AuthenticationError:
        print("Check the scopes of your personal access token.")
    except APIError as e:
        print(f"[{e.status_code}] {e.url}: {e.message}")
    except ADOLabBootstrapError as e:
        print(f"Bootstrap failed: {e}")
    ```

Note:
    All exceptions inherit from ADOLabBootstrapError to allow catching
    all package-specific exceptions with a single except clause.
"""


class ADOLabBootstrapError(Exception):
    """Base exception for ADO Lab Bootstrap."""


class ConfigurationError(ADOLabBootstrapError):
    """Raised when the bootstrap configuration is invalid."""

    def __init__(self, message: str = "Invalid bootstrap configuration") -> None:
        super().__init__(message)


class APIError(ADOLabBootstrapError):
    """Raised when an Azure DevOps API call does not succeed."""

    def __init__(self, url: str, status_code: int | None, message: str) -> None:
        self.url = url
        self.status_code = status_code
        self.message = message
        super().__init__(f"[{status_code}] {url} - {message}")


class AuthenticationError(APIError):
    """Raised when Azure DevOps rejects the access token (HTTP 401)."""

    DEFAULT_MESSAGE = (
        "Permission denied. Make sure the access token is valid and has the "
        "Project and Team, Code and Build scopes with read, write and manage access"
    )

    def __init__(self, url: str = "", message: str = DEFAULT_MESSAGE) -> None:
        super().__init__(url, 401, message)


class RedirectError(APIError):
    """Raised when Azure DevOps redirects the request to a sign-in page (HTTP 302)."""

    DEFAULT_MESSAGE = "Request was redirected. Make sure the organization name and the access token are correct"

    def __init__(self, url: str = "", message: str = DEFAULT_MESSAGE) -> None:
        super().__init__(url, 302, message)


class NotFoundError(APIError):
    """Raised when the requested Azure DevOps resource does not exist (HTTP 404)."""

    def __init__(self, url: str = "", message: str = "Resource not found") -> None:
        super().__init__(url, 404, message)


class ArchiveExtractionError(ADOLabBootstrapError):
    """Raised when the asset archive cannot be extracted or is incomplete."""

    def __init__(self, path: str, reason: str = "extraction failed") -> None:
        self.path = path
        super().__init__(f"Failed to extract assets from {path}: {reason}")


class PipelineAssetError(ADOLabBootstrapError):
    """Raised when a pipeline definition file cannot be parsed."""

    def __init__(self, path: str, reason: str = "invalid content") -> None:
        self.path = path
        super().__init__(f"Error parsing pipeline definition {path}: {reason}")


class BootstrapAbortedError(ADOLabBootstrapError):
    """Raised when the user declines to continue with an existing project."""

    def __init__(self, project: str) -> None:
        self.project = project
        super().__init__(f"Bootstrap of existing project '{project}' aborted by user")
