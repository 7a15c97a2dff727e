"""Core Azure DevOps API client functionality.

This module provides the client used to talk to the Azure DevOps REST API while
bootstrapping a lab project. All calls are synchronous and issued one at a time.

Key Components:
    AzureDevOpsClient: Wraps an authenticated requests session and exposes one
        method per endpoint the bootstrap workflow consumes.

Features:
    - Basic authentication with a personal access token
    - Lazily created session usable as a context manager
    - GET helper that never raises on status and exposes the raw response
    - POST helper that maps error statuses to typed exceptions
    - Fixed, configurable delay after every successful POST

Dependencies:
    - models.py: Request payloads and response models
    - exceptions.py: Custom exceptions for error handling
    - requests: For HTTP operations

Example:
    ```python
    from ado_lab_bootstrap.core.client import AzureDevOpsClient

    with AzureDevOpsClient(organization="org", token="pat") as client:
        if not client.project_exists("LabProject"):
            client.create_project("LabProject")

        repository = client.push_initial_commit(
            "LabProject",
            "LabProject",
            [("/src/App.cs", "class App {}")],
        )
    ```

Raises:
    AuthenticationError: When a POST is rejected with HTTP 401
    RedirectError: When a POST is redirected (HTTP 302)
    NotFoundError: When a POST targets a missing resource (HTTP 404)
    APIError: For any other failed POST or network error
"""

import logging
import time
from typing import Any

import requests

from ado_lab_bootstrap.core.exceptions import APIError, AuthenticationError, NotFoundError, RedirectError
from ado_lab_bootstrap.core.models import (
    Payload,
    PipelineCreatePayload,
    ProjectCreatePayload,
    ProjectStatus,
    PushPayload,
    RepositoryReference,
)


class AzureDevOpsClient:
    """Handles API interactions with Azure DevOps at the organization level."""

    API_VERSION = "7.1"  # Azure DevOps API version
    POST_DELAY = 3.0  # Seconds to wait after every successful POST
    SUCCESS_STATUS_CODES = range(200, 210)

    def __init__(
        self,
        organization: str,
        token: str,
        api_version: str = API_VERSION,
        post_delay: float = POST_DELAY,
    ) -> None:
        # Base configuration
        self.organization = organization
        self.api_version = api_version
        self.post_delay = post_delay
        self.base_url = f"https://dev.azure.com/{organization}"

        # Authentication
        self.token = token
        self.headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        self.default_params = {"api-version": self.api_version}

        # Session and last GET response
        self._session = None
        self.last_response: requests.Response | None = None

    ### Session methods
    @property
    def session(self) -> requests.Session:
        """Lazy initialization of the session."""
        if self._session is None:
            self._session = self._create_session()
        return self._session

    def _create_session(self) -> requests.Session:
        """Creates a new requests session authenticated with the access token."""
        session = requests.Session()
        session.auth = ("", self.token)
        session.headers.update(self.headers)
        return session

    ### Context manager methods
    def __enter__(self) -> "AzureDevOpsClient":
        """Context manager entry."""
        if self._session is None:
            self._session = self._create_session()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        """Context manager exit."""
        if self._session:
            self._session.close()
            self._session = None

    ### Request methods
    @staticmethod
    def _parse_body(response: requests.Response) -> dict:
        """Returns the JSON body of a response, or an empty dict when it is not JSON."""
        try:
            data = response.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {"value": data}

    def _get(self, url: str, params: dict | None = None) -> dict:
        """
        Handles GET requests without raising on error statuses.

        The raw response is kept in ``last_response`` so callers can inspect the
        status code themselves.
        """
        merged_params = {**self.default_params, **(params or {})}
        try:
            response = self.session.get(url, params=merged_params, allow_redirects=False)
        except requests.exceptions.RequestException as e:
            logging.error("client: request error: %s - %s", type(e).__name__, url)  # noqa: TRY400
            raise APIError(url, None, str(e)) from e

        self.last_response = response
        logging.debug("client: GET [%s] %s", response.status_code, url)
        return self._parse_body(response)

    def _post(self, url: str, body: Payload | dict, params: dict | None = None) -> dict:
        """Handles POST requests, raising on any status outside 200-209."""
        merged_params = {**self.default_params, **(params or {})}
        payload = body.to_request_body() if isinstance(body, Payload) else body
        try:
            response = self.session.post(url, params=merged_params, json=payload, allow_redirects=False)
        except requests.exceptions.RequestException as e:
            logging.error("client: request error: %s - %s", type(e).__name__, url)  # noqa: TRY400
            raise APIError(url, None, str(e)) from e

        if response.status_code not in self.SUCCESS_STATUS_CODES:
            error = self._error_from_response(url, response)
            logging.error("client: [%s] %s - %s", response.status_code, url, error.message)
            raise error

        logging.debug("client: POST [%s] %s", response.status_code, url)
        if self.post_delay:
            time.sleep(self.post_delay)
        return self._parse_body(response)

    def _error_from_response(self, url: str, response: requests.Response) -> APIError:
        """Maps a failed response to the matching exception."""
        status = response.status_code
        if status == 401:  # noqa: PLR2004
            return AuthenticationError(url)
        if status == 302:  # noqa: PLR2004
            return RedirectError(url)

        message = self._parse_body(response).get("message")
        if status == 404:  # noqa: PLR2004
            return NotFoundError(url, message or "Resource not found")
        return APIError(url, status, message or response.text)

    ### Project methods
    def project_exists(self, project: str) -> bool:
        """Checks whether a project exists in the organization."""
        url = f"{self.base_url}/_apis/projects/{project}"
        self._get(url)
        exists = self.last_response.status_code in range(200, 300)
        logging.info("client: project '%s' %s", project, "exists" if exists else "not found")
        return exists

    def create_project(self, project: str) -> ProjectStatus:
        """Queues the creation of a Git project."""
        url = f"{self.base_url}/_apis/projects"
        data = self._post(url, ProjectCreatePayload.for_project(project))
        return ProjectStatus.from_create_response(data)

    ### Repository methods
    def push_initial_commit(
        self,
        project: str,
        repository: str,
        files: list[tuple[str, str]],
    ) -> RepositoryReference:
        """Pushes the files as the first commit of an empty repository."""
        url = f"{self.base_url}/{project}/_apis/git/repositories/{repository}/pushes"
        logging.info("client: pushing %d files to '%s'", len(files), repository)
        data = self._post(url, PushPayload.initial_commit(files))
        return RepositoryReference.from_push_response(data)

    ### Pipeline methods
    def create_yaml_pipeline(
        self,
        project: str,
        name: str,
        path: str,
        repository: RepositoryReference,
    ) -> dict[str, Any]:
        """Creates a YAML pipeline pointing at a file in the repository."""
        url = f"{self.base_url}/{project}/_apis/pipelines"
        return self._post(url, PipelineCreatePayload.for_yaml_file(name, path, repository))

    def create_build_definition(self, project: str, definition: dict[str, Any]) -> dict[str, Any]:
        """Creates a classic build definition."""
        url = f"{self.base_url}/{project}/_apis/build/definitions"
        return self._post(url, definition)
