# ruff: noqa: SLF001,PLR2004,S105,S106
import json
import shutil
import tarfile
from datetime import date
from pathlib import Path
from unittest.mock import Mock

import pytest

from ado_lab_bootstrap.core.bootstrap import ProjectBootstrapper, bind_classic_definition
from ado_lab_bootstrap.core.client import AzureDevOpsClient
from ado_lab_bootstrap.core.exceptions import (
    ArchiveExtractionError,
    AuthenticationError,
    BootstrapAbortedError,
    PipelineAssetError,
)
from ado_lab_bootstrap.core.models import BootstrapConfig, PipelineKind, ProjectStatus, RepositoryReference

REPOSITORY = RepositoryReference(name="Lab", id="repo-1")

CLASSIC_DEFINITION = {
    "name": "nightly",
    "process": {"type": 1, "phases": []},
    "repository": {"id": "old-id", "name": "old-name", "type": "TfsGit", "defaultBranch": "refs/heads/main"},
}


def build_bundle(root: Path) -> Path:
    """Create a lab root directory with an asset archive and classic pipelines."""
    assets = root / "assets"
    (assets / "src" / "Api").mkdir(parents=True)
    (assets / "pipelines" / "yml").mkdir(parents=True)
    (assets / "src" / "Api" / "Program.cs").write_text("class Program {}", encoding="utf-8")
    (assets / "src" / "Api" / "Api.csproj").write_text("<Project />", encoding="utf-8")
    (assets / "Lab.sln").write_text("Microsoft Visual Studio Solution File", encoding="utf-8")
    (assets / "README.md").write_text("# Lab", encoding="utf-8")
    (assets / "pipelines" / "yml" / "ci.yml").write_text("trigger:\n  - main\n", encoding="utf-8")
    (assets / "pipelines" / "yml" / "cd.yml").write_text("stages: []\n", encoding="utf-8")
    (assets / "jobs.json").write_text('{"jobs": [{"due": "2023-05-01"}, {"due": "2031-01-01"}]}', encoding="utf-8")

    with tarfile.open(root / "azure_devops.tgz", "w:gz") as tar:
        for path in assets.iterdir():
            tar.add(path, arcname=path.name)

    classic = root / "pipelines" / "classic"
    classic.mkdir(parents=True)
    (classic / "nightly.json").write_text(json.dumps(CLASSIC_DEFINITION), encoding="utf-8")
    return root


@pytest.fixture
def lab_root(tmp_path: Path) -> Path:
    """Create a lab root directory."""
    return build_bundle(tmp_path)


@pytest.fixture
def mock_client() -> Mock:
    """Create a mock Azure DevOps client."""
    client = Mock(spec=AzureDevOpsClient)
    client.project_exists.return_value = False
    client.create_project.return_value = ProjectStatus(id="op-1", status="queued")
    client.push_initial_commit.return_value = REPOSITORY
    client.create_yaml_pipeline.side_effect = lambda project, name, path, repository: {"id": 10, "name": name}
    client.create_build_definition.side_effect = lambda project, definition: {"id": 20, "name": definition["name"]}
    return client


@pytest.fixture
def config(lab_root: Path) -> BootstrapConfig:
    """Create a bootstrap configuration."""
    return BootstrapConfig("org", "Lab", "pat", root_dir=lab_root, post_delay=0)


def test_bind_classic_definition() -> None:
    """Test only the repository name and id are overwritten."""
    bound = bind_classic_definition(CLASSIC_DEFINITION, REPOSITORY)

    if bound["repository"]["name"] != "Lab" or bound["repository"]["id"] != "repo-1":
        pytest.fail(f"Repository not bound: {bound['repository']}")
    if bound["repository"]["type"] != "TfsGit" or bound["repository"]["defaultBranch"] != "refs/heads/main":
        pytest.fail("Expected other repository fields to be unchanged")
    if bound["process"] != CLASSIC_DEFINITION["process"] or bound["name"] != "nightly":
        pytest.fail("Expected other fields to be unchanged")
    if CLASSIC_DEFINITION["repository"]["id"] != "old-id":
        pytest.fail("Expected the original definition to be left untouched")


def test_bind_classic_definition_without_repository() -> None:
    """Test a missing repository object is created."""
    bound = bind_classic_definition({"name": "bare"}, REPOSITORY)
    if bound["repository"] != {"name": "Lab", "id": "repo-1"}:
        pytest.fail(f"Unexpected repository: {bound['repository']}")


def test_run_creates_everything(mock_client: Mock, config: BootstrapConfig, lab_root: Path) -> None:
    """Test a full run against a new project."""
    bootstrapper = ProjectBootstrapper(mock_client, config, today=date(2024, 6, 15))
    result = bootstrapper.run()

    mock_client.create_project.assert_called_once_with("Lab")
    if not result.project_created:
        pytest.fail("Expected project to be created")

    # Initial commit
    project, repository, files = mock_client.push_initial_commit.call_args.args
    if (project, repository) != ("Lab", "Lab"):
        pytest.fail("Expected push to the project's default repository")
    paths = [path for path, _ in files]
    expected_paths = [
        "/Lab.sln",
        "/pipelines/yml/cd.yml",
        "/pipelines/yml/ci.yml",
        "/src/Api/Api.csproj",
        "/src/Api/Program.cs",
    ]
    if paths != expected_paths:
        pytest.fail(f"Unexpected pushed files: {paths}")
    if result.pushed_files != 5 or result.repository != REPOSITORY:
        pytest.fail(f"Unexpected push result: {result}")

    # YAML pipelines
    yaml_calls = [c.args for c in mock_client.create_yaml_pipeline.call_args_list]
    expected_yaml = [
        ("Lab", "cd", "/pipelines/yml/cd.yml", REPOSITORY),
        ("Lab", "ci", "/pipelines/yml/ci.yml", REPOSITORY),
    ]
    if yaml_calls != expected_yaml:
        pytest.fail(f"Unexpected YAML pipeline calls: {yaml_calls}")

    # Classic pipelines come from the root directory
    mock_client.create_build_definition.assert_called_once()
    _, definition = mock_client.create_build_definition.call_args.args
    if definition["repository"]["id"] != "repo-1" or definition["repository"]["name"] != "Lab":
        pytest.fail(f"Classic pipeline not bound: {definition['repository']}")

    if [p.kind for p in result.pipelines] != [PipelineKind.YAML, PipelineKind.YAML, PipelineKind.CLASSIC]:
        pytest.fail("Expected YAML pipelines before classic ones")
    if [p.name for p in result.pipelines] != ["cd", "ci", "nightly"]:
        pytest.fail(f"Unexpected pipeline names: {[p.name for p in result.pipelines]}")

    # Forecast written to the root directory
    forecast = (lab_root / "jobs.json").read_text(encoding="utf-8")
    if forecast != '{"jobs": [{"due": "2024-06-15"}, {"due": "2031-01-01"}]}':
        pytest.fail(f"Unexpected forecast: {forecast}")
    if result.forecast_replacements != 1 or result.forecast_path != lab_root / "jobs.json":
        pytest.fail("Unexpected forecast result")


def test_existing_project_confirmed(mock_client: Mock, config: BootstrapConfig) -> None:
    """Test an existing project is reused when the user confirms."""
    mock_client.project_exists.return_value = True
    confirm = Mock(return_value=True)

    result = ProjectBootstrapper(mock_client, config, confirm=confirm).run()

    confirm.assert_called_once_with("Lab")
    mock_client.create_project.assert_not_called()
    if result.project_created:
        pytest.fail("Expected existing project to be reused")


def test_existing_project_declined(mock_client: Mock, config: BootstrapConfig) -> None:
    """Test declining the prompt stops before any change."""
    mock_client.project_exists.return_value = True

    with pytest.raises(BootstrapAbortedError):
        ProjectBootstrapper(mock_client, config, confirm=lambda project: False).run()

    mock_client.create_project.assert_not_called()
    mock_client.push_initial_commit.assert_not_called()


def test_existing_project_assume_yes(mock_client: Mock, lab_root: Path) -> None:
    """Test assume_yes skips the prompt."""
    mock_client.project_exists.return_value = True
    config = BootstrapConfig("org", "Lab", "pat", root_dir=lab_root, assume_yes=True)
    confirm = Mock(return_value=False)

    ProjectBootstrapper(mock_client, config, confirm=confirm).run()

    confirm.assert_not_called()
    mock_client.push_initial_commit.assert_called_once()


def test_missing_archive(mock_client: Mock, tmp_path: Path) -> None:
    """Test a missing archive aborts before pushing."""
    config = BootstrapConfig("org", "Lab", "pat", root_dir=tmp_path)

    with pytest.raises(ArchiveExtractionError):
        ProjectBootstrapper(mock_client, config).run()

    mock_client.push_initial_commit.assert_not_called()


def test_failure_stops_remaining_pipelines(mock_client: Mock, config: BootstrapConfig, lab_root: Path) -> None:
    """Test the first failing pipeline aborts the rest of the run."""
    mock_client.create_yaml_pipeline.side_effect = AuthenticationError("https://dev.azure.com/org/Lab/_apis/pipelines")

    with pytest.raises(AuthenticationError):
        ProjectBootstrapper(mock_client, config).run()

    if mock_client.create_yaml_pipeline.call_count != 1:
        pytest.fail("Expected no further YAML pipeline calls")
    mock_client.create_build_definition.assert_not_called()
    if (lab_root / "jobs.json").exists():
        pytest.fail("Expected forecast not to be refreshed")


def test_invalid_classic_definition(mock_client: Mock, config: BootstrapConfig, lab_root: Path) -> None:
    """Test an unparseable classic definition aborts the run."""
    (lab_root / "pipelines" / "classic" / "broken.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(PipelineAssetError):
        ProjectBootstrapper(mock_client, config).run()

    mock_client.create_build_definition.assert_not_called()


def test_extraction_directory_removed(mock_client: Mock, config: BootstrapConfig) -> None:
    """Test the extracted assets are removed after the run."""
    workdirs = []
    bootstrapper = ProjectBootstrapper(mock_client, config)
    original = bootstrapper.scanner.extract

    def record_extract(archive: Path, destination: Path) -> Path:
        workdirs.append(destination)
        return original(archive, destination)

    bootstrapper.scanner.extract = record_extract
    bootstrapper.run()

    if len(workdirs) != 1 or workdirs[0].exists():
        pytest.fail("Expected the extraction directory to be removed")


def test_extraction_directory_kept(mock_client: Mock, lab_root: Path) -> None:
    """Test keep_temp leaves the extracted assets in place."""
    config = BootstrapConfig("org", "Lab", "pat", root_dir=lab_root, post_delay=0, keep_temp=True)
    workdirs = []
    bootstrapper = ProjectBootstrapper(mock_client, config)
    original = bootstrapper.scanner.extract

    def record_extract(archive: Path, destination: Path) -> Path:
        workdirs.append(destination)
        return original(archive, destination)

    bootstrapper.scanner.extract = record_extract
    bootstrapper.run()

    if not (workdirs[0] / "jobs.json").exists():
        pytest.fail("Expected the extraction directory to be kept")
    shutil.rmtree(workdirs[0])
