"""Asset scanning functionality for the lab bootstrap bundle.

This module extracts the asset archive shipped with the lab and locates the files
the bootstrap workflow needs: the source files pushed as the initial commit, the
YAML pipeline definitions inside the extracted bundle and the classic build
definitions kept next to it in the root directory.

Key Components:
    AssetScanner: Extracts the archive and enumerates source files and pipeline
        definitions with deterministic (sorted) ordering.

Features:
    - tar.gz extraction with the tarfile data filter
    - Recursive source file discovery (.cs, .csproj, .sln, .yml)
    - Repository-relative paths rooted at "/"
    - YAML pipeline validation with PyYAML
    - Classic build definition parsing from JSON

Dependencies:
    - core.exceptions: ArchiveExtractionError and PipelineAssetError
    - yaml: Pipeline definition validation
    - logging: Operation logging

Example:
    ```python
    from pathlib import Path
    from ado_lab_bootstrap.utils.scanner import AssetScanner

    scanner = AssetScanner()
    scanner.extract(Path("~/azure_devops/azure_devops.tgz"), Path("/tmp/assets"))

    files = scanner.find_source_files(Path("/tmp/assets"))
    print(f"Found {len(files)} source files")

    for path, content in files:
        print(f"File: {path} ({len(content)} bytes)")
    ```

Raises:
    ArchiveExtractionError: When the archive is missing or cannot be extracted, or a
        source file cannot be read as UTF-8
    PipelineAssetError: When a pipeline definition cannot be read or parsed
"""

import json
import logging
import tarfile
from pathlib import Path
from typing import Any

import yaml

from ado_lab_bootstrap.core.exceptions import ArchiveExtractionError, PipelineAssetError


def to_repository_path(path: Path, root: Path) -> str:
    """Formats a file path as a repository path rooted at "/"."""
    return "/" + path.relative_to(root).as_posix()


class AssetScanner:
    """Handles extraction and scanning of the lab asset bundle."""

    SOURCE_EXTENSIONS = (".cs", ".csproj", ".sln", ".yml")

    def __init__(self, pipeline_dir: str = "pipelines") -> None:
        """Initializes the scanner with the name of the pipeline assets directory."""
        self.pipeline_dir = pipeline_dir

    def extract(self, archive: Path, destination: Path) -> Path:
        """
        Extract a tar.gz archive.

        Args:
            archive: Path to the archive
            destination: Directory to extract into

        Returns:
            The destination directory
        """
        logging.info("scanner: extracting %s into %s", archive, destination)
        try:
            with tarfile.open(archive, "r:gz") as tar:
                tar.extractall(destination, filter="data")
        except (OSError, tarfile.TarError) as e:
            logging.exception("scanner: failed to extract %s", archive)
            raise ArchiveExtractionError(str(archive), str(e)) from e
        return destination

    def find_source_files(self, root: Path) -> list[tuple[str, str]]:
        """
        Find the files pushed as the initial commit.

        Args:
            root: Extraction root

        Returns:
            List of tuples containing (repository_path, file_content)
        """
        files = []
        for path in sorted(root.rglob("*")):
            if not path.is_file() or path.suffix not in self.SOURCE_EXTENSIONS:
                continue
            try:
                content = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logging.exception("scanner: failed to read source file %s", path)
                raise ArchiveExtractionError(str(path), f"cannot read source file: {e!s}") from e
            files.append((to_repository_path(path, root), content))
            logging.debug("scanner: added source file: %s", path)

        logging.info("scanner: found %d source files", len(files))
        return files

    def find_yaml_pipelines(self, root: Path) -> list[tuple[str, str]]:
        """
        Find the YAML pipeline definitions inside the extracted bundle.

        Only ``*.yml`` files directly under ``<root>/<pipeline_dir>/yml`` are
        considered. Each one must parse as YAML.

        Args:
            root: Extraction root

        Returns:
            List of tuples containing (pipeline_name, repository_path)
        """
        directory = root / self.pipeline_dir / "yml"
        if not directory.is_dir():
            logging.warning("scanner: no YAML pipeline directory at %s", directory)
            return []

        pipelines = []
        for path in sorted(directory.glob("*.yml")):
            if not path.is_file():
                continue
            self._validate_yaml(path)
            pipelines.append((path.stem, to_repository_path(path, root)))
            logging.debug("scanner: added YAML pipeline: %s", path.stem)

        logging.info("scanner: found %d YAML pipelines", len(pipelines))
        return pipelines

    def find_classic_pipelines(self, directory: Path) -> list[tuple[Path, dict[str, Any]]]:
        """
        Load the classic build definitions.

        Args:
            directory: Directory holding one JSON build definition per file

        Returns:
            List of tuples containing (file_path, definition)
        """
        if not directory.is_dir():
            logging.warning("scanner: no classic pipeline directory at %s", directory)
            return []

        definitions = []
        for path in sorted(directory.iterdir()):
            if not path.is_file():
                continue
            definitions.append((path, self._load_definition(path)))
            logging.debug("scanner: added classic pipeline: %s", path.name)

        logging.info("scanner: found %d classic pipelines", len(definitions))
        return definitions

    @staticmethod
    def _read_definition(path: Path) -> str:
        """Read a pipeline definition file as UTF-8 text."""
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise PipelineAssetError(str(path), f"cannot read file: {e!s}") from e

    @classmethod
    def _validate_yaml(cls, path: Path) -> None:
        """Check that a pipeline file parses as YAML."""
        try:
            yaml.safe_load(cls._read_definition(path))
        except yaml.YAMLError as e:
            raise PipelineAssetError(str(path), f"YAML parsing error: {e!s}") from e

    @classmethod
    def _load_definition(cls, path: Path) -> dict[str, Any]:
        """Parse a classic build definition."""
        try:
            definition = json.loads(cls._read_definition(path))
        except json.JSONDecodeError as e:
            raise PipelineAssetError(str(path), f"JSON parsing error: {e!s}") from e
        if not isinstance(definition, dict):
            raise PipelineAssetError(str(path), "expected a JSON object")
        return definition
