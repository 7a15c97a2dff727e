"""Utility functions and components for ADO Lab Bootstrap.

This package provides the file-system side of the bootstrap workflow: extracting
the asset archive, enumerating the files to push and the pipelines to register,
and refreshing the forecast data file.

Components:
    AssetScanner: Extracts the asset archive and locates source files,
        YAML pipeline definitions and classic build definitions.
    refresh_dates: Rewrites dates in a text to today's date.
    refresh_forecast: Refreshes a forecast file and writes it to a destination.

Example:
    ```python
    from pathlib import Path
    from ado_lab_bootstrap.utils import AssetScanner, refresh_forecast

    scanner = AssetScanner(pipeline_dir="pipelines")
    root = scanner.extract(Path("azure_devops.tgz"), Path("/tmp/assets"))

    files = scanner.find_source_files(root)
    yaml_pipelines = scanner.find_yaml_pipelines(root)

    refresh_forecast(root / "jobs.json", Path("jobs.json"))
    ```
"""

from .forecast import refresh_dates, refresh_forecast
from .scanner import AssetScanner

__all__ = ["AssetScanner", "refresh_dates", "refresh_forecast"]
