"""Command-line output formatting for bootstrap results.

This module provides the output formatters used to summarize a bootstrap run.
Each printer renders the same BootstrapResult through a pluggable printer
architecture with consistent output handling.

Key Components:
    BootstrapPrinter: Abstract base class defining the output contract and stream handling
    BootstrapPlainPrinter: Simple text output for basic terminals and logs
    BootstrapRichPrinter: Rich text console output with tables and styling
    BootstrapJSONPrinter: Structured JSON output with file support

Output Handling:
    - All printers support both stdout and file output
    - Abstract _write method enforcing output contract
    - UTF-8 encoding for file output

Dependencies:
    - core.models: BootstrapResult and related models
    - rich: Terminal formatting and table generation
    - json: JSON data formatting

Example:
    ```python
    from ado_lab_bootstrap.cli.printer import BootstrapRichPrinter, BootstrapJSONPrinter

    BootstrapRichPrinter(result).print()
    BootstrapJSONPrinter(result).print(output_file="bootstrap.json")
    ```
"""

import json
import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TextIO

from rich.console import Console
from rich.table import Table

from ado_lab_bootstrap.core.models import BootstrapResult, RegisteredPipeline


def format_pipeline_id(pipeline: RegisteredPipeline) -> str:
    """Formats a pipeline id, which may be missing from the creation response."""
    return str(pipeline.id) if pipeline.id is not None else "-"


class BootstrapPrinter(ABC):
    """Base printer for bootstrap results."""

    result: BootstrapResult
    _output: TextIO | None = None

    def __init__(self, result: BootstrapResult) -> None:
        """Initialize printer with the run result."""
        self.result = result

    def print(self, output_file: str | None = None) -> None:
        """
        Print the run summary to the given output file.

        Args:
            output_file: Path to output file, or None for stdout
        """
        if output_file:
            with Path(output_file).open("w", encoding="utf-8") as output:
                self._output = output
                self._print_content()
        else:
            # Don't close stdout
            self._output = sys.stdout
            self._print_content()

    @abstractmethod
    def _print_content(self) -> None:
        """Print the summary to the configured output stream."""

    @abstractmethod
    def _write(self, content: str | Table | dict) -> None:
        """
        Write content to configured output stream.

        Args:
            content: Content to write (string, Table, or dictionary)
        """

    @property
    def success_message(self) -> str:
        """Final confirmation line."""
        return f"Project '{self.result.project}' bootstrapped successfully"


class BootstrapPlainPrinter(BootstrapPrinter):
    """Bootstrap result printer with plain text output."""

    def _write(self, content: str = "") -> None:
        """Write content to configured output."""
        print(content, file=self._output)

    def _print_content(self) -> None:
        result = self.result
        self._write(f"\n{result.organization}/{result.project}")
        self._write(f"Project: {'created' if result.project_created else 'existing'}")
        if result.repository:
            self._write(f"Repository: {result.repository.name} ({result.repository.id})")
        self._write(f"Pushed files: {result.pushed_files}")

        self._write(f"Pipelines ({len(result.pipelines)}):")
        for pipeline in result.pipelines:
            self._write(f"  [{pipeline.kind}] {pipeline.name} (id: {format_pipeline_id(pipeline)})")

        if result.forecast_path:
            self._write(f"Forecast: {result.forecast_path} ({result.forecast_replacements} dates refreshed)")
        self._write(self.success_message)


class BootstrapRichPrinter(BootstrapPrinter):
    """Bootstrap result printer with rich text formatting."""

    def _write(self, content: str | Table) -> None:
        """Write content to configured output."""
        self._console.print(content)

    def _print_content(self) -> None:
        self._console = Console(file=self._output)
        result = self.result

        summary = Table(
            title=f"Bootstrap of '{result.organization}/{result.project}'",
            show_header=False,
        )
        summary.add_column("Item", style="bold")
        summary.add_column("Value")
        summary.add_row(
            "Project",
            "[green]Created[/]" if result.project_created else "[yellow]Existing[/]",
        )
        if result.repository:
            summary.add_row("Repository", f"{result.repository.name} ({result.repository.id})")
        summary.add_row("Pushed files", str(result.pushed_files))
        if result.forecast_path:
            summary.add_row(
                "Forecast",
                f"{result.forecast_path} ({result.forecast_replacements} dates refreshed)",
            )
        self._write(summary)

        if result.pipelines:
            pipelines = Table(title="Registered Pipelines")
            pipelines.add_column("Name")
            pipelines.add_column("Type")
            pipelines.add_column("ID", justify="right")
            for pipeline in result.pipelines:
                pipelines.add_row(pipeline.name, pipeline.kind.value.upper(), format_pipeline_id(pipeline))
            self._write(pipelines)

        self._write(f"[green]{self.success_message}[/]")


class BootstrapJSONPrinter(BootstrapPrinter):
    """Bootstrap result printer with JSON output."""

    def _write(self, content: dict) -> None:
        """Write JSON content to configured output."""
        json.dump(content, self._output, indent=2)
        self._output.write("\n")

    def _print_content(self) -> None:
        result = self.result
        self._write(
            {
                "organization": result.organization,
                "project": result.project,
                "project_created": result.project_created,
                "repository": (
                    {"name": result.repository.name, "id": result.repository.id} if result.repository else None
                ),
                "pushed_files": result.pushed_files,
                "pipelines": [
                    {"name": p.name, "id": p.id, "type": str(p.kind)} for p in result.pipelines
                ],
                "forecast": {
                    "path": str(result.forecast_path) if result.forecast_path else None,
                    "replacements": result.forecast_replacements,
                },
            },
        )
