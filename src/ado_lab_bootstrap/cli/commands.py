r"""Command-line interface for lab project bootstrapping.

This module provides the command-line interface for the bootstrapper. It handles
argument parsing, configuration creation, logging setup and the mapping of
bootstrap errors to a single error line and a non-zero exit status.

Key Components:
    parse_args: Handles CLI argument parsing and validation
    create_config: Creates the immutable run configuration from CLI args
    confirm_continue: Asks whether to continue with an existing project
    run: Orchestrates the bootstrap and prints the summary
    main: Entry point for CLI execution

Dependencies:
    - core.bootstrap: The bootstrap workflow
    - core.client: Azure DevOps API client
    - core.models: Configuration data models
    - cli.printer: Results output formatting and presentation
    - rich: Confirmation prompt and error output

Output Formats:
    - plain: Simple text output suitable for logs and terminals
    - rich: Colorized output with tables
    - json: Structured JSON output for programmatic consumption

CLI Usage:
    ```bash
    # Bootstrap a project with the default asset bundle
    $ ado-lab-bootstrap \
        --organization myorg \
        --project LabProject \
        --access-token mytoken

    # Reuse an existing project without prompting and write a JSON summary
    $ ado-lab-bootstrap \
        --organization myorg \
        --project LabProject \
        --access-token mytoken \
        --yes \
        --output-format json \
        --output-file bootstrap.json

    # Use a different working directory and no delay between requests (level INFO)
    $ ado-lab-bootstrap \
        --organization myorg \
        --project LabProject \
        --access-token mytoken \
        --root-dir ./lab \
        --delay 0 \
        -vv
    ```

Exit Status:
    0: Project bootstrapped
    1: Any bootstrap error (API failure, archive extraction, user abort)
    2: Invalid or missing command-line arguments
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from rich.console import Console
from rich.prompt import Confirm

from ado_lab_bootstrap import __version__
from ado_lab_bootstrap.core.bootstrap import ProjectBootstrapper
from ado_lab_bootstrap.core.client import AzureDevOpsClient
from ado_lab_bootstrap.core.exceptions import ADOLabBootstrapError, APIError
from ado_lab_bootstrap.core.models import BootstrapConfig, BootstrapResult, default_root_dir

from .printer import (
    BootstrapJSONPrinter,
    BootstrapPlainPrinter,
    BootstrapPrinter,
    BootstrapRichPrinter,
)

DEFAULT_POST_DELAY = AzureDevOpsClient.POST_DELAY

PRINTERS: dict[str, type[BootstrapPrinter]] = {
    "plain": BootstrapPlainPrinter,
    "rich": BootstrapRichPrinter,
    "json": BootstrapJSONPrinter,
}


def create_config(args: argparse.Namespace) -> BootstrapConfig:
    """Creates a BootstrapConfig from CLI arguments."""
    return BootstrapConfig(
        organization=args.organization,
        project=args.project,
        access_token=args.access_token,
        asset_file=args.asset_file,
        pipeline_dir=args.pipeline_dir,
        root_dir=Path(args.root_dir) if args.root_dir else default_root_dir(),
        forecast_file=args.forecast_file,
        post_delay=args.delay,
        assume_yes=args.yes,
        keep_temp=args.keep_temp,
    )


def create_printer(output_format: str, result: BootstrapResult) -> BootstrapPrinter:
    """Creates the printer for an output format."""
    printer_cls = PRINTERS.get(output_format)
    if printer_cls is None:
        error_message = f"Invalid output format: {output_format}. Must be one of: {', '.join(PRINTERS)}"
        raise ValueError(error_message)
    return printer_cls(result)


def confirm_continue(project: str) -> bool:
    """Asks whether to continue bootstrapping an existing project."""
    return Confirm.ask(f"Project '{project}' already exists. Continue anyway?", default=False)


def non_negative_float(value: str) -> float:
    """argparse type for a non-negative number of seconds."""
    try:
        number = float(value)
    except ValueError as e:
        msg = f"invalid number: {value}"
        raise argparse.ArgumentTypeError(msg) from e
    if number < 0:
        msg = f"must be non-negative: {value}"
        raise argparse.ArgumentTypeError(msg)
    return number


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Bootstrap an Azure DevOps project for a lab environment",
    )

    # Azure DevOps connection
    parser.add_argument(
        "--organization",
        required=True,
        help="Azure DevOps organization name",
    )
    parser.add_argument(
        "--project",
        required=True,
        help="Azure DevOps project name (created if it does not exist)",
    )
    parser.add_argument(
        "--access-token",
        required=True,
        help="Azure DevOps personal access token",
    )

    # Asset configuration
    assets_group = parser.add_argument_group("assets", "Lab asset locations")
    assets_group.add_argument(
        "--root-dir",
        default=None,
        help="Working root directory (default: $ADO_LAB_BOOTSTRAP_ROOT or $HOME/azure_devops)",
    )
    assets_group.add_argument(
        "--asset-file",
        default="azure_devops.tgz",
        help="Asset archive inside the root directory (default: azure_devops.tgz)",
    )
    assets_group.add_argument(
        "--pipeline-dir",
        default="pipelines",
        help="Pipeline assets directory name (default: pipelines)",
    )
    assets_group.add_argument(
        "--forecast-file",
        default="jobs.json",
        help="Forecast data file to refresh (default: jobs.json)",
    )
    assets_group.add_argument(
        "--keep-temp",
        action="store_true",
        help="Keep the extracted assets after the run",
    )

    # Execution configuration
    execution_group = parser.add_argument_group("execution", "Execution configuration")
    execution_group.add_argument(
        "--delay",
        type=non_negative_float,
        default=DEFAULT_POST_DELAY,
        help=f"Seconds to wait after every API change (default: {DEFAULT_POST_DELAY:g})",
    )
    execution_group.add_argument(
        "--yes",
        "-y",
        action="store_true",
        help="Continue without prompting when the project already exists",
    )

    # Output configuration
    output_group = parser.add_argument_group("output", "Output configuration")
    output_group.add_argument(
        "--output-format",
        choices=list(PRINTERS),
        default="rich",
        help="Output format for the run summary (default: rich)",
    )
    output_group.add_argument(
        "--output-file",
        default=None,
        help="Write the run summary to a file instead of standard output",
    )

    # Add verbosity control
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Suppress all non-essential output",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Increase verbosity (can be used multiple times)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"{__version__}",
        help="Show the version of ado-lab-bootstrap",
    )

    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> BootstrapResult:
    """Run the bootstrap with CLI arguments."""
    config = create_config(args)

    with AzureDevOpsClient(
        organization=config.organization,
        token=config.access_token,
        post_delay=config.post_delay,
    ) as client:
        bootstrapper = ProjectBootstrapper(
            client=client,
            config=config,
            confirm=confirm_continue,
        )
        result = bootstrapper.run()

    printer = create_printer(args.output_format, result)
    printer.print(output_file=args.output_file)
    return result


def configure_logging(args: argparse.Namespace) -> None:
    """Configure logging from the verbosity flags or the environment."""
    # First check command-line args
    if args.quiet:
        log_level = logging.CRITICAL
    elif args.verbose > 0:
        # Map verbosity count to log levels
        log_level = {
            1: logging.WARNING,
            2: logging.INFO,
            3: logging.DEBUG,
        }.get(min(args.verbose, 3), logging.DEBUG)
    else:
        # Then check environment variable
        env_level = os.environ.get("ADO_LAB_BOOTSTRAP_LOG_LEVEL", "CRITICAL").upper()
        log_level = getattr(logging, env_level, logging.CRITICAL)

    logging.basicConfig(level=log_level, format="%(levelname)s: %(message)s")

    # Suppress third-party loggers
    logging.getLogger("urllib3").setLevel(logging.ERROR)


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = parse_args(argv)
    configure_logging(args)

    console = Console(stderr=True)
    try:
        run(args)
    except APIError as e:
        console.print(f"[red]Request to {e.url} failed with status {e.status_code}: {e.message}[/]")
        sys.exit(1)
    except ADOLabBootstrapError as e:
        console.print(f"[red]{e}[/]")
        sys.exit(1)

    if args.output_format == "json" or args.output_file:
        console.print(f"Project '{args.project}' bootstrapped successfully")
