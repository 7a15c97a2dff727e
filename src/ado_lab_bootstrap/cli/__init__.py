"""Command line interface for lab project bootstrapping.

This subpackage provides the command-line interface components for the bootstrapper,
including argument parsing, printer implementations, and execution coordination.

Modules:
    commands: CLI argument parsing and execution
    printer: Output formatting and display

Components:
    Command-line Processing:
        parse_args: Command-line arguments parser
        create_config: Creates the run configuration from CLI args
        create_printer: Selects the printer for an output format
        confirm_continue: Prompt shown when the project already exists
        run: Function to execute the bootstrap with parsed arguments
        main: CLI entry point function

    Output Formatters:
        BootstrapPrinter: Abstract base printer class
        BootstrapPlainPrinter: Simple text output format
        BootstrapRichPrinter: Rich text console output with tables
        BootstrapJSONPrinter: Structured JSON output format

Example:
    Using from command-line:
    ```bash
    $ ado-lab-bootstrap --organization myorg --project LabProject --access-token mytoken
    ```

    Programmatic usage of CLI components:
    ```python
    from ado_lab_bootstrap.cli import parse_args, run

    args = parse_args(["--organization", "myorg", "--project", "Lab", "--access-token", "pat", "--yes"])
    result = run(args)
    ```
"""

from ado_lab_bootstrap.cli.commands import (
    confirm_continue,
    create_config,
    create_printer,
    main,
    parse_args,
    run,
)
from ado_lab_bootstrap.cli.printer import (
    BootstrapJSONPrinter,
    BootstrapPlainPrinter,
    BootstrapPrinter,
    BootstrapRichPrinter,
)

__all__ = [  # noqa: RUF022
    # Command-line processing
    "confirm_continue",
    "create_config",
    "create_printer",
    "parse_args",
    "run",
    "main",
    # Output formatters
    "BootstrapJSONPrinter",
    "BootstrapPlainPrinter",
    "BootstrapPrinter",
    "BootstrapRichPrinter",
]
