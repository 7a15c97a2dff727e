"""This module serves as the entry point for the ado_lab_bootstrap application.

It imports the main function from the ado_lab_bootstrap.cli module and
executes it when the script is run as the main module.
"""

from ado_lab_bootstrap.cli import main

if __name__ == "__main__":
    main()
