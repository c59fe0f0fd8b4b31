"""
Entry point for running tclshell as a module.

Usage:
    python -m tclshell
    python -m tclshell script.tcl
"""

import sys

from tclshell.cli import main

if __name__ == "__main__":
    sys.exit(main())
