"""Entry point for running zplgfa as a module."""

import sys

from zplgfa.cli.convert import main

if __name__ == "__main__":
    sys.exit(main())
