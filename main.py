"""Entry point for the Bendscape command line tool."""

import sys

from bendscape.cli import main


if __name__ == "__main__":
    sys.exit(main())
