"""Allow running as: python -m part450_portal"""

import sys

from part450_portal.main import cli

if __name__ == "__main__":
    cli(sys.argv)
