"""
Entry point for running outdir as a module: python -m outdir
"""

import sys
from .cli import main

if __name__ == "__main__":
    sys.exit(main())
