#!/usr/bin/env python3
"""
calcstate main entry point for running as a module: python3 -m calcstate
"""

import sys
from calcstate.cli import main

if __name__ == '__main__':
    sys.exit(main())
