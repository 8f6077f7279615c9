#!/usr/bin/env python3
"""
dump_dop - HDOP/VDOP track extraction from Optech .pgps files
Command Line Entry Point
"""

import sys
from dumpdop.cli import main


if __name__ == "__main__":
    sys.exit(main())
