#!/usr/bin/env python3
"""
Bus Route Simulator - Main Application Entry Point
Runs the command line without installing the package
"""

import os
import sys

# Add src directory to path
sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "src"))

from bus_route.cli.main import main

if __name__ == "__main__":
    main()
