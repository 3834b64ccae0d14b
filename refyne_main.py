#!/usr/bin/env python3
import sys
import os

# Add the Refyne directory to the Python path to recognize the 'refyne' package
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from refyne.main import main

if __name__ == "__main__":
    sys.exit(main())
