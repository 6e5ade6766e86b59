"""
Run with: python -m blackholeoptics
"""
import sys

from blackholeoptics.main import main

if __name__ == "__main__":
    sys.exit(main())
