# modpacker/__main__.py
import sys

from modpacker.cli import main

if __name__ == "__main__":
    sys.exit(main())
