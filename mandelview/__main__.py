import sys

from mandelview.cli import main

if __name__ == "__main__":
    sys.exit(main())
