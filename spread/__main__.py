import sys

from spread.host.app import main

if __name__ == "__main__":
    sys.exit(main())
