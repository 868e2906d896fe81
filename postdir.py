# Production server for the post directory, backed by MongoDB
import sys
from postdir_lib.cli import main

if __name__ == "__main__":
    sys.exit(main())
