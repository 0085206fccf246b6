import sys

from asciiflow.main import main

if __name__ == "__main__":
    sys.exit(main())
