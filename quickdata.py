"""QuickData entry point.

    python3 quickdata.py                    serve the HTTP API
    python3 quickdata.py --dump --decrypt   print the store as plain JSON
"""
import sys

from quickdata_lib.cli import main

if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
