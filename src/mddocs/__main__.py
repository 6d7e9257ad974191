"""Entry point for python -m mddocs."""

from mddocs.cli import main

if __name__ == "__main__":
    main()
