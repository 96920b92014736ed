"""Main entry point for scenepartner CLI when run as a module."""

from scenepartner.cli.main import main

if __name__ == "__main__":  # pragma: no cover
    main()
