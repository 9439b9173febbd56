"""
Package entry point.

Allows running the application via:

    python -m coursescraper

This simply forwards execution to coursescraper.cli.main().
"""

from coursescraper.cli import main

if __name__ == "__main__":
    main()
