"""Package entry point for ``python -m docs_directives``."""

from docs_directives.cli import main

if __name__ == "__main__":
    main()
