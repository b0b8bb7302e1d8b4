"""Entry point for ``python -m mintpipe``."""

from mintpipe.cli import main

if __name__ == "__main__":
    main()
