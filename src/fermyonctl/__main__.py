"""Entry point for running fermyonctl as a module.

This allows running the CLI with:
    python -m fermyonctl
"""

from fermyonctl.cli.main import main

if __name__ == "__main__":
    main()
