"""Allow running testablegen as a module.

This allows the CLI to be invoked as:
    python -m testablegen
"""

from .cli import main

if __name__ == "__main__":
    main()
