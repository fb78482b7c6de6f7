"""Allow running tp as ``python -m tp``."""

from .cli.main import main

if __name__ == "__main__":
    main(prog_name="tp")
