"""Allow running as ``python -m linearis``."""

from linearis.cli import main

if __name__ == "__main__":
    main()
