"""Entry point for running stock_advisor as a module: python -m stock_advisor"""

from .cli import main

if __name__ == "__main__":
    exit(main())
