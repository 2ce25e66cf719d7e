try:
    from gamecost.cli.app import cli
except ModuleNotFoundError:
    # Fallback: ensure project root is on sys.path when run from a checkout
    import os
    import sys

    sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))
    from gamecost.cli.app import cli


def main():
    """Entry point for the gamecost CLI. Delegates to gamecost.cli.app:cli."""
    cli(obj={})


if __name__ == "__main__":
    main()
