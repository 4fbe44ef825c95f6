"""Entry point for `python -m devconnect` and `devconnect` CLI."""

from devconnect.cli.app import app


def main() -> None:
    app()


if __name__ == "__main__":
    main()
