"""Module entrypoint for ``python -m shop_api``."""

from shop_cli.main import run


def main() -> None:
    run(["api", "start"])


if __name__ == "__main__":
    main()
