"""Module entrypoint for ``python -m shop_cli``."""

from .main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
