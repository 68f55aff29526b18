"""Module entrypoint for ``python -m shop_worker``."""

from shop_cli.main import run


def main() -> None:
    run(["worker", "start"])


if __name__ == "__main__":
    main()
