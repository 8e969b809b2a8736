"""Module entrypoint to support ``python -m protein_idmap`` invocation."""

from __future__ import annotations

from protein_idmap.cli import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
