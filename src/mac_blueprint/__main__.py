"""Run the CLI with `python -m mac_blueprint`."""

from __future__ import annotations

import sys

# Rich prints arrows and check marks; legacy Windows consoles default to cp1252.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from mac_blueprint.cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
