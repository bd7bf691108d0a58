"""Run script.

Why it exists:
- Allows running the CLI with `python -m kontroll`.
- Keeps a simple entrypoint besides the `kontroll` console script.
"""

from __future__ import annotations

import sys

# Workaround for UnicodeEncodeError on Windows terminals (cp1252 vs utf-8):
# keyboard names may contain non-ASCII characters.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from kontroll.cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
