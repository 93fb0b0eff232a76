"""
Demo script: parse a local AMFI NAV feed via the public API.

Usage:
    uv run python scripts/run_parse.py                          # bundled sample feed
    uv run python scripts/run_parse.py NAVAll.txt               # your own copy
    uv run python scripts/run_parse.py NAVAll.txt --export out/nav.parquet

Prints one line per record, logs one warning per bad line, and finishes
with a ``Total: N Error: M`` summary.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

DEFAULT_INPUT = Path(__file__).resolve().parent.parent / "tests" / "fixtures" / "NAVOpen.txt"

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("run_parse")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main() -> int:
    import amfi_nav

    argv = sys.argv[1:]
    export_path = None
    if "--export" in argv:
        idx = argv.index("--export")
        if idx + 1 >= len(argv):
            log.error("--export needs an output path")
            return 2
        export_path = Path(argv[idx + 1])
        del argv[idx:idx + 2]
    input_path = Path(argv[0]) if argv else DEFAULT_INPUT

    if not input_path.exists():
        log.error("File not found: %s", input_path)
        return 1

    if export_path is not None:
        fmt = "csv" if export_path.suffix.lower() == ".csv" else "parquet"
        errors = amfi_nav.export_records(
            amfi_nav.nav_from_file(input_path), export_path, output_format=fmt
        )
        for error in errors:
            log.warning("%s", error)
        log.info("Wrote %s (%d line errors)", export_path, len(errors))
        return 0

    count = 0
    failed = 0
    for item in amfi_nav.nav_from_file(input_path):
        if isinstance(item, amfi_nav.LineError):
            failed += 1
            log.warning("%s", item)
            continue
        count += 1
        nav = "N.A." if item.nav is None else f"{item.nav:.4f}"
        print(f"{nav:>12}  {item.date}  {item.name}")

    print(f"Total: {count} Error: {failed}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
