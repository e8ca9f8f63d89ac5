"""Main orchestration script for generating man pages from rustdoc JSON."""

import argparse
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path

from rustman.rustdoc_to_man import main as rustdoc_to_man


def run_command(cmd_list: Sequence[str | Path], cwd: Path | str | None = None) -> None:
    """Run a command and exit if it fails."""
    cmd_str = " ".join(str(x) for x in cmd_list)
    print(f"Running: {cmd_str}")
    try:
        subprocess.run(cmd_list, check=True, cwd=cwd)
    except subprocess.CalledProcessError as e:
        print(f"Error executing command: {cmd_str}")
        sys.exit(e.returncode)


def main() -> None:
    """Run development checks if requested, then convert the given JSON files."""
    parser = argparse.ArgumentParser(
        description="Generate man pages from pre-built rustdoc JSON files.",
        epilog="All other arguments are passed to the converter.",
    )
    parser.add_argument(
        "--dev",
        action="store_true",
        help="Run development checks (linting, tests) before generating pages",
    )
    args, rest = parser.parse_known_args()

    if args.dev:
        print("--- Running Development Checks ---")
        run_command([sys.executable, str(Path(__file__).parent / "dev.py"), "--ci"])
        print("\nDevelopment checks passed. Proceeding with page generation.\n")

    sys.exit(rustdoc_to_man(rest))


if __name__ == "__main__":
    main()
