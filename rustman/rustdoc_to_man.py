"""Convert rustdoc JSON output into compressed man pages.

Each JSON file is produced beforehand with
`cargo +nightly rustdoc -- -Z unstable-options --output-format json`.
"""

import argparse
import logging
import shutil
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from rustman.errors import IndexFormatError
from rustman.load_config import load_config
from rustman.load_index import load_index
from rustman.render_options import RenderOptions
from rustman.run_conversion import run_conversion

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Command line interface of the converter."""
    ap = argparse.ArgumentParser(
        description="Render rustdoc JSON documentation as man pages.",
    )
    ap.add_argument(
        "json_files",
        nargs="+",
        type=Path,
        help="rustdoc JSON files to convert",
    )
    ap.add_argument(
        "-w",
        "--max-width",
        type=int,
        help="Maximum width of module index summary lines (default: 80)",
    )
    ap.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output directory (default: output)",
    )
    ap.add_argument(
        "-c",
        "--clean",
        action="store_true",
        help="Remove the output directory before generating",
    )
    ap.add_argument(
        "--dry-run",
        action="store_true",
        help="Render every page without writing files",
    )
    ap.add_argument(
        "--config",
        help="Path to configuration file",
    )
    ap.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every page written",
    )
    return ap


def _apply_overrides(config: dict[str, Any], args: argparse.Namespace) -> None:
    """Command line flags take precedence over the configuration file."""
    if args.max_width is not None:
        config["render"]["max_width"] = args.max_width
    if args.output is not None:
        config["output"]["directory"] = str(args.output)
    if args.clean:
        config["output"]["clean"] = True


def convert(args: argparse.Namespace) -> int:
    """Convert every JSON file named on the command line."""
    config = load_config(args.config)
    _apply_overrides(config, args)
    options = RenderOptions.from_config(config)
    out_dir = Path(config["output"]["directory"])

    if config["output"]["clean"] and out_dir.exists() and not args.dry_run:
        shutil.rmtree(out_dir)

    failed = 0
    for json_file in args.json_files:
        if not json_file.is_file():
            msg = f"No such file: {json_file}"
            raise SystemExit(msg)
        try:
            index = load_index(json_file)
        except IndexFormatError as e:
            raise SystemExit(str(e)) from e

        report = run_conversion(
            index,
            out_dir,
            options,
            compress=config["output"]["compress"],
            dry_run=args.dry_run,
        )
        failed += len(report.failed)
        if args.dry_run:
            print(f"Rendered {report.rendered} pages from {json_file} (dry run)")
        else:
            print(f"Generated {len(report.written)} man pages into: {out_dir}")
        if report.failed:
            print(f"Failed to render {len(report.failed)} items, see the log above")

    return 1 if failed else 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the conversion process."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return convert(args)


if __name__ == "__main__":
    raise SystemExit(main())
