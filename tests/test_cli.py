"""Tests for the command line interface."""

import gzip
import json
from pathlib import Path

import pytest
import yaml

from rustman.errors import IndexFormatError
from rustman.load_index import load_index
from rustman.rustdoc_to_man import build_parser, main


@pytest.fixture
def demo_file(demo_json: dict, tmp_path: Path) -> Path:
    """The demo crate written to disk as rustdoc JSON."""
    path = tmp_path / "demo.json"
    path.write_text(json.dumps(demo_json), encoding="utf-8")
    return path


def test_parser_defaults() -> None:
    """Verify that unset flags stay None so the config file wins."""
    args = build_parser().parse_args(["a.json"])
    assert args.json_files == [Path("a.json")]
    assert args.max_width is None
    assert args.output is None
    assert not args.clean
    assert not args.dry_run


def test_load_index_rejects_bad_json(tmp_path: Path) -> None:
    """Verify IndexFormatError for invalid JSON and non-index documents."""
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(IndexFormatError):
        load_index(bad)
    bad.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(IndexFormatError):
        load_index(bad)
    bad.write_text('{"paths": {}}', encoding="utf-8")
    with pytest.raises(IndexFormatError):
        load_index(bad)


def test_main_generates_pages(
    demo_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Verify a full run writes pages and reports the count."""
    out = tmp_path / "man"
    assert main([str(demo_file), "-o", str(out)]) == 0
    assert f"Generated 5 man pages into: {out}" in capsys.readouterr().out
    assert (out / "struct.demo::Point.3r.gz").is_file()


def test_main_clean_removes_stale_pages(demo_file: Path, tmp_path: Path) -> None:
    """Verify that --clean empties the output directory first."""
    out = tmp_path / "man"
    out.mkdir()
    (out / "stale.3r.gz").write_bytes(b"")
    assert main([str(demo_file), "-o", str(out), "--clean"]) == 0
    assert not (out / "stale.3r.gz").exists()


def test_main_dry_run(
    demo_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Verify that --dry-run renders without writing."""
    out = tmp_path / "man"
    assert main([str(demo_file), "-o", str(out), "--dry-run"]) == 0
    assert "Rendered 5 pages" in capsys.readouterr().out
    assert not out.exists()


def test_main_uses_config_file(demo_file: Path, tmp_path: Path) -> None:
    """Verify that the config file sets the output options."""
    out = tmp_path / "plain"
    config = tmp_path / "config.yml"
    config.write_text(
        yaml.dump({"output": {"directory": str(out), "compress": False}}),
        encoding="utf-8",
    )
    assert main([str(demo_file), "--config", str(config)]) == 0
    assert (out / "fn.demo::origin.3r").is_file()


def test_main_max_width(demo_file: Path, tmp_path: Path) -> None:
    """Verify that -w narrows module index summaries."""
    wide, narrow = tmp_path / "wide", tmp_path / "narrow"
    assert main([str(demo_file), "-o", str(wide)]) == 0
    assert main([str(demo_file), "-o", str(narrow), "-w", "20"]) == 0
    assert b"A point." in gzip.decompress((wide / "mod.demo.3r.gz").read_bytes())
    assert b"A point." not in gzip.decompress((narrow / "mod.demo.3r.gz").read_bytes())
    with pytest.raises(SystemExit):
        main([str(demo_file), "-w", "wide"])


def test_main_missing_file(tmp_path: Path) -> None:
    """Verify that a missing input file exits with a message."""
    with pytest.raises(SystemExit, match="No such file"):
        main([str(tmp_path / "absent.json"), "-o", str(tmp_path)])


def test_main_invalid_json(tmp_path: Path) -> None:
    """Verify that unreadable JSON exits with a message."""
    bad = tmp_path / "bad.json"
    bad.write_text("{", encoding="utf-8")
    with pytest.raises(SystemExit, match="not valid JSON"):
        main([str(bad), "-o", str(tmp_path / "man")])


def test_main_reports_failures(
    demo_json: dict, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Verify a nonzero exit status when an item fails to render."""
    demo_json["index"]["6"]["inner"]["module"]["items"].append("99")
    path = tmp_path / "broken.json"
    path.write_text(json.dumps(demo_json), encoding="utf-8")
    assert main([str(path), "-o", str(tmp_path / "man")]) == 1
    assert "Failed to render 2 items" in capsys.readouterr().out
