import importlib.util
import json
import os
from pathlib import Path

from polyominoes.export import ExportArgs, run_export

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))

spec = importlib.util.spec_from_file_location(
    "verify_export",
    os.path.join(ROOT, "scripts", "verify_export.py"),
)
verify_export = importlib.util.module_from_spec(spec)
assert spec and spec.loader
spec.loader.exec_module(verify_export)  # type: ignore


def test_verify_accepts_fresh_export(tmp_path: Path):
    run_export(ExportArgs(up_to=6, out=tmp_path, manifest=True))
    assert verify_export.main([str(tmp_path)]) == 0


def test_verify_rejects_wrong_class(tmp_path: Path):
    run_export(ExportArgs(up_to=3, out=tmp_path))
    (tmp_path / "3.json").write_text('{\n\t"0,0,0,1,0,2": "All",\n\t"0,0,0,1,1,0": "Mirror45"\n}\n')
    errors = verify_export.verify_listing(tmp_path / "3.json", 3)
    assert any("classified Rotation2FoldMirror90" in e for e in errors)
    assert verify_export.main([str(tmp_path)]) == 1


def test_verify_rejects_non_canonical_and_missing(tmp_path: Path):
    path = tmp_path / "3.json"
    path.write_text(json.dumps({"0,0,1,0,2,0": "Rotation2FoldMirror90"}))
    errors = verify_export.verify_listing(path, 3)
    assert any("not a free canonical form" in e for e in errors)
    assert any("expected 2" in e for e in errors)


def test_verify_detects_checksum_mismatch(tmp_path: Path):
    run_export(ExportArgs(up_to=4, out=tmp_path, manifest=True))
    with (tmp_path / "4.json").open("a") as f:
        f.write("\n")
    errors = verify_export.verify_manifest(tmp_path)
    assert any("checksum mismatch for 4" in e for e in errors)


def test_verify_empty_directory(tmp_path: Path):
    assert verify_export.main([str(tmp_path)]) == 2


def test_verify_reports_corrupt_listing_with_manifest(tmp_path: Path, capsys):
    run_export(ExportArgs(up_to=3, out=tmp_path, manifest=True))
    (tmp_path / "3.json").write_text("{ truncated")
    errors = verify_export.verify_manifest(tmp_path)
    assert any("3: failed to parse listing" in e for e in errors)
    assert verify_export.main([str(tmp_path)]) == 1
    assert "ERROR: 3.json: failed to parse" in capsys.readouterr().err


def test_verify_rejects_repeated_entries(tmp_path: Path):
    path = tmp_path / "3.json"
    path.write_text(
        '{\n'
        '\t"0,0,0,1,0,2": "Rotation2FoldMirror90",\n'
        '\t"0,0,0,1,0,2": "Rotation2FoldMirror90"\n'
        '}\n'
    )
    errors = verify_export.verify_listing(path, 3)
    assert any("'0,0,0,1,0,2' listed 2 times" in e for e in errors)
