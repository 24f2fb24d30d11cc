import json
from pathlib import Path

import pytest

from polyominoes.export import ExportArgs, listing_path, run_export, sha256_file, write_generation
from polyominoes.growth import KNOWN_FIXED_COUNTS, KNOWN_FREE_COUNTS
from polyominoes.polyomino import parse_cells
from polyominoes.symmetry import SymmetryGroup


def test_write_generation_exact_format(tmp_path: Path):
    gen = {
        parse_cells("0,0,0,1,0,2"): SymmetryGroup.Rotation2FoldMirror90,
        parse_cells("0,0,0,1,1,0"): SymmetryGroup.Mirror45,
    }
    path = write_generation(3, gen, tmp_path)
    assert path == tmp_path / "3.json"
    assert path.read_text() == (
        '{\n'
        '\t"0,0,0,1,0,2": "Rotation2FoldMirror90",\n'
        '\t"0,0,0,1,1,0": "Mirror45"\n'
        '}\n'
    )


def test_write_generation_none_class_and_empty(tmp_path: Path):
    path = write_generation(4, {parse_cells("0,0,0,1,0,2,1,0"): SymmetryGroup.NONE}, tmp_path)
    assert json.loads(path.read_text()) == {"0,0,0,1,0,2,1,0": "None"}
    empty = write_generation(9, {}, tmp_path)
    assert empty.read_text() == "{\n}\n"


def test_write_generation_truncates_existing(tmp_path: Path):
    target = tmp_path / "2.json"
    target.write_text("x" * 1000)
    write_generation(2, {parse_cells("0,0,0,1"): SymmetryGroup.Rotation2FoldMirror90}, tmp_path)
    assert target.read_text() == '{\n\t"0,0,0,1": "Rotation2FoldMirror90"\n}\n'


def test_run_export_up_to_two(tmp_path: Path):
    res = run_export(ExportArgs(up_to=2, out=tmp_path))
    assert sorted(p.name for p in tmp_path.iterdir()) == ["2.json"]
    assert json.loads((tmp_path / "2.json").read_text()) == {"0,0,0,1": "Rotation2FoldMirror90"}
    assert res.counts == {2: 1}


def test_run_export_up_to_three(tmp_path: Path):
    run_export(ExportArgs(up_to=3, out=tmp_path))
    assert not (tmp_path / "1.json").exists()
    data = json.loads((tmp_path / "3.json").read_text())
    assert list(data.items()) == [
        ("0,0,0,1,0,2", "Rotation2FoldMirror90"),
        ("0,0,0,1,1,0", "Mirror45"),
    ]


@pytest.mark.parametrize("up_to", [0, 1])
def test_run_export_trivial_sizes_write_nothing(tmp_path: Path, up_to: int):
    res = run_export(ExportArgs(up_to=up_to, out=tmp_path))
    assert res.files == {}
    assert res.last is None
    assert list(tmp_path.iterdir()) == []


def test_run_export_counts(tmp_path: Path):
    res = run_export(ExportArgs(up_to=6, out=tmp_path))
    assert res.counts == {n: KNOWN_FREE_COUNTS[n] for n in range(2, 7)}
    for n in range(2, 7):
        assert len(json.loads(listing_path(tmp_path, n).read_text())) == KNOWN_FREE_COUNTS[n]


def test_run_export_reproducible(tmp_path: Path):
    run_export(ExportArgs(up_to=6, out=tmp_path / "a"))
    run_export(ExportArgs(up_to=6, out=tmp_path / "b"))
    for n in range(2, 7):
        assert (tmp_path / "a" / f"{n}.json").read_bytes() == (tmp_path / "b" / f"{n}.json").read_bytes()


def test_run_export_manifest(tmp_path: Path):
    out = tmp_path / "exp"
    run_export(ExportArgs(up_to=5, out=out, manifest=True))
    manifest = json.loads((out / "manifest.json").read_text())
    assert manifest["manifest_version"]
    assert manifest["args"] == {"up_to": 5}
    assert manifest["free_counts"] == {str(n): KNOWN_FREE_COUNTS[n] for n in range(2, 6)}
    assert manifest["fixed_counts"] == {str(n): KNOWN_FIXED_COUNTS[n] for n in range(2, 6)}
    assert manifest["files"]["4"] == "4.json"
    assert manifest["checksums"]["4"] == sha256_file(out / "4.json")
    assert manifest["symmetry_distribution"]["4"]["All"] == 1
    assert sum(manifest["symmetry_distribution"]["5"].values()) == 12


def test_run_export_rejects_bad_args(tmp_path: Path):
    with pytest.raises(ValueError):
        run_export(ExportArgs(up_to=-1, out=tmp_path))
    with pytest.raises(ValueError):
        run_export(ExportArgs(up_to=3, out=tmp_path, tracking="wandb"))


def test_run_export_io_error_keeps_smaller_sizes(tmp_path: Path):
    (tmp_path / "4.json").mkdir()
    with pytest.raises(OSError):
        run_export(ExportArgs(up_to=5, out=tmp_path))
    assert len(json.loads((tmp_path / "3.json").read_text())) == 2
    assert not (tmp_path / "5.json").exists()
