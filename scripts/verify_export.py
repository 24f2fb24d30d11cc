#!/usr/bin/env python3
"""
Verify a directory of polyomino listings (<n>.json).

Checks performed:
- every <n>.json parses as a JSON object with no repeated keys
- every key parses as a cell list of exactly n cells
- every key is its own free canonical form and its value is its symmetry class
- keys appear in ascending order of their cell sequence
- entry counts match the published free polyomino counts where known
- if manifest.json exists: counts and SHA256 checksums match the files

Exit codes:
 0 on success, non-zero on any validation failure.
"""
from __future__ import annotations

import argparse
import json
from collections import Counter
from pathlib import Path
import sys
from typing import Any, Dict, List

from polyominoes.export import sha256_file
from polyominoes.growth import KNOWN_FREE_COUNTS
from polyominoes.polyomino import parse_cells
from polyominoes.symmetry import canonize_free


def listing_sizes(out: Path) -> List[int]:
    return sorted(int(p.stem) for p in out.glob("*.json") if p.stem.isdigit())


def verify_listing(path: Path, n: int) -> List[str]:
    errors: List[str] = []
    text = path.read_text()
    try:
        data = json.loads(text)
    except ValueError as e:
        return [f"{path.name}: failed to parse: {e}"]
    if not isinstance(data, dict):
        return [f"{path.name}: top level is not an object"]
    # json.loads keeps only the last of repeated keys; re-read as raw pairs
    pairs = json.loads(text, object_pairs_hook=list)
    for key, times in Counter(k for k, _ in pairs).items():
        if times > 1:
            errors.append(f"{path.name}: {key!r} listed {times} times")
    shapes = []
    for key, value in pairs:
        try:
            shape = parse_cells(key)
        except ValueError as e:
            errors.append(f"{path.name}: {e}")
            continue
        if len(shape) != n:
            errors.append(f"{path.name}: {key!r} has {len(shape)} cells, expected {n}")
            continue
        form, group = canonize_free(shape)
        if form != shape:
            errors.append(f"{path.name}: {key!r} is not a free canonical form")
        if group.value != value:
            errors.append(f"{path.name}: {key!r} classified {group.value}, listed {value}")
        shapes.append(shape)
    if shapes != sorted(shapes):
        errors.append(f"{path.name}: entries are not in ascending order")
    want = KNOWN_FREE_COUNTS.get(n)
    if want is not None and len(pairs) != want:
        errors.append(f"{path.name}: {len(pairs)} entries, expected {want}")
    return errors


def verify_manifest(out: Path) -> List[str]:
    manifest_path = out / "manifest.json"
    try:
        manifest = json.loads(manifest_path.read_text())
    except ValueError as e:
        return [f"failed to parse manifest: {e}"]
    errors: List[str] = []
    files: Dict[str, Any] = manifest.get("files", {}) or {}
    checksums: Dict[str, Any] = manifest.get("checksums", {}) or {}
    counts: Dict[str, Any] = manifest.get("free_counts", {}) or {}
    for label, name in files.items():
        fp = out / name
        if not fp.exists():
            errors.append(f"missing file listed in manifest: {label} -> {fp}")
            continue
        want = checksums.get(label)
        have = sha256_file(fp)
        if want and want != have:
            errors.append(f"checksum mismatch for {label}: manifest={want} computed={have}")
        try:
            n_entries = len(json.loads(fp.read_text()))
        except ValueError as e:
            errors.append(f"{label}: failed to parse listing: {e}")
            continue
        if counts.get(label) != n_entries:
            errors.append(f"count mismatch for {label}: manifest={counts.get(label)} actual={n_entries}")
    return errors


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Verify polyomino listings")
    ap.add_argument("out", type=Path, help="Directory containing <n>.json listings")
    ns = ap.parse_args(argv)
    out = ns.out
    sizes = listing_sizes(out)
    if not sizes:
        print(f"ERROR: no listings found in {out}", file=sys.stderr)
        return 2

    errors: List[str] = []
    for n in sizes:
        errors.extend(verify_listing(out / f"{n}.json", n))
    if (out / "manifest.json").exists():
        errors.extend(verify_manifest(out))

    for err in errors:
        print(f"ERROR: {err}", file=sys.stderr)
    if errors:
        return 1
    print(f"OK: {len(sizes)} listing(s) verified", file=sys.stdout)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
