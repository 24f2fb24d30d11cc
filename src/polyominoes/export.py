"""
Listing export for enumerated polyominoes.

Each size n is written to ``<n>.json`` as a mapping from the free canonical
form (``"x0,y0,x1,y1,..."``) to its symmetry class name. Keys and values are
written verbatim: they only ever contain digits, commas, minus signs and
letters, so no JSON escaping is needed.
"""
from __future__ import annotations

import hashlib
import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from .growth import Generation, class_distribution, enumerate_generations, fixed_count
from .paths import get_git_commit, get_git_is_dirty
from .polyomino import format_cells
from .tracking import log_artifact, log_metrics, log_params, maybe_mlflow_run


@dataclass
class ExportArgs:
    up_to: int
    out: Path = Path(".")
    manifest: bool = False
    verbose: bool = False
    tracking: str = "none"  # one of: "none", "mlflow"
    log_dir: Path = Path("runs")
    cli_argv: Optional[List[str]] = None


@dataclass
class ExportResult:
    out: Path
    files: Dict[int, Path]
    counts: Dict[int, int]
    last: Optional[Generation] = None


MANIFEST_VERSION = "1.0.0"


def listing_path(out_dir: Path, n: int) -> Path:
    return out_dir / f"{n}.json"


def write_generation(n: int, generation: Generation, out_dir: Path) -> Path:
    """Write one listing, truncating any existing file of the same name.

    Entries are written as they are formatted; a failure part-way leaves a
    partial file behind.
    """
    path = listing_path(out_dir, n)
    with path.open("w", newline="") as f:
        f.write("{")
        for i, (shape, group) in enumerate(generation.items()):
            sep = "\n" if i == 0 else ",\n"
            f.write(f'{sep}\t"{format_cells(shape)}": "{group.value}"')
        f.write("\n}\n")
    return path


def sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()


def run_export(args: ExportArgs) -> ExportResult:
    if args.up_to < 0:
        raise ValueError(f"up_to must be non-negative, got {args.up_to}")
    if args.tracking not in {"none", "mlflow"}:
        raise ValueError(f"Unknown tracking backend: {args.tracking}")
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="[%(levelname)s] %(message)s")
    args.out.mkdir(parents=True, exist_ok=True)

    result = ExportResult(out=args.out, files={}, counts={})
    fixed_counts: Dict[int, int] = {}
    distributions: Dict[int, Dict[str, int]] = {}

    with maybe_mlflow_run(args.tracking == "mlflow", run_name="enumerate", log_dir=args.log_dir):
        log_params({"up_to": args.up_to, "manifest": args.manifest})
        logging.info("Enumerating free polyominoes up to size %d…", args.up_to)
        for n, generation in enumerate_generations(args.up_to):
            path = write_generation(n, generation, args.out)
            result.files[n] = path
            result.counts[n] = len(generation)
            fixed_counts[n] = fixed_count(generation)
            distributions[n] = class_distribution(generation)
            result.last = generation
            logging.info("Wrote %s (%d entries)", path, len(generation))
            logging.debug("Size %d symmetry classes: %s", n, distributions[n])
            log_metrics({"free_count": len(generation), "fixed_count": fixed_counts[n]}, step=n)

        if args.manifest:
            manifest_path = _write_manifest(args, result, fixed_counts, distributions)
            log_artifact(manifest_path)

    return result


def _write_manifest(
    args: ExportArgs,
    result: ExportResult,
    fixed_counts: Dict[int, int],
    distributions: Dict[int, Dict[str, int]],
) -> Path:
    manifest: Dict[str, Any] = {
        "manifest_version": MANIFEST_VERSION,
        "created_at": datetime.now(timezone.utc).isoformat(),
        "args": {"up_to": args.up_to},
        "git_commit": get_git_commit(),
        "git_is_dirty": get_git_is_dirty(),
        "cli_argv": args.cli_argv,
        # JSON object keys are strings; sizes are stored as "2", "3", ...
        "free_counts": {str(n): c for n, c in result.counts.items()},
        "fixed_counts": {str(n): c for n, c in fixed_counts.items()},
        "symmetry_distribution": {str(n): d for n, d in distributions.items()},
        "files": {str(n): p.name for n, p in result.files.items()},
        "checksums": {str(n): sha256_file(p) for n, p in result.files.items()},
    }
    path = args.out / "manifest.json"
    path.write_text(json.dumps(manifest, indent=2))
    logging.info("Wrote manifest.json with counts and checksums")
    return path
