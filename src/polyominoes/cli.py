from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .export import ExportArgs, run_export
from .polyomino import render
from .symmetry import symmetry_info


def _non_negative_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative: {text!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="polyominoes",
        description="Enumerate free polyominoes and write one <n>.json listing per size",
    )
    p.add_argument(
        "up_to",
        nargs="?",
        type=_non_negative_int,
        help="Largest polyomino size (in cells) to enumerate, inclusive",
    )
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument(
        "--info",
        action="store_true",
        help="Print environment and dependency info and exit",
    )
    p.add_argument(
        "--out", type=Path, default=Path("."), help="Output directory (default: current directory)"
    )
    p.add_argument(
        "--manifest",
        action="store_true",
        help="Also write manifest.json with counts, symmetry distribution and checksums",
    )
    p.add_argument(
        "--show",
        action="store_true",
        help="Print an ASCII picture of every polyomino of the largest size",
    )
    p.add_argument(
        "--tracking",
        choices=["none", "mlflow"],
        default="none",
        help="Experiment tracking backend",
    )
    p.add_argument(
        "--log-dir",
        type=Path,
        default=Path("runs"),
        help="Directory for tracking logs/artifacts (for mlflow local backend)",
    )
    return p


def _print_info() -> None:
    import importlib.util
    import platform
    import sys

    print(f"python={sys.version.split()[0]} platform={platform.platform()}")
    for pkg in ["numpy", "mlflow"]:
        spec = importlib.util.find_spec(pkg)
        if spec is None:
            print(f"{pkg}=<not installed>")
        else:
            mod = __import__(pkg)
            ver = getattr(mod, "__version__", "?")
            print(f"{pkg}={ver}")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if ns.verbose else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    # Early exits
    if ns.version:
        from importlib.metadata import PackageNotFoundError, version as _ver

        try:
            print(_ver("polyominoes"))
        except PackageNotFoundError:
            print("unknown")
        return 0
    if ns.info:
        _print_info()
        return 0

    if ns.up_to is None:
        parser.error("the following arguments are required: up_to")

    try:
        result = run_export(ExportArgs(
            up_to=ns.up_to,
            out=ns.out,
            manifest=ns.manifest,
            verbose=ns.verbose,
            tracking=ns.tracking,
            log_dir=ns.log_dir,
            cli_argv=list(argv) if argv is not None else None,
        ))
    except OSError as e:
        logging.error("Failed to write listings: %s", e)
        return 1
    logging.info("Wrote %d listing(s) to: %s", len(result.files), result.out)

    if ns.show and result.last is not None:
        for shape in result.last:
            info = symmetry_info(shape)
            print(f"{info['canonical_form']} {info['symmetry']} orbit_size={info['orbit_size']}")
            print(render(shape))
            print()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
