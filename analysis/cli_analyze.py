from __future__ import annotations

import argparse
import mimetypes
import sys
from pathlib import Path
from typing import Any, Dict, List

import orjson
from tqdm import tqdm

from analysis.report import analyze_document
from common.config import yaml_config
from common.logger import get_logger, set_level
from extraction.errors import AnalysisError

log = get_logger(__name__)


def discover_files(paths: List[Path]) -> List[Path]:
    """
    Expand directories into the supported files they contain (recursively).
    Explicit file arguments are kept whatever their extension.
    """
    allowed = {f".{ext}" for ext in yaml_config.extraction.allowed_extensions}
    found: List[Path] = []
    for root in paths:
        if root.is_dir():
            found.extend(
                p for p in sorted(root.rglob("*"))
                if p.is_file() and p.suffix.lower() in allowed
            )
        else:
            found.append(root)
    return found


def analyze_path(path: Path, strict: bool = False) -> Dict[str, Any]:
    media_type = mimetypes.guess_type(path.name)[0] or ""
    try:
        data = path.read_bytes()
        return analyze_document(data, path.name, media_type, strict=strict).as_dict()
    except (AnalysisError, OSError) as e:
        log.error("Failed to analyze %s: %s", path, e)
        return {"ok": False, "filename": path.name, "error": str(e)}


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Extract text from documents and score their internal repetition."
    )
    parser.add_argument(
        "paths", nargs="+", type=Path, help="Files or folders (PDF/DOCX/ODT/TXT)"
    )
    parser.add_argument(
        "--output", type=Path, default=None, help="Write the JSON report here"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Refuse unsupported types and oversized files before extraction",
    )
    parser.add_argument("--log_level", type=str, default=None)
    args = parser.parse_args(argv)

    if args.log_level:
        set_level(args.log_level)

    files = discover_files(args.paths)
    if not files:
        log.warning("No documents found to analyze.")
        return 1

    reports = [
        analyze_path(f, strict=args.strict)
        for f in tqdm(files, desc="Analyzing", disable=len(files) < 2)
    ]
    payload = orjson.dumps(reports, option=orjson.OPT_INDENT_2)

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_bytes(payload)
        log.info("Wrote %d reports to %s", len(reports), args.output)
    else:
        sys.stdout.write(payload.decode("utf-8") + "\n")

    return 0 if all(r["ok"] for r in reports) else 1


if __name__ == "__main__":
    raise SystemExit(main())
