import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from deepfwd.config import get_settings
from deepfwd.logger import set_level
from deepfwd.pipeline import ExtractOptions, extract


def collect_source_paths(inputs: List[str]) -> List[str]:
    collected: List[str] = []
    for raw in inputs:
        path = Path(raw).expanduser()
        if path.is_dir():
            for child in sorted(path.rglob("*")):
                if child.is_file():
                    collected.append(str(child))
        elif path.is_file():
            collected.append(str(path))
        else:
            print(f"[warn] input not found: {raw}")
    return collected


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Extract the deepest forwarded message from email files."
    )
    parser.add_argument(
        "--inputs",
        nargs="+",
        required=True,
        help="Input file paths or directories (.eml or plain text).",
    )
    parser.add_argument(
        "--skip-mime",
        action="store_true",
        help="Treat inputs as already decoded text; only run inline unwrapping.",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Maximum nested message/rfc822 layers (default: DEEPFWD_MIME_MAX_DEPTH).",
    )
    parser.add_argument(
        "--timeout-ms",
        type=int,
        default=None,
        help="MIME parsing budget in milliseconds (default: DEEPFWD_TIMEOUT_MS).",
    )
    parser.add_argument(
        "--output-json",
        default=None,
        help="Write all results to this JSON file instead of printing a summary.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser.parse_args(argv)


def result_record(path: str, result_dict: Dict[str, Any], max_body_chars: int) -> Dict[str, Any]:
    record = {"file": path, **result_dict}
    body = record.get("full_body") or ""
    if max_body_chars and len(body) > max_body_chars:
        record["full_body"] = body[:max_body_chars]
    return record


def print_summary(path: str, record: Dict[str, Any]) -> None:
    sender = record.get("from") or {}
    diagnostics = record.get("diagnostics") or {}
    confidence = record.get("confidence") or {}
    print(f"== {path}")
    print(f"   from:    {sender.get('name') or ''} <{sender.get('address') or ''}>")
    print(f"   subject: {record.get('subject') or ''}")
    print(f"   date:    {record.get('date_iso') or record.get('date_raw') or ''}")
    print(
        f"   method:  {diagnostics.get('method')} depth={diagnostics.get('depth')} "
        f"score={confidence.get('score')}"
    )
    for warning in diagnostics.get("warnings") or []:
        print(f"   [warn] {warning}")


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    if args.verbose:
        set_level(logging.DEBUG)

    file_paths = collect_source_paths(args.inputs)
    if not file_paths:
        print("[error] no valid input files found.")
        return 1

    options = ExtractOptions(
        max_depth=args.max_depth,
        timeout_ms=args.timeout_ms,
        skip_mime_layer=args.skip_mime,
    )
    max_body_chars = get_settings().MAX_BODY_CHARS

    records: List[Dict[str, Any]] = []
    for path in file_paths:
        raw = Path(path).read_bytes()
        result = extract(raw, options)
        records.append(result_record(path, result.to_dict(), max_body_chars))

    if args.output_json:
        json_path = Path(args.output_json).resolve()
        json_path.parent.mkdir(parents=True, exist_ok=True)
        with open(json_path, "w", encoding="utf-8") as f:
            json.dump(records, f, ensure_ascii=False, indent=2, default=str)
        print("JSON:", json_path)
    else:
        for record in records:
            print_summary(record["file"], record)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
