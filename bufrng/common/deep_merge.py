from __future__ import annotations
import json
from pathlib import Path
from typing import Any


def _strip_jsonc_comments(src: str) -> str:
    """Remove // and /* */ comments from JSONC text, leaving string literals intact."""
    out: list[str] = []
    i = 0
    n = len(src)
    in_string = False
    escape = False

    while i < n:
        ch = src[i]

        if in_string:
            out.append(ch)
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            i += 1
            continue

        if ch == '"':
            in_string = True
            out.append(ch)
            i += 1
        elif src.startswith("//", i):
            while i < n and src[i] not in ("\n", "\r"):
                i += 1
        elif src.startswith("/*", i):
            end = src.find("*/", i + 2)
            i = n if end < 0 else end + 2
        else:
            out.append(ch)
            i += 1

    return "".join(out)


def load_json_file(path: str | Path) -> Any:
    """Load a JSON or JSONC document from disk.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the content is neither valid JSON nor valid JSONC.
    """
    p = Path(path).expanduser()
    if not p.exists():
        raise FileNotFoundError(f"JSON file not found: {path}")

    content = p.read_text(encoding="utf-8")
    try:
        return json.loads(content)
    except json.JSONDecodeError:
        try:
            return json.loads(_strip_jsonc_comments(content))
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in {p}: {exc}") from exc


def load_json_optional(path: str | Path, default: Any = None) -> Any:
    """Load JSON/JSONC from disk, returning `default` when the file is missing or empty."""
    p = Path(path)
    if not p.exists() or not p.read_text(encoding="utf-8").strip():
        return default
    return load_json_file(p)


def _deep_merge_two(left: Any, right: Any) -> Any:
    # dicts merge key by key, anything else is replaced by the right-hand value
    if isinstance(left, dict) and isinstance(right, dict):
        result = dict(left)
        for key, right_val in right.items():
            if key in result:
                result[key] = _deep_merge_two(result[key], right_val)
            else:
                result[key] = right_val
        return result
    return right


def deep_merge_json(base: Any, *others: Any) -> Any:
    """Deep-merge JSON-like sources left to right.

    Each source may be a dict, a path to a JSON/JSONC file, or None (skipped).
    Later sources win on conflicts; nested dicts are merged recursively.
    The inputs are not mutated.
    """
    def _resolve(src: Any) -> Any:
        if isinstance(src, (str, Path)):
            return load_json_file(src)
        return src

    acc = _resolve(base)
    for src in others:
        parsed = _resolve(src)
        if parsed is None:
            continue
        acc = _deep_merge_two(acc, parsed)
    return acc


__all__ = ["deep_merge_json", "load_json_file", "load_json_optional"]
