# params_io.py
# defaults + mode normalization + .params text format (write / forgiving read)
#

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Dict, List

from viralflow_gui.config import (
    DEFAULT_PARAMS,
    PARAMS_KEY_ORDER,
    PARAMS_HEADER,
    STRING_FIELDS, BOOL_FIELDS, INT_FIELDS,
    CUSTOM_ONLY_FIELDS, DEDUP_ONLY_FIELDS,
    VIRUS_CUSTOM, VIRUS_MODES,
    NULL_TOKEN,
)
from viralflow_gui.utils import format_value, parse_number

_LINE_SPLIT = re.compile(r"\r?\n")


def default_params() -> Dict[str, Any]:
    """fresh copy of the documented defaults"""
    return dict(DEFAULT_PARAMS)


def merge_over_defaults(params: Dict[str, Any] | None) -> Dict[str, Any]:
    out = default_params()
    out.update(params or {})
    return out


def normalize_params(params: Dict[str, Any] | None) -> Dict[str, Any]:
    """
    Prepare a parameter set for execution / export:
    - fill missing fields from defaults
    - drop custom-genome fields unless virus == custom
    - drop ndedup unless dedup is on
    Returns a new dict; the input is left as is.
    """
    p = merge_over_defaults(params)

    if p.get("virus") != VIRUS_CUSTOM:
        for key in CUSTOM_ONLY_FIELDS:
            p.pop(key, None)

    if not p.get("dedup"):
        for key in DEDUP_ONLY_FIELDS:
            p.pop(key, None)

    return p


def serialize_params(params: Dict[str, Any] | None) -> List[str]:
    """normalized params -> .params lines (header + one 'key value' line per present field)"""
    p = normalize_params(params)
    lines = list(PARAMS_HEADER)
    for key in PARAMS_KEY_ORDER:
        if key not in p:
            continue
        lines.append(f"{key} {format_value(p[key])}")
    return lines


def params_to_text(params: Dict[str, Any] | None) -> str:
    return "\n".join(serialize_params(params)) + "\n"


def parse_params_text(text: str) -> Dict[str, Any]:
    """
    Forgiving .params reader. Returns only the keys that parsed cleanly:
      - blank lines and '#' comments are skipped
      - 'key value...' split on the first whitespace run, value kept verbatim
      - bad enum / bool / number values and unknown keys are dropped silently
    Defaults are NOT filled in here; merge over default_params() if needed.
    """
    result: Dict[str, Any] = {}
    for raw in _LINE_SPLIT.split(text or ""):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue

        parts = line.split(None, 1)
        if len(parts) < 2:
            continue
        key, value = parts

        if key == "virus":
            if value in VIRUS_MODES:
                result[key] = value

        elif key in STRING_FIELDS:
            result[key] = "" if value == NULL_TOKEN else value

        elif key in BOOL_FIELDS:
            # strict: anything but true/false is treated like a bad number
            if value == "true":
                result[key] = True
            elif value == "false":
                result[key] = False

        elif key in INT_FIELDS:
            n = parse_number(value)
            if n is not None:
                result[key] = n

    return result


def write_params_file(path: str | Path, params: Dict[str, Any] | None) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(params_to_text(params), encoding="utf-8")
    return path


def read_params_file(path: str | Path) -> Dict[str, Any]:
    """read a .params file and fill whatever it does not mention from defaults"""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(str(path))
    loaded = parse_params_text(path.read_text(encoding="utf-8"))
    return merge_over_defaults(loaded)
