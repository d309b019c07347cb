# utils.py
# helpers
#

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Literal, Optional

import math
import re
import pandas as pd

from viralflow_gui.config import KIND_STDOUT, NULL_TOKEN


def _is_missing(x) -> bool:
    """missing value? (None / NaN / empty string)"""
    if x is None:
        return True
    if isinstance(x, str):
        return x == ""
    if isinstance(x, (list, tuple, dict, set)):
        return False
    # pandas NA / numpy.nan
    if pd.isna(x):
        return True
    # plain float nan
    if isinstance(x, float) and math.isnan(x):
        return True
    return False


def format_value(v: Any) -> str:
    """Render a parameter value the way a .params file expects it."""
    if _is_missing(v):
        return NULL_TOKEN
    if isinstance(v, bool):
        return "true" if v else "false"
    if isinstance(v, float) and v.is_integer():
        return str(int(v))
    return str(v)


_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def parse_number(s: str) -> Optional[int | float]:
    """int first, then float; integral floats collapse to int. None if not a finite number."""
    # plain ASCII literals only: no digit separators, no non-latin digits
    s = s.strip()
    if not _NUMBER_RE.fullmatch(s):
        return None
    try:
        return int(s)
    except ValueError:
        pass
    try:
        f = float(s)
    except ValueError:
        return None
    if math.isnan(f) or math.isinf(f):
        return None
    return int(f) if f.is_integer() else f


@dataclass(frozen=True)
class LogEntry:
    kind: Literal["stdout", "stderr"] = KIND_STDOUT
    text: str = ""

    def to_dict(self) -> dict:
        return {"kind": self.kind, "text": self.text}
