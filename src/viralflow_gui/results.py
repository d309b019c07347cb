# results.py
# output browser helpers: directory listing, file kinds, table preview
#

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from viralflow_gui.config import IMAGE_EXTS, HTML_EXTS, TABLE_EXTS, TABLE_PREVIEW_ROWS
from viralflow_gui.resolve import resolve_out_dir
from viralflow_gui.store import AppConfig


@dataclass(frozen=True)
class FileEntry:
    name: str
    path: str
    is_directory: bool


def list_dir(path: str | Path | None) -> List[FileEntry]:
    """directories first, then files; both alphabetical (case-insensitive)"""
    if not path:
        return []
    path = Path(path)
    if not path.is_dir():
        raise FileNotFoundError(str(path))

    entries = [
        FileEntry(name=child.name, path=str(child), is_directory=child.is_dir())
        for child in path.iterdir()
    ]
    entries.sort(key=lambda e: (not e.is_directory, e.name.casefold(), e.name))
    return entries


def parent_dir(path: str | Path | None) -> Optional[Path]:
    if not path:
        return None
    p = Path(path)
    parent = p.parent
    if parent == p:
        return None
    return parent


def file_kind(path: str | Path) -> str:
    ext = Path(path).suffix.lower().lstrip(".")
    if ext in IMAGE_EXTS:
        return "image"
    if ext in HTML_EXTS:
        return "html"
    if ext == "pdf":
        return "pdf"
    if ext in TABLE_EXTS:
        return "table"
    return "other"


PREVIEW_MODES = {
    "image": "image",
    "html": "iframe",
    "pdf": "iframe",
    "table": "table",
}


def preview_mode(path: str | Path) -> Optional[str]:
    """how the viewer shows a file: image / iframe / table, None when it can't"""
    return PREVIEW_MODES.get(file_kind(path))


def load_table_preview(path: str | Path, max_rows: int = TABLE_PREVIEW_ROWS) -> pd.DataFrame:
    """first rows of a csv/tsv result table"""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(str(path))

    suf = path.suffix.lower()
    if suf not in [".csv", ".tsv"]:
        raise ValueError(f"Unsupported table file type: {suf}")

    sep = "\t" if suf == ".tsv" else ","
    return pd.read_csv(path, sep=sep, nrows=max_rows)


def table_rows(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """DataFrame -> JSON-friendly rows for ui.table (NaN -> None)"""
    clean = df.astype(object).where(pd.notna(df), None)
    return clean.to_dict(orient="records")


def initial_results_dir(params: Dict[str, Any] | None, config: Optional[AppConfig]) -> Path:
    """resolved outDir when it exists, otherwise the user's home"""
    out = resolve_out_dir((params or {}).get("outDir"), config)
    if out is not None and out.is_dir():
        return out
    return Path.home()
