# resolve.py
# ViralFlow working directory + outDir resolver
#

from __future__ import annotations

from pathlib import Path
from typing import Optional

from viralflow_gui.session import default_repo_path
from viralflow_gui.store import AppConfig


def viralflow_cwd(config: Optional[AppConfig]) -> Path:
    """
    Directory ViralFlow runs from (relative outDir/inDir are relative to it):
      1) repo path from config
      2) ~/ViralFlow if it exists
      3) current working directory
    """
    if config is not None and config.repo_path:
        return Path(config.repo_path)
    default = default_repo_path()
    if default.exists():
        return default
    return Path.cwd()


def resolve_out_dir(out_dir: Optional[str], config: Optional[AppConfig]) -> Optional[Path]:
    if not out_dir:
        return None
    p = Path(out_dir)
    if p.is_absolute():
        return p
    return viralflow_cwd(config) / p
