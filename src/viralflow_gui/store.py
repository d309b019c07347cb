# store.py
# JSON persistence: edited params + app config
#

from __future__ import annotations

import json
import locale
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from rich.console import Console
from rich.markup import escape

from viralflow_gui.config import (
    STORE_DIR_ENV, STORE_DIR_NAME,
    CONFIG_FILE, PARAMS_FILE,
    FALLBACK_LOCALE,
)
from viralflow_gui.params_io import default_params, merge_over_defaults

console = Console(stderr=True)


def default_store_dir() -> Path:
    # per-user directory, overridable for tests / portable installs
    env = os.environ.get(STORE_DIR_ENV)
    base = Path(env) if env else Path.home() / STORE_DIR_NAME
    base.mkdir(parents=True, exist_ok=True)
    return base


def _read_json(path: Path) -> Optional[Any]:
    if not path.exists():
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        console.print(f"[yellow]Warning:[/yellow] could not read {escape(str(path))}: {escape(str(e))}")
        return None


def _write_json(path: Path, data: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


class ParamsStore:
    """
    Session continuity for the params editor. Saves exactly what the UI holds
    (custom-mode values survive a switch back to sars-cov2); normalization
    only happens when a .params file is produced.
    """

    def __init__(self, store_dir: Optional[Path] = None) -> None:
        self.store_dir = Path(store_dir) if store_dir else default_store_dir()
        self.path = self.store_dir / PARAMS_FILE

    def load(self) -> Dict[str, Any]:
        data = _read_json(self.path)
        if not isinstance(data, dict):
            return default_params()
        return merge_over_defaults(data)

    def save(self, params: Dict[str, Any]) -> Path:
        return _write_json(self.path, params or {})


def default_locale(raw: Optional[str] = None) -> str:
    if raw is None:
        raw = locale.getlocale()[0] or FALLBACK_LOCALE
    lower = raw.lower()
    if lower.startswith("pt"):
        return "pt-BR"
    return FALLBACK_LOCALE


@dataclass
class AppConfig:
    repo_path: Optional[str] = None
    locale: str = FALLBACK_LOCALE
    containers_built: bool = False

    # ---------- persistence ----------
    def to_dict(self) -> dict:
        return {
            "repoPath": self.repo_path,
            "locale": self.locale,
            "containersBuilt": self.containers_built,
        }

    @staticmethod
    def from_dict(d: dict) -> "AppConfig":
        built = d.get("containersBuilt")
        return AppConfig(
            repo_path=d.get("repoPath") or None,
            locale=d.get("locale") or default_locale(),
            containers_built=built if isinstance(built, bool) else False,
        )


def load_config(store_dir: Optional[Path] = None) -> AppConfig:
    store = Path(store_dir) if store_dir else default_store_dir()
    data = _read_json(store / CONFIG_FILE)
    if not isinstance(data, dict):
        return AppConfig(locale=default_locale())
    return AppConfig.from_dict(data)


def save_config(cfg: AppConfig, store_dir: Optional[Path] = None) -> Path:
    store = Path(store_dir) if store_dir else default_store_dir()
    return _write_json(store / CONFIG_FILE, cfg.to_dict())
