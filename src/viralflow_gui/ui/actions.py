# actions.py
# response to actions
#

from __future__ import annotations
from pathlib import Path
from typing import Any, Optional

from viralflow_gui.context import RunContext, RunOutcome, RunStatus
from viralflow_gui.params_io import read_params_file, write_params_file
from viralflow_gui.results import initial_results_dir, list_dir, parent_dir
from viralflow_gui.session import ActionResult, RepoNotConfiguredError
from viralflow_gui.store import default_locale, save_config
from viralflow_gui.ui.state import AppState
from viralflow_gui.config import SUPPORTED_LOCALES


# ---------- params ----------

def update_field(state: AppState, key: str, value: Any) -> None:
    """edit one field and auto-save (verbatim, no normalization)"""
    state.params = {**state.params, key: value}
    state.params_store.save(state.params)


def update_int_field(state: AppState, key: str, value: Any) -> None:
    # a cleared number box counts as 0, never null
    update_field(state, key, int(value) if value is not None else 0)


def export_params(state: AppState, path: str | Path) -> Path:
    return write_params_file(path, state.params)


def import_params(state: AppState, path: str | Path) -> None:
    """load a .params file (missing fields from defaults) and make it current"""
    state.params = read_params_file(path)
    state.params_store.save(state.params)


# ---------- run ----------

def run_viralflow(state: AppState) -> RunOutcome:
    # one reset per run, before the first chunk
    state.run_log.reset()
    state.run_status = RunStatus.RUNNING

    ctx = RunContext(params=state.params, config=state.config, sink=state.run_log.apply)
    outcome = ctx.run()

    state.run_status = outcome.status
    return outcome


# ---------- setup ----------

def _setup_action(state: AppState, fn, *args) -> ActionResult:
    state.setup_log.reset()
    result = fn(*args)
    state.status_message = "" if result.ok else result.message
    return result


def install_micromamba(state: AppState) -> ActionResult:
    return _setup_action(state, state.session.install_micromamba)


def install_viralflow(state: AppState) -> ActionResult:
    return _setup_action(state, state.session.install_viralflow)


def build_containers(state: AppState) -> ActionResult:
    return _setup_action(state, state.session.build_containers)


def update_pangolin(state: AppState, mode: str) -> ActionResult:
    return _setup_action(state, state.session.update_pangolin, mode)


def add_snpeff_entry(state: AppState, org_name: str, genome_code: str) -> ActionResult:
    return _setup_action(state, state.session.add_snpeff_entry, org_name, genome_code)


def clone_default_repo(state: AppState) -> ActionResult:
    result = state.session.clone_default_repo()
    state.status_message = f"Repository configured at {result.message}"
    return result


def git_pull(state: AppState) -> ActionResult:
    state.setup_log.reset()
    try:
        result = state.session.git_pull()
    except RepoNotConfiguredError as e:
        state.status_message = str(e)
        return ActionResult(ok=False, message=str(e))
    state.status_message = result.message
    return result


# ---------- settings ----------

def set_repo_path(state: AppState, repo_path: Optional[str]) -> None:
    state.config.repo_path = repo_path or None
    save_config(state.config, state.store_dir)


def set_locale(state: AppState, locale: Optional[str]) -> None:
    state.config.locale = locale if locale in SUPPORTED_LOCALES else default_locale(locale)
    save_config(state.config, state.store_dir)


# ---------- results ----------

def open_results(state: AppState) -> None:
    if state.results_dir is None:
        state.results_dir = initial_results_dir(state.params, state.config)
    state.selected_file = None


def enter_dir(state: AppState, path: str | Path) -> None:
    state.results_dir = Path(path)
    state.selected_file = None


def go_up(state: AppState) -> None:
    parent = parent_dir(state.results_dir)
    if parent is not None:
        enter_dir(state, parent)


def results_entries(state: AppState):
    return list_dir(state.results_dir)
