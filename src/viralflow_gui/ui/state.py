# state.py
# control GUI state
#

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from viralflow_gui.context import RunStatus
from viralflow_gui.logstream import LogStreamReducer
from viralflow_gui.session import EnvironmentSession
from viralflow_gui.store import AppConfig, ParamsStore, load_config, default_store_dir


@dataclass
class AppState:
    store_dir: Path
    params_store: ParamsStore
    config: AppConfig
    session: EnvironmentSession
    params: Dict[str, Any] = field(default_factory=dict)

    # run page (kept across tab switches)
    run_log: LogStreamReducer = field(default_factory=LogStreamReducer)
    run_status: RunStatus = RunStatus.IDLE

    # setup dialog / settings page log
    setup_log: LogStreamReducer = field(default_factory=LogStreamReducer)
    status_message: str = ""

    # results page
    results_dir: Optional[Path] = None
    selected_file: Optional[Path] = None

    @property
    def environment_ready(self) -> bool:
        return self.session.check_install().ready


def load_app_state(store_dir: Optional[Path] = None) -> AppState:
    store = Path(store_dir) if store_dir else default_store_dir()
    params_store = ParamsStore(store)
    config = load_config(store)

    state = AppState(
        store_dir=store,
        params_store=params_store,
        config=config,
        session=EnvironmentSession(config=config, store_dir=store),
        params=params_store.load(),
    )
    # setup output lands in the setup log as it is produced
    state.session.sink = state.setup_log.apply
    return state
