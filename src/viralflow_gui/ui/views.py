# views.py
# UI appearance
#

from __future__ import annotations
from nicegui import app, ui
from pathlib import Path
from typing import Sequence

from viralflow_gui.config import (
    MVP_VERSION, VIRUS_MODES, VIRUS_CUSTOM,
    EXPORT_PARAMS_FILENAME, PANGOLIN_MODES, SUPPORTED_LOCALES,
    KIND_STDERR,
)
from viralflow_gui.context import RunStatus
from viralflow_gui.results import load_table_preview, preview_mode, table_rows
from viralflow_gui.ui.state import AppState
from viralflow_gui.ui import actions
from viralflow_gui.utils import LogEntry


def status_badge(status: RunStatus) -> str:
    return {
        RunStatus.IDLE: "⚪ idle",
        RunStatus.RUNNING: "🟠 running",
        RunStatus.SUCCESS: "🟢 finished",
        RunStatus.ERROR: "🔴 failed",
    }[status]


def build_log_box(entries: Sequence[LogEntry], placeholder: str = "No output yet.") -> None:
    """render a reduced log; stderr entries in red"""
    with ui.scroll_area().classes("w-full h-80 bg-gray-50 border rounded"):
        if not entries:
            ui.label(placeholder).classes("text-sm text-gray-500")
            return
        for e in entries:
            lbl = ui.label(e.text).classes("font-mono text-xs whitespace-pre-wrap")
            if e.kind == KIND_STDERR:
                lbl.classes("text-red-600")


def build_toolbar(state: AppState, refresh_all) -> None:
    with ui.row().classes("w-full items-center gap-2"):
        ui.label("ViralFlow GUI").classes("text-lg font-semibold")
        ui.label(MVP_VERSION).classes("text-xs text-gray-500")

        ui.separator().props("vertical")

        install = state.session.check_install()
        version = install.viralflow_version or "not installed"
        ui.label(f"ViralFlow: {version}").classes("text-sm")

        # setup entry point pushed to the far right
        setup_btn = ui.button("Environment setup", on_click=lambda: setup_dialog(state, refresh_all))
        setup_btn.classes("ml-auto")
        if state.environment_ready:
            setup_btn.props("flat")


# ---------- params ----------

def _text_field(state: AppState, key: str, label: str, placeholder: str = "") -> None:
    inp = ui.input(label, value=state.params.get(key) or "", placeholder=placeholder).classes("w-full")
    inp.on_value_change(lambda e, k=key: actions.update_field(state, k, e.value or ""))


def _int_field(state: AppState, key: str, label: str, minimum: int = 0) -> None:
    num = ui.number(label, value=state.params.get(key), min=minimum, step=1, format="%d").classes("w-48")
    num.on_value_change(lambda e, k=key: actions.update_int_field(state, k, e.value))


def _bool_field(state: AppState, key: str, label: str, refresh_all=None) -> None:
    def on_change(e, k=key):
        actions.update_field(state, k, bool(e.value))
        if refresh_all is not None:
            refresh_all()

    ui.switch(label, value=bool(state.params.get(key))).on_value_change(on_change)


def params_file_dialog(state: AppState, refresh_all, mode: str) -> None:
    """path prompt for exporting / importing a .params file"""
    default = str(Path.home() / EXPORT_PARAMS_FILENAME)
    title = "Save params file" if mode == "export" else "Load params file"

    with ui.dialog() as dialog, ui.card().classes("w-[560px]"):
        ui.label(title).classes("text-base font-semibold")
        path_in = ui.input("path", value=default).classes("w-full").props("autofocus")

        with ui.row().classes("justify-end gap-2"):
            ui.button("Cancel", on_click=dialog.close).props("flat")
            ui.button("OK", on_click=lambda: _do()).props("unelevated")

        def _do():
            path = (path_in.value or "").strip()
            if not path:
                ui.notify("A file path is required", type="negative")
                return
            try:
                if mode == "export":
                    out = actions.export_params(state, path)
                    ui.notify(f"Saved: {out}", type="positive")
                else:
                    actions.import_params(state, path)
                    ui.notify(f"Loaded: {path}", type="positive")
            except OSError as e:
                ui.notify(f"Could not {mode} params file: {e}", type="negative")
                return
            dialog.close()
            refresh_all()

    dialog.open()


def build_params_panel(state: AppState, refresh_all) -> None:
    p = state.params

    with ui.row().classes("items-center gap-2"):
        ui.button("Save .params file", on_click=lambda: params_file_dialog(state, refresh_all, "export")).props("outline")
        ui.button("Load .params file", on_click=lambda: params_file_dialog(state, refresh_all, "import")).props("outline")

    ui.label("Execution mode").classes("text-base font-semibold mt-4")
    current_virus = p.get("virus") if p.get("virus") in VIRUS_MODES else VIRUS_MODES[0]
    virus = ui.select(options=list(VIRUS_MODES), value=current_virus, label="virus").classes("w-56")

    def on_virus(e):
        actions.update_field(state, "virus", e.value if e.value == VIRUS_CUSTOM else VIRUS_MODES[0])
        refresh_all()

    virus.on_value_change(on_virus)

    ui.label("Inputs").classes("text-base font-semibold mt-4")
    _text_field(state, "inDir", "inDir", placeholder="launchDir/input/")
    _text_field(state, "primersBED", "primersBED")

    ui.label("Output").classes("text-base font-semibold mt-4")
    _text_field(state, "outDir", "outDir")
    with ui.row().classes("gap-6"):
        _bool_field(state, "runSnpEff", "runSnpEff")
        _bool_field(state, "writeMappedReads", "writeMappedReads")

    # custom genome fields are only meaningful for virus == custom (values kept in store either way)
    if p.get("virus") == VIRUS_CUSTOM:
        ui.label("Custom virus").classes("text-base font-semibold mt-4")
        _text_field(state, "refGenomeCode", "refGenomeCode")
        _text_field(state, "referenceGFF", "referenceGFF")
        _text_field(state, "referenceGenome", "referenceGenome")

    ui.label("Quality / filtering").classes("text-base font-semibold mt-4")
    with ui.row().classes("gap-4"):
        _int_field(state, "minLen", "minLen")
        _int_field(state, "depth", "depth")
        _int_field(state, "mapping_quality", "mapping_quality")
        _int_field(state, "base_quality", "base_quality")
        _int_field(state, "minDpIntrahost", "minDpIntrahost")
        _int_field(state, "trimLen", "trimLen")

    ui.label("Resources").classes("text-base font-semibold mt-4")
    with ui.row().classes("gap-4 items-center"):
        _int_field(state, "fastp_threads", "fastp_threads", minimum=1)
        _int_field(state, "bwa_threads", "bwa_threads", minimum=1)
        _text_field(state, "nextflowSimCalls", "nextflowSimCalls", placeholder="empty or a number")

    ui.label("Deduplication").classes("text-base font-semibold mt-4")
    with ui.row().classes("gap-4 items-center"):
        _bool_field(state, "dedup", "dedup", refresh_all)
        if p.get("dedup"):
            _int_field(state, "ndedup", "ndedup", minimum=1)


# ---------- run ----------

def build_run_panel(state: AppState, refresh_all) -> None:
    with ui.row().classes("w-full items-center gap-2"):
        run_btn = ui.button("Run ViralFlow", on_click=lambda: do_run(state, refresh_all))
        if state.run_status == RunStatus.RUNNING:
            run_btn.disable()
        ui.label(status_badge(state.run_status)).classes("ml-auto text-sm")

    build_log_box(state.run_log.entries)


def do_run(state: AppState, refresh_all) -> None:
    if not state.environment_ready:
        ui.notify("Environment is not ready (see Environment setup)", type="warning")
    outcome = actions.run_viralflow(state)
    if outcome.exit_code == 0:
        ui.notify("Run finished (simulated)", type="positive")
    else:
        ui.notify("Run failed", type="negative")
    refresh_all()


# ---------- results ----------

def build_results_panel(state: AppState, refresh_all) -> None:
    if state.results_dir is None:
        actions.open_results(state)

    with ui.row().classes("w-full items-center gap-2"):
        dir_in = ui.input("Output directory", value=str(state.results_dir)).classes("w-[520px]")
        ui.button("Open", on_click=lambda: _goto(dir_in.value)).props("outline")
        ui.button("↑ ..", on_click=lambda: (actions.go_up(state), refresh_all())).props("flat")

    def _goto(path):
        actions.enter_dir(state, (path or "").strip() or Path.home())
        refresh_all()

    try:
        entries = actions.results_entries(state)
    except OSError as e:
        ui.label(str(e)).classes("text-sm text-red-600")
        return

    with ui.row().classes("w-full no-wrap"):
        with ui.column().classes("col-4"):
            if not entries:
                ui.label("Empty directory").classes("text-sm text-gray-500")
            for entry in entries:
                icon = "📁" if entry.is_directory else "📄"
                ui.button(
                    f"{icon} {entry.name}",
                    on_click=lambda en=entry: _select(en),
                ).props("flat dense no-caps align=left").classes("w-full")

        with ui.column().classes("col-8"):
            build_viewer(state)

    def _select(entry):
        if entry.is_directory:
            actions.enter_dir(state, entry.path)
        else:
            state.selected_file = Path(entry.path)
        refresh_all()


def build_viewer(state: AppState) -> None:
    f = state.selected_file
    if f is None:
        ui.label("Select a file to preview").classes("text-sm text-gray-500")
        return

    ui.label(str(f)).classes("text-xs text-gray-500")
    mode = preview_mode(f)
    if mode == "image":
        ui.image(str(f)).classes("w-full")
    elif mode == "iframe":
        # html reports and pdfs are served by the NiceGUI app itself
        url = app.add_media_file(local_file=f)
        ui.element("iframe").props(f'src="{url}"').classes("w-full").style("height: 75vh; border: none")
    elif mode == "table":
        try:
            df = load_table_preview(f)
        except (OSError, ValueError) as e:
            ui.label(f"Could not read table: {e}").classes("text-sm text-red-600")
            return
        columns = [{"name": c, "label": c, "field": c, "sortable": True} for c in map(str, df.columns)]
        df.columns = [str(c) for c in df.columns]
        ui.table(columns=columns, rows=table_rows(df), pagination={"rowsPerPage": 25}).classes("w-full").props("dense")
    else:
        ui.label("No preview available for this file type").classes("text-sm text-gray-500")


# ---------- settings ----------

def snpeff_dialog(state: AppState, refresh_all) -> None:
    with ui.dialog() as dialog, ui.card().classes("w-[520px]"):
        ui.label("Add snpEff entry").classes("text-base font-semibold")
        org = ui.input("org_name").props("autofocus")
        code = ui.input("genome_code")

        with ui.row().classes("justify-end gap-2"):
            ui.button("Cancel", on_click=dialog.close).props("flat")
            ui.button("Add", on_click=lambda: _do()).props("unelevated")

        def _do():
            if not (org.value or "").strip() or not (code.value or "").strip():
                ui.notify("org_name and genome_code are required", type="negative")
                return
            actions.add_snpeff_entry(state, org.value, code.value)
            dialog.close()
            refresh_all()

    dialog.open()


def build_settings_panel(state: AppState, refresh_all) -> None:
    ui.label("ViralFlow repository").classes("text-base font-semibold")
    with ui.row().classes("w-full items-center gap-2"):
        repo = ui.input("repoPath", value=state.config.repo_path or "").classes("w-[520px]")
        ui.button("Save", on_click=lambda: (actions.set_repo_path(state, (repo.value or "").strip()), refresh_all())).props("outline")
        ui.button("Clone default", on_click=lambda: (actions.clone_default_repo(state), refresh_all())).props("outline")
        ui.button("git pull", on_click=lambda: (actions.git_pull(state), refresh_all())).props("outline")

    ui.label("Language").classes("text-base font-semibold mt-4")
    current_locale = state.config.locale if state.config.locale in SUPPORTED_LOCALES else SUPPORTED_LOCALES[0]
    loc = ui.select(options=list(SUPPORTED_LOCALES), value=current_locale, label="locale").classes("w-56")
    loc.on_value_change(lambda e: actions.set_locale(state, e.value))

    ui.label("Maintenance").classes("text-base font-semibold mt-4")
    with ui.row().classes("items-center gap-2"):
        ui.button("Build containers", on_click=lambda: (actions.build_containers(state), refresh_all())).props("outline")
        for mode in PANGOLIN_MODES:
            ui.button(
                f"Update Pangolin ({mode})",
                on_click=lambda m=mode: (actions.update_pangolin(state, m), refresh_all()),
            ).props("outline")
        ui.button("Add snpEff entry", on_click=lambda: snpeff_dialog(state, refresh_all)).props("outline")

    if state.status_message:
        ui.label(state.status_message).classes("text-sm text-gray-700 mt-2")

    build_log_box(state.setup_log.entries)


def setup_dialog(state: AppState, refresh_all) -> None:
    """install steps in order; each step only enabled once the previous one is done"""
    status = state.session.check_install()

    with ui.dialog() as dialog, ui.card().classes("w-[720px]"):
        ui.label("Environment setup (simulated)").classes("text-base font-semibold")

        def step(label, done, enabled, fn):
            with ui.row().classes("w-full items-center justify-between"):
                ui.label(f"{'🟢' if done else '⚪'} {label}")
                btn = ui.button("Run", on_click=lambda: (fn(state), dialog.close(), refresh_all(), setup_dialog(state, refresh_all)))
                if done or not enabled:
                    btn.disable()

        step("micromamba", status.micromamba_installed, True, actions.install_micromamba)
        step("ViralFlow", status.viralflow_installed, status.micromamba_installed, actions.install_viralflow)
        step("containers", status.containers_built, status.viralflow_installed, actions.build_containers)

        build_log_box(state.setup_log.entries)

        with ui.row().classes("justify-end gap-2"):
            close_btn = ui.button("Close", on_click=dialog.close)
            if not status.ready:
                close_btn.props("flat")

    dialog.open()


def build_main_view(state: AppState) -> None:
    """
    Root coordinator for application's layout.
    Toolbar + tabs (Params / Run / Results / Settings). Rebuild on refresh.
    """
    container = ui.column().classes("w-full")
    current = {"tab": "Params"}

    def refresh_all():
        container.clear()
        with container:
            build_toolbar(state, refresh_all)

            ui.separator()

            with ui.tabs(value=current["tab"]).classes("w-full") as tabs:
                for name in ("Params", "Run", "Results", "Settings"):
                    ui.tab(name)
            tabs.on_value_change(lambda e: current.update(tab=e.value))

            with ui.tab_panels(tabs, value=current["tab"]).classes("w-full"):
                with ui.tab_panel("Params"):
                    build_params_panel(state, refresh_all)
                with ui.tab_panel("Run"):
                    build_run_panel(state, refresh_all)
                with ui.tab_panel("Results"):
                    build_results_panel(state, refresh_all)
                with ui.tab_panel("Settings"):
                    build_settings_panel(state, refresh_all)

    refresh_all()

    # first start: environment is never ready in a new session
    if not state.environment_ready:
        setup_dialog(state, refresh_all)
