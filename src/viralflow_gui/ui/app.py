# app.py
# control UI state/view
#

from nicegui import ui
from viralflow_gui.config import MVP_VERSION
from viralflow_gui.ui.state import load_app_state
from viralflow_gui.ui.views import build_main_view


def main() -> None:
    state = load_app_state()
    build_main_view(state)
    ui.run(title=f"ViralFlow GUI ({MVP_VERSION})", reload=False)


if __name__ in {"__main__", "__mp_main__"}:
    main()
