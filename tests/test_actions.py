"""
Tests for the UI action handlers (no NiceGUI needed).
"""

import json

from viralflow_gui.context import RunStatus
from viralflow_gui.store import load_config
from viralflow_gui.ui import actions
from viralflow_gui.ui.state import load_app_state


class TestParamsActions:
    def test_update_field_autosaves_verbatim(self, store_dir):
        state = load_app_state(store_dir)
        actions.update_field(state, "virus", "custom")
        actions.update_field(state, "refGenomeCode", "NC_045512.2")
        actions.update_field(state, "virus", "sars-cov2")

        saved = json.loads(state.params_store.path.read_text(encoding="utf-8"))
        assert saved["virus"] == "sars-cov2"
        assert saved["refGenomeCode"] == "NC_045512.2"

        reloaded = load_app_state(store_dir)
        assert reloaded.params["refGenomeCode"] == "NC_045512.2"

    def test_export_normalizes(self, store_dir, tmp_path):
        state = load_app_state(store_dir)
        actions.update_field(state, "refGenomeCode", "left over")
        out = actions.export_params(state, tmp_path / "viralflow.params")
        assert "refGenomeCode" not in out.read_text(encoding="utf-8")

    def test_cleared_number_box_exports_zero(self, store_dir, tmp_path):
        state = load_app_state(store_dir)
        actions.update_int_field(state, "minLen", None)
        actions.update_int_field(state, "depth", 12.0)
        assert state.params["minLen"] == 0
        assert state.params["depth"] == 12

        lines = actions.export_params(state, tmp_path / "viralflow.params").read_text(encoding="utf-8").splitlines()
        assert "minLen 0" in lines
        assert "minLen null" not in lines
        assert "depth 12" in lines

    def test_import_merges_over_defaults_and_saves(self, store_dir, tmp_path):
        path = tmp_path / "in.params"
        path.write_text("# hand edited\nvirus custom\ndepth 20\nfoo bar\n", encoding="utf-8")
        state = load_app_state(store_dir)
        actions.update_field(state, "minLen", 10)

        actions.import_params(state, path)
        assert state.params["virus"] == "custom"
        assert state.params["depth"] == 20
        assert state.params["minLen"] == 75
        assert "foo" not in state.params
        assert load_app_state(store_dir).params["depth"] == 20


class TestRunAction:
    def test_run_resets_log_once_per_run(self, store_dir, tmp_path):
        state = load_app_state(store_dir)
        actions.set_repo_path(state, str(tmp_path / "vf"))

        actions.run_viralflow(state)
        first = len(state.run_log)
        actions.run_viralflow(state)

        assert first == 2
        assert len(state.run_log) == 2
        assert state.run_status == RunStatus.SUCCESS
        assert (tmp_path / "vf" / "viralflow-gui.params").exists()


class TestSetupActions:
    def test_setup_log_reset_per_action(self, store_dir):
        state = load_app_state(store_dir)
        actions.install_micromamba(state)
        actions.install_viralflow(state)
        assert not any("Micromamba (fake) installed" in e.text for e in state.setup_log.entries)
        assert any("ViralFlow (fake) installed" in e.text for e in state.setup_log.entries)

    def test_environment_ready(self, store_dir):
        state = load_app_state(store_dir)
        assert not state.environment_ready
        actions.install_micromamba(state)
        actions.install_viralflow(state)
        actions.build_containers(state)
        assert state.environment_ready

    def test_failed_action_sets_status_message(self, store_dir):
        state = load_app_state(store_dir)
        result = actions.build_containers(state)
        assert not result.ok
        assert state.status_message == result.message

    def test_git_pull_without_repo(self, store_dir):
        state = load_app_state(store_dir)
        result = actions.git_pull(state)
        assert not result.ok
        assert "not configured" in state.status_message


class TestSettingsActions:
    def test_set_locale(self, store_dir):
        state = load_app_state(store_dir)
        actions.set_locale(state, "pt-BR")
        assert load_config(store_dir).locale == "pt-BR"
        actions.set_locale(state, "fr_FR")
        assert load_config(store_dir).locale == "en"

    def test_set_repo_path(self, store_dir):
        state = load_app_state(store_dir)
        actions.set_repo_path(state, "/opt/ViralFlow")
        assert load_config(store_dir).repo_path == "/opt/ViralFlow"
        actions.set_repo_path(state, "")
        assert load_config(store_dir).repo_path is None


class TestResultsActions:
    def test_browse(self, store_dir, tmp_path):
        out = tmp_path / "vf" / "launchDir" / "output"
        (out / "sample1").mkdir(parents=True)
        state = load_app_state(store_dir)
        actions.set_repo_path(state, str(tmp_path / "vf"))

        actions.open_results(state)
        assert state.results_dir == out
        assert [e.name for e in actions.results_entries(state)] == ["sample1"]

        actions.enter_dir(state, out / "sample1")
        actions.go_up(state)
        assert state.results_dir == out
