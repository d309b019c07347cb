"""
Tests for the simulated environment setup session.
"""

import pytest

from viralflow_gui.config import FAKE_MICROMAMBA_VERSION, FAKE_VIRALFLOW_VERSION
from viralflow_gui.session import EnvironmentSession, RepoNotConfiguredError
from viralflow_gui.store import AppConfig, load_config


@pytest.fixture
def session(store_dir):
    received = []
    s = EnvironmentSession(config=AppConfig(), store_dir=store_dir, sink=received.append)
    s.received = received
    return s


def _install_all(s):
    s.install_micromamba()
    s.install_viralflow()
    s.build_containers()


class TestInstallFlow:
    """Setup steps and their ordering."""

    def test_new_session_has_nothing_installed(self, session):
        status = session.check_install()
        assert not status.micromamba_installed
        assert not status.viralflow_installed
        assert not status.containers_built
        assert not status.ready

    def test_install_micromamba(self, session):
        result = session.install_micromamba()
        assert result.ok
        assert result.status.micromamba_version == FAKE_MICROMAMBA_VERSION
        assert any("micromamba" in e.text for e in session.received)

    def test_viralflow_requires_micromamba(self, session):
        result = session.install_viralflow()
        assert not result.ok
        assert not session.viralflow_installed
        assert session.received[-1].kind == "stderr"

    def test_full_install(self, session, store_dir):
        _install_all(session)
        status = session.check_install()
        assert status.ready
        assert status.viralflow_version == FAKE_VIRALFLOW_VERSION
        assert load_config(store_dir).containers_built is True

    def test_containers_require_tools(self, session):
        session.install_micromamba()
        result = session.build_containers()
        assert not result.ok
        assert not session.check_install().containers_built

    def test_reinstall_invalidates_containers(self, session, store_dir):
        _install_all(session)
        session.install_viralflow()
        assert not session.check_install().containers_built
        assert load_config(store_dir).containers_built is False

    def test_persisted_flag_alone_is_not_enough(self, store_dir):
        s = EnvironmentSession(config=AppConfig(containers_built=True), store_dir=store_dir)
        assert not s.check_install().containers_built

    def test_separate_sessions_do_not_share_state(self, store_dir):
        a = EnvironmentSession(config=AppConfig(), store_dir=store_dir)
        b = EnvironmentSession(config=AppConfig(), store_dir=store_dir)
        a.install_micromamba()
        assert not b.micromamba_installed

    def test_log_entries_only_go_to_sink(self, session):
        _install_all(session)
        assert session.received
        assert not hasattr(session, "history")


class TestMaintenance:
    """Pangolin / snpEff actions."""

    def test_pangolin_requires_tools(self, session):
        assert not session.update_pangolin("dataOnly").ok

    def test_pangolin_modes(self, session):
        _install_all(session)
        assert session.update_pangolin("dataOnly").ok
        assert "databases only" in session.received[-1].text
        assert session.update_pangolin("toolAndData").ok

    def test_pangolin_bad_mode(self, session):
        with pytest.raises(ValueError):
            session.update_pangolin("everything")

    def test_snpeff_requires_both_fields(self, session):
        _install_all(session)
        result = session.add_snpeff_entry("SARS-CoV-2", "  ")
        assert not result.ok
        assert "required" in result.message

    def test_snpeff_entry(self, session):
        _install_all(session)
        result = session.add_snpeff_entry("SARS-CoV-2", "NC_045512.2")
        assert result.ok
        assert 'genome_code="NC_045512.2"' in session.received[-1].text


class TestRepository:
    """Simulated clone / pull."""

    def test_clone_sets_repo_path(self, session, store_dir):
        result = session.clone_default_repo()
        assert result.ok
        assert result.message.endswith("ViralFlow")
        assert load_config(store_dir).repo_path == result.message

    def test_pull_without_repo(self, session):
        with pytest.raises(RepoNotConfiguredError):
            session.git_pull()

    def test_pull_after_clone(self, session):
        session.clone_default_repo()
        assert session.git_pull().ok
