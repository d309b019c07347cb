import pytest


@pytest.fixture
def store_dir(tmp_path, monkeypatch):
    """isolated store dir + home so nothing touches the real user profile"""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    store = tmp_path / "store"
    monkeypatch.setenv("VIRALFLOW_GUI_HOME", str(store))
    return store
