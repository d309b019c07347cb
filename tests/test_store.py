"""
Tests for the JSON stores (params + app config).
"""

import json

from viralflow_gui.store import (
    AppConfig,
    ParamsStore,
    default_locale,
    default_store_dir,
    load_config,
    save_config,
)


class TestParamsStore:
    """Edited params persistence."""

    def test_load_without_file_gives_defaults(self, store_dir):
        p = ParamsStore(store_dir).load()
        assert p["virus"] == "sars-cov2"
        assert p["minLen"] == 75

    def test_save_is_verbatim(self, store_dir):
        store = ParamsStore(store_dir)
        params = {"virus": "sars-cov2", "refGenomeCode": "kept", "dedup": False, "ndedup": 9}
        store.save(params)
        on_disk = json.loads(store.path.read_text(encoding="utf-8"))
        assert on_disk == params

    def test_load_merges_legacy_file_over_defaults(self, store_dir):
        store = ParamsStore(store_dir)
        store.store_dir.mkdir(parents=True, exist_ok=True)
        store.path.write_text(json.dumps({"depth": 12}), encoding="utf-8")
        p = store.load()
        assert p["depth"] == 12
        assert p["bwa_threads"] == 1

    def test_inapplicable_values_survive_save_load(self, store_dir):
        store = ParamsStore(store_dir)
        store.save({"virus": "sars-cov2", "referenceGFF": "/ref/a.gff"})
        assert store.load()["referenceGFF"] == "/ref/a.gff"

    def test_unreadable_json_gives_defaults(self, store_dir):
        store = ParamsStore(store_dir)
        store.store_dir.mkdir(parents=True, exist_ok=True)
        store.path.write_text("{not json", encoding="utf-8")
        assert store.load()["virus"] == "sars-cov2"

    def test_default_store_dir_from_env(self, store_dir):
        assert default_store_dir() == store_dir
        assert store_dir.is_dir()


class TestAppConfig:
    """Repo path / locale / containers flag."""

    def test_round_trip(self, store_dir):
        cfg = AppConfig(repo_path="/opt/ViralFlow", locale="pt-BR", containers_built=True)
        save_config(cfg, store_dir)
        assert load_config(store_dir) == cfg

    def test_json_keys(self, store_dir):
        path = save_config(AppConfig(repo_path="/x"), store_dir)
        data = json.loads(path.read_text(encoding="utf-8"))
        assert set(data) == {"repoPath", "locale", "containersBuilt"}

    def test_missing_file(self, store_dir):
        cfg = load_config(store_dir)
        assert cfg.repo_path is None
        assert cfg.containers_built is False
        assert cfg.locale in ("en", "pt-BR")

    def test_from_dict_fixes_bad_values(self):
        cfg = AppConfig.from_dict({"repoPath": "", "locale": "pt-BR", "containersBuilt": "yes"})
        assert cfg.repo_path is None
        assert cfg.containers_built is False
        assert cfg.locale == "pt-BR"


class TestDefaultLocale:
    def test_portuguese(self):
        assert default_locale("pt_PT") == "pt-BR"
        assert default_locale("PT-br") == "pt-BR"

    def test_everything_else_is_english(self):
        assert default_locale("en_US") == "en"
        assert default_locale("de_DE") == "en"
