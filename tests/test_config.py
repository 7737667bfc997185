"""Tests for user preferences and env defaults."""

from englishquest.config import DEFAULT_HISTORY_LIMIT, DEFAULT_LANG_PREF, DEFAULT_QUESTIONS_PER_SESSION
from englishquest.user_config import UserConfig, UserConfigManager, default_config_path


class TestConfigDefaults:
    """Smoke tests for the env-driven defaults."""

    def test_defaults_are_usable(self):
        """Test defaults satisfy the preference model."""
        config = UserConfig()
        assert config.lang_pref == DEFAULT_LANG_PREF
        assert config.questions_per_session == DEFAULT_QUESTIONS_PER_SESSION
        assert config.profile_id == ""
        assert DEFAULT_HISTORY_LIMIT > 0

    def test_out_of_range_values_coerced(self):
        """Test unknown languages and out-of-range counts are coerced."""
        assert UserConfig(lang_pref="fr").lang_pref == "en"
        assert UserConfig(lang_pref=" JA ").lang_pref == "ja"
        assert UserConfig(questions_per_session=0).questions_per_session == 1
        assert UserConfig(questions_per_session=99).questions_per_session == 50
        assert UserConfig(questions_per_session="many").questions_per_session == DEFAULT_QUESTIONS_PER_SESSION
        assert UserConfig(profile_id=None).profile_id == ""

    def test_default_path_honors_xdg(self, monkeypatch, tmp_path):
        """Test XDG_CONFIG_HOME overrides the base directory."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert default_config_path() == tmp_path / "tui-english-quest" / "config.json"


class TestUserConfigManager:
    """Test suite for UserConfigManager."""

    def test_missing_file_loads_defaults(self, tmp_path):
        """Test a missing file yields defaults without creating it."""
        manager = UserConfigManager(tmp_path / "config.json")
        assert manager.load() == UserConfig()
        assert not manager.path.exists()

    def test_save_and_load(self, tmp_path):
        """Test preferences survive a save and reload."""
        path = tmp_path / "nested" / "config.json"
        manager = UserConfigManager(path, UserConfig(lang_pref="ja", questions_per_session=10))
        manager.save()

        loaded = UserConfigManager(path).load()
        assert loaded.lang_pref == "ja"
        assert loaded.questions_per_session == 10

    def test_malformed_file_falls_back(self, tmp_path, caplog):
        """Test a malformed file is reported and replaced by defaults."""
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")
        manager = UserConfigManager(path)
        assert manager.load() == UserConfig()
        assert "Failed to read config" in caplog.text

    def test_legacy_file_keeps_profile_id(self, tmp_path):
        """Test an older file with a retired language keeps its profile id."""
        path = tmp_path / "config.json"
        path.write_text(
            '{"lang_pref": "both", "api_key": "", "questions_per_session": 0, "profile_id": "abc123"}',
            encoding="utf-8",
        )
        manager = UserConfigManager(path)
        loaded = manager.load()
        assert loaded.lang_pref == "en"
        assert loaded.questions_per_session == 1
        assert manager.ensure_profile_id() == "abc123"

    def test_ensure_profile_id_generates_once(self, tmp_path):
        """Test a profile id is generated, saved and then reused."""
        path = tmp_path / "config.json"
        manager = UserConfigManager(path)
        first = manager.ensure_profile_id()
        assert first
        assert manager.ensure_profile_id() == first
        assert UserConfigManager(path).load().profile_id == first

    def test_update_config(self, tmp_path):
        """Test update_config replaces the in-memory config."""
        manager = UserConfigManager(tmp_path / "config.json")
        manager.update_config(UserConfig(profile_id="abc"))
        assert manager.config.profile_id == "abc"
