"""Tests for tasknest/workspace.py and tasknest/i18n.py — config and strings."""

from tasknest.i18n import SUPPORTED_LOCALES, language_label, translate
from tasknest.workspace import Config, load_config, log_path, store_dir, workspace_root


def test_workspace_root_from_env(workspace):
    assert workspace_root() == workspace.resolve()


def test_load_config(workspace):
    config = load_config(workspace)
    assert config.log_level == "DEBUG"
    assert config.store_dir == "data"
    assert config.log_file == "tasknest.log"


def test_missing_config_uses_defaults(tmp_path):
    assert load_config(tmp_path) == Config()


def test_paths_follow_config(workspace):
    assert store_dir(workspace) == workspace / "data"
    assert log_path(workspace) == workspace / "tasknest.log"


def test_config_round_trip():
    c = Config(log_level="WARNING", log_file="x.log", store_dir="s")
    assert Config.from_dict(c.to_dict()) == c


def test_translate_fallbacks():
    assert translate("header_title", "tr") == "Görevler"
    assert translate("empty_list", "de") == "No tasks found for this filter."
    assert translate("header_title", "xx") == "Tasks"
    assert translate("no_such_key") == "no_such_key"


def test_translate_interpolates_count():
    assert translate("header_subtitle", "en", count=3) == "3 tasks found"
    assert translate("header_subtitle", "tr", count=3) == "3 adet görev bulundu"


def test_supported_locales():
    assert {"en", "tr", "fr", "de"} <= SUPPORTED_LOCALES


def test_language_label():
    assert language_label("tr") == "Türkçe"
    assert language_label("system", "tr") == "Sistem"
