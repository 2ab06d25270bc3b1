import pytest

from bufrng import settings
from bufrng.common.deep_merge import deep_merge_json, load_json_file, load_json_optional
from bufrng.distributions import RandomGen
from bufrng.log import is_verbose


@pytest.fixture
def user_config(tmp_path):
    original = settings.USER_CONFIG_PATH
    path = tmp_path / "config_user.json"
    settings.USER_CONFIG_PATH = path
    yield path
    settings.USER_CONFIG_PATH = original
    settings.reload_settings()


def test_shipped_config_matches_defaults():
    assert settings.get_buffer_bytes("fast") == 1024
    assert settings.get_buffer_bytes("secure") == 8192
    assert settings.get_buffer_bytes("local") == 8192


def test_user_config_overrides_one_profile(user_config):
    user_config.write_text(
        '{\n  // smaller buffer for the fast profile\n'
        '  "random": {"profiles": {"fast": {"buffer_bytes": 64}}}\n}\n',
        encoding="utf-8",
    )
    settings.reload_settings()
    assert settings.get_buffer_bytes("fast") == 64
    assert settings.get_buffer_bytes("secure") == 8192
    assert RandomGen.create_fast(1).buffer_size_bytes == 64


def test_empty_user_config_is_ignored(user_config):
    user_config.write_text("   \n", encoding="utf-8")
    merged = settings.reload_settings()
    assert merged["random"]["profiles"]["fast"]["buffer_bytes"] == 1024


def test_invalid_user_config_raises(user_config):
    user_config.write_text('{"random": ', encoding="utf-8")
    with pytest.raises(ValueError):
        settings.reload_settings()


def test_verbose_flag_from_config(user_config):
    user_config.write_text('{"log": {"verbose": true}}', encoding="utf-8")
    settings.reload_settings()
    assert is_verbose()


def test_profile_without_buffer_size(user_config):
    user_config.write_text('{"random": {"profiles": {"odd": {}}}}', encoding="utf-8")
    settings.reload_settings()
    with pytest.raises(ValueError, match="buffer_bytes"):
        settings.get_buffer_bytes("odd")


def test_unknown_profile():
    with pytest.raises(ValueError, match="Unknown generator profile"):
        settings.get_profile("turbo")


def test_deep_merge_nested_dicts():
    base = {"a": {"b": 1, "c": 2}, "d": [1, 2]}
    merged = deep_merge_json(base, {"a": {"b": 3}}, None, {"d": [9]})
    assert merged == {"a": {"b": 3, "c": 2}, "d": [9]}
    assert base == {"a": {"b": 1, "c": 2}, "d": [1, 2]}


def test_deep_merge_accepts_paths(tmp_path):
    path = tmp_path / "extra.json"
    path.write_text('{"a": {"c": 5}}', encoding="utf-8")
    assert deep_merge_json({"a": {"b": 1}}, path) == {"a": {"b": 1, "c": 5}}


def test_jsonc_comments_outside_strings_only(tmp_path):
    path = tmp_path / "commented.json"
    path.write_text(
        '{\n  "url": "http://example.org", // trailing\n  /* block */ "n": 1\n}\n',
        encoding="utf-8",
    )
    assert load_json_file(path) == {"url": "http://example.org", "n": 1}


def test_missing_files(tmp_path):
    missing = tmp_path / "nope.json"
    assert load_json_optional(missing, {"x": 1}) == {"x": 1}
    with pytest.raises(FileNotFoundError):
        load_json_file(missing)
