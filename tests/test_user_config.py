import json

from repo_resume.user_config import UserPreferences


def test_default_preferences():
    prefs = UserPreferences()
    assert prefs.last_import_handle is None
    assert prefs.last_style is None


def test_to_dict():
    prefs = UserPreferences(last_import_handle="octo", last_style="classic")
    assert prefs.to_dict() == {"last_import_handle": "octo", "last_style": "classic"}


def test_from_dict_ignores_wrong_types():
    prefs = UserPreferences.from_dict({"last_import_handle": 42, "last_style": "minimal", "extra": True})
    assert prefs.last_import_handle is None
    assert prefs.last_style == "minimal"


def test_save_creates_parent_directories(tmp_path):
    path = tmp_path / "config" / "repo-resume" / "preferences.json"

    UserPreferences(last_style="developer").save(path)

    assert json.loads(path.read_text(encoding="utf-8")) == {
        "last_import_handle": None,
        "last_style": "developer",
    }
    assert UserPreferences.load(path).last_style == "developer"


def test_load_missing_file(tmp_path):
    prefs = UserPreferences.load(tmp_path / "nope.json")
    assert prefs.to_dict() == UserPreferences().to_dict()


def test_load_malformed_file(tmp_path):
    path = tmp_path / "preferences.json"
    path.write_text("{oops", encoding="utf-8")
    assert UserPreferences.load(path).last_style is None

    path.write_text('["modern"]', encoding="utf-8")
    assert UserPreferences.load(path).last_style is None
