import pytest

from xcforge_engine.settings import Settings, load_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    monkeypatch.delenv("XCFORGE_CONFIG", raising=False)
    monkeypatch.delenv("XCFORGE_LOG_LEVEL", raising=False)
    monkeypatch.chdir(tmp_path)


def test_defaults_when_no_file(tmp_path):
    assert load_settings() == Settings()


def test_loads_file_from_working_directory(tmp_path):
    (tmp_path / "xcforge.yaml").write_text("xcforge:\n  log_level: debug\n  json_indent: 4\n  rollup_on_load: false\n")

    settings = load_settings()

    assert settings.log_level == "DEBUG"
    assert settings.json_indent == 4
    assert settings.rollup_on_load is False
    assert settings.classify_on_load is True


def test_config_path_from_environment(tmp_path, monkeypatch):
    config = tmp_path / "custom.yaml"
    config.write_text("json_indent: null\n")
    monkeypatch.setenv("XCFORGE_CONFIG", str(config))

    assert load_settings().json_indent is None


def test_log_level_environment_override(tmp_path, monkeypatch):
    (tmp_path / "xcforge.yaml").write_text("log_level: WARNING\n")
    monkeypatch.setenv("XCFORGE_LOG_LEVEL", "error")

    assert load_settings().log_level == "ERROR"


@pytest.mark.parametrize("content, message", [
    ("log_level: [unclosed", "YAML syntax error"),
    ("- a\n- b\n", "must be a mapping"),
    ("colour: true\n", "Unknown settings"),
    ("json_indent: wide\n", "json_indent"),
])
def test_invalid_files_raise_value_error(tmp_path, content, message):
    config = tmp_path / "bad.yaml"
    config.write_text(content)

    with pytest.raises(ValueError, match=message):
        load_settings(config)


@pytest.mark.parametrize("content", [
    'classify_on_load: "false"\n',
    'rollup_on_load: "no"\n',
    "rollup_on_load: 0\n",
])
def test_non_boolean_flags_are_rejected(tmp_path, content):
    config = tmp_path / "flags.yaml"
    config.write_text(content)

    with pytest.raises(ValueError, match="must be true or false"):
        load_settings(config)


def test_to_dict_matches_fields(tmp_path):
    (tmp_path / "xcforge.yaml").write_text("classify_on_load: false\n")

    assert load_settings().to_dict() == {
        "log_level": "INFO",
        "json_indent": 2,
        "classify_on_load": False,
        "rollup_on_load": True,
    }
