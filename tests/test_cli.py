import json

import pytest
import yaml
from pydantic import ValidationError

from deployprops.cli import cli, load_config, main, validate_config


CONFIG = {
    "name": "worker",
    "props": [
        {"kind": "mailbox_capacity", "capacity": 10},
        {"kind": "dispatcher_from_config", "path": "dispatchers.io"},
        {"kind": "mailbox_capacity", "capacity": 50},
    ],
    "settings": {"default_mailbox_capacity": 200},
}


@pytest.fixture
def json_config(tmp_path):
    path = tmp_path / "deployment.json"
    path.write_text(json.dumps(CONFIG))
    return path


def test_main_with_config_dict():
    result = main(config_dict=CONFIG)

    assert result["name"] == "worker"
    assert result["props"] == CONFIG["props"]
    assert result["resolved"] == {
        "mailbox_capacity": 10,
        "dispatcher": {"kind": "dispatcher_from_config", "path": "dispatchers.io"},
    }


def test_main_falls_back_to_settings_defaults():
    result = main(config_dict={"name": "idle", "settings": {"default_mailbox_capacity": 200}})

    assert result["props"] == []
    assert result["resolved"] == {
        "mailbox_capacity": 200,
        "dispatcher": {"kind": "dispatcher_default"},
    }


def test_main_requires_a_config():
    with pytest.raises(ValueError, match="Either config_path or config_dict"):
        main()


def test_main_reads_yaml(tmp_path):
    path = tmp_path / "deployment.yaml"
    path.write_text(yaml.safe_dump(CONFIG))

    assert main(config_path=str(path))["resolved"]["mailbox_capacity"] == 10


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "missing.json"))


def test_load_config_unsupported_suffix(tmp_path):
    path = tmp_path / "deployment.toml"
    path.write_text("name = 'worker'")

    with pytest.raises(ValueError, match="Unsupported config format"):
        load_config(str(path))


def test_validate_config_accepts_valid_file(json_config):
    assert validate_config(str(json_config)) is True


def test_validate_config_rejects_invalid_file(tmp_path):
    path = tmp_path / "deployment.json"
    path.write_text(json.dumps({"props": [{"kind": "mailbox_capacity", "capacity": 0}]}))

    with pytest.raises(ValidationError):
        validate_config(str(path))


def test_cli_validate_exit_codes(json_config, tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"props": [{"kind": "nope"}]}))

    assert cli(["validate", str(json_config)]) == 0
    assert cli(["validate", str(bad)]) == 1


def test_cli_show_prints_resolution(json_config, capsys):
    assert cli(["show", str(json_config)]) == 0

    text = capsys.readouterr().out
    out = json.loads(text[text.index("{\n"):])
    assert out["resolved"]["mailbox_capacity"] == 10
    assert [entry["kind"] for entry in out["props"]] == [
        "mailbox_capacity",
        "dispatcher_from_config",
        "mailbox_capacity",
    ]


def test_cli_without_command_prints_help(capsys):
    assert cli([]) == 0
    assert "deployprops" in capsys.readouterr().out
