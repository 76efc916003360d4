import pytest

from pgauditsetup.errors import SetupError
from pgauditsetup.services.config_loader import ConfigLoader


def test_config_loader_loads_yaml_mapping(tmp_path):
    config_file = tmp_path / ".pgaudit-setup.yml"
    config_file.write_text(
        "container: my-postgres\nuser: auditor\nrestart_delay: 10\n",
        encoding="utf-8",
    )

    loader = ConfigLoader()
    loaded = loader.load(str(config_file))

    assert loaded["container"] == "my-postgres"
    assert loaded["user"] == "auditor"
    assert loaded["restart_delay"] == 10


def test_config_loader_returns_empty_without_path():
    assert ConfigLoader().load(None) == {}


def test_config_loader_rejects_unknown_keys(tmp_path):
    config_file = tmp_path / ".pgaudit-setup.yml"
    config_file.write_text("unknown_key: true\n", encoding="utf-8")

    loader = ConfigLoader()

    with pytest.raises(SetupError, match="Unknown configuration keys"):
        loader.load(str(config_file))


def test_config_loader_rejects_non_mapping_root(tmp_path):
    config_file = tmp_path / ".pgaudit-setup.yml"
    config_file.write_text("- container\n- user\n", encoding="utf-8")

    with pytest.raises(SetupError, match="YAML mapping"):
        ConfigLoader().load(str(config_file))


def test_config_loader_reports_missing_file(tmp_path):
    with pytest.raises(SetupError, match="Config file not found"):
        ConfigLoader().load(str(tmp_path / "missing.yml"))


def test_config_loader_normalizes_scalar_values(tmp_path):
    config_file = tmp_path / ".pgaudit-setup.yml"
    config_file.write_text(
        "postgres_version: 16\npassword: 1234\nrestart_delay: 3\nverbose: true\n",
        encoding="utf-8",
    )

    loaded = ConfigLoader().load(str(config_file))

    assert loaded == {
        "postgres_version": "16",
        "password": "1234",
        "restart_delay": 3.0,
        "verbose": True,
    }


@pytest.mark.parametrize(
    "line, key",
    [
        ("restart_delay: soon", "restart_delay"),
        ("restart_delay: true", "restart_delay"),
        ("no_log_file: 'false'", "no_log_file"),
        ("dry_run: 1", "dry_run"),
        ("user: [admin]", "user"),
    ],
)
def test_config_loader_rejects_values_of_the_wrong_type(tmp_path, line, key):
    config_file = tmp_path / ".pgaudit-setup.yml"
    config_file.write_text(f"{line}\n", encoding="utf-8")

    with pytest.raises(SetupError, match=f"Invalid value for '{key}'"):
        ConfigLoader().load(str(config_file))
