import json
import math
import pathlib

import pytest

from chunkcopy import adapter, data


@pytest.fixture(scope="function")
def config_dict() -> dict:
    return {
        "batch-size": 500,
        "throttle-millis": 50,
        "strategy": "range",
        "raise-on-warnings": True,
        "pause-before-switch-seconds": 1.5,
        "retry": {"tries": 5, "base-interval": 0.5, "multiplier": 2},
        "databases": [
            {
                "name": "shop",
                "api": "pymysql",
                "host": "db.example.com",
                "port": 3307,
                "db-name": "shop",
                "keyring-db-username-entry": "shop-user",
                "keyring-db-password-entry": "shop-password",
            },
            {
                "name": "reporting",
                "api": "pyodbc",
                "connection-string": "DSN=reporting",
            },
        ],
    }


def test_parse(config_dict: dict):
    config = adapter.config.parse(config_dict)

    assert isinstance(config, data.Config), str(config)
    assert config.batch_size == 500
    assert config.throttle_millis == 50
    assert config.strategy == data.ChunkStrategy.RANGE
    assert config.raise_on_warnings
    assert config.pause_before_switch_seconds == 1.5
    assert config.retry.tries == 5
    assert config.retry.base_interval == 0.5
    assert config.retry.multiplier == 2.0
    assert config.retry.max_elapsed_time == math.inf


def test_parse_databases(config_dict: dict):
    config = adapter.config.parse(config_dict)

    shop = config.db("shop")
    assert shop is not None
    assert shop.api == data.API.PYMYSQL
    assert shop.host == "db.example.com"
    assert shop.port == 3307
    assert shop.connection_string is None

    reporting = config.db("reporting")
    assert reporting is not None
    assert reporting.api == data.API.PYODBC
    assert reporting.connection_string.get_secret_value() == "DSN=reporting"
    assert "DSN=reporting" not in repr(config)

    assert config.db("missing") is None


def test_optional_entries_have_defaults(config_dict: dict):
    for key in ("raise-on-warnings", "pause-before-switch-seconds", "retry"):
        del config_dict[key]

    config = adapter.config.parse(config_dict)

    assert isinstance(config, data.Config), str(config)
    assert not config.raise_on_warnings
    assert config.pause_before_switch_seconds is None
    assert config.retry == data.RetryConfig.default()


@pytest.mark.parametrize("key", ["batch-size", "throttle-millis", "strategy", "databases"])
def test_missing_required_entry(config_dict: dict, key: str):
    del config_dict[key]

    result = adapter.config.parse(config_dict)

    assert isinstance(result, data.Error)
    assert key in result.message


def test_unrecognized_strategy(config_dict: dict):
    config_dict["strategy"] = "random"

    assert isinstance(adapter.config.parse(config_dict), data.Error)


def test_id_set_strategy(config_dict: dict):
    config_dict["strategy"] = "id-set"

    config = adapter.config.parse(config_dict)

    assert config.strategy == data.ChunkStrategy.ID_SET


def test_unrecognized_api(config_dict: dict):
    config_dict["databases"][0]["api"] = "oracle"

    result = adapter.config.parse(config_dict)

    assert isinstance(result, data.Error)
    assert "oracle" in result.message


def test_database_without_connection_string_needs_credentials(config_dict: dict):
    del config_dict["databases"][0]["keyring-db-password-entry"]

    result = adapter.config.parse(config_dict)

    assert isinstance(result, data.Error)
    assert ("name", "'shop'") in result.context


@pytest.mark.parametrize("batch_size", [0, -1])
def test_batch_size_must_be_positive(config_dict: dict, batch_size: int):
    config_dict["batch-size"] = batch_size

    assert isinstance(adapter.config.parse(config_dict), data.Error)


def test_invalid_retry_entry(config_dict: dict):
    config_dict["retry"] = {"tries": 0}

    result = adapter.config.parse(config_dict)

    assert isinstance(result, data.Error)
    assert "retry" in result.message


def test_load(tmp_path: pathlib.Path, config_dict: dict):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps(config_dict))

    config = adapter.config.load(config_file=config_file)

    assert isinstance(config, data.Config), str(config)
    assert config.db("shop") is not None


def test_load_missing_file(tmp_path: pathlib.Path):
    result = adapter.config.load(config_file=tmp_path / "missing.json")

    assert isinstance(result, data.Error)
    assert "does not exist" in result.message


def test_fs_env_overrides(monkeypatch, tmp_path: pathlib.Path):
    monkeypatch.setenv(adapter.fs.CONFIG_PATH_ENV_VAR, str(tmp_path / "other.json"))
    monkeypatch.setenv(adapter.fs.LOG_FOLDER_ENV_VAR, str(tmp_path / "logs"))

    assert adapter.fs.get_config_path() == tmp_path / "other.json"
    assert adapter.fs.get_log_folder() == tmp_path / "logs"
    assert (tmp_path / "logs").is_dir()


@pytest.mark.parametrize("value", ["false", "true", 0, None])
def test_raise_on_warnings_must_be_a_boolean(config_dict: dict, value):
    config_dict["raise-on-warnings"] = value

    result = adapter.config.parse(config_dict)

    assert isinstance(result, data.Error)
    assert "raise-on-warnings" in result.message
