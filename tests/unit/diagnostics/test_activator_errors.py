from activator.core.exceptions import ActivatorError, ConfigError, SettingsError


def test_config_error_collects_context() -> None:
    err = ConfigError("Config file not found: x.json", path="x.json", key="x")

    assert isinstance(err, ValueError)
    assert err.to_json_error() == {
        "message": "Config file not found: x.json",
        "code": "ConfigError",
        "context": {"path": "x.json", "key": "x"},
    }


def test_context_is_copied() -> None:
    ctx = {"key": "ACTIVATOR_x"}
    err = SettingsError("bad", context=ctx)
    ctx["key"] = "changed"

    assert isinstance(err, ActivatorError)
    assert err.context == {"key": "ACTIVATOR_x"}
