import pytest
import voluptuous as vol

from custom_components.minimal_http_blinds.config import BlindsConfig, StatusApiConfig

BASE = {
    "name": "Living room",
    "get_current_position_url": "http://blind/position",
    "set_target_position_url": "http://blind/set/%position%",
}


def test_defaults():
    conf = BlindsConfig.from_mapping(BASE)

    assert conf.name == "Living room"
    assert conf.get_position_method == "GET"
    assert conf.set_position_method == "POST"
    assert conf.poll_interval_ms == 500
    assert conf.tolerance == 0
    assert conf.battery_url is None
    assert conf.api is None


def test_optional_capabilities():
    conf = BlindsConfig.from_mapping(
        {
            **BASE,
            "get_current_position_method": "post",
            "get_current_position_polling_millis": "750",
            "current_position_tolerance": 3,
            "get_battery_level_url": "http://blind/battery",
            "api_port": 8080,
        }
    )

    assert conf.get_position_method == "POST"
    assert conf.poll_interval_ms == 750
    assert conf.tolerance == 3
    assert conf.battery_url == "http://blind/battery"
    assert conf.api == StatusApiConfig(host="0.0.0.0", port=8080)


def test_empty_optional_values_are_not_configured():
    conf = BlindsConfig.from_mapping({**BASE, "get_battery_level_url": "", "api_host": "127.0.0.1"})

    assert conf.battery_url is None
    assert conf.api is None


@pytest.mark.parametrize(
    "override",
    [
        {"get_current_position_method": "FETCH"},
        {"get_current_position_polling_millis": 0},
        {"current_position_tolerance": -1},
        {"api_port": 70000},
    ],
)
def test_invalid_values(override):
    with pytest.raises(vol.Invalid):
        BlindsConfig.from_mapping({**BASE, **override})


def test_missing_url():
    with pytest.raises(vol.Invalid):
        BlindsConfig.from_mapping({"name": "x", "get_current_position_url": "http://blind"})
