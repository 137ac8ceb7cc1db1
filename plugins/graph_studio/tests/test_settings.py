import pytest

from plugins.graph_studio.core import PRESETS, Limit, list_presets, load_settings, parse_for_mode


def test_defaults_without_configuration():
    settings = load_settings(None)
    assert settings.function_points.default == 400
    assert settings.surface_steps.default == 60
    assert settings.zeta_terms.minimum == 2
    assert settings.to_dict()["zeta_grid_steps"] == {"min": 1, "max": 60, "default": 18}


@pytest.mark.parametrize(
    ("value", "expected"),
    [(None, 400), (0, 1), (-20, 1), (250, 250), (250.9, 250), (10**9, 5000), ("abc", 400), (float("nan"), 400), (float("inf"), 5000)],
)
def test_clamp(value, expected):
    assert load_settings({}).function_points.clamp(value) == expected


def test_malformed_limits_fall_back():
    settings = load_settings(
        {
            "limits": {
                "surface_steps": {"min": "x", "max": 50},
                "polar_steps": "not a mapping",
                "zeta_terms": {"min": 0, "max": 10, "default": 500},
            }
        }
    )
    assert settings.surface_steps == Limit(minimum=1, maximum=50, default=50)
    assert settings.polar_steps.default == 600
    assert settings.zeta_terms == Limit(minimum=1, maximum=10, default=10)


def test_presets_parse_for_their_mode():
    for mode, items in PRESETS.items():
        for item in items:
            for key, value in item.items():
                if key.endswith("expression"):
                    parse_for_mode(value, mode)


def test_list_presets_filters_by_mode():
    assert list(list_presets("polar")) == ["polar"]
    assert set(list_presets()) == {"function", "parametric", "polar", "surface"}
    with pytest.raises(KeyError):
        list_presets("volume")


def test_clamp_handles_integers_too_large_for_float():
    limit = load_settings({}).function_points
    assert limit.clamp(10**400) == 5000
    assert limit.clamp(-(10**400)) == 1
