from typing import Any

from compositemark.config import ErrorBarConfig
from compositemark.core.grammar import ErrorBarCenter, ErrorBarExtent, ErrorBarPart, Orient
from compositemark.core.schema import UnitSpec
from compositemark.core.toggle import Override, UseDefault
from compositemark.errorbar.layers import errorbar_layers, part_layer
from compositemark.errorbar.params import errorbar_params

ALL_PARTS = ErrorBarConfig(
    bar=UseDefault(), line=UseDefault(), ticks=UseDefault(), whisker=UseDefault()
)


def build(mark: Any, encoding: dict[str, Any], extent=ErrorBarExtent.STDERR):
    spec = UnitSpec.model_validate({"mark": mark, "encoding": encoding})
    params = errorbar_params(spec, Orient.VERTICAL, ErrorBarCenter.MEAN, extent)
    return spec, params


ENCODING = {
    "x": {"field": "a", "type": "ordinal"},
    "y": {
        "field": "b",
        "type": "quantitative",
        "scale": {"zero": False},
        "axis": {"title": "B"},
    },
}


def mark_types(layers: list[dict]) -> list[str]:
    return [layer["mark"]["type"] for layer in layers]


def test_default_config_draws_rule_then_point() -> None:
    spec, params = build("errorbar", ENCODING)
    layers = errorbar_layers(spec.mark, ErrorBarConfig(), params)
    assert mark_types(layers) == ["rule", "point"]


def test_every_part_in_drawing_order() -> None:
    spec, params = build("errorbar", ENCODING)
    layers = errorbar_layers(spec.mark, ALL_PARTS, params)
    assert mark_types(layers) == ["bar", "line", "tick", "tick", "rule", "point"]
    assert [layer["mark"]["style"] for layer in layers] == [
        "errorbar-bar",
        "errorbar-line",
        "errorbar-ticks",
        "errorbar-ticks",
        "errorbar-whisker",
        "errorbar-point",
    ]


def test_whisker_spans_lower_to_upper_bound() -> None:
    spec, params = build("errorbar", ENCODING)
    [whisker] = part_layer(ErrorBarPart.WHISKER, spec.mark, ErrorBarConfig(), params)
    assert whisker["encoding"]["y"] == {
        "field": "lower_whisker_b",
        "type": "quantitative",
        "scale": {"zero": False},
        "axis": {"title": "B"},
    }
    assert whisker["encoding"]["y2"] == {"field": "upper_whisker_b"}
    assert whisker["encoding"]["x"] == {"field": "a", "type": "ordinal"}


def test_ticks_bind_to_each_whisker_bound() -> None:
    spec, params = build("errorbar", ENCODING)
    layers = errorbar_layers(spec.mark, ALL_PARTS, params)
    ticks = [layer for layer in layers if layer["mark"]["type"] == "tick"]
    assert [t["encoding"]["y"]["field"] for t in ticks] == ["lower_whisker_b", "upper_whisker_b"]
    assert all("y2" not in t["encoding"] for t in ticks)


def test_point_reads_center_field_with_scale_and_axis() -> None:
    spec, params = build("errorbar", ENCODING, extent=ErrorBarExtent.CI)
    [point] = part_layer(ErrorBarPart.POINT, spec.mark, ErrorBarConfig(), params)
    assert point["encoding"]["y"]["field"] == "mean_b"
    assert point["encoding"]["y"]["scale"] == {"zero": False}
    assert point["encoding"]["y"]["axis"] == {"title": "B"}


def test_color_and_size_channels_are_not_copied_into_layers() -> None:
    encoding = {
        **ENCODING,
        "color": {"field": "g", "type": "nominal"},
        "size": {"value": 4},
        "detail": {"field": "d", "type": "nominal"},
    }
    spec, params = build("errorbar", encoding)
    for layer in errorbar_layers(spec.mark, ALL_PARTS, params):
        assert "color" not in layer["encoding"]
        assert "size" not in layer["encoding"]
        assert layer["encoding"]["detail"] == {"field": "d", "type": "nominal"}
    assert "g" in params.groupby


def test_mark_color_opacity_and_user_part_override() -> None:
    mark = {"type": "errorbar", "color": "red", "opacity": 0, "point": {"filled": True, "color": "black"}}
    spec, params = build(mark, ENCODING)
    whisker, point = errorbar_layers(spec.mark, ErrorBarConfig(), params)
    assert whisker["mark"] == {
        "color": "red",
        "opacity": 0,
        "type": "rule",
        "style": "errorbar-whisker",
    }
    assert point["mark"]["color"] == "black"
    assert point["mark"]["filled"] is True
    assert point["mark"]["opacity"] == 0


def test_user_can_disable_a_default_part_and_enable_another() -> None:
    mark = {"type": "errorbar", "point": False, "ticks": True}
    spec, params = build(mark, ENCODING)
    layers = errorbar_layers(spec.mark, ErrorBarConfig(), params)
    assert mark_types(layers) == ["tick", "tick", "rule"]


def test_configured_properties_win_over_mark_color_but_not_user_override() -> None:
    config = ErrorBarConfig(
        whisker=Override({"strokeWidth": 3, "color": "gray", "opacity": 0.5}),
        point=Override({"color": "gray"}),
    )
    mark = {"type": "errorbar", "color": "blue", "opacity": 0.9, "point": {"color": "black"}}
    spec, params = build(mark, ENCODING)
    whisker, point = errorbar_layers(spec.mark, config, params)
    assert whisker["mark"] == {
        "strokeWidth": 3,
        "color": "gray",
        "opacity": 0.5,
        "type": "rule",
        "style": "errorbar-whisker",
    }
    assert point["mark"]["color"] == "black"
    assert point["mark"]["opacity"] == 0.9


def test_layers_do_not_share_encoding_objects() -> None:
    spec, params = build("errorbar", ENCODING)
    whisker, point = errorbar_layers(spec.mark, ErrorBarConfig(), params)
    whisker["encoding"]["x"]["title"] = "changed"
    assert "title" not in point["encoding"]["x"]
    assert "title" not in params.encoding_without_continuous_axis["x"]
