from typing import Any

import pytest

from compositemark.core.grammar import ErrorBarCenter, ErrorBarExtent, Orient
from compositemark.core.schema import UnitSpec
from compositemark.errorbar.params import derived_fields, errorbar_params


def make_spec(encoding: dict[str, Any]) -> UnitSpec:
    return UnitSpec.model_validate({"mark": "errorbar", "encoding": encoding})


BASE = {
    "x": {"field": "a", "type": "ordinal"},
    "y": {"field": "b", "type": "quantitative"},
}


def aggregate_step(transform: list[dict]) -> dict:
    steps = [t for t in transform if "aggregate" in t]
    assert len(steps) == 1
    return steps[0]


def test_stderr_pipeline_matches_expected_shape() -> None:
    params = errorbar_params(
        make_spec(BASE), Orient.VERTICAL, ErrorBarCenter.MEAN, ErrorBarExtent.STDERR
    )
    assert params.transform == [
        {
            "aggregate": [
                {"op": "mean", "field": "b", "as": "mean_b"},
                {"op": "stderr", "field": "b", "as": "extent_b"},
            ],
            "groupby": ["a"],
        },
        {"calculate": "datum.mean_b + datum.extent_b", "as": "upper_whisker_b"},
        {"calculate": "datum.mean_b - datum.extent_b", "as": "lower_whisker_b"},
    ]
    assert params.groupby == ["a"]
    assert params.continuous_axis == "y"
    assert params.encoding_without_continuous_axis == {"x": {"field": "a", "type": "ordinal"}}


@pytest.mark.parametrize(
    "extent, lower_op, upper_op",
    [(ErrorBarExtent.CI, "ci0", "ci1"), (ErrorBarExtent.IQR, "q1", "q3")],
)
def test_special_extents_have_no_calculate(extent, lower_op: str, upper_op: str) -> None:
    params = errorbar_params(make_spec(BASE), Orient.VERTICAL, ErrorBarCenter.MEDIAN, extent)
    assert not any("calculate" in t for t in params.transform)
    assert aggregate_step(params.transform)["aggregate"] == [
        {"op": "median", "field": "b", "as": "median_b"},
        {"op": lower_op, "field": "b", "as": "lower_whisker_b"},
        {"op": upper_op, "field": "b", "as": "upper_whisker_b"},
    ]
    assert params.derived.extent is None


@pytest.mark.parametrize("extent", [ErrorBarExtent.STDERR, ErrorBarExtent.STDEV])
@pytest.mark.parametrize("center", [ErrorBarCenter.MEAN, ErrorBarCenter.MEDIAN])
def test_symmetric_extents_have_two_calculates(center, extent) -> None:
    params = errorbar_params(make_spec(BASE), Orient.VERTICAL, center, extent)
    calculates = [t for t in params.transform if "calculate" in t]
    assert len(calculates) == 2
    for step in calculates:
        assert f"datum.{center.value}_b" in step["calculate"]
        assert "datum.extent_b" in step["calculate"]
    assert params.transform[-2:] == calculates


def test_derived_names_are_stable() -> None:
    first = derived_fields("price", ErrorBarCenter.MEAN, ErrorBarExtent.STDEV)
    second = derived_fields("price", ErrorBarCenter.MEAN, ErrorBarExtent.STDEV)
    assert first == second
    assert (first.center, first.lower_whisker, first.upper_whisker, first.extent) == (
        "mean_price",
        "lower_whisker_price",
        "upper_whisker_price",
        "extent_price",
    )
    p1 = errorbar_params(make_spec(BASE), Orient.VERTICAL, ErrorBarCenter.MEAN, ErrorBarExtent.CI)
    p2 = errorbar_params(make_spec(BASE), Orient.VERTICAL, ErrorBarCenter.MEAN, ErrorBarExtent.CI)
    assert p1.transform == p2.transform


def test_horizontal_uses_x_as_continuous_field() -> None:
    spec = make_spec(
        {
            "x": {"field": "b", "type": "quantitative", "aggregate": "errorbar"},
            "y": {"field": "a", "type": "nominal"},
        }
    )
    params = errorbar_params(spec, Orient.HORIZONTAL, ErrorBarCenter.MEAN, ErrorBarExtent.CI)
    assert params.continuous_axis == "x"
    assert aggregate_step(params.transform)["groupby"] == ["a"]
    assert params.continuous_axis_channel_def.aggregate is None


def test_bin_and_time_unit_steps_precede_aggregate_and_group_on_transformed_names() -> None:
    spec = make_spec(
        {
            "x": {"field": "a", "type": "quantitative", "bin": True},
            "y": {"field": "b", "type": "quantitative"},
            "detail": {"field": "d", "type": "temporal", "timeUnit": "month"},
        }
    )
    params = errorbar_params(spec, Orient.VERTICAL, ErrorBarCenter.MEAN, ErrorBarExtent.CI)
    assert params.transform[0] == {"bin": True, "field": "a", "as": "bin_maxbins_10_a"}
    assert params.transform[1] == {"timeUnit": "month", "field": "d", "as": "month_d"}
    assert "aggregate" in params.transform[2]
    assert params.groupby == ["bin_maxbins_10_a", "month_d"]
    assert params.encoding_without_continuous_axis == {
        "x": {"field": "bin_maxbins_10_a", "type": "quantitative"},
        "detail": {"field": "month_d", "type": "temporal"},
    }


def test_aggregated_channels_join_the_aggregate_not_groupby() -> None:
    spec = make_spec(
        {
            **BASE,
            "color": {"field": "c", "type": "quantitative", "aggregate": "max"},
            "size": {"aggregate": "count", "type": "quantitative"},
        }
    )
    params = errorbar_params(spec, Orient.VERTICAL, ErrorBarCenter.MEAN, ErrorBarExtent.STDEV)
    ops = aggregate_step(params.transform)["aggregate"]
    assert {"op": "max", "field": "c", "as": "max_c"} in ops
    assert {"op": "count", "as": "count_*"} in ops
    assert params.groupby == ["a"]
    assert params.encoding_without_continuous_axis["color"] == {
        "field": "max_c",
        "type": "quantitative",
    }


def test_unrecognized_aggregate_is_neither_aggregated_nor_grouped() -> None:
    spec = make_spec({**BASE, "detail": {"field": "d", "type": "nominal", "aggregate": "mode"}})
    params = errorbar_params(spec, Orient.VERTICAL, ErrorBarCenter.MEAN, ErrorBarExtent.STDEV)
    assert params.groupby == ["a"]
    assert len(aggregate_step(params.transform)["aggregate"]) == 2
    assert params.encoding_without_continuous_axis["detail"]["field"] == "mode_d"


def test_value_defs_pass_through_untouched() -> None:
    spec = make_spec({**BASE, "opacity": {"value": 0.3}})
    params = errorbar_params(spec, Orient.VERTICAL, ErrorBarCenter.MEAN, ErrorBarExtent.STDERR)
    assert params.encoding_without_continuous_axis["opacity"] == {"value": 0.3}
    assert params.groupby == ["a"]


def test_detail_array_groups_on_every_entry() -> None:
    spec = make_spec(
        {
            **BASE,
            "detail": [
                {"field": "d1", "type": "nominal"},
                {"field": "d2", "type": "temporal", "timeUnit": "year"},
                {"field": "d3", "type": "quantitative", "aggregate": "sum"},
            ],
        }
    )
    params = errorbar_params(spec, Orient.VERTICAL, ErrorBarCenter.MEAN, ErrorBarExtent.CI)
    assert params.groupby == ["a", "d1", "year_d2"]
    assert params.transform[0] == {"timeUnit": "year", "field": "d2", "as": "year_d2"}
    assert {"op": "sum", "field": "d3", "as": "sum_d3"} in aggregate_step(params.transform)["aggregate"]
    assert params.encoding_without_continuous_axis["detail"] == [
        {"field": "d1", "type": "nominal"},
        {"field": "year_d2", "type": "temporal"},
        {"field": "sum_d3", "type": "quantitative"},
    ]


def test_channel_properties_survive_the_rewrite() -> None:
    spec = make_spec({**BASE, "x": {"field": "a", "type": "ordinal", "title": "Group"}})
    params = errorbar_params(spec, Orient.VERTICAL, ErrorBarCenter.MEAN, ErrorBarExtent.STDERR)
    assert params.encoding_without_continuous_axis["x"] == {
        "field": "a",
        "type": "ordinal",
        "title": "Group",
    }
