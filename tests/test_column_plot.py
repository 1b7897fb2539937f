import pandas as pd
import pytest

from columnplot.core.config import PlotConfiguration, PlotState
from columnplot.core.divisors import max_divisor, static_divisor
from columnplot.core.streams import SeriesStream
from columnplot.ui.plots.column_plot import ColumnPlot, RectSpec
from columnplot.ui.plots.input_series import InputSeries


def _value(row):
    return row["value"]


def _make_plot(rows=None, **options):
    source = InputSeries(SeriesStream(rows) if rows is not None else None)
    config = PlotConfiguration(
        column_height=options.pop("column_height", 100),
        column_spacing=options.pop("column_spacing", 2),
        column_width=options.pop("column_width", 10),
        domain_max=options.pop("domain_max", 0),
    )
    plot = ColumnPlot(source, config=config, **options)
    invalidations = []
    plot.invalidated.connect(lambda: invalidations.append(True))
    return plot, source, invalidations


class ValuePlot(ColumnPlot):
    def value_selector(self, row):
        return row["value"]


class HalvingPlot(ValuePlot):
    def divisor_operator(self, stream, value_selector):
        return static_divisor(2)(stream, value_selector)


# ------------------------------------------------------------------ series transform
def test_existing_stream_is_used_immediately():
    rows = [{"value": 10}, {"value": 20}]
    plot, _, _ = _make_plot(rows, value_selector=_value)

    assert plot.subscribed
    assert [column.input for column in plot.series] == rows
    assert [column.relative_value for column in plot.series] == [10, 20]


def test_scenario_without_ceiling():
    plot, _, _ = _make_plot([{"value": 10}, {"value": 20}], value_selector=_value)
    points = plot.plot()

    assert [p.display_height for p in points] == pytest.approx([1000, 2000])
    assert [p.x1 for p in points] == [0, 12]


def test_scenario_with_ceiling_matching_max():
    plot, _, _ = _make_plot([{"value": 10}, {"value": 20}], value_selector=_value, domain_max=20)

    assert [p.display_height for p in plot.plot()] == pytest.approx([1000, 2000])


def test_scenario_empty_series():
    plot, _, _ = _make_plot([], value_selector=_value)
    points = plot.plot()

    assert points == []
    assert plot.render_plot(points) == []


def test_scenario_no_strategies_defaults_to_flat_columns():
    plot, _, _ = _make_plot([{"value": 10}, {"value": 20}])

    assert [column.value for column in plot.series] == [0, 0]
    assert [column.relative_value for column in plot.series] == [0, 0]
    assert [p.display_height for p in plot.plot()] == [0, 0]


def test_plot_without_any_stream_is_empty():
    plot, _, _ = _make_plot()

    assert not plot.subscribed
    assert plot.plot() == []


def test_subclass_strategies_are_used():
    source = InputSeries(SeriesStream([{"value": 8}]))
    plot = HalvingPlot(source, config=PlotConfiguration(column_height=1))

    assert plot.series[0].value == 8
    assert plot.series[0].relative_value == 4


def test_explicit_strategies_override_subclass():
    source = InputSeries(SeriesStream([{"value": 8}, {"value": 2}]))
    plot = HalvingPlot(source, value_selector=lambda row: row["value"] + 1, divisor_operator=max_divisor)

    assert [column.relative_value for column in plot.series] == pytest.approx([1.0, 3 / 9])


def test_emission_replaces_series_and_invalidates():
    stream = SeriesStream([{"value": 1}])
    plot, _, invalidations = _make_plot(value_selector=_value)
    plot.input_series = stream
    before = len(invalidations)
    stream.push([{"value": 2}, {"value": 3}])

    assert [column.value for column in plot.series] == [2, 3]
    assert len(invalidations) == before + 1


def test_replacing_stream_twice_keeps_only_latest_subscription():
    first = SeriesStream([{"value": 1}])
    second = SeriesStream([{"value": 2}])
    third = SeriesStream([{"value": 3}])
    plot, source, _ = _make_plot(value_selector=_value)

    source.input_series = first
    source.input_series = second
    source.input_series = third
    first.push([{"value": 100}])
    second.push([{"value": 200}])
    third.push([{"value": 4}, {"value": 5}])

    assert [column.value for column in plot.series] == [4, 5]
    assert first.receivers(first.emitted) == 0
    assert second.receivers(second.emitted) == 0
    assert third.receivers(third.emitted) == 1


def test_clearing_stream_drops_series():
    plot, source, invalidations = _make_plot([{"value": 1}], value_selector=_value)
    source.input_series = None

    assert plot.series == ()
    assert not plot.subscribed
    assert invalidations


def test_stream_failure_is_reported_and_series_kept():
    stream = SeriesStream([{"value": 1}])
    plot, _, _ = _make_plot(value_selector=_value)
    plot.input_series = stream
    failures = []
    plot.series_failed.connect(failures.append)
    error = ValueError("bad row")
    stream.fail(error)

    assert failures == [error]
    assert [column.value for column in plot.series] == [1]


def test_destroy_is_idempotent_and_unsubscribes():
    stream = SeriesStream([{"value": 1}])
    plot, source, _ = _make_plot(value_selector=_value)
    source.input_series = stream
    plot.destroy()
    plot.destroy()
    stream.push([{"value": 2}])
    source.input_series = SeriesStream([{"value": 3}])

    assert plot.series == ()
    assert not plot.subscribed
    assert stream.receivers(stream.emitted) == 0


def test_destroy_without_subscription_is_safe():
    plot, _, _ = _make_plot()
    plot.destroy()

    assert plot.plot() == []


# ------------------------------------------------------------------ configuration
def test_settings_use_private_storage_without_state():
    plot, _, invalidations = _make_plot()
    plot.column_height = 40
    plot.column_width = 6
    plot.column_spacing = 1
    plot.domain_max = 9

    assert (plot.column_height, plot.column_width, plot.column_spacing, plot.domain_max) == (
        40,
        6,
        1,
        9,
    )
    assert len(invalidations) == 4
    assert plot.state is None


def test_setting_same_value_still_invalidates():
    plot, _, invalidations = _make_plot(column_height=100)
    plot.column_height = 100
    plot.column_height = 100

    assert len(invalidations) == 2


def test_settings_delegate_to_state_container():
    state = PlotState()
    plot, _, invalidations = _make_plot(state=state, column_width=10)

    assert plot.column_width == 10
    plot.column_width = 25

    assert state.state["columnWidth"] == 25
    assert plot.column_width == 25
    assert invalidations == [True]


def test_state_container_values_win_over_options():
    state = PlotState({"columnHeight": 300})
    plot, _, invalidations = _make_plot(state=state, column_height=100)

    assert plot.column_height == 300
    state.set_state(columnHeight=50)
    assert plot.column_height == 50
    assert invalidations == [True]


def test_unrelated_state_changes_do_not_invalidate():
    state = PlotState()
    plot, _, invalidations = _make_plot(state=state)
    state.set_state(title="Visits")

    assert invalidations == []


def test_destroyed_plot_ignores_state_changes():
    state = PlotState()
    plot, _, invalidations = _make_plot(state=state)
    plot.destroy()
    state.set_state(domainMax=10)

    assert invalidations == []
    assert state.receivers(state.state_changed) == 0


def test_settings_are_not_validated():
    plot, _, _ = _make_plot()
    plot.column_width = -5

    assert plot.column_width == -5


# ------------------------------------------------------------------ render mapping
def test_render_plot_emits_rects_keyed_by_input():
    rows = [{"value": 10}, {"value": 20}]
    plot, _, _ = _make_plot(rows, value_selector=_value, column_height=100, divisor_operator=max_divisor)
    specs = plot.render_plot(plot.plot())

    assert specs == [
        RectSpec(key=rows[0], x=1, y=50, width=10, height=50),
        RectSpec(key=rows[1], x=13, y=0, width=10, height=100),
    ]
    assert specs[0].key is rows[0]


def test_plot_bounds_include_columns_overflowing_the_ceiling():
    plot, _, _ = _make_plot([{"value": 1}, {"value": 3}], value_selector=_value, column_height=10)
    points = plot.plot()

    assert plot.plot_bounds(points) == (0, -20, 24, 10)
    assert plot.plot_bounds([]) == (0.0, 0.0, 0.0, 0.0)


def test_plot_bounds_for_short_columns_end_at_column_height():
    plot, _, _ = _make_plot(
        [{"value": 1}, {"value": 2}],
        value_selector=_value,
        divisor_operator=max_divisor,
        column_height=10,
    )

    assert plot.plot_bounds(plot.plot()) == (0, 0, 24, 10)


def test_points_frame_tabulates_layout():
    rows = [{"value": 2}, {"value": 4}]
    plot, _, _ = _make_plot(rows, value_selector=_value, divisor_operator=max_divisor)
    frame = plot.points_frame()

    assert isinstance(frame, pd.DataFrame)
    assert list(frame["value"]) == [2, 4]
    assert list(frame["relative_value"]) == [0.5, 1.0]
    assert list(frame["x1"]) == [0, 12]
    assert frame["input"].iloc[0] is rows[0]


def test_points_frame_for_empty_plot_has_columns():
    plot, _, _ = _make_plot([])
    frame = plot.points_frame()

    assert frame.empty
    assert "display_height" in frame.columns
