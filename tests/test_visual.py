from __future__ import annotations

from typing import Any

import pytest

from barrace.anims.clock import VirtualClock
from barrace.anims.state import Status
from barrace.core.constants import WAITING_MESSAGE
from barrace.data.dataview import Column, DataView
from barrace.visual import Host, Visual

from conftest import make_view


class RecordingPalette:
    def __init__(self) -> None:
        self.calls: list[str] = []

    def get_color(self, name: str) -> str:
        self.calls.append(name)
        return f"#{len(self.calls):06x}"


class RecordingSelection:
    def __init__(self) -> None:
        self.calls: list[tuple[Any, tuple[float, float]]] = []

    def show_context_menu(self, identity: Any, position: tuple[float, float]) -> None:
        self.calls.append((identity, position))


SETTINGS = {"barsToShow": 2, "intervalTiming": 100, "showControls": True}


def make_visual(axes, **host_kwargs) -> tuple[Visual, VirtualClock, RecordingPalette]:
    palette = RecordingPalette()
    clock = VirtualClock()
    visual = Visual(axes, Host(palette=palette, **host_kwargs), clock)
    return visual, clock, palette


def test_missing_roles_show_placeholder_and_do_not_start(axes, race_rows) -> None:
    visual, clock, _ = make_visual(axes)
    view = DataView(columns=(Column("name", frozenset({"labels"})),), rows=(("A",),))

    assert visual.update(view, (600, 300), SETTINGS) is False
    assert visual.scheduler is None
    assert visual.scene.message_text.get_text() == WAITING_MESSAGE
    assert clock.pending == 0

    assert visual.update(make_view(race_rows), (600, 300), SETTINGS) is True
    assert visual.scene.message_text is None


def test_update_renders_first_snapshot_and_starts_playback(axes, race_rows) -> None:
    visual, clock, _ = make_visual(axes)

    assert visual.update(make_view(race_rows), (600, 300), SETTINGS)

    assert visual.scheduler.status is Status.RUNNING
    assert set(visual.scene.bars) == {"A", "B"}
    assert visual.scene.period_text.get_text() == "2000"
    assert visual.scene.sub_period_text.get_text() == "Jan"
    assert visual.scene.control_text.get_text() == "Pause"
    assert clock.pending == 1


def test_ticks_reconcile_bars_and_update_period_text(axes, race_rows) -> None:
    visual, clock, _ = make_visual(axes)
    visual.update(make_view(race_rows), (600, 300), SETTINGS)

    clock.step()
    visual.draw(clock.time() + 1)
    assert set(visual.scene.bars) == {"A", "B"}
    assert visual.scene.sub_period_text.get_text() == "Feb"

    clock.step()
    assert set(visual.scene.bars) == {"A", "B", "C"}
    visual.draw(clock.time() + 1)
    assert set(visual.scene.bars) == {"A", "C"}
    assert visual.scene.sub_period_text.get_text() == "Mar"


def test_value_labels_interpolate_from_prior_value(axes, race_rows) -> None:
    visual, clock, _ = make_visual(axes)
    visual.update(make_view(race_rows), (600, 300), {**SETTINGS, "valueFormat": ",.1f"})
    clock.step()

    visual.scene.render(0.5)
    assert visual.scene.bars["B"].value_label.get_text() == "7.0"

    visual.scene.render(1.0)
    assert visual.scene.bars["B"].value_label.get_text() == "9.0"


def test_finish_and_control_clicks_toggle_label(axes, race_rows) -> None:
    visual, clock, _ = make_visual(axes)
    visual.update(make_view(race_rows), (600, 300), SETTINGS)

    visual.click_control()
    assert visual.scheduler.status is Status.PAUSED
    assert visual.scene.control_text.get_text() == "Play"

    visual.click_control()
    assert visual.scene.control_text.get_text() == "Pause"

    clock.run()
    assert visual.scheduler.status is Status.FINISHED
    assert visual.scene.control_text.get_text() == "Play"


def test_controls_hidden_when_disabled(axes, race_rows) -> None:
    visual, _, _ = make_visual(axes)
    visual.update(make_view(race_rows), (600, 300), {"barsToShow": 2})

    assert visual.scene.control_text.get_text() == ""


def test_colors_are_resolved_once_per_name(axes, race_rows) -> None:
    visual, clock, palette = make_visual(axes)
    visual.update(make_view(race_rows), (600, 300), SETTINGS)
    colors = {name: visual.scene.bars[name].bar.get_facecolor() for name in visual.scene.bars}

    clock.run()
    visual.update(make_view(race_rows), (600, 300), SETTINGS)

    assert palette.calls == ["A", "B", "C"]
    for name, color in colors.items():
        assert visual.scene.bars[name].bar.get_facecolor() == color


def test_context_menu_reports_bar_under_pointer(axes, race_rows) -> None:
    selection = RecordingSelection()
    visual, _, _ = make_visual(axes, selection_manager=selection)
    visual.update(make_view(race_rows), (600, 300), SETTINGS)

    bar = visual.scene.bars["A"].bar
    x = bar.get_x() + bar.get_width() / 2
    y = bar.get_y() + bar.get_height() / 2
    visual.context_menu(x, y)
    visual.context_menu(599, 299)

    assert selection.calls == [("A", (x, y)), (None, (599, 299))]


def test_paging_requests_more_data_for_segmented_views(axes, race_rows) -> None:
    fetches: list[bool] = []

    def fetch_more() -> bool:
        fetches.append(True)
        return False

    visual, _, _ = make_visual(axes, fetch_more_data=fetch_more)
    visual.update(make_view(race_rows, segment=True), (600, 300), SETTINGS)
    visual.update(make_view(race_rows), (600, 300), SETTINGS)

    assert fetches == [True]
    assert visual.windows_loaded == 2


def test_new_update_stops_previous_playback(axes, race_rows) -> None:
    visual, clock, _ = make_visual(axes)
    visual.update(make_view(race_rows), (600, 300), SETTINGS)
    first = visual.scheduler

    visual.update(make_view(race_rows), (600, 300), SETTINGS)

    assert first.status is Status.IDLE
    assert clock.pending == 1


def test_show_snapshot_stops_and_renders_requested_key(axes, race_rows) -> None:
    visual, clock, _ = make_visual(axes)
    visual.update(make_view(race_rows), (600, 300), SETTINGS)

    snapshot = visual.show_snapshot(1.02)

    assert snapshot.names == ["C", "A"]
    assert set(visual.scene.bars) == {"C", "A"}
    assert clock.pending == 0


def test_failed_render_pauses_and_shows_play(axes, race_rows, monkeypatch) -> None:
    visual, clock, _ = make_visual(axes)
    visual.update(make_view(race_rows), (600, 300), SETTINGS)

    def broken(plan, scale) -> None:
        raise RuntimeError("artist failed")

    monkeypatch.setattr(visual.scene, "apply", broken)
    with pytest.raises(RuntimeError):
        clock.step()

    assert visual.scheduler.status is Status.PAUSED
    assert visual.scene.control_text.get_text() == "Play"
    assert clock.pending == 0

    monkeypatch.undo()
    visual.click_control()
    assert visual.scene.control_text.get_text() == "Pause"
    assert clock.pending == 1
