"""Host-facing bar chart race visual.

Wires a data view and options into the engine: role mapping, record
building, the scheduler and the binder, with a RaceScene as the rendering
target. The host supplies the palette, the selection manager and paging.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Protocol

import matplotlib.pyplot as plt

from .anims.clock import Clock
from .anims.reconcile import ReconciliationBinder
from .anims.scale import ScaleModel
from .anims.scene import RaceScene
from .anims.scheduler import AnimationScheduler, Transition
from .anims.snapshot import Snapshot
from .anims.state import Status
from .core.cache import ColorCache
from .core.colors import ColorPalette
from .core.constants import WAITING_MESSAGE
from .core.formatting import compile_format
from .data.dataview import DataView
from .data.records import build_records
from .data.roles import MissingRoleError, map_roles
from .data.store import TimeSeriesStore
from .settings import VisualOptions, parse_settings

logger = logging.getLogger(__name__)


class Palette(Protocol):
    def get_color(self, name: str) -> str: ...


class SelectionManager(Protocol):
    def show_context_menu(self, identity: Any, position: tuple[float, float]) -> None: ...


@dataclass
class Host:
    palette: Palette
    selection_manager: SelectionManager | None = None
    fetch_more_data: Callable[[], bool] | None = None


class Visual:
    """A bar chart race bound to one axes.

    Args:
        ax: Axes used as the rendering surface.
        host: Host collaborators.
        clock: Event loop driving playback.
    """

    def __init__(self, ax: plt.Axes, host: Host, clock: Clock) -> None:
        self.ax = ax
        self.host = host
        self.clock = clock
        self.colors = ColorCache()
        self.options = VisualOptions()
        self.scene: RaceScene | None = None
        self.scheduler: AnimationScheduler | None = None
        self.binder: ReconciliationBinder | None = None
        self.viewport: tuple[float, float] = (0.0, 0.0)
        self.windows_loaded = 0
        self.transition_started: float | None = None
        self.transition_duration: float = 0.0

    def _color_for(self, name: str) -> str:
        return self.colors.get(name, self.host.palette.get_color)

    def _fetch_more(self, data_view: DataView) -> None:
        self.windows_loaded += 1
        if not data_view.segment or self.host.fetch_more_data is None:
            logger.debug(
                "All data loaded: %d rows over %d fetches",
                len(data_view.rows),
                self.windows_loaded,
            )
            return
        if self.host.fetch_more_data():
            logger.info("Requested another data page after %d rows", len(data_view.rows))
        else:
            logger.info(
                "Host refused more data after %d fetches; continuing with %d rows",
                self.windows_loaded,
                len(data_view.rows),
            )

    def update(
        self,
        data_view: DataView,
        viewport: tuple[float, float],
        objects: Mapping[str, Any] | None = None,
    ) -> bool:
        """Rebuild the visual for a new data view.

        Args:
            data_view: Columns and rows from the host.
            viewport: (width, height) in pixels.
            objects: Host option values.

        Returns:
            True if playback started, False when waiting for fields or data.
        """
        self.teardown()
        self.options = parse_settings(objects)
        self.viewport = viewport
        self._fetch_more(data_view)

        width, height = viewport
        self.scene = RaceScene(
            self.ax, width, height, self.options, compile_format(self.options.value_format)
        )
        try:
            roles = map_roles(data_view.columns)
        except MissingRoleError as e:
            logger.info("Waiting for fields: %s", ", ".join(e.missing))
            self.scene.show_message(WAITING_MESSAGE)
            return False

        store = TimeSeriesStore(build_records(data_view.rows, roles, self._color_for))
        top_n = self.options.bars_to_show
        self.binder = ReconciliationBinder(top_n)
        self.scheduler = AnimationScheduler(
            store,
            self.clock,
            top_n=top_n,
            interval_ms=self.options.interval_timing,
            loop=self.options.repeat_loop,
            on_transition=self._on_transition,
            on_finished=self._on_finished,
        )
        if store.is_empty:
            logger.info("No rows to animate")
            return False

        first = self.scheduler.snapshot
        self.scene.apply(self.binder.bind(first, 0), self._scale(first))
        self.scene.render(1.0)
        self.scene.set_period(first)
        self.scheduler.play()
        self._refresh_control()
        return True

    def _scale(self, snapshot: Snapshot) -> ScaleModel:
        width, height = self.viewport
        return ScaleModel(snapshot, width, height, self.options.bars_to_show)

    def _on_transition(self, transition: Transition) -> None:
        try:
            plan = self.binder.bind(transition.current, transition.duration_ms)
            self.scene.apply(plan, self._scale(transition.current))
            self.scene.set_period(transition.current)
        except Exception:
            # the scheduler pauses on a failed transition
            if self.options.show_controls:
                self.scene.set_control_label("Play")
            raise
        self.transition_started = self.clock.time()
        self.transition_duration = transition.duration_ms / 1000.0

    def _on_finished(self) -> None:
        self._refresh_control()

    def _refresh_control(self) -> None:
        if self.scene is None:
            return
        if not self.options.show_controls or self.scheduler is None:
            self.scene.set_control_label("")
        elif self.scheduler.status is Status.RUNNING:
            self.scene.set_control_label("Pause")
        else:
            self.scene.set_control_label("Play")

    def draw(self, now: float | None = None) -> None:
        """Render the in-flight transition at the clock's current time."""
        if self.scene is None or self.transition_started is None:
            return
        now = self.clock.time() if now is None else now
        elapsed = now - self.transition_started
        t = 1.0 if self.transition_duration <= 0 else elapsed / self.transition_duration
        self.scene.render(min(1.0, t))

    def click_control(self) -> None:
        """Play/pause control click."""
        if self.scheduler is None:
            return
        self.scheduler.toggle()
        self._refresh_control()

    def show_snapshot(self, time_key: float) -> Snapshot:
        """Stop playback and show the snapshot at ``time_key``."""
        if self.scheduler is None:
            raise RuntimeError("no data loaded")
        self.scheduler.stop()
        snapshot = self.scheduler.computer.compute(time_key)
        self.scene.apply(self.binder.bind(snapshot, 0), self._scale(snapshot))
        self.scene.render(1.0)
        self.scene.set_period(snapshot)
        self._refresh_control()
        return snapshot

    def context_menu(self, x: float, y: float) -> None:
        """Forward a context-menu request at pixel ``(x, y)`` to the host."""
        manager = self.host.selection_manager
        if manager is None:
            return
        key = self.scene.hit_test(x, y) if self.scene is not None else None
        manager.show_context_menu(key, (x, y))

    def teardown(self) -> None:
        if self.scheduler is not None:
            self.scheduler.stop()
        self.scheduler = None
        self.transition_started = None


def default_host(**kwargs: Any) -> Host:
    """Host with a matplotlib palette and no selection or paging."""
    return Host(palette=ColorPalette(), **kwargs)
