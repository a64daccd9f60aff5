"""barrace package public API.
This module re-exports the engine's building blocks from submodules
to provide a simplified interface.
"""

from .anims.clock import VirtualClock
from .anims.reconcile import Instruction, Phase, ReconcilePlan, ReconciliationBinder
from .anims.scale import Margins, ScaleModel
from .anims.scheduler import AnimationScheduler, Transition
from .anims.snapshot import Snapshot, SnapshotComputer, SnapshotEntry, compute_snapshot
from .anims.state import AnimationState, Status
from .core.cache import ColorCache, error_logged
from .core.colors import ColorPalette
from .core.formatting import compile_format
from .data.dataview import Column, DataView
from .data.records import DataRecord, build_records
from .data.roles import MissingRoleError, RoleAssignment, map_roles
from .data.store import TimeSeriesStore
from .settings import VisualOptions, parse_settings
from .visual import Host, Visual

__all__ = [
    "AnimationScheduler",
    "AnimationState",
    "ColorCache",
    "ColorPalette",
    "Column",
    "DataRecord",
    "DataView",
    "Host",
    "Instruction",
    "Margins",
    "MissingRoleError",
    "Phase",
    "ReconcilePlan",
    "ReconciliationBinder",
    "RoleAssignment",
    "ScaleModel",
    "Snapshot",
    "SnapshotComputer",
    "SnapshotEntry",
    "Status",
    "TimeSeriesStore",
    "Transition",
    "VirtualClock",
    "Visual",
    "VisualOptions",
    "build_records",
    "compile_format",
    "compute_snapshot",
    "error_logged",
    "map_roles",
    "parse_settings",
]
