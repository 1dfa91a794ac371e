"""
Page selection state for AgriMind AI dashboard
Per-page field / overlay / time-range selection, the controls that change
it, and a store that keeps one state per mounted page.
"""

from dataclasses import dataclass, replace

from farm_data import (
    ALL_FIELDS, CONFIG, MAP_FIELDS, SENSOR_FIELDS, OverlayKind, TimeRange,
    log_message,
)


@dataclass(frozen=True)
class SelectionState:
    field: str
    overlay: OverlayKind
    time_range: TimeRange
    secondary_field: str = None


@dataclass(frozen=True)
class PageSelectionSpec:
    """Valid choices and the mount-time default for one page."""
    page_id: str
    fields: tuple
    time_ranges: tuple
    default: SelectionState
    overlays: tuple = tuple(OverlayKind)
    secondary_fields: tuple = ()


@dataclass(frozen=True)
class Control:
    current: object
    choices: tuple


def _require(value, choices, what):
    if value not in choices:
        raise ValueError(f"{value!r} is not a valid {what}; choose one of {list(choices)}")


def _validate_spec(spec):
    d = spec.default
    _require(d.field, spec.fields, "field")
    _require(d.overlay, spec.overlays, "overlay")
    _require(d.time_range, spec.time_ranges, "time range")
    if spec.secondary_fields:
        _require(d.secondary_field, spec.secondary_fields, "field")
    return spec


# ---------------------------------------------------------------------------
# Page specs
# ---------------------------------------------------------------------------

_PRECISION_DEFAULTS = CONFIG["pages"]["precision"]
_CROPS_DEFAULTS = CONFIG["pages"]["crops"]

PRECISION_SELECTION = _validate_spec(PageSelectionSpec(
    page_id="precision",
    fields=SENSOR_FIELDS,
    time_ranges=(TimeRange.SEVEN_DAYS, TimeRange.THIRTY_DAYS, TimeRange.NINETY_DAYS),
    secondary_fields=SENSOR_FIELDS,
    default=SelectionState(
        field=_PRECISION_DEFAULTS["default_field"],
        overlay=OverlayKind(_PRECISION_DEFAULTS["default_overlay"]),
        time_range=TimeRange(_PRECISION_DEFAULTS["default_time_range"]),
        secondary_field=_PRECISION_DEFAULTS["default_fertilizer_field"],
    ),
))

CROPS_SELECTION = _validate_spec(PageSelectionSpec(
    page_id="crops",
    fields=(ALL_FIELDS,) + MAP_FIELDS,
    time_ranges=(TimeRange.WEEKLY, TimeRange.MONTHLY),
    default=SelectionState(
        field=_CROPS_DEFAULTS["default_field"],
        overlay=OverlayKind(_CROPS_DEFAULTS["default_overlay"]),
        time_range=TimeRange(_CROPS_DEFAULTS["default_time_range"]),
    ),
))


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------

def select_field(spec, state, field):
    _require(field, spec.fields, "field")
    return replace(state, field=field)


def select_secondary_field(spec, state, field):
    _require(field, spec.secondary_fields, "field")
    return replace(state, secondary_field=field)


def select_overlay(spec, state, overlay):
    _require(overlay, spec.overlays, "overlay")
    return replace(state, overlay=overlay)


def select_time_range(spec, state, time_range):
    _require(time_range, spec.time_ranges, "time range")
    return replace(state, time_range=time_range)


# ---------------------------------------------------------------------------
# Controls
# ---------------------------------------------------------------------------

def field_control(spec, state):
    return Control(state.field, spec.fields)


def secondary_field_control(spec, state):
    return Control(state.secondary_field, spec.secondary_fields)


def overlay_control(spec, state):
    return Control(state.overlay, spec.overlays)


def time_range_control(spec, state):
    return Control(state.time_range, spec.time_ranges)


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

class SelectionStore:
    """Keeps one SelectionState per page inside a session mapping.

    Each page's state lives under its own key, so pages never share or
    overwrite each other's selection. ``get`` initialises a page from its
    default when it mounts; ``release_inactive`` drops every other page's
    state when the route changes.
    """

    KEY_PREFIX = "selection::"

    def __init__(self, session):
        self._session = session

    def key(self, spec):
        return f"{self.KEY_PREFIX}{spec.page_id}"

    def get(self, spec):
        key = self.key(spec)
        if key not in self._session:
            self._session[key] = spec.default
        return self._session[key]

    def update(self, spec, state):
        previous = self.get(spec)
        self._session[self.key(spec)] = state
        if state != previous:
            log_message(f"Selection [{spec.page_id}]: {_describe(previous)} -> {_describe(state)}")
        return state

    def apply(self, spec, transition, value):
        """Run a select_* transition against the page's current state and store it."""
        return self.update(spec, transition(spec, self.get(spec), value))

    def release_inactive(self, active_page_id=None):
        keep = f"{self.KEY_PREFIX}{active_page_id}" if active_page_id else None
        stale = [k for k in list(self._session.keys())
                 if str(k).startswith(self.KEY_PREFIX) and k != keep]
        for key in stale:
            del self._session[key]
        return stale


def _describe(state):
    parts = [state.field, state.overlay.value, state.time_range.value]
    if state.secondary_field:
        parts.append(f"fertilizer={state.secondary_field}")
    return "/".join(parts)
