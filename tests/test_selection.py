"""
Tests for per-page selection state, controls and the selection store.
"""

import pytest

from farm_data import ALL_FIELDS, OverlayKind, TimeRange
from selection import (
    CROPS_SELECTION, PRECISION_SELECTION, SelectionState, SelectionStore,
    field_control, overlay_control, secondary_field_control, select_field,
    select_overlay, select_secondary_field, select_time_range,
    time_range_control,
)


class TestDefaults:

    def test_precision_default(self):
        d = PRECISION_SELECTION.default
        assert (d.field, d.overlay, d.time_range) == ("Field A", OverlayKind.NDVI, TimeRange.SEVEN_DAYS)
        assert d.secondary_field == "Field B"

    def test_crops_default(self):
        d = CROPS_SELECTION.default
        assert (d.field, d.overlay, d.time_range) == (ALL_FIELDS, OverlayKind.NDVI, TimeRange.WEEKLY)


class TestTransitions:

    def setup_method(self):
        self.spec = PRECISION_SELECTION
        self.state = self.spec.default

    def test_overlay_leaves_field_and_range(self):
        new = select_overlay(self.spec, self.state, OverlayKind.MOISTURE)
        assert new.overlay is OverlayKind.MOISTURE
        assert (new.field, new.time_range) == (self.state.field, self.state.time_range)
        assert self.state.overlay is OverlayKind.NDVI

    def test_field(self):
        assert select_field(self.spec, self.state, "Field C").field == "Field C"

    def test_secondary_field_is_independent(self):
        new = select_secondary_field(self.spec, self.state, "Field A")
        assert new.secondary_field == "Field A"
        assert new.field == self.state.field

    def test_time_range(self):
        assert select_time_range(self.spec, self.state, TimeRange.NINETY_DAYS).time_range is TimeRange.NINETY_DAYS

    def test_invalid_values_rejected(self):
        with pytest.raises(ValueError):
            select_field(self.spec, self.state, "Field D")
        with pytest.raises(ValueError):
            select_time_range(self.spec, self.state, TimeRange.MONTHLY)
        with pytest.raises(ValueError):
            select_field(CROPS_SELECTION, CROPS_SELECTION.default, "Field Z")


class TestControls:

    def test_controls_offer_only_valid_members(self):
        state = PRECISION_SELECTION.default
        assert field_control(PRECISION_SELECTION, state).choices == ("Field A", "Field B", "Field C")
        assert overlay_control(PRECISION_SELECTION, state).choices == tuple(OverlayKind)
        assert time_range_control(PRECISION_SELECTION, state).choices == (
            TimeRange.SEVEN_DAYS, TimeRange.THIRTY_DAYS, TimeRange.NINETY_DAYS)

    def test_current_value(self):
        state = CROPS_SELECTION.default
        assert field_control(CROPS_SELECTION, state).current == ALL_FIELDS
        assert time_range_control(CROPS_SELECTION, state).current is TimeRange.WEEKLY
        assert secondary_field_control(PRECISION_SELECTION, PRECISION_SELECTION.default).current == "Field B"


class TestSelectionStore:

    def setup_method(self):
        self.session = {}
        self.store = SelectionStore(self.session)

    def test_get_initialises_from_default(self):
        assert self.store.get(CROPS_SELECTION) == CROPS_SELECTION.default
        assert "selection::crops" in self.session

    def test_update_touches_only_its_page(self):
        precision = self.store.get(PRECISION_SELECTION)
        crops = self.store.get(CROPS_SELECTION)
        self.session["shell_state"] = "untouched"

        self.store.apply(PRECISION_SELECTION, select_overlay, OverlayKind.TEMPERATURE)

        assert self.store.get(PRECISION_SELECTION).overlay is OverlayKind.TEMPERATURE
        assert self.store.get(PRECISION_SELECTION).field == precision.field
        assert self.store.get(CROPS_SELECTION) == crops
        assert self.session["shell_state"] == "untouched"

    def test_invalid_apply_keeps_state(self):
        self.store.get(PRECISION_SELECTION)
        with pytest.raises(ValueError):
            self.store.apply(PRECISION_SELECTION, select_field, "Field D")
        assert self.store.get(PRECISION_SELECTION) == PRECISION_SELECTION.default

    def test_release_inactive_discards_other_pages(self):
        self.store.apply(CROPS_SELECTION, select_field, "Field B")
        self.store.get(PRECISION_SELECTION)
        self.session["shell_state"] = "kept"

        released = self.store.release_inactive("precision")

        assert released == ["selection::crops"]
        assert "selection::precision" in self.session
        assert self.session["shell_state"] == "kept"
        # remounting starts again from the default
        assert self.store.get(CROPS_SELECTION).field == ALL_FIELDS

    def test_release_all(self):
        self.store.get(PRECISION_SELECTION)
        self.store.get(CROPS_SELECTION)
        self.store.release_inactive(None)
        assert not any(k.startswith(SelectionStore.KEY_PREFIX) for k in self.session)

    def test_changes_are_logged(self, log_file):
        self.store.apply(PRECISION_SELECTION, select_overlay, OverlayKind.MOISTURE)
        assert "Selection [precision]" in log_file.read_text(encoding="utf-8")

    def test_state_is_frozen(self):
        state = SelectionState("Field A", OverlayKind.NDVI, TimeRange.SEVEN_DAYS)
        with pytest.raises(AttributeError):
            state.field = "Field B"
