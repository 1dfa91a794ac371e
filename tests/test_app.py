"""
End-to-end tests: drive app.py through Streamlit's AppTest harness.
"""

import pytest
from streamlit.testing.v1 import AppTest

from farm_data import OverlayKind, TimeRange
from shell import ShellState


def _app(path=None):
    at = AppTest.from_file("../app.py", default_timeout=30)
    if path is not None:
        at.session_state["route_path"] = path
    return at.run()


def _markdown(at):
    return "\n".join(m.value for m in at.markdown)


def _nav(scope, path):
    return f"nav_{scope}_{path}"


class TestPagesRender:

    @pytest.mark.parametrize("path, heading", [
        ("/dashboard", "Good morning"),
        ("/dashboard/precision", "Precision Farming"),
        ("/dashboard/crops", "Crop Monitoring"),
        ("/dashboard/machinery", "not available in this demo"),
        ("/dashboard/settings", "not available in this demo"),
    ])
    def test_dashboard_page(self, path, heading):
        at = _app(path)
        assert not at.exception
        assert heading in _markdown(at)
        assert at.button(key=_nav("side", path)).proto.type == "primary"

    def test_unknown_dashboard_route_gets_placeholder(self, log_file):
        at = _app("/dashboard/nowhere")
        assert not at.exception
        assert "Page not found" in _markdown(at)
        assert "Unknown route: /dashboard/nowhere" in log_file.read_text(encoding="utf-8")

    def test_route_markup_is_escaped(self):
        at = _app('/dashboard/<img src=x onerror="alert(1)">')
        assert not at.exception
        html = _markdown(at)
        assert "Page not found" in html
        assert "<img src=x onerror" not in html
        assert "/dashboard/&lt;img src=x onerror=&quot;alert(1)&quot;&gt;" in html

    def test_alert_feed_badges(self):
        at = _app("/dashboard/crops")
        assert "5 active" in _markdown(at)

    def test_pricing_has_no_shell(self):
        at = _app("/pricing")
        assert not at.exception
        assert not any((b.key or "").startswith("nav_") for b in at.button)
        at.button(key="handoff_dashboard").click().run()
        assert at.session_state["route_path"] == "/dashboard"
        assert "Good morning" in _markdown(at)


class TestShell:

    def test_collapse_hides_labels_keeps_icons_and_highlight(self):
        at = _app("/dashboard/crops")
        assert "Crop Monitoring" in at.button(key=_nav("side", "/dashboard/crops")).label
        assert "👑" in at.button(key=_nav("side", "/dashboard/crops")).label

        at.button(key="shell_collapse_toggle").click().run()

        assert at.session_state["shell_state"].collapsed is True
        for entry_key in ("/dashboard", "/dashboard/precision", "/dashboard/crops"):
            label = at.button(key=_nav("side", entry_key)).label
            assert "Monitoring" not in label and "Overview" not in label
            assert "👑" not in label
            assert label.strip()
        assert at.button(key=_nav("side", "/dashboard/crops")).proto.type == "primary"

        at.button(key="shell_collapse_toggle").click().run()
        assert "Crop Monitoring" in at.button(key=_nav("side", "/dashboard/crops")).label

    def test_selecting_entry_from_mobile_panel_closes_it(self):
        at = _app()
        at.button(key="shell_menu_open").click().run()
        assert at.session_state["shell_state"].mobile_panel_open is True

        at.button(key=_nav("mobile", "/dashboard/crops")).click().run()

        assert at.session_state["shell_state"] == ShellState(collapsed=False, mobile_panel_open=False)
        assert at.session_state["route_path"] == "/dashboard/crops"
        assert "Crop Monitoring" in _markdown(at)

    def test_backdrop_closes_panel_without_navigating(self):
        at = _app("/dashboard/precision")
        at.button(key="shell_menu_open").click().run()
        at.button(key="shell_backdrop").click().run()

        assert at.session_state["shell_state"].mobile_panel_open is False
        assert at.session_state["route_path"] == "/dashboard/precision"

    def test_shell_state_does_not_touch_selection(self):
        at = _app("/dashboard/precision")
        at.radio(key="precision_overlay").set_value(OverlayKind.TEMPERATURE).run()
        at.button(key="shell_collapse_toggle").click().run()
        assert at.session_state["selection::precision"].overlay is OverlayKind.TEMPERATURE


class TestPrecisionSelection:

    def test_overlay_switch_keeps_field(self):
        at = _app("/dashboard/precision")
        state = at.session_state["selection::precision"]
        assert (state.field, state.overlay, state.time_range) == (
            "Field A", OverlayKind.NDVI, TimeRange.SEVEN_DAYS)
        assert "Low</span>" in _markdown(at)

        at.radio(key="precision_overlay").set_value(OverlayKind.MOISTURE).run()

        state = at.session_state["selection::precision"]
        assert state.overlay is OverlayKind.MOISTURE
        assert state.field == "Field A"
        assert state.time_range is TimeRange.SEVEN_DAYS
        html = _markdown(at)
        for label in ("Dry", "Moderate", "Wet"):
            assert f"{label}</span>" in html
        assert "Low</span>" not in html
        assert "69%" in html

    def test_field_drives_gauge(self):
        at = _app("/dashboard/precision")
        at.selectbox(key="precision_field").select("Field C").run()
        assert at.session_state["selection::precision"].field == "Field C"
        assert "53%" in _markdown(at)
        assert at.session_state["selection::precision"].secondary_field == "Field B"

    def test_time_range(self):
        at = _app("/dashboard/precision")
        at.radio(key="precision_time_range").set_value(TimeRange.THIRTY_DAYS).run()
        assert not at.exception
        state = at.session_state["selection::precision"]
        assert state.time_range is TimeRange.THIRTY_DAYS
        assert state.overlay is OverlayKind.NDVI


class TestPageIndependence:

    def test_crops_selection_does_not_leak(self):
        at = _app("/dashboard/crops")
        at.selectbox(key="crops_field").select("Field B").run()
        at.radio(key="crops_overlay").set_value(OverlayKind.TEMPERATURE).run()

        assert "selection::precision" not in at.session_state
        assert at.session_state["shell_state"] == ShellState()
        assert "Crop Health Trend · Field B" in _markdown(at)

        at.button(key=_nav("side", "/dashboard/precision")).click().run()

        assert "selection::crops" not in at.session_state
        precision = at.session_state["selection::precision"]
        assert precision.overlay is OverlayKind.NDVI

        at.button(key=_nav("side", "/dashboard/crops")).click().run()
        crops = at.session_state["selection::crops"]
        assert crops.field == "All Fields"
        assert crops.overlay is OverlayKind.NDVI
