"""
Dashboard pages for AgriMind AI
Overview, Precision Farming and Crop Monitoring compose the widgets with
their page's selection state; every other dashboard route gets a
placeholder panel. Routes outside /dashboard (landing, pricing, auth)
belong to the marketing site and only get a hand-off panel here.
"""

from dataclasses import dataclass
from html import escape

import streamlit as st

from alert_engine import (
    format_active_count, get_feed_summary, get_feed_tone, get_tone_color,
)
from farm_data import (
    ALL_FIELDS, CONFIG, DISEASE_DETECTIONS, DRONE_CAPTURES, FERTILIZER_PLAN,
    FIELD_ALERTS, FIELD_LINE_TONES, FIELD_STATS, IRRIGATION_PLAN, LAST_SCAN_LABEL,
    NUTRIENTS, OVERVIEW_INSIGHTS, OVERVIEW_KPIS, OVERVIEW_WEATHER, PRECISION_ALERTS,
    PREMIUM_MODULES, SENSOR_FIELDS, SENSORS, SOIL_TODAY, CROP_HEALTH,
    WEATHER_FORECAST, YIELD_PERFORMANCE, Icon, Tone, get_current_moisture,
    get_field_regions, get_health_headline, get_health_trend, get_moisture_trend,
    log_message,
)
from selection import (
    CROPS_SELECTION, PRECISION_SELECTION, field_control, overlay_control,
    secondary_field_control, select_field, select_overlay,
    select_secondary_field, select_time_range, time_range_control,
)
from shell import FOOTER_LINKS, NAV_ENTRIES, active_entry
from widgets import (
    OVERLAY_ICONS, ChartConfig, ChartStyle, SeriesSpec, build_chart, chart_color,
    render_alert_feed_html, render_badge_html, render_disease_card_html,
    render_drone_grid_html, render_field_map_html, render_forecast_html,
    render_gauge_html, render_insight_html, render_kpi_card_html,
    render_locked_card_html, render_nutrient_bars_html, render_sensor_grid_html,
    render_stat_card_html, render_weather_now_html, resolve_icon,
)

APP = CONFIG["app"]
CHART_OPTIONS = {'displayModeBar': False}


# ──────────────────────────────────────────────────────────────
# Shared page pieces
# ──────────────────────────────────────────────────────────────

def _page_header(title, subtitle):
    st.markdown(f"""
    <div class="page-header">
        <h1>{title}</h1>
        <p>{subtitle}</p>
    </div>
    """, unsafe_allow_html=True)


def _section(title, icon=None, badge=""):
    glyph = f'<span class="section-icon">{resolve_icon(icon)}</span>' if icon else ""
    st.markdown(f'<div class="section-label">{glyph}{title}{badge}</div>',
                unsafe_allow_html=True)


def _html(fragment):
    st.markdown(fragment, unsafe_allow_html=True)


def _feed_badge(alerts):
    return render_badge_html(format_active_count(alerts), get_feed_tone(alerts), "section-badge")


def _on_select(store, spec, transition, widget_key):
    store.apply(spec, transition, st.session_state[widget_key])


def _field_picker(store, spec, control, transition, name, label):
    key = f"{spec.page_id}_{name}"
    return st.selectbox(
        label, control.choices,
        index=control.choices.index(control.current),
        key=key, on_change=_on_select, args=(store, spec, transition, key),
        label_visibility="collapsed",
    )


def _toggle_group(store, spec, control, transition, name, label, format_func):
    key = f"{spec.page_id}_{name}"
    return st.radio(
        label, control.choices,
        index=control.choices.index(control.current),
        key=key, on_change=_on_select, args=(store, spec, transition, key),
        format_func=format_func, horizontal=True, label_visibility="collapsed",
    )


def _overlay_label(kind):
    return f"{resolve_icon(OVERLAY_ICONS[kind])} {kind.value}"


def _time_range_label(time_range):
    return time_range.value


# ──────────────────────────────────────────────────────────────
# Overview
# ──────────────────────────────────────────────────────────────

def render_overview(store=None):
    _page_header(f"Good morning, {APP['user_name']} 👋",
                 "Here's what's happening on your farm today.")

    for col, card in zip(st.columns(len(OVERVIEW_KPIS)), OVERVIEW_KPIS):
        with col:
            _html(render_kpi_card_html(card))

    col_yield, col_weather = st.columns([2, 1])
    with col_yield:
        _section("Yield Performance", badge=render_badge_html("Live", Tone.LEAF, "section-badge"))
        fig = build_chart(YIELD_PERFORMANCE, ChartConfig(
            x_key="month",
            series=(
                SeriesSpec("yield", "Actual", chart_color(Tone.LEAF)),
                SeriesSpec("predicted", "AI Predicted", chart_color(Tone.ACCENT), dashed=True),
            ),
            style=ChartStyle.AREA,
            show_legend=True,
        ))
        st.plotly_chart(fig, width='stretch', config=CHART_OPTIONS)
    with col_weather:
        _section("Weather")
        _html(render_weather_now_html(OVERVIEW_WEATHER))

    col_soil, col_crop, col_alerts = st.columns(3)
    with col_soil:
        _section("Soil Moisture Today")
        fig = build_chart(SOIL_TODAY, ChartConfig(
            x_key="time",
            series=(SeriesSpec("moisture", "Moisture", chart_color(Tone.SKY)),),
            unit="%", height=200,
        ))
        st.plotly_chart(fig, width='stretch', config=CHART_OPTIONS)
    with col_crop:
        _section("Crop Health")
        fig = build_chart(CROP_HEALTH, ChartConfig(
            x_key="name",
            series=(SeriesSpec("health", "Health", chart_color(Tone.LEAF)),),
            style=ChartStyle.BAR, horizontal=True, y_domain=(0, 100), unit="%", height=200,
        ))
        st.plotly_chart(fig, width='stretch', config=CHART_OPTIONS)
    with col_alerts:
        _section("AI Alerts", icon=Icon.BOT)
        _html("".join(render_insight_html(i) for i in OVERVIEW_INSIGHTS))

    for col, title in zip(st.columns(len(PREMIUM_MODULES)), PREMIUM_MODULES):
        with col:
            _html(render_locked_card_html(title))


# ──────────────────────────────────────────────────────────────
# Precision Farming
# ──────────────────────────────────────────────────────────────

def _irrigation_message(field):
    plan = IRRIGATION_PLAN
    return f"""
    <div class="agri-callout accent">
        <p><strong>{resolve_icon(Icon.DROPLETS)} Recommendation:</strong>
        Irrigate <strong>{field}</strong> at <strong>{plan['time']}</strong> for optimal moisture levels.
        Rain probability for tomorrow is {plan['rain_probability']}% — consider reducing
        irrigation volume by {plan['volume_reduction']}%.</p>
        {render_badge_html(f"{resolve_icon(Icon.CHECK)} {plan['confidence']}% confidence", Tone.LEAF)}
    </div>
    """


def _quick_stats_html():
    plan = IRRIGATION_PLAN
    rows = (
        ("Last Irrigated", plan["last_irrigated"], None),
        ("Water Saved", plan["water_saved"], Tone.LEAF),
        ("Next Window", plan["next_window"], Tone.ACCENT),
    )
    body = "".join(
        f'<div class="quick-stat"><span>{label}</span>'
        f'<strong style="color:{get_tone_color(tone) if tone else "inherit"};">{value}</strong></div>'
        for label, value, tone in rows
    )
    return f'<div class="quick-stats">{body}</div>'


def _fertilizer_message(field):
    plan = FERTILIZER_PLAN
    return f"""
    <div class="agri-callout leaf">
        <p><strong>{resolve_icon(Icon.SPROUT)} AI Insight:</strong>
        Reduce nitrogen usage by <strong>{plan['nitrogen_reduction']}%</strong> in {field}.
        Current levels exceed crop requirements, leading to potential runoff.</p>
        {render_badge_html(f"{resolve_icon(Icon.CHECK)} {plan['confidence']}% confidence", Tone.LEAF)}
    </div>
    """


def render_precision_farming(store):
    spec = PRECISION_SELECTION
    state = store.get(spec)

    _page_header("Precision Farming",
                 "Optimize irrigation, fertilizer and soil health using AI insights.")

    col_hero, col_trend = st.columns([3, 2])
    with col_hero:
        _section("AI Irrigation Recommendation", icon=Icon.BOT,
                 badge=render_badge_html("Action Needed Tomorrow", Tone.WARNING, "section-badge"))
        _html(_irrigation_message(state.field))

        col_gauge, col_forecast, col_stats = st.columns(3)
        with col_gauge:
            _field_picker(store, spec, field_control(spec, state), select_field,
                          "field", "Field")
            _html(render_gauge_html(get_current_moisture(state.field)))
        with col_forecast:
            st.caption("WEATHER FORECAST")
            _html(render_forecast_html(WEATHER_FORECAST))
        with col_stats:
            st.caption("QUICK STATS")
            _html(_quick_stats_html())

    with col_trend:
        _section("Soil Moisture Trends")
        _toggle_group(store, spec, time_range_control(spec, state), select_time_range,
                      "time_range", "Time range", _time_range_label)
        fig = build_chart(get_moisture_trend(state.time_range), ChartConfig(
            x_key="day",
            series=tuple(SeriesSpec(f, f, chart_color(FIELD_LINE_TONES[f])) for f in SENSOR_FIELDS),
            y_domain=(30, 100), unit="%", height=240, show_legend=True,
        ))
        st.plotly_chart(fig, width='stretch', config=CHART_OPTIONS)

    col_map, col_fert = st.columns([3, 2])
    with col_map:
        _section("Field Map", icon=Icon.LAYERS)
        _toggle_group(store, spec, overlay_control(spec, state), select_overlay,
                      "overlay", "Overlay", _overlay_label)
        _html(render_field_map_html(state.overlay, get_field_regions(), highlight=state.field))

    with col_fert:
        _section("Fertilizer Optimization", icon=Icon.FLASK)
        _field_picker(store, spec, secondary_field_control(spec, state), select_secondary_field,
                      "fertilizer_field", "Fertilizer field")
        _html(_fertilizer_message(state.secondary_field))
        _html(render_nutrient_bars_html(NUTRIENTS))

    col_sensors, col_alerts = st.columns([3, 2])
    with col_sensors:
        _section("Soil Sensor Status", icon=Icon.WIFI)
        _html(render_sensor_grid_html(SENSORS))
    with col_alerts:
        _section("AI Alerts Feed", icon=Icon.BELL,
                 badge=_feed_badge(PRECISION_ALERTS))
        st.caption(get_feed_summary(PRECISION_ALERTS))
        _html(render_alert_feed_html(PRECISION_ALERTS))


# ──────────────────────────────────────────────────────────────
# Crop Monitoring
# ──────────────────────────────────────────────────────────────

def _health_headline_html(field):
    latest, change = get_health_headline(field)
    tone = Tone.LEAF if change >= 0 else Tone.DESTRUCTIVE
    arrow = Icon.ARROW_UP_RIGHT if change >= 0 else Icon.ARROW_DOWN_RIGHT
    badge = render_badge_html(f"{resolve_icon(arrow)} {change:+d}% this month", tone)
    return f'<div class="health-headline"><span class="health-value">{latest}%</span>{badge}</div>'


def render_crop_monitoring(store):
    spec = CROPS_SELECTION
    state = store.get(spec)
    highlight = None if state.field == ALL_FIELDS else state.field

    _page_header("Crop Monitoring",
                 "Monitor crop health using satellite imagery and AI detection.")

    _section("Farm Field Overview", icon=Icon.SATELLITE,
             badge=render_badge_html(f"{resolve_icon(Icon.CLOCK)} Last scan: {LAST_SCAN_LABEL}",
                                     Tone.LEAF, "section-badge"))
    col_overlay, col_field = st.columns([3, 1])
    with col_overlay:
        _toggle_group(store, spec, overlay_control(spec, state), select_overlay,
                      "overlay", "Overlay", _overlay_label)
    with col_field:
        _field_picker(store, spec, field_control(spec, state), select_field, "field", "Field")
    _html(render_field_map_html(state.overlay, get_field_regions(), highlight=highlight))

    col_disease, col_drone = st.columns([2, 3])
    with col_disease:
        _section("AI Disease Detection", icon=Icon.SHIELD)
        _html("".join(render_disease_card_html(d) for d in DISEASE_DETECTIONS))
    with col_drone:
        _section("Recent Drone Captures", icon=Icon.CAMERA)
        _html(render_drone_grid_html(DRONE_CAPTURES))

    col_trend, col_stats = st.columns([3, 2])
    with col_trend:
        _section(f"Crop Health Trend · {state.field}", icon=Icon.ACTIVITY)
        _html(_health_headline_html(state.field))
        _toggle_group(store, spec, time_range_control(spec, state), select_time_range,
                      "time_range", "Period", _time_range_label)
        fig = build_chart(get_health_trend(state.time_range, state.field), ChartConfig(
            x_key="period",
            series=(SeriesSpec("health", "Health Index", chart_color(Tone.LEAF)),),
            y_domain=(60, 100), unit="%", height=220,
        ))
        st.plotly_chart(fig, width='stretch', config=CHART_OPTIONS)
    with col_stats:
        for stat in FIELD_STATS:
            _html(render_stat_card_html(stat))

    _section("Field Alert Feed", icon=Icon.ALERT_TRIANGLE, badge=_feed_badge(FIELD_ALERTS))
    st.caption(get_feed_summary(FIELD_ALERTS))
    _html(render_alert_feed_html(FIELD_ALERTS))


# ──────────────────────────────────────────────────────────────
# Placeholders and hand-off routes
# ──────────────────────────────────────────────────────────────

def render_placeholder(path):
    entry = active_entry(NAV_ENTRIES + FOOTER_LINKS, path)
    title = entry.label if entry else "Page not found"
    icon = entry.icon if entry else Icon.ALERT_TRIANGLE
    _page_header(title, "")
    _html(f"""
    <div class="agri-card placeholder-card">
        <span class="placeholder-icon">{resolve_icon(icon)}</span>
        <p>This module is not available in this demo.</p>
        <code>{escape(path)}</code>
    </div>
    """)


# Landing, pricing and auth screens live on the marketing site
EXTERNAL_ROUTES = {
    "/": ("Welcome to AgriMind AI", "Smart farming powered by AI."),
    "/pricing": ("Pricing", "Compare plans and upgrade to Pro on the AgriMind website."),
    "/login": ("Sign in", "Sign in on the AgriMind website to continue."),
    "/register": ("Create an account", "Registration is handled on the AgriMind website."),
    "/install": ("Install the app", "App installation is handled on the AgriMind website."),
}


def render_external_route(router, path):
    """Minimal panel for a route outside the dashboard; no shell."""
    title, message = EXTERNAL_ROUTES.get(path, ("Page not found", "There is nothing at this address."))
    if path not in EXTERNAL_ROUTES:
        log_message(f"Unknown route: {path}")
    _html(f"""
    <div class="handoff-panel">
        <div class="agri-brand"><span class="brand-mark">{resolve_icon(Icon.LEAF)}</span>
        <span class="brand-name">{APP['brand']}<span class="brand-suffix"> {APP['brand_suffix']}</span></span></div>
        <h1>{title}</h1>
        <p>{message}</p>
    </div>
    """)
    if st.button("Go to Dashboard", key="handoff_dashboard", type="primary"):
        router.navigate(APP["default_path"])
        st.rerun()


# ──────────────────────────────────────────────────────────────
# Route table
# ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Page:
    page_id: str
    render: object


PAGES = {
    "/dashboard": Page("overview", render_overview),
    "/dashboard/precision": Page(PRECISION_SELECTION.page_id, render_precision_farming),
    "/dashboard/crops": Page(CROPS_SELECTION.page_id, render_crop_monitoring),
}

# Shell routes that exist in the navigation but have no page yet
PLACEHOLDER_PATHS = tuple(
    e.path for e in NAV_ENTRIES + FOOTER_LINKS
    if e.path not in PAGES and e.path.startswith("/dashboard")
)


def resolve_page(path):
    """Return the Page for a dashboard path, or None when it has no page."""
    return PAGES.get(path)
