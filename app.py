"""
AgriMind AI — Farm Dashboard
Operations dashboard for farm telemetry: soil moisture, sensor health,
crop disease risk and yield trends, on fixed sample data.

USAGE:
    streamlit run app.py

PAGES (?path=...):
    /dashboard            -> Overview: KPIs, yield, weather, soil, crop health
    /dashboard/precision  -> Precision Farming: irrigation, moisture trends,
                             field map, fertilizer, sensors, alert feed
    /dashboard/crops      -> Crop Monitoring: field map overlays, disease
                             detection, drone captures, health trend
    other /dashboard/...  -> "not available in this demo" placeholder
    /, /pricing, ...      -> hand-off panel for the marketing site

ARCHITECTURE:
    app.py (this file)  -> Page config, theme CSS, route dispatch
    shell.py            -> Sidebar / mobile panel / top bar + router
    views.py            -> Page layouts
    selection.py        -> Per-page field / overlay / time-range state
    widgets.py          -> Charts, gauge, field map, list and card renderers
    alert_engine.py     -> Severity and status styling, feed summaries
    farm_data.py        -> Sample datasets, slice accessors, config + logging
    config.yaml         -> Thresholds, layout, transitions, page defaults
"""

import streamlit as st

from farm_data import CONFIG, log_message
from selection import SelectionStore
from shell import Router, is_dashboard_route, render_shell
from views import PLACEHOLDER_PATHS, render_external_route, render_placeholder, resolve_page

# ──────────────────────────────────────────────────────────────
# Page config & theme
# ──────────────────────────────────────────────────────────────

st.set_page_config(
    page_title=CONFIG["app"]["page_title"],
    page_icon=CONFIG["app"]["page_icon"],
    layout="wide",
    initial_sidebar_state="expanded"
)

LAYOUT = CONFIG["layout"]
MOBILE_MAX = LAYOUT["mobile_breakpoint"] - 1

# ──────────────────────────────────────────────────────────────
# Custom CSS — field-green agronomy aesthetic
# ──────────────────────────────────────────────────────────────

THEME_CSS = """
<style>
    @import url('https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&family=Space+Grotesk:wght@500;600;700&display=swap');

    /* ── Root variables ── */
    :root {
        --leaf: hsl(122, 39%, 49%);
        --sky: hsl(199, 89%, 48%);
        --primary: hsl(142, 45%, 32%);
        --warning: hsl(45, 93%, 47%);
        --destructive: hsl(0, 72%, 51%);
        --accent: hsl(211, 78%, 46%);
        --earth: hsl(30, 45%, 42%);
        --muted: hsl(100, 12%, 94%);
        --muted-fg: hsl(120, 8%, 46%);
        --border: hsl(100, 12%, 88%);
        --card-bg: #ffffff;
        --sidebar-bg: hsl(150, 30%, 14%);
        --sidebar-fg: hsl(100, 20%, 92%);
    }

    /* ── Global typography ── */
    html, body, [class*="css"] { font-family: 'Inter', sans-serif; }
    h1, h2, h3 { font-family: 'Space Grotesk', sans-serif !important; }

    /* ── Transitions ── */
    @keyframes agri-fade {
        from { opacity: 0; }
        to { opacity: 1; }
    }
    @keyframes agri-grow {
        from { width: 0; }
    }

    /* ── Sidebar ── */
    section[data-testid="stSidebar"] {
        background: var(--sidebar-bg);
        color: var(--sidebar-fg);
    }
    section[data-testid="stSidebar"] .stButton > button {
        justify-content: flex-start;
        border: none !important;
        background: transparent;
        color: var(--sidebar-fg);
        white-space: nowrap;
        overflow: hidden;
    }
    section[data-testid="stSidebar"] .stButton > button[kind="primary"] {
        background: var(--leaf);
        color: #ffffff;
    }
    .agri-brand {
        display: flex;
        align-items: center;
        gap: 10px;
        padding: 6px 4px 12px;
        font-family: 'Space Grotesk', sans-serif;
        font-weight: 700;
        font-size: 1.15rem;
    }
    .brand-mark {
        display: inline-flex;
        align-items: center;
        justify-content: center;
        width: 34px;
        height: 34px;
        border-radius: 10px;
        background: linear-gradient(135deg, var(--primary), var(--leaf));
    }
    .brand-suffix { color: var(--leaf); }
    .nav-divider { height: 1px; background: rgba(255, 255, 255, 0.12); margin: 12px 0; }
    .plan-card {
        background: rgba(255, 255, 255, 0.06);
        border-radius: 10px;
        padding: 10px 12px;
        margin-bottom: 6px;
    }
    .plan-title { font-size: 0.75rem; font-weight: 600; margin: 0; }
    .plan-sub { font-size: 0.72rem; opacity: 0.6; margin: 2px 0 0; }

    /* ── Top bar ── */
    .topbar-title { font-size: 1.15rem !important; margin: 0 !important; padding: 4px 0 !important; }
    .topbar-user { display: flex; align-items: center; justify-content: flex-end; gap: 14px; }
    .topbar-bell { position: relative; font-size: 1.1rem; }
    .topbar-dot {
        position: absolute; top: 0; right: -2px;
        width: 8px; height: 8px; border-radius: 50%;
        background: var(--destructive);
    }
    .topbar-avatar {
        display: inline-flex; align-items: center; justify-content: center;
        width: 36px; height: 36px; border-radius: 50%;
        background: linear-gradient(135deg, var(--primary), var(--leaf));
        color: #ffffff; font-weight: 600; font-size: 0.85rem;
    }
    .agri-divider { height: 1px; background: var(--border); margin: 8px 0 20px; }

    /* ── Mobile panel ── */
    .st-key-shell_menu_open { display: none; }
    .st-key-shell_mobile_panel {
        position: fixed;
        inset: 0 auto 0 0;
        width: """ + str(LAYOUT["sidebar_width_expanded"]) + """px;
        z-index: 1000;
        padding: 16px 12px;
        overflow-y: auto;
        background: var(--sidebar-bg);
        color: var(--sidebar-fg);
        animation: agri-fade 0.2s ease-out;
    }
    .st-key-shell_backdrop button {
        position: fixed;
        inset: 0;
        z-index: 999;
        border: none;
        border-radius: 0;
        background: rgba(16, 24, 16, 0.5);
        color: transparent;
    }

    /* ── Cards ── */
    .agri-card {
        background: var(--card-bg);
        border: 1px solid var(--border);
        border-radius: 14px;
        padding: 18px;
        margin-bottom: 14px;
        box-shadow: 0 1px 3px rgba(16, 24, 16, 0.05);
        animation: agri-fade 0.4s ease-out;
    }
    .page-header h1 { font-size: 1.7rem !important; margin: 0 !important; padding: 0 !important; }
    .page-header p { color: var(--muted-fg); margin: 4px 0 18px; }
    .section-label {
        display: flex;
        align-items: center;
        gap: 8px;
        font-family: 'Space Grotesk', sans-serif;
        font-size: 1.02rem;
        font-weight: 600;
        margin: 12px 0 10px;
    }
    .section-badge { margin-left: 6px; }

    /* ── Badges ── */
    .agri-badge {
        display: inline-block;
        font-size: 0.7rem;
        font-weight: 500;
        border: 1px solid;
        border-radius: 999px;
        padding: 1px 8px;
        white-space: nowrap;
    }
    .agri-badge.capitalize { text-transform: capitalize; }
    .agri-callout { border-radius: 12px; padding: 12px 14px; margin-bottom: 14px; font-size: 0.88rem; }
    .agri-callout p { margin: 0 0 8px; }
    .agri-callout.accent { background: hsla(211, 78%, 46%, 0.05); border: 1px solid hsla(211, 78%, 46%, 0.12); }
    .agri-callout.leaf { background: hsla(122, 39%, 49%, 0.05); border: 1px solid hsla(122, 39%, 49%, 0.12); }

    /* ── KPI and stat cards ── */
    .kpi-head, .stat-head { display: flex; align-items: center; justify-content: space-between; }
    .kpi-icon {
        display: inline-flex; align-items: center; justify-content: center;
        width: 40px; height: 40px; border-radius: 10px;
    }
    .kpi-change { font-size: 0.75rem; font-weight: 500; color: var(--leaf); }
    .kpi-value { font-family: 'Space Grotesk', sans-serif; font-size: 1.55rem; font-weight: 700; margin: 12px 0 0; }
    .kpi-label, .stat-label { font-size: 0.82rem; color: var(--muted-fg); margin: 0; }
    .stat-head { justify-content: flex-start; gap: 8px; }
    .stat-body { display: flex; align-items: baseline; gap: 6px; margin-top: 6px; }
    .stat-value { font-family: 'Space Grotesk', sans-serif; font-size: 1.5rem; font-weight: 700; }
    .stat-unit { font-size: 0.8rem; color: var(--muted-fg); }
    .stat-trend { margin-left: auto; font-size: 0.78rem; font-weight: 600; }
    .health-headline { display: flex; align-items: center; gap: 10px; margin-bottom: 6px; }
    .health-value { font-family: 'Space Grotesk', sans-serif; font-size: 1.9rem; font-weight: 700; }

    /* ── Gauge ── */
    .agri-gauge { position: relative; margin: 8px auto; }
    .agri-gauge-label {
        position: absolute; inset: 0;
        display: flex; flex-direction: column; align-items: center; justify-content: center;
    }
    .agri-gauge-value { font-family: 'Space Grotesk', sans-serif; font-size: 1.6rem; font-weight: 700; }
    .agri-gauge-unit { font-size: 0.72rem; color: var(--muted-fg); }

    /* ── Field map ── */
    .agri-map {
        position: relative;
        border: 1px solid var(--border);
        border-radius: 14px;
        overflow: hidden;
        background: var(--muted);
    }
    .agri-map-legend {
        position: absolute; left: 12px; bottom: 12px;
        display: flex; gap: 10px; align-items: center;
        background: rgba(255, 255, 255, 0.9);
        border: 1px solid var(--border);
        border-radius: 8px;
        padding: 4px 10px;
        font-size: 0.68rem; font-weight: 500;
    }
    .legend-item { display: inline-flex; align-items: center; gap: 4px; }
    .legend-swatch { width: 10px; height: 10px; border-radius: 2px; display: inline-block; }

    /* ── Sensors and alerts ── */
    .sensor-grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(220px, 1fr)); gap: 12px; }
    .sensor-card { margin-bottom: 0; padding: 14px; }
    .sensor-head { display: flex; justify-content: space-between; align-items: center; gap: 8px; }
    .sensor-name { font-size: 0.85rem; font-weight: 600; overflow: hidden; text-overflow: ellipsis; white-space: nowrap; }
    .sensor-meta { display: flex; gap: 12px; margin-top: 10px; font-size: 0.75rem; }
    .sensor-sync { margin-left: auto; color: var(--muted-fg); }
    .alert-feed { max-height: 320px; overflow-y: auto; padding-right: 4px; }
    .alert-item {
        display: flex; gap: 10px; align-items: flex-start;
        border-left: 3px solid;
        background: var(--muted);
        border-radius: 6px;
        padding: 10px 12px;
        margin-bottom: 8px;
    }
    .alert-text { font-size: 0.85rem; margin: 0; line-height: 1.35; }
    .alert-time { font-size: 0.72rem; color: var(--muted-fg); margin: 4px 0 0; }
    .insight-item {
        display: flex; gap: 10px; align-items: flex-start;
        background: var(--muted); border-radius: 8px;
        padding: 10px 12px; margin-bottom: 8px;
    }
    .insight-item p { margin: 0; font-size: 0.85rem; }

    /* ── Weather ── */
    .weather-now { display: flex; align-items: center; gap: 14px; }
    .weather-icon { font-size: 2.8rem; }
    .weather-temp { font-family: 'Space Grotesk', sans-serif; font-size: 1.9rem; font-weight: 700; margin: 0; }
    .weather-cond { font-size: 0.85rem; color: var(--muted-fg); margin: 0; }
    .weather-details { display: grid; grid-template-columns: repeat(3, 1fr); gap: 8px; margin-top: 16px; }
    .weather-detail { background: var(--muted); border-radius: 8px; padding: 10px; text-align: center; font-size: 0.85rem; }
    .weather-detail p { font-size: 0.72rem; color: var(--muted-fg); margin: 4px 0 0; }
    .forecast-row {
        display: flex; align-items: center; gap: 10px;
        background: var(--muted); border-radius: 8px;
        padding: 6px 10px; margin-bottom: 6px; font-size: 0.85rem;
    }
    .forecast-day { flex: 1; }
    .forecast-rain { font-size: 0.72rem; color: var(--accent); }
    .quick-stats { background: var(--muted); border-radius: 8px; padding: 10px 12px; }
    .quick-stat { display: flex; justify-content: space-between; font-size: 0.82rem; padding: 3px 0; }
    .quick-stat span { color: var(--muted-fg); }

    /* ── Nutrients ── */
    .nutrient { margin-bottom: 12px; }
    .nutrient-head { display: flex; justify-content: space-between; font-size: 0.75rem; font-weight: 500; margin-bottom: 4px; }
    .nutrient-level { color: var(--muted-fg); font-weight: 400; }
    .nutrient-track { height: 10px; border-radius: 999px; background: var(--muted); overflow: hidden; }
    .nutrient-fill { height: 100%; border-radius: 999px; }

    /* ── Disease and drone cards ── */
    .disease-card { display: flex; gap: 12px; padding: 12px; margin-bottom: 10px; }
    .disease-thumb {
        flex-shrink: 0; width: 56px; height: 56px; border-radius: 10px;
        background: var(--muted); display: flex; align-items: center; justify-content: center;
        font-size: 1.6rem;
    }
    .disease-head { display: flex; flex-wrap: wrap; gap: 6px; align-items: center; font-size: 0.88rem; }
    .disease-field { font-size: 0.75rem; color: var(--muted-fg); margin: 4px 0 0; }
    .disease-desc { font-size: 0.75rem; color: var(--muted-fg); margin: 6px 0 0; line-height: 1.4; }
    .drone-grid { display: grid; grid-template-columns: repeat(3, 1fr); gap: 12px; }
    .drone-card { padding: 0; overflow: hidden; margin-bottom: 0; }
    .drone-image {
        position: relative; height: 96px;
        display: flex; align-items: center; justify-content: center;
        font-size: 1.8rem;
        background: linear-gradient(135deg, hsla(122, 39%, 49%, 0.25), hsla(30, 45%, 42%, 0.25));
    }
    .drone-tag { position: absolute; top: 8px; right: 8px; }
    .drone-meta { padding: 8px 10px; font-size: 0.78rem; }
    .drone-meta p { margin: 2px 0 0; font-size: 0.7rem; color: var(--muted-fg); }

    /* ── Locked / placeholder panels ── */
    .locked-card { position: relative; min-height: 190px; overflow: hidden; }
    .locked-card h4 { margin: 0; }
    .locked-placeholder { height: 110px; margin-top: 12px; border-radius: 10px; background: var(--muted); }
    .locked-overlay {
        position: absolute; inset: 0;
        display: flex; flex-direction: column; align-items: center; justify-content: center;
        background: rgba(255, 255, 255, 0.75);
        backdrop-filter: blur(3px);
    }
    .locked-overlay p { font-size: 0.85rem; color: var(--muted-fg); margin: 6px 0 10px; }
    .locked-icon { font-size: 1.6rem; }
    .agri-button {
        display: inline-block; padding: 6px 14px; border-radius: 8px;
        background: linear-gradient(135deg, var(--primary), var(--leaf));
        color: #ffffff !important; font-size: 0.8rem; font-weight: 600; text-decoration: none;
    }
    .placeholder-card { text-align: center; padding: 48px 24px; }
    .placeholder-icon { font-size: 2.4rem; }
    .placeholder-card p { color: var(--muted-fg); }
    .handoff-panel { max-width: 520px; margin: 12vh auto 16px; text-align: center; }
    .handoff-panel .agri-brand { justify-content: center; }

    /* ── Button polish ── */
    .stButton > button {
        font-weight: 600 !important;
        border-radius: 10px !important;
        transition: all 0.2s ease !important;
    }

    /* ── Plotly containers ── */
    .js-plotly-plot { border-radius: 12px; overflow: hidden; }

    /* ── Hide Streamlit branding ── */
    #MainMenu { visibility: hidden; }
    footer { visibility: hidden; }

    /* ── Responsive: below the breakpoint the sidebar gives way to the menu button ── */
    @media (max-width: """ + str(MOBILE_MAX) + """px) {
        section[data-testid="stSidebar"] { display: none; }
        [data-testid="stSidebarCollapsedControl"] { display: none; }
        .st-key-shell_menu_open { display: block; }
        .drone-grid { grid-template-columns: repeat(2, 1fr); }
        .page-header h1 { font-size: 1.4rem !important; }
    }
</style>
"""


def main():
    st.markdown(THEME_CSS, unsafe_allow_html=True)

    router = Router(st.session_state, st.query_params)
    store = SelectionStore(st.session_state)
    path = router.current_path

    if not is_dashboard_route(path):
        store.release_inactive(None)
        render_external_route(router, path)
        return

    page = resolve_page(path)
    if page is None:
        if path not in PLACEHOLDER_PATHS:
            log_message(f"Unknown route: {path}")
        store.release_inactive(None)
        render_shell(router, lambda: render_placeholder(path))
        return

    store.release_inactive(page.page_id)
    render_shell(router, lambda: page.render(store))


if __name__ == "__main__":
    main()
