"""
Navigation shell for AgriMind AI dashboard
Collapsible sidebar, mobile slide-over panel, top bar and the single
content slot every dashboard page renders into.

The shell's own state (collapsed / mobile panel open) is a frozen
ShellState kept in st.session_state; the transitions below are pure so
they can be tested without a running session.
"""

from dataclasses import dataclass, replace
from enum import Enum
from html import escape

import streamlit as st

from farm_data import CONFIG, Icon, log_message
from widgets import resolve_icon

LAYOUT = CONFIG["layout"]
APP = CONFIG["app"]

DASHBOARD_PREFIX = "/dashboard"
PRICING_PATH = "/pricing"
SHELL_STATE_KEY = "shell_state"
ROUTE_KEY = "route_path"


# ──────────────────────────────────────────────────────────────
# Navigation entries
# ──────────────────────────────────────────────────────────────

class AccessTier(Enum):
    FREE = "free"
    PREMIUM = "premium"


@dataclass(frozen=True)
class NavEntry:
    label: str
    icon: Icon
    path: str
    access: AccessTier = AccessTier.FREE


NAV_ENTRIES = (
    NavEntry("Overview", Icon.DASHBOARD, "/dashboard", AccessTier.FREE),
    NavEntry("Precision Farming", Icon.DROPLETS, "/dashboard/precision", AccessTier.PREMIUM),
    NavEntry("Crop Monitoring", Icon.SPROUT, "/dashboard/crops", AccessTier.PREMIUM),
    NavEntry("Machinery", Icon.TRACTOR, "/dashboard/machinery", AccessTier.PREMIUM),
    NavEntry("Yield Forecast", Icon.TRENDING_UP, "/dashboard/forecast", AccessTier.PREMIUM),
    NavEntry("AI Agents", Icon.BOT, "/dashboard/ai", AccessTier.PREMIUM),
)

FOOTER_LINKS = (
    NavEntry("Settings", Icon.SETTINGS, "/dashboard/settings"),
    NavEntry("Logout", Icon.LOG_OUT, "/"),
)


# ──────────────────────────────────────────────────────────────
# Shell state machine
# ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ShellState:
    collapsed: bool = False
    mobile_panel_open: bool = False


def toggle_collapse(state):
    return replace(state, collapsed=not state.collapsed)


def open_mobile_panel(state):
    return replace(state, mobile_panel_open=True)


def close_mobile_panel(state):
    return replace(state, mobile_panel_open=False)


def dismiss_backdrop(state):
    """Tapping outside the mobile panel closes it; nothing else changes."""
    return close_mobile_panel(state)


def select_entry(state, entry):
    """Choosing an entry always closes the mobile panel.

    Returns (new_state, path) where *path* is the navigation intent for
    the router. Collapse is left as it was.
    """
    return close_mobile_panel(state), entry.path


def active_entry(entries, path):
    """The entry whose path equals the current route, or None."""
    for entry in entries:
        if entry.path == path:
            return entry
    return None


@dataclass(frozen=True)
class NavItemView:
    icon: Icon
    label: str
    premium_marker: bool
    active: bool


def nav_item_view(entry, current_path, collapsed=False):
    """What one nav row shows: the icon always, label and crown only when expanded."""
    return NavItemView(
        icon=entry.icon,
        label=None if collapsed else entry.label,
        premium_marker=(not collapsed) and entry.access is AccessTier.PREMIUM,
        active=entry.path == current_path,
    )


def sidebar_width(state):
    if state.collapsed:
        return LAYOUT["sidebar_width_collapsed"]
    return LAYOUT["sidebar_width_expanded"]


def is_dashboard_route(path):
    return path == DASHBOARD_PREFIX or path.startswith(DASHBOARD_PREFIX + "/")


def get_shell_state(session):
    if SHELL_STATE_KEY not in session:
        session[SHELL_STATE_KEY] = ShellState()
    return session[SHELL_STATE_KEY]


def set_shell_state(session, state, reason):
    previous = get_shell_state(session)
    session[SHELL_STATE_KEY] = state
    if state != previous:
        log_message(f"Shell: {reason} (collapsed={state.collapsed}, "
                    f"mobile_panel_open={state.mobile_panel_open})")
    return state


# ──────────────────────────────────────────────────────────────
# Routing
# ──────────────────────────────────────────────────────────────

class Router:
    """Current path and navigation intents.

    The path lives in the session so it survives reruns; it is mirrored to
    the ``?path=`` query parameter so a dashboard URL can be shared or
    reloaded onto the same page.
    """

    PARAM = "path"

    def __init__(self, session, query_params, default_path=None):
        self._session = session
        self._query_params = query_params
        self.default_path = default_path or APP["default_path"]

    @property
    def current_path(self):
        if ROUTE_KEY not in self._session:
            self._session[ROUTE_KEY] = self._query_params.get(self.PARAM, self.default_path)
        return self._session[ROUTE_KEY]

    def navigate(self, path):
        previous = self.current_path
        if path == previous:
            return
        log_message(f"Route: {previous} -> {path}")
        self._session[ROUTE_KEY] = path
        self._query_params[self.PARAM] = path


# ──────────────────────────────────────────────────────────────
# Rendering
# ──────────────────────────────────────────────────────────────

def shell_css(state):
    """Per-run CSS: sidebar width for the current collapse state."""
    width = sidebar_width(state)
    return f"""
    <style>
        section[data-testid="stSidebar"] {{
            width: {width}px !important;
            min-width: {width}px !important;
            max-width: {width}px !important;
            transition: width {LAYOUT['shell_transition_ms']}ms ease, min-width {LAYOUT['shell_transition_ms']}ms ease;
        }}
    </style>
    """


def _nav_button_label(view):
    glyph = resolve_icon(view.icon)
    if view.label is None:
        return glyph
    crown = f"  {resolve_icon(Icon.CROWN)}" if view.premium_marker else ""
    return f"{glyph}  {view.label}{crown}"


def _nav_button(router, entry, collapsed, scope):
    session = st.session_state
    view = nav_item_view(entry, router.current_path, collapsed)
    clicked = st.button(
        _nav_button_label(view),
        key=f"nav_{scope}_{entry.path}",
        help=entry.label if collapsed else None,
        type="primary" if view.active else "secondary",
        width='stretch',
    )
    if clicked:
        state, path = select_entry(get_shell_state(session), entry)
        set_shell_state(session, state, f"selected {entry.label}")
        router.navigate(path)
        st.rerun()


def _render_brand(collapsed):
    name = "" if collapsed else (
        f'<span class="brand-name">{escape(APP["brand"])}'
        f'<span class="brand-suffix"> {escape(APP["brand_suffix"])}</span></span>'
    )
    st.markdown(f"""
    <div class="agri-brand">
        <span class="brand-mark">{resolve_icon(Icon.LEAF)}</span>{name}
    </div>
    """, unsafe_allow_html=True)


def _render_plan_card(router, scope):
    st.markdown("""
    <div class="plan-card">
        <p class="plan-title">Free Plan</p>
        <p class="plan-sub">Upgrade for full access</p>
    </div>
    """, unsafe_allow_html=True)
    if st.button("Upgrade to Pro", key=f"upgrade_{scope}", type="primary", width='stretch'):
        follow_link(router, PRICING_PATH)


def follow_link(router, path):
    """Navigate from an in-page link; closes the mobile panel like a nav entry does."""
    session = st.session_state
    set_shell_state(session, close_mobile_panel(get_shell_state(session)), f"link to {path}")
    router.navigate(path)
    st.rerun()


def _render_nav(router, collapsed, scope):
    for entry in NAV_ENTRIES:
        _nav_button(router, entry, collapsed, scope)

    st.markdown('<div class="nav-divider"></div>', unsafe_allow_html=True)
    if not collapsed:
        _render_plan_card(router, scope)
    for entry in FOOTER_LINKS:
        _nav_button(router, entry, collapsed, scope)


def _render_sidebar(router, state):
    session = st.session_state
    with st.sidebar:
        if state.collapsed:
            _render_brand(True)
            toggle_slot = st.container()
            toggle_icon = Icon.CHEVRON_RIGHT
        else:
            col_brand, toggle_slot = st.columns([0.75, 0.25])
            with col_brand:
                _render_brand(False)
            toggle_icon = Icon.CHEVRON_LEFT

        with toggle_slot:
            if st.button(resolve_icon(toggle_icon), key="shell_collapse_toggle",
                         help="Expand sidebar" if state.collapsed else "Collapse sidebar"):
                set_shell_state(session, toggle_collapse(state),
                                "expanded" if state.collapsed else "collapsed")
                st.rerun()

        _render_nav(router, state.collapsed, "side")


def _render_top_bar():
    session = st.session_state
    col_menu, col_title, col_user = st.columns([0.08, 0.72, 0.2])
    with col_menu:
        if st.button(resolve_icon(Icon.MENU), key="shell_menu_open", help="Open navigation"):
            set_shell_state(session, open_mobile_panel(get_shell_state(session)), "mobile panel opened")
            st.rerun()
    with col_title:
        st.markdown('<h2 class="topbar-title">Dashboard</h2>', unsafe_allow_html=True)
    with col_user:
        st.markdown(f"""
        <div class="topbar-user">
            <span class="topbar-bell">{resolve_icon(Icon.BELL)}<span class="topbar-dot"></span></span>
            <span class="topbar-avatar">{escape(APP['user_initials'])}</span>
        </div>
        """, unsafe_allow_html=True)
    st.markdown('<div class="agri-divider"></div>', unsafe_allow_html=True)


def _render_mobile_panel(router):
    session = st.session_state
    # Full-screen transparent button behind the panel acts as the backdrop
    if st.button("Close menu", key="shell_backdrop"):
        set_shell_state(session, dismiss_backdrop(get_shell_state(session)), "backdrop dismissed")
        st.rerun()
    with st.container(key="shell_mobile_panel"):
        _render_brand(False)
        _render_nav(router, False, "mobile")


def render_shell(router, content):
    """Lay out the shell and render *content* (a zero-argument callable) in its slot."""
    state = get_shell_state(st.session_state)
    st.markdown(shell_css(state), unsafe_allow_html=True)

    _render_sidebar(router, state)
    _render_top_bar()
    if state.mobile_panel_open:
        _render_mobile_panel(router)

    with st.container(key="shell_content"):
        content()
