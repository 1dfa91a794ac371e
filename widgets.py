"""
Visualization widgets for AgriMind AI dashboard
Chart adapter (Plotly), circular gauge, stylized field-map overlay,
sensor/alert list renderers and card renderers.

Widgets are stateless: they take data plus the current selection and
return a Plotly figure or an HTML fragment. The Streamlit calls that put
them on screen live in views.py.
"""

import math
from dataclasses import dataclass
from enum import Enum
from html import escape

import plotly.graph_objects as go

from alert_engine import (
    get_alert_style, get_capture_tone, get_disease_tone, get_status_tone,
    get_tone_color,
)
from farm_data import (
    CONFIG, Icon, OverlayKind, SignalLevel, Tone, TrendDirection,
    ensure_exhaustive, log_message,
)


# ---------------------------------------------------------------------------
# Icon resolution
# ---------------------------------------------------------------------------

ICON_GLYPHS = ensure_exhaustive({
    Icon.DASHBOARD: "▦",
    Icon.SPROUT: "🌱",
    Icon.TRACTOR: "🚜",
    Icon.TRENDING_UP: "📈",
    Icon.BOT: "🤖",
    Icon.DROPLETS: "💧",
    Icon.BELL: "🔔",
    Icon.SETTINGS: "⚙️",
    Icon.LOG_OUT: "⎋",
    Icon.CHEVRON_LEFT: "‹",
    Icon.CHEVRON_RIGHT: "›",
    Icon.CROWN: "👑",
    Icon.MENU: "☰",
    Icon.LEAF: "🍃",
    Icon.HEART: "❤️",
    Icon.THERMOMETER_SUN: "🌡️",
    Icon.THERMOMETER: "🌡️",
    Icon.SUN: "☀️",
    Icon.CLOUD: "☁️",
    Icon.CLOUD_RAIN: "🌧️",
    Icon.CLOUD_SUN: "⛅",
    Icon.WIND: "💨",
    Icon.ALERT_TRIANGLE: "⚠️",
    Icon.FLASK: "🧪",
    Icon.ACTIVITY: "📉",
    Icon.BUG: "🐞",
    Icon.SATELLITE: "🛰️",
    Icon.LAYERS: "🗺️",
    Icon.WIFI: "📶",
    Icon.WIFI_OFF: "🚫",
    Icon.BATTERY_FULL: "🔋",
    Icon.BATTERY_MEDIUM: "🔋",
    Icon.BATTERY_LOW: "🪫",
    Icon.CLOCK: "🕒",
    Icon.CHECK: "✓",
    Icon.CAMERA: "📷",
    Icon.SHIELD: "🛡️",
    Icon.LOCK: "🔒",
    Icon.ARROW_UP_RIGHT: "↗",
    Icon.ARROW_DOWN_RIGHT: "↘",
    Icon.EYE: "👁️",
    Icon.REFRESH: "🔄",
    Icon.UPLOAD: "⬆️",
    Icon.MESSAGE: "💬",
}, Icon)


def resolve_icon(icon):
    """Resolve an icon handle to the glyph used on screen."""
    return ICON_GLYPHS[icon]


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Transition:
    """A cosmetic animation: declared start and end values plus duration.

    Logical state is always ``end``; the renderer only uses ``start`` to
    draw the first frame.
    """
    start: float
    end: float
    duration: float
    delay: float = 0.0


TRANSITIONS = CONFIG["transitions"]
MUTED = "#6c7f6c"
GRID = "#dfe4dd"

# Plotly takes hex; HTML fragments use the hsl palette in alert_engine
CHART_COLORS = ensure_exhaustive({
    Tone.LEAF: "#4caf50",
    Tone.SKY: "#0ea5e9",
    Tone.PRIMARY: "#2d7a46",
    Tone.WARNING: "#e7b008",
    Tone.DESTRUCTIVE: "#dc2828",
    Tone.ACCENT: "#1a72d1",
    Tone.EARTH: "#9c6b3a",
}, Tone)


def chart_color(tone):
    return CHART_COLORS[tone]


def _with_alpha(color, alpha):
    """'hsl(h, s%, l%)' -> 'hsla(h, s%, l%, alpha)'."""
    return color.replace("hsl(", "hsla(").rstrip(")") + f", {alpha})"


def _rgba(hex_color, alpha):
    r, g, b = (int(hex_color[i:i + 2], 16) for i in (1, 3, 5))
    return f"rgba({r},{g},{b},{alpha})"


# ---------------------------------------------------------------------------
# Time-series / bar chart adapter (Plotly)
# ---------------------------------------------------------------------------

class ChartStyle(Enum):
    LINE = "line"
    AREA = "area"
    BAR = "bar"


@dataclass(frozen=True)
class SeriesSpec:
    key: str
    label: str
    color: str
    dashed: bool = False


@dataclass(frozen=True)
class ChartConfig:
    x_key: str
    series: tuple
    style: ChartStyle = ChartStyle.LINE
    y_domain: tuple = None
    unit: str = ""
    horizontal: bool = False
    title: str = None
    height: int = 260
    show_legend: bool = False


PLOTLY_LAYOUT = dict(
    paper_bgcolor='rgba(0,0,0,0)',
    plot_bgcolor='rgba(0,0,0,0)',
    font=dict(family='Inter, sans-serif', color=MUTED, size=12),
    margin=dict(l=44, r=16, t=24, b=36),
    xaxis=dict(gridcolor=GRID, zerolinecolor=GRID, griddash='dash'),
    yaxis=dict(gridcolor=GRID, zerolinecolor=GRID, griddash='dash'),
    legend=dict(orientation='h', yanchor='bottom', y=1.02, xanchor='left', x=0,
                bgcolor='rgba(0,0,0,0)', borderwidth=0, font=dict(size=11)),
    hoverlabel=dict(bgcolor='#ffffff', bordercolor=GRID,
                    font=dict(family='Inter, sans-serif', size=12, color='#1f2a1f')),
)


def _series_trace(frame, config, spec):
    categories = frame[config.x_key].tolist()
    values = frame[spec.key].tolist()
    hover = f'%{{x}}<br><b>%{{y}}{config.unit}</b><extra>{spec.label}</extra>'

    if config.style is ChartStyle.BAR:
        if config.horizontal:
            return go.Bar(
                x=values, y=categories, orientation='h', name=spec.label,
                marker=dict(color=spec.color, line=dict(width=0)),
                hovertemplate=f'%{{y}}<br><b>%{{x}}{config.unit}</b><extra>{spec.label}</extra>',
            )
        return go.Bar(
            x=categories, y=values, name=spec.label,
            marker=dict(color=spec.color, line=dict(width=0)),
            hovertemplate=hover,
        )

    line = dict(color=spec.color, width=2, shape='linear')
    if spec.dashed:
        line['dash'] = 'dash'
    trace = dict(
        x=categories, y=values, name=spec.label, line=line,
        mode='lines' if spec.dashed else 'lines+markers',
        marker=dict(size=6, color=spec.color),
        hovertemplate=hover,
    )
    # Area style fills solid series; dashed series stay overlay lines
    if config.style is ChartStyle.AREA and not spec.dashed:
        trace['fill'] = 'tozeroy'
        trace['fillcolor'] = _rgba(spec.color, 0.18)
    return go.Scatter(**trace)


def build_chart(frame, config):
    """Build a Plotly figure from an ordered frame and a ChartConfig.

    The category axis keeps the frame's row order, every series shares one
    value axis, and the plotted values are exactly the frame's values
    (straight segments, no smoothing).
    """
    missing = [k for k in [config.x_key] + [s.key for s in config.series]
               if k not in frame.columns]
    if missing:
        raise ValueError(f"Chart columns not found in data: {missing}")

    fig = go.Figure()
    for spec in config.series:
        fig.add_trace(_series_trace(frame, config, spec))

    categories = frame[config.x_key].tolist()
    category_axis = dict(gridcolor=GRID, categoryorder='array',
                         categoryarray=categories, type='category')
    value_axis = dict(gridcolor=GRID, ticksuffix=config.unit)
    if config.y_domain is not None:
        value_axis['range'] = list(config.y_domain)

    layout = {**PLOTLY_LAYOUT,
        'height': config.height,
        'showlegend': config.show_legend,
        'barmode': 'group',
    }
    if config.title:
        layout['title'] = dict(text=config.title, font=dict(size=14))
    if config.horizontal:
        category_axis['autorange'] = 'reversed'
        layout['xaxis'] = value_axis
        layout['yaxis'] = category_axis
    else:
        layout['xaxis'] = category_axis
        layout['yaxis'] = value_axis
    fig.update_layout(**layout)
    return fig


# ---------------------------------------------------------------------------
# Circular gauge
# ---------------------------------------------------------------------------

class GaugeBand(Enum):
    HIGH = "high"
    MID = "mid"
    LOW = "low"


GAUGE_COLORS = ensure_exhaustive({
    GaugeBand.HIGH: get_tone_color(Tone.LEAF),
    GaugeBand.MID: get_tone_color(Tone.WARNING),
    GaugeBand.LOW: get_tone_color(Tone.DESTRUCTIVE),
}, GaugeBand)

GAUGE_RADIUS = 54


@dataclass(frozen=True)
class GaugeGeometry:
    value: float
    radius: float
    circumference: float
    progress: float
    dash_offset: float
    color: str
    sweep: Transition


def clamp_percent(value):
    """Clamp a gauge input to [0, 100], logging anything outside it."""
    if value < 0 or value > 100:
        log_message(f"Gauge value {value} outside 0-100, clamped")
    return min(100, max(0, value))


def gauge_band(value):
    """Colour band for a percentage: > high, > mid, else low."""
    thresholds = CONFIG["thresholds"]["gauge"]
    value = clamp_percent(value)
    if value > thresholds["high"]:
        return GaugeBand.HIGH
    if value > thresholds["mid"]:
        return GaugeBand.MID
    return GaugeBand.LOW


def gauge_color(value):
    return GAUGE_COLORS[gauge_band(value)]


def gauge_geometry(value, radius=GAUGE_RADIUS):
    """Arc geometry for a circular progress ring.

    The filled arc is ``value/100`` of the circumference. The SVG draws it
    as a dashed stroke whose offset sweeps from the full circumference
    (empty ring) down to ``circumference - progress``.
    """
    value = clamp_percent(value)
    circumference = 2 * math.pi * radius
    progress = value / 100 * circumference
    end_offset = circumference - progress
    return GaugeGeometry(
        value=value,
        radius=radius,
        circumference=circumference,
        progress=progress,
        dash_offset=end_offset,
        color=gauge_color(value),
        sweep=Transition(start=circumference, end=end_offset,
                         duration=TRANSITIONS["gauge_sweep_s"]),
    )


def render_gauge_html(value, unit_label="Moisture"):
    g = gauge_geometry(value)
    size = int(2 * (g.radius + 11))
    centre = size / 2
    shown = f"{g.value:g}"
    # a round cap still paints a dot on a zero-length arc
    linecap = "round" if g.progress > 0 else "butt"
    return f"""
    <div class="agri-gauge" style="width:{size}px;height:{size}px;">
      <svg width="{size}" height="{size}" viewBox="0 0 {size} {size}" style="transform:rotate(-90deg);">
        <circle cx="{centre}" cy="{centre}" r="{g.radius}" fill="none" stroke="{GRID}" stroke-width="10"/>
        <circle cx="{centre}" cy="{centre}" r="{g.radius}" fill="none" stroke="{g.color}" stroke-width="10"
                stroke-linecap="{linecap}" stroke-dasharray="{g.circumference:.2f}"
                stroke-dashoffset="{g.dash_offset:.2f}">
          <animate attributeName="stroke-dashoffset" from="{g.sweep.start:.2f}" to="{g.sweep.end:.2f}"
                   dur="{g.sweep.duration}s" fill="freeze"/>
        </circle>
      </svg>
      <div class="agri-gauge-label">
        <span class="agri-gauge-value">{shown}%</span>
        <span class="agri-gauge-unit">{escape(unit_label)}</span>
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Field map overlay
# ---------------------------------------------------------------------------
# A stylized placeholder: fixed polygons on a 600x300 canvas tinted by the
# active overlay's colour ramp. There is no geospatial data behind it.

OVERLAY_RAMPS = ensure_exhaustive({
    OverlayKind.SATELLITE: ("hsl(120,30%,35%)", "hsl(100,25%,45%)", "hsl(80,20%,55%)"),
    OverlayKind.NDVI: ("hsl(0,72%,51%)", "hsl(45,93%,47%)", "hsl(122,39%,49%)"),
    OverlayKind.MOISTURE: ("hsl(30,60%,50%)", "hsl(199,50%,55%)", "hsl(211,78%,46%)"),
    OverlayKind.TEMPERATURE: ("hsl(211,78%,46%)", "hsl(45,93%,47%)", "hsl(0,72%,51%)"),
}, OverlayKind)

# Legend labels per ramp stop; None means a single composite caption
OVERLAY_LEGEND_LABELS = ensure_exhaustive({
    OverlayKind.SATELLITE: None,
    OverlayKind.NDVI: ("Low", "Medium", "High"),
    OverlayKind.MOISTURE: ("Dry", "Moderate", "Wet"),
    OverlayKind.TEMPERATURE: ("Cool", "Warm", "Hot"),
}, OverlayKind)

OVERLAY_ICONS = ensure_exhaustive({
    OverlayKind.SATELLITE: Icon.SATELLITE,
    OverlayKind.NDVI: Icon.LAYERS,
    OverlayKind.MOISTURE: Icon.DROPLETS,
    OverlayKind.TEMPERATURE: Icon.THERMOMETER,
}, OverlayKind)

SATELLITE_CAPTION = "RGB Composite View"

# (x1, y1, x2, y2), then stops as (offset %, ramp index, opacity)
GRADIENT_TEMPLATES = (
    (("0%", "0%", "100%", "100%"), ((0, 2, 0.8), (50, 1, 0.7), (100, 2, 0.9))),
    (("0%", "100%", "100%", "0%"), ((0, 1, 0.7), (60, 0, 0.6), (100, 1, 0.8))),
    (("100%", "0%", "0%", "100%"), ((0, 2, 0.9), (40, 1, 0.6), (100, 0, 0.5))),
)


@dataclass(frozen=True)
class LegendItem:
    label: str
    color: str = None


def overlay_ramp(kind):
    """The overlay's 3-stop colour ramp, low to high."""
    return OVERLAY_RAMPS[kind]


def overlay_legend(kind):
    """Legend entries for the active overlay."""
    labels = OVERLAY_LEGEND_LABELS[kind]
    if labels is None:
        return (LegendItem(SATELLITE_CAPTION),)
    return tuple(LegendItem(label, color) for label, color in zip(labels, OVERLAY_RAMPS[kind]))


def overlay_gradients(kind):
    """Gradient definitions (id, direction, stops) for the active overlay."""
    ramp = OVERLAY_RAMPS[kind]
    prefix = kind.name.lower()
    gradients = []
    for i, (direction, stops) in enumerate(GRADIENT_TEMPLATES):
        gradients.append({
            "id": f"field-grad-{prefix}-{i}",
            "direction": direction,
            "stops": [(offset, ramp[idx], opacity) for offset, idx, opacity in stops],
        })
    return gradients


def polygon_fades(regions):
    """Staggered fade-in for each region, in drawing order."""
    return [
        Transition(start=0.0, end=1.0, duration=TRANSITIONS["polygon_fade_s"],
                   delay=round(i * TRANSITIONS["polygon_stagger_s"], 3))
        for i, _ in enumerate(regions)
    ]


def render_map_legend_html(kind):
    items = []
    for item in overlay_legend(kind):
        if item.color is None:
            items.append(f'<span>{escape(item.label)}</span>')
        else:
            items.append(
                f'<span class="legend-item"><span class="legend-swatch" '
                f'style="background:{item.color};"></span>{escape(item.label)}</span>'
            )
    return f'<div class="agri-map-legend">{"".join(items)}</div>'


def render_field_map_html(kind, regions, highlight=None):
    """Render the stylized field map for one overlay.

    *highlight* names a region to outline (the page's selected field); it
    does not change any fill.
    """
    gradients = overlay_gradients(kind)
    defs = []
    for grad in gradients:
        x1, y1, x2, y2 = grad["direction"]
        stops = "".join(
            f'<stop offset="{offset}%" stop-color="{color}" stop-opacity="{opacity}"/>'
            for offset, color, opacity in grad["stops"]
        )
        defs.append(
            f'<linearGradient id="{grad["id"]}" x1="{x1}" y1="{y1}" x2="{x2}" y2="{y2}">'
            f'{stops}</linearGradient>'
        )

    grid = "".join(
        f'<line x1="0" y1="{i * 50}" x2="600" y2="{i * 50}" stroke="{GRID}" stroke-width="0.5"/>'
        for i in range(7)
    ) + "".join(
        f'<line x1="{i * 50}" y1="0" x2="{i * 50}" y2="300" stroke="{GRID}" stroke-width="0.5"/>'
        for i in range(13)
    )

    shapes = []
    for region, fade in zip(regions, polygon_fades(regions)):
        points = " ".join(f"{x},{y}" for x, y in region.points)
        fill = gradients[region.gradient]["id"]
        dash = ' stroke-dasharray="6 3"' if region.dashed else ""
        width = 4 if region.name == highlight else 2
        shapes.append(
            f'<polygon points="{points}" fill="url(#{fill})" stroke="{region.stroke}" '
            f'stroke-width="{width}"{dash} opacity="{fade.end}">'
            f'<animate attributeName="opacity" from="{fade.start}" to="{fade.end}" '
            f'dur="{fade.duration}s" begin="{fade.delay}s" fill="freeze"/></polygon>'
        )
        lx, ly = region.label_xy
        shapes.append(
            f'<text x="{lx}" y="{ly}" text-anchor="middle" fill="white" '
            f'font-size="13" font-weight="600">{escape(region.name)}</text>'
        )
    for region in regions:
        if region.pin_xy:
            px, py = region.pin_xy
            shapes.append(
                f'<circle cx="{px}" cy="{py}" r="4" fill="white" '
                f'stroke="{region.stroke}" stroke-width="2"/>'
            )

    return f"""
    <div class="agri-map" style="animation: agri-fade {TRANSITIONS['overlay_fade_s']}s ease-out;">
      <svg viewBox="0 0 600 300" width="100%" preserveAspectRatio="xMidYMid meet">
        <defs>{"".join(defs)}</defs>
        <rect width="600" height="300" fill="hsl(100,12%,94%)" rx="12"/>
        {grid}
        {"".join(shapes)}
      </svg>
      {render_map_legend_html(kind)}
    </div>
    """


# ---------------------------------------------------------------------------
# Sensor and alert lists
# ---------------------------------------------------------------------------

class BatteryTier(Enum):
    FULL = "full"
    MEDIUM = "medium"
    LOW = "low"


BATTERY_ICONS = ensure_exhaustive({
    BatteryTier.FULL: Icon.BATTERY_FULL,
    BatteryTier.MEDIUM: Icon.BATTERY_MEDIUM,
    BatteryTier.LOW: Icon.BATTERY_LOW,
}, BatteryTier)

SIGNAL_ICONS = ensure_exhaustive({
    SignalLevel.NONE: Icon.WIFI_OFF,
    SignalLevel.WEAK: Icon.WIFI,
    SignalLevel.MEDIUM: Icon.WIFI,
    SignalLevel.STRONG: Icon.WIFI,
}, SignalLevel)

SIGNAL_COLORS = ensure_exhaustive({
    SignalLevel.NONE: get_tone_color(Tone.DESTRUCTIVE),
    SignalLevel.WEAK: get_tone_color(Tone.WARNING),
    SignalLevel.MEDIUM: MUTED,
    SignalLevel.STRONG: MUTED,
}, SignalLevel)


def battery_tier(pct):
    thresholds = CONFIG["thresholds"]["battery"]
    if pct > thresholds["full"]:
        return BatteryTier.FULL
    if pct > thresholds["medium"]:
        return BatteryTier.MEDIUM
    return BatteryTier.LOW


def battery_icon(pct):
    return BATTERY_ICONS[battery_tier(pct)]


def battery_color(pct):
    if battery_tier(pct) is BatteryTier.LOW:
        return get_tone_color(Tone.DESTRUCTIVE)
    return MUTED


def signal_icon(level):
    return SIGNAL_ICONS[level]


def render_badge_html(text, tone, extra_class=""):
    color = get_tone_color(tone)
    return (
        f'<span class="agri-badge {extra_class}" style="color:{color};'
        f'border-color:{_with_alpha(color, 0.25)};background:{_with_alpha(color, 0.1)};">'
        f'{escape(text)}</span>'
    )


def render_sensor_card_html(sensor):
    status = render_badge_html(sensor.status.value, get_status_tone(sensor.status), "capitalize")
    return f"""
    <div class="agri-card sensor-card">
      <div class="sensor-head">
        <span class="sensor-name">{escape(sensor.name)}</span>{status}
      </div>
      <div class="sensor-meta">
        <span style="color:{battery_color(sensor.battery_pct)};">{resolve_icon(battery_icon(sensor.battery_pct))} {sensor.battery_pct}%</span>
        <span style="color:{SIGNAL_COLORS[sensor.signal]};">{resolve_icon(signal_icon(sensor.signal))} {sensor.signal.value}</span>
        <span class="sensor-sync">{resolve_icon(Icon.CLOCK)} {escape(sensor.last_sync)}</span>
      </div>
    </div>
    """


def render_sensor_grid_html(sensors):
    """Sensor cards in input order."""
    cards = "".join(render_sensor_card_html(s) for s in sensors)
    return f'<div class="sensor-grid">{cards}</div>'


def render_alert_item_html(alert):
    border, icon_color = get_alert_style(alert.severity)
    return f"""
    <div class="alert-item" style="border-left-color:{border};">
      <span class="alert-icon" style="color:{icon_color};">{resolve_icon(alert.icon)}</span>
      <div class="alert-body">
        <p class="alert-text">{escape(alert.message)}</p>
        <p class="alert-time">{escape(alert.time_label)}</p>
      </div>
    </div>
    """


def render_alert_feed_html(alerts):
    """Alert items in input order, newest first by convention."""
    items = "".join(render_alert_item_html(a) for a in alerts)
    return f'<div class="alert-feed">{items}</div>'


# ---------------------------------------------------------------------------
# Cards
# ---------------------------------------------------------------------------

def render_kpi_card_html(card):
    color = get_tone_color(card.tone)
    return f"""
    <div class="agri-card kpi-card">
      <div class="kpi-head">
        <span class="kpi-icon" style="background:{_with_alpha(color, 0.1)};color:{color};">{resolve_icon(card.icon)}</span>
        <span class="kpi-change">{resolve_icon(Icon.ARROW_UP_RIGHT)}{escape(card.change)}</span>
      </div>
      <p class="kpi-value">{escape(card.value)}</p>
      <p class="kpi-label">{escape(card.label)}</p>
    </div>
    """


def trend_tone(stat):
    """Leaf when the trend moves the good way for this stat, destructive otherwise."""
    rising = stat.trend is TrendDirection.UP
    return Tone.LEAF if rising == stat.higher_is_better else Tone.DESTRUCTIVE


def render_stat_card_html(stat):
    arrow = Icon.ARROW_UP_RIGHT if stat.trend is TrendDirection.UP else Icon.ARROW_DOWN_RIGHT
    return f"""
    <div class="agri-card stat-card">
      <div class="stat-head">
        <span class="stat-icon">{resolve_icon(stat.icon)}</span>
        <span class="stat-label">{escape(stat.label)}</span>
      </div>
      <div class="stat-body">
        <span class="stat-value">{stat.value:g}</span>
        <span class="stat-unit">{escape(stat.unit)}</span>
        <span class="stat-trend" style="color:{get_tone_color(trend_tone(stat))};">{resolve_icon(arrow)}{escape(stat.trend_delta)}</span>
      </div>
    </div>
    """


def render_insight_html(insight):
    return f"""
    <div class="insight-item">
      <span style="color:{get_tone_color(insight.tone)};">{resolve_icon(insight.icon)}</span>
      <p>{escape(insight.text)}</p>
    </div>
    """


def render_locked_card_html(title):
    return f"""
    <div class="agri-card locked-card">
      <h4>{escape(title)}</h4>
      <div class="locked-placeholder"></div>
      <div class="locked-overlay">
        <span class="locked-icon">{resolve_icon(Icon.LOCK)}</span>
        <p>Premium Feature</p>
        <a class="agri-button" href="?path=/pricing" target="_self">Upgrade to Pro</a>
      </div>
    </div>
    """


def render_weather_now_html(weather):
    details = "".join(
        f'<div class="weather-detail">{resolve_icon(icon)}<p>{escape(label)}</p>'
        f'<strong>{escape(value)}</strong></div>'
        for icon, label, value in weather.details
    )
    return f"""
    <div class="weather-now">
      <span class="weather-icon">{resolve_icon(weather.icon)}</span>
      <div><p class="weather-temp">{escape(weather.temp)}</p>
      <p class="weather-cond">{escape(weather.condition)}</p></div>
    </div>
    <div class="weather-details">{details}</div>
    """


def render_forecast_html(days):
    rows = "".join(
        f'<div class="forecast-row">{resolve_icon(d.icon)}<span class="forecast-day">{escape(d.day)}</span>'
        f'<strong>{escape(d.temp)}</strong><span class="forecast-rain">{escape(d.rain)} 🌧</span></div>'
        for d in days
    )
    return f'<div class="forecast">{rows}</div>'


def nutrient_fill(nutrient):
    """Return (bar width %, over_optimal) for a nutrient level bar."""
    pct = nutrient.current / nutrient.optimal * 100
    return min(pct, 100.0), pct > 100


def render_nutrient_bars_html(nutrients):
    bars = []
    duration = TRANSITIONS["nutrient_bar_s"]
    for n in nutrients:
        width, over = nutrient_fill(n)
        color = get_tone_color(Tone.WARNING if over else Tone.LEAF)
        bars.append(f"""
        <div class="nutrient">
          <div class="nutrient-head"><span>{escape(n.name)}</span>
          <span class="nutrient-level">{n.current:g}/{n.optimal:g} {escape(n.unit)}</span></div>
          <div class="nutrient-track"><div class="nutrient-fill"
               style="width:{width:.1f}%;background:{color};animation:agri-grow {duration}s ease-out;"></div></div>
        </div>
        """)
    return "".join(bars)


def render_disease_card_html(detection):
    severity = render_badge_html(detection.severity.value, get_disease_tone(detection.severity))
    confidence = render_badge_html(f"{resolve_icon(Icon.CHECK)} {detection.confidence}%", Tone.ACCENT)
    return f"""
    <div class="agri-card disease-card">
      <div class="disease-thumb">{detection.thumbnail}</div>
      <div class="disease-body">
        <div class="disease-head"><strong>{escape(detection.disease)}</strong>{severity}{confidence}</div>
        <p class="disease-field">{escape(detection.field)}</p>
        <p class="disease-desc">{escape(detection.description)}</p>
      </div>
    </div>
    """


def render_drone_card_html(capture):
    tag = render_badge_html(capture.tag.value, get_capture_tone(capture.tag), "drone-tag")
    return f"""
    <div class="agri-card drone-card">
      <div class="drone-image">{resolve_icon(Icon.CAMERA)}{tag}</div>
      <div class="drone-meta"><strong>{escape(capture.field)}</strong>
      <p>{resolve_icon(Icon.CLOCK)} {escape(capture.date)}</p></div>
    </div>
    """


def render_drone_grid_html(captures):
    cards = "".join(render_drone_card_html(c) for c in captures)
    return f'<div class="drone-grid">{cards}</div>'
