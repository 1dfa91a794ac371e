"""
Farm data for AgriMind AI dashboard
Typed sample datasets (sensors, alerts, time series, field stats) and the
slice accessors the dashboard pages read from.

All values are fixed synthetic data standing in for a future telemetry
source. Nothing here performs I/O beyond reading config.yaml and appending
to the dashboard log.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

import numpy as np
import pandas as pd
import yaml

CONFIG_PATH = Path(__file__).parent / "config.yaml"
with open(CONFIG_PATH, "r") as f:
    CONFIG = yaml.safe_load(f)

LOG_PATH = Path(__file__).parent / CONFIG["logging"]["path"]
LOG_PATH.parent.mkdir(exist_ok=True)


# ═══════════════════════════════════════════════════════════════════════════
# Logging
# ═══════════════════════════════════════════════════════════════════════════

def log_message(message):
    """Append timestamped message to log file and stdout.

    Uses UTF-8 for the log file and replaces unencodable characters on
    Windows consoles to prevent 'charmap' codec crashes.
    """
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    log_entry = f"[{timestamp}] {message}\n"
    try:
        with open(LOG_PATH, "a", encoding="utf-8") as f:
            f.write(log_entry)
    except OSError:
        pass
    try:
        print(log_entry.strip())
    except UnicodeEncodeError:
        print(log_entry.strip().encode("ascii", errors="replace").decode("ascii"))


def ensure_exhaustive(table, variant_type):
    """Raise LookupError unless *table* has an entry for every member of *variant_type*.

    Called at import time next to each enum-keyed lookup table, so a new
    variant without a matching style fails on the first import instead of
    rendering with a missing colour.
    """
    missing = [member.name for member in variant_type if member not in table]
    if missing:
        raise LookupError(
            f"{variant_type.__name__} table is missing entries for: {', '.join(missing)}"
        )
    return table


def ensure_fields(table, fields):
    """Raise LookupError unless *table* has an entry for every name in *fields*."""
    missing = [name for name in fields if name not in table]
    if missing:
        raise LookupError(f"field table is missing entries for: {', '.join(missing)}")
    return table


# ═══════════════════════════════════════════════════════════════════════════
# Variant types
# ═══════════════════════════════════════════════════════════════════════════

class Icon(Enum):
    """Opaque icon handle; resolved to a glyph only at render time."""
    DASHBOARD = "dashboard"
    SPROUT = "sprout"
    TRACTOR = "tractor"
    TRENDING_UP = "trending-up"
    BOT = "bot"
    DROPLETS = "droplets"
    BELL = "bell"
    SETTINGS = "settings"
    LOG_OUT = "log-out"
    CHEVRON_LEFT = "chevron-left"
    CHEVRON_RIGHT = "chevron-right"
    CROWN = "crown"
    MENU = "menu"
    LEAF = "leaf"
    HEART = "heart"
    THERMOMETER_SUN = "thermometer-sun"
    THERMOMETER = "thermometer"
    SUN = "sun"
    CLOUD = "cloud"
    CLOUD_RAIN = "cloud-rain"
    CLOUD_SUN = "cloud-sun"
    WIND = "wind"
    ALERT_TRIANGLE = "alert-triangle"
    FLASK = "flask"
    ACTIVITY = "activity"
    BUG = "bug"
    SATELLITE = "satellite"
    LAYERS = "layers"
    WIFI = "wifi"
    WIFI_OFF = "wifi-off"
    BATTERY_FULL = "battery-full"
    BATTERY_MEDIUM = "battery-medium"
    BATTERY_LOW = "battery-low"
    CLOCK = "clock"
    CHECK = "check"
    CAMERA = "camera"
    SHIELD = "shield"
    LOCK = "lock"
    ARROW_UP_RIGHT = "arrow-up-right"
    ARROW_DOWN_RIGHT = "arrow-down-right"
    EYE = "eye"
    REFRESH = "refresh"
    UPLOAD = "upload"
    MESSAGE = "message"


class OverlayKind(Enum):
    SATELLITE = "Satellite"
    NDVI = "NDVI"
    MOISTURE = "Moisture"
    TEMPERATURE = "Temperature"


class Severity(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class SignalLevel(Enum):
    NONE = "none"
    WEAK = "weak"
    MEDIUM = "medium"
    STRONG = "strong"


class SensorStatus(Enum):
    HEALTHY = "healthy"
    WARNING = "warning"
    OFFLINE = "offline"


class TrendDirection(Enum):
    UP = "up"
    DOWN = "down"


class TimeRange(Enum):
    SEVEN_DAYS = "7d"
    THIRTY_DAYS = "30d"
    NINETY_DAYS = "90d"
    WEEKLY = "Weekly"
    MONTHLY = "Monthly"


class DiseaseSeverity(Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class CaptureTag(Enum):
    HEALTHY = "Healthy"
    STRESS = "Stress"
    DISEASE = "Disease"


class Tone(Enum):
    """Palette slot used by cards and badges."""
    LEAF = "leaf"
    SKY = "sky"
    PRIMARY = "primary"
    WARNING = "warning"
    DESTRUCTIVE = "destructive"
    ACCENT = "accent"
    EARTH = "earth"


# ═══════════════════════════════════════════════════════════════════════════
# Records
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Sensor:
    # status is supplied by the source, not derived from battery/signal
    id: int
    name: str
    battery_pct: int
    signal: SignalLevel
    last_sync: str
    status: SensorStatus


@dataclass(frozen=True)
class Alert:
    id: int
    severity: Severity
    message: str
    time_label: str
    icon: Icon


@dataclass(frozen=True)
class FieldStat:
    label: str
    value: float
    unit: str
    trend_delta: str
    trend: TrendDirection
    icon: Icon
    higher_is_better: bool = True


@dataclass(frozen=True)
class KpiCard:
    label: str
    value: str
    change: str
    icon: Icon
    tone: Tone


@dataclass(frozen=True)
class Insight:
    text: str
    icon: Icon
    tone: Tone


@dataclass(frozen=True)
class Nutrient:
    name: str
    current: float
    optimal: float
    unit: str


@dataclass(frozen=True)
class WeatherDay:
    day: str
    icon: Icon
    temp: str
    rain: str


@dataclass(frozen=True)
class WeatherNow:
    temp: str
    condition: str
    icon: Icon
    details: tuple


@dataclass(frozen=True)
class DiseaseDetection:
    id: int
    disease: str
    field: str
    confidence: int
    severity: DiseaseSeverity
    thumbnail: str
    description: str


@dataclass(frozen=True)
class DroneCapture:
    id: int
    date: str
    field: str
    tag: CaptureTag


@dataclass(frozen=True)
class MapRegion:
    """A stylized field outline on the 600x300 map canvas.

    Coordinates are fixed drawing positions, not geography.
    """
    name: str
    points: tuple
    gradient: int
    stroke: str
    label_xy: tuple
    pin_xy: tuple = None
    dashed: bool = False


# ═══════════════════════════════════════════════════════════════════════════
# Fields
# ═══════════════════════════════════════════════════════════════════════════

ALL_FIELDS = "All Fields"
SENSOR_FIELDS = ("Field A", "Field B", "Field C")
MAP_FIELDS = ("Field A", "Field B", "Field C", "Field D")

# Moisture trend line colour per sensor field
FIELD_LINE_TONES = ensure_fields({
    "Field A": Tone.LEAF,
    "Field B": Tone.ACCENT,
    "Field C": Tone.WARNING,
}, SENSOR_FIELDS)

FIELD_REGIONS = (
    MapRegion("Field A", ((50, 40), (220, 30), (240, 140), (60, 150)),
              gradient=0, stroke="hsl(122,39%,49%)",
              label_xy=(130, 95), pin_xy=(140, 85)),
    MapRegion("Field B", ((260, 25), (440, 35), (430, 160), (250, 145)),
              gradient=1, stroke="hsl(45,93%,47%)",
              label_xy=(340, 95), pin_xy=(340, 85)),
    MapRegion("Field C", ((460, 40), (570, 50), (560, 155), (450, 148)),
              gradient=2, stroke="hsl(211,78%,46%)",
              label_xy=(510, 100), pin_xy=(510, 90)),
    MapRegion("Field D", ((80, 170), (350, 165), (340, 270), (70, 275)),
              gradient=0, stroke="hsl(122,39%,49%)",
              label_xy=(200, 225), dashed=True),
)


def get_field_regions():
    """Return the fixed map regions in drawing order."""
    return FIELD_REGIONS


# ═══════════════════════════════════════════════════════════════════════════
# Overview datasets
# ═══════════════════════════════════════════════════════════════════════════

OVERVIEW_KPIS = (
    KpiCard("Farm Health Score", "87/100", "+3%", Icon.HEART, Tone.LEAF),
    KpiCard("Soil Moisture", "64%", "+5%", Icon.DROPLETS, Tone.SKY),
    KpiCard("Crop Health Index", "91%", "+2%", Icon.LEAF, Tone.PRIMARY),
    KpiCard("Soil Temp", "24°C", "+1°", Icon.THERMOMETER_SUN, Tone.WARNING),
)

YIELD_PERFORMANCE = pd.DataFrame({
    "month": ["Jan", "Feb", "Mar", "Apr", "May", "Jun"],
    "yield": [65, 72, 78, 85, 92, 88],
    "predicted": [68, 70, 80, 88, 95, 90],
})

SOIL_TODAY = pd.DataFrame({
    "time": ["6am", "9am", "12pm", "3pm", "6pm", "9pm"],
    "moisture": [72, 68, 55, 48, 52, 60],
    "temp": [18, 22, 28, 32, 26, 20],
})

CROP_HEALTH = pd.DataFrame({
    "name": ["Wheat", "Corn", "Soybean", "Rice"],
    "health": [92, 87, 78, 95],
})

OVERVIEW_WEATHER = WeatherNow(
    temp="28°C",
    condition="Partly Cloudy",
    icon=Icon.SUN,
    details=(
        (Icon.DROPLETS, "Humidity", "65%"),
        (Icon.WIND, "Wind", "12 km/h"),
        (Icon.CLOUD, "Rain", "20%"),
    ),
)

OVERVIEW_INSIGHTS = (
    Insight("Pest risk detected in Field B — wheat section", Icon.ALERT_TRIANGLE, Tone.WARNING),
    Insight("Irrigation needed in Zone 3 within 4 hours", Icon.DROPLETS, Tone.SKY),
    Insight("Corn yield forecast increased by 8%", Icon.TRENDING_UP, Tone.LEAF),
)

PREMIUM_MODULES = ("Precision Farming", "Autonomous Machinery", "Livestock Monitoring")


# ═══════════════════════════════════════════════════════════════════════════
# Precision farming datasets
# ═══════════════════════════════════════════════════════════════════════════

MOISTURE_7D = pd.DataFrame({
    "day": ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"],
    "Field A": [72, 68, 64, 70, 75, 71, 69],
    "Field B": [65, 62, 60, 58, 63, 66, 64],
    "Field C": [58, 55, 52, 48, 45, 50, 53],
})

# Final day of the sample history (a Sunday, matching MOISTURE_7D)
HISTORY_END = pd.Timestamp("2026-02-22")
HISTORY_DAYS = 91

# base %, swing %, phase (radians) of the synthetic history per field
_HISTORY_PROFILE = {
    "Field A": (70.0, 5.0, 0.0),
    "Field B": (62.0, 4.0, 1.3),
    "Field C": (54.0, 6.0, 2.1),
}

NUTRIENTS = (
    Nutrient("Nitrogen (N)", 78, 90, "kg/ha"),
    Nutrient("Phosphorus (P)", 45, 50, "kg/ha"),
    Nutrient("Potassium (K)", 62, 60, "kg/ha"),
)

SENSORS = (
    Sensor(1, "Field A Sensor #1", 92, SignalLevel.STRONG, "2 min ago", SensorStatus.HEALTHY),
    Sensor(2, "Field A Sensor #2", 78, SignalLevel.STRONG, "5 min ago", SensorStatus.HEALTHY),
    Sensor(3, "Field B Sensor #1", 45, SignalLevel.MEDIUM, "12 min ago", SensorStatus.WARNING),
    Sensor(4, "Field B Sensor #2", 15, SignalLevel.WEAK, "1 hr ago", SensorStatus.WARNING),
    Sensor(5, "Field C Sensor #1", 88, SignalLevel.STRONG, "3 min ago", SensorStatus.HEALTHY),
    Sensor(6, "Field C Sensor #2", 0, SignalLevel.NONE, "3 days ago", SensorStatus.OFFLINE),
)

PRECISION_ALERTS = (
    Alert(1, Severity.ERROR, "Low moisture detected in Field C — below 50% threshold",
          "12 min ago", Icon.DROPLETS),
    Alert(2, Severity.INFO, "Rain expected tomorrow — 78% probability, consider delaying irrigation",
          "1 hr ago", Icon.CLOUD_RAIN),
    Alert(3, Severity.WARNING, "Fertilizer levels dropping in Field B — nitrogen at 65%",
          "2 hr ago", Icon.FLASK),
    Alert(4, Severity.WARNING, "Sensor #4 battery critically low — replace within 24 hours",
          "3 hr ago", Icon.ALERT_TRIANGLE),
    Alert(5, Severity.ERROR, "Soil pH anomaly detected in Field A — recommend manual testing",
          "5 hr ago", Icon.ACTIVITY),
)

WEATHER_FORECAST = (
    WeatherDay("Today", Icon.SUN, "28°C", "10%"),
    WeatherDay("Tomorrow", Icon.CLOUD_RAIN, "24°C", "78%"),
    WeatherDay("Wed", Icon.CLOUD_SUN, "26°C", "35%"),
)

IRRIGATION_PLAN = {
    "time": "06:00 AM",
    "rain_probability": 78,
    "volume_reduction": 30,
    "confidence": 92,
    "last_irrigated": "2 days ago",
    "water_saved": "1,240 L",
    "next_window": "Tomorrow 6AM",
}

FERTILIZER_PLAN = {
    "nitrogen_reduction": 12,
    "confidence": 88,
}


# ═══════════════════════════════════════════════════════════════════════════
# Crop monitoring datasets
# ═══════════════════════════════════════════════════════════════════════════

_WEEKS = ["W1", "W2", "W3", "W4", "W5", "W6", "W7", "W8"]
_MONTHS = ["Sep", "Oct", "Nov", "Dec", "Jan", "Feb"]

HEALTH_WEEKLY = pd.DataFrame({
    "period": _WEEKS,
    ALL_FIELDS: [76, 78, 74, 80, 82, 79, 84, 84],
    "Field A": [82, 83, 81, 85, 86, 85, 88, 88],
    "Field B": [72, 70, 68, 71, 69, 66, 68, 68],
    "Field C": [74, 76, 73, 77, 80, 78, 81, 82],
    "Field D": [75, 79, 75, 82, 84, 81, 85, 86],
})

HEALTH_MONTHLY = pd.DataFrame({
    "period": _MONTHS,
    ALL_FIELDS: [71, 74, 77, 79, 78, 84],
    "Field A": [78, 80, 83, 85, 86, 88],
    "Field B": [70, 71, 69, 70, 67, 68],
    "Field C": [69, 72, 75, 77, 79, 82],
    "Field D": [70, 74, 77, 80, 81, 86],
})

DISEASE_DETECTIONS = (
    DiseaseDetection(1, "Leaf Rust", "Field B", 87, DiseaseSeverity.HIGH, "🍂",
                     "Possible Leaf Rust detected in northern section of Field B. "
                     "Early treatment recommended."),
    DiseaseDetection(2, "Powdery Mildew", "Field A", 72, DiseaseSeverity.MEDIUM, "🌿",
                     "Early signs of Powdery Mildew in Field A east corner. Monitor closely."),
    DiseaseDetection(3, "Aphid Infestation", "Field C", 64, DiseaseSeverity.LOW, "🐛",
                     "Minor aphid activity detected in Field C. No immediate action needed."),
)

DRONE_CAPTURES = (
    DroneCapture(1, "Feb 17, 2026", "Field A", CaptureTag.HEALTHY),
    DroneCapture(2, "Feb 16, 2026", "Field B", CaptureTag.STRESS),
    DroneCapture(3, "Feb 15, 2026", "Field C", CaptureTag.HEALTHY),
    DroneCapture(4, "Feb 14, 2026", "Field A", CaptureTag.DISEASE),
    DroneCapture(5, "Feb 13, 2026", "Field B", CaptureTag.HEALTHY),
    DroneCapture(6, "Feb 12, 2026", "Field C", CaptureTag.STRESS),
)

FIELD_STATS = (
    FieldStat("Field A Health", 88, "%", "+4%", TrendDirection.UP, Icon.SPROUT),
    FieldStat("Field B Stress", 32, "%", "+8%", TrendDirection.UP, Icon.ALERT_TRIANGLE,
              higher_is_better=False),
    FieldStat("Pest Risk Index", 18, "/100", "-3", TrendDirection.DOWN, Icon.BUG,
              higher_is_better=False),
    FieldStat("Growth Rate", 2.4, "cm/day", "+0.3", TrendDirection.UP, Icon.TRENDING_UP),
)

FIELD_ALERTS = (
    Alert(1, Severity.WARNING, "Pest risk increasing in Field C — monitoring threshold breached",
          "15 min ago", Icon.BUG),
    Alert(2, Severity.INFO, "Moisture imbalance detected in north sector of Field A",
          "1 hr ago", Icon.DROPLETS),
    Alert(3, Severity.ERROR, "Crop stress detected in Field B — leaf temperature elevated",
          "2 hr ago", Icon.ACTIVITY),
    Alert(4, Severity.INFO, "NDVI values improving in Field C south — recovery underway",
          "4 hr ago", Icon.LEAF),
    Alert(5, Severity.WARNING, "Unusual growth pattern in Field A row 12 — manual inspection suggested",
          "6 hr ago", Icon.ALERT_TRIANGLE),
)

LAST_SCAN_LABEL = "2 hours ago"


# ═══════════════════════════════════════════════════════════════════════════
# Slice accessors
# ═══════════════════════════════════════════════════════════════════════════

def _moisture_history():
    """Daily moisture per field over HISTORY_DAYS, ending with the MOISTURE_7D week.

    The earlier days are a deterministic two-wave pattern around each
    field's base level, so every run sees the same numbers.
    """
    dates = pd.date_range(end=HISTORY_END, periods=HISTORY_DAYS, freq="D")
    t = np.arange(HISTORY_DAYS - len(MOISTURE_7D))
    history = pd.DataFrame({"date": dates})
    for field, (base, swing, phase) in _HISTORY_PROFILE.items():
        synthetic = (
            base
            + swing * np.sin(2 * math.pi * t / 17 + phase)
            + 0.5 * swing * np.sin(2 * math.pi * t / 6.5 + 2 * phase)
        )
        synthetic = np.clip(np.round(synthetic), 35, 95)
        recent = MOISTURE_7D[field].to_numpy(dtype=float)
        history[field] = np.concatenate([synthetic, recent])
    return history


def _moisture_30d():
    history = _moisture_history().tail(30)
    frame = pd.DataFrame({"day": history["date"].dt.strftime("%b %d")})
    for field in SENSOR_FIELDS:
        frame[field] = history[field].astype(int)
    return frame.reset_index(drop=True)


def _moisture_90d():
    # 13 calendar weeks, each labelled by its first day
    history = _moisture_history()
    weeks = len(history) // 7
    frame = pd.DataFrame({
        "day": history["date"].iloc[::7].dt.strftime("%b %d").to_list()[:weeks]
    })
    for field in SENSOR_FIELDS:
        values = history[field].to_numpy()[: weeks * 7].reshape(weeks, 7)
        frame[field] = np.round(values.mean(axis=1), 1)
    return frame


_MOISTURE_SLICES = {
    TimeRange.SEVEN_DAYS: lambda: MOISTURE_7D.copy(),
    TimeRange.THIRTY_DAYS: _moisture_30d,
    TimeRange.NINETY_DAYS: _moisture_90d,
}

_HEALTH_SLICES = {
    TimeRange.WEEKLY: HEALTH_WEEKLY,
    TimeRange.MONTHLY: HEALTH_MONTHLY,
}


def get_moisture_trend(time_range):
    """Return soil moisture per field for a 7d / 30d / 90d range.

    Columns: 'day' plus one column per sensor field, in axis order.
    """
    if time_range not in _MOISTURE_SLICES:
        raise ValueError(f"No moisture series for time range {time_range!r}")
    return _MOISTURE_SLICES[time_range]()


def get_current_moisture(field):
    """Latest soil moisture reading (%) for a sensor field."""
    if field not in SENSOR_FIELDS:
        raise ValueError(f"Unknown sensor field: {field!r}")
    return int(MOISTURE_7D[field].iloc[-1])


def get_health_trend(period, field=ALL_FIELDS):
    """Return the crop health index series for one field and period.

    Columns: 'period' and 'health'.
    """
    if period not in _HEALTH_SLICES:
        raise ValueError(f"No health series for period {period!r}")
    source = _HEALTH_SLICES[period]
    if field == "period" or field not in source.columns:
        raise ValueError(f"Unknown field: {field!r}")
    return pd.DataFrame({"period": source["period"], "health": source[field]})


def get_health_headline(field=ALL_FIELDS):
    """Return (latest health %, change vs. previous month) for the trend card."""
    series = HEALTH_MONTHLY[field]
    return int(series.iloc[-1]), int(series.iloc[-1] - series.iloc[-2])
