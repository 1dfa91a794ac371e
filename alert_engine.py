"""
Alert Engine for AgriMind AI dashboard
Severity and status styling, badge tones, and alert-feed summaries.
"""

from farm_data import (
    CaptureTag, DiseaseSeverity, SensorStatus, Severity, Tone, ensure_exhaustive,
)


# ---------------------------------------------------------------------------
# Palette
# ---------------------------------------------------------------------------

TONE_COLORS = ensure_exhaustive({
    Tone.LEAF: "hsl(122, 39%, 49%)",
    Tone.SKY: "hsl(199, 89%, 48%)",
    Tone.PRIMARY: "hsl(142, 45%, 32%)",
    Tone.WARNING: "hsl(45, 93%, 47%)",
    Tone.DESTRUCTIVE: "hsl(0, 72%, 51%)",
    Tone.ACCENT: "hsl(211, 78%, 46%)",
    Tone.EARTH: "hsl(30, 45%, 42%)",
}, Tone)


def get_tone_color(tone):
    """Map a palette tone to its CSS colour."""
    return TONE_COLORS[tone]


# ---------------------------------------------------------------------------
# Alert severity
# ---------------------------------------------------------------------------

SEVERITY_TONES = ensure_exhaustive({
    Severity.ERROR: Tone.DESTRUCTIVE,
    Severity.WARNING: Tone.WARNING,
    Severity.INFO: Tone.ACCENT,
}, Severity)

SEVERITY_RANK = ensure_exhaustive({
    Severity.ERROR: 2,
    Severity.WARNING: 1,
    Severity.INFO: 0,
}, Severity)


def get_severity_color(severity):
    """Left-border and icon colour for an alert of this severity."""
    return TONE_COLORS[SEVERITY_TONES[severity]]


def get_alert_style(severity):
    """Return (border_color, icon_color) for an alert-feed item."""
    color = get_severity_color(severity)
    return color, color


# ---------------------------------------------------------------------------
# Badges
# ---------------------------------------------------------------------------

STATUS_TONES = ensure_exhaustive({
    SensorStatus.HEALTHY: Tone.LEAF,
    SensorStatus.WARNING: Tone.WARNING,
    SensorStatus.OFFLINE: Tone.DESTRUCTIVE,
}, SensorStatus)

DISEASE_TONES = ensure_exhaustive({
    DiseaseSeverity.HIGH: Tone.DESTRUCTIVE,
    DiseaseSeverity.MEDIUM: Tone.WARNING,
    DiseaseSeverity.LOW: Tone.LEAF,
}, DiseaseSeverity)

CAPTURE_TONES = ensure_exhaustive({
    CaptureTag.HEALTHY: Tone.LEAF,
    CaptureTag.STRESS: Tone.WARNING,
    CaptureTag.DISEASE: Tone.DESTRUCTIVE,
}, CaptureTag)


def get_status_tone(status):
    return STATUS_TONES[status]


def get_disease_tone(severity):
    return DISEASE_TONES[severity]


def get_capture_tone(tag):
    return CAPTURE_TONES[tag]


# ---------------------------------------------------------------------------
# Feed summaries
# ---------------------------------------------------------------------------

def count_by_severity(alerts):
    """Count alerts per severity; every severity is present in the result."""
    counts = {severity: 0 for severity in Severity}
    for alert in alerts:
        counts[alert.severity] += 1
    return counts


def format_active_count(alerts):
    """Badge text for a feed header, e.g. '5 active'."""
    return f"{len(alerts)} active"


def get_most_severe(alerts):
    """Highest severity present in the feed, or None for an empty feed."""
    if not alerts:
        return None
    return max((a.severity for a in alerts), key=SEVERITY_RANK.__getitem__)


def get_feed_tone(alerts):
    """Badge tone for a feed header: the tone of its most severe alert."""
    severity = get_most_severe(alerts)
    if severity is None:
        return Tone.LEAF
    return SEVERITY_TONES[severity]


def get_feed_summary(alerts):
    """Generate a one-line human-readable summary of an alert feed."""
    if not alerts:
        return "No active alerts."

    counts = count_by_severity(alerts)
    labels = {
        Severity.ERROR: ("critical", "critical"),
        Severity.WARNING: ("warning", "warnings"),
        Severity.INFO: ("notice", "notices"),
    }
    parts = []
    for severity in sorted(Severity, key=SEVERITY_RANK.__getitem__, reverse=True):
        n = counts[severity]
        if n:
            singular, plural = labels[severity]
            parts.append(f"{n} {singular if n == 1 else plural}")
    return ", ".join(parts)
