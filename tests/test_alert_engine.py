"""
Tests for severity / status styling and alert-feed summaries.
"""

from alert_engine import (
    SEVERITY_TONES, TONE_COLORS, count_by_severity, format_active_count,
    get_alert_style, get_capture_tone, get_disease_tone, get_feed_summary,
    get_feed_tone, get_most_severe, get_severity_color, get_status_tone,
)
from farm_data import (
    FIELD_ALERTS, PRECISION_ALERTS, Alert, CaptureTag, DiseaseSeverity, Icon,
    SensorStatus, Severity, Tone,
)


class TestSeverityStyle:

    def test_each_severity_has_its_own_colour(self):
        colours = {get_severity_color(s) for s in Severity}
        assert len(colours) == len(Severity)

    def test_error_is_destructive(self):
        assert SEVERITY_TONES[Severity.ERROR] is Tone.DESTRUCTIVE
        assert get_severity_color(Severity.ERROR) == TONE_COLORS[Tone.DESTRUCTIVE]

    def test_border_and_icon_match(self):
        border, icon = get_alert_style(Severity.WARNING)
        assert border == icon == TONE_COLORS[Tone.WARNING]


class TestBadgeTones:

    def test_sensor_status(self):
        assert get_status_tone(SensorStatus.HEALTHY) is Tone.LEAF
        assert get_status_tone(SensorStatus.WARNING) is Tone.WARNING
        assert get_status_tone(SensorStatus.OFFLINE) is Tone.DESTRUCTIVE

    def test_disease_severity(self):
        assert get_disease_tone(DiseaseSeverity.HIGH) is Tone.DESTRUCTIVE
        assert get_disease_tone(DiseaseSeverity.LOW) is Tone.LEAF

    def test_capture_tag(self):
        assert get_capture_tone(CaptureTag.STRESS) is Tone.WARNING


class TestFeedSummary:

    def test_counts_include_every_severity(self):
        counts = count_by_severity([])
        assert counts == {Severity.INFO: 0, Severity.WARNING: 0, Severity.ERROR: 0}

    def test_precision_feed(self):
        assert format_active_count(PRECISION_ALERTS) == "5 active"
        assert get_feed_summary(PRECISION_ALERTS) == "2 critical, 2 warnings, 1 notice"

    def test_field_feed(self):
        assert get_feed_summary(FIELD_ALERTS) == "1 critical, 2 warnings, 2 notices"

    def test_empty_feed(self):
        assert get_feed_summary([]) == "No active alerts."
        assert get_most_severe([]) is None

    def test_most_severe(self):
        alerts = [
            Alert(1, Severity.INFO, "a", "now", Icon.BELL),
            Alert(2, Severity.WARNING, "b", "now", Icon.BELL),
        ]
        assert get_most_severe(alerts) is Severity.WARNING

    def test_feed_tone_follows_most_severe(self):
        assert get_feed_tone(PRECISION_ALERTS) is Tone.DESTRUCTIVE
        notices = [Alert(1, Severity.INFO, "a", "now", Icon.BELL)]
        assert get_feed_tone(notices) is Tone.ACCENT
        assert get_feed_tone([]) is Tone.LEAF
