import pytest

import farm_data


@pytest.fixture(autouse=True)
def log_file(tmp_path, monkeypatch):
    """Send dashboard log lines to a per-test file."""
    path = tmp_path / "dashboard_log.txt"
    monkeypatch.setattr(farm_data, "LOG_PATH", path)
    return path
