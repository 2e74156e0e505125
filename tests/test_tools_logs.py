from pathlib import Path
from planedit.tools.logs import log_event

def test_log_event_writes_line(tmp_path: Path):
    p = log_event(tmp_path / "logs", "unit-test message", kind="unit", data={"n": 1})
    assert p.exists() and p.name == "planedit.log"
    data = p.read_text(encoding="utf-8").splitlines()[-1]
    assert "| unit | unit-test message | {\"n\": 1}" in data
    assert "T" in data.split(" | ")[0]  # ISO timestamp

def test_log_event_keeps_one_line_per_event(tmp_path: Path):
    log_event(tmp_path, "first\nline")
    p = log_event(tmp_path, "second")
    assert len(p.read_text(encoding="utf-8").splitlines()) == 2
