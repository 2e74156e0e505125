import os
import subprocess
import sys
from pathlib import Path
from planedit.cli import main, render_blocks
from planedit.plan.blocks import to_display_blocks

ROOT = Path(__file__).resolve().parents[1]
CONFIG = str(ROOT / "config")

def run_cli(*args: str, cwd: Path) -> subprocess.CompletedProcess:
    # lancé hors du dépôt: les logs (data/logs) atterrissent dans cwd
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(p for p in (str(ROOT), env.get("PYTHONPATH", "")) if p)
    return subprocess.run(
        [sys.executable, "-m", "planedit", *args],
        text=True,
        capture_output=True,
        check=False,
        cwd=cwd,
        env=env,
    )

def test_help_works(tmp_path: Path):
    p = run_cli("--help", cwd=tmp_path)
    assert p.returncode == 0
    assert "Plan-Edit vs Chat" in p.stdout

def test_dummy_model_full_flow(tmp_path: Path):
    p = run_cli("--prompt", "Plan 3 vegetarian dinners", "--model", "dummy", "--drop", "2",
                "--config", CONFIG, cwd=tmp_path)
    assert p.returncode == 0, p.stderr
    assert "=== CHAT ===" in p.stdout
    assert "=== PLAN ===" in p.stdout
    assert "=== PLAN (édité) ===" in p.stdout
    assert "=== RÉSULTAT ===" in p.stdout
    assert "STATUS: ok (mode=http)" in p.stdout
    assert (tmp_path / "data" / "logs" / "planedit.log").exists()

def test_mock_model_plan_only(tmp_path: Path):
    p = run_cli("--prompt", "Organize my desk", "--model", "mock", "--plan-only",
                "--config", CONFIG, cwd=tmp_path)
    assert p.returncode == 0, p.stderr
    assert "\n1. " in p.stdout and "\n3. " in p.stdout
    assert "Organize my desk" in p.stdout
    assert "=== RÉSULTAT ===" not in p.stdout
    assert "STATUS: ok (mode=mock)" in p.stdout

def test_version(capsys):
    assert main(["--version"]) == 0
    assert capsys.readouterr().out.strip() == "0.1.0"

def test_render_blocks_text():
    lines = render_blocks(to_display_blocks("Intro\nDay 1\n- Oats"))
    assert lines == ["Intro", "## Day 1", "  • Oats"]
