from pathlib import Path
import pytest
from planedit.config import load_settings

@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("LLM_URL", "LLM_MODEL", "LLM_API_KEY", "PORT", "PLANEDIT_USE_HTTP_LLM"):
        monkeypatch.delenv(name, raising=False)

def test_live_defaults():
    s = load_settings(config=str(Path("config")), profile="live")
    assert s.general.profile == "live"
    assert s.general.use_http_llm is True
    assert s.llm.url == "http://localhost:11434/v1/chat/completions"
    assert s.llm.model == "llama3"
    assert s.llm.temperature == 0.4
    assert s.llm.max_tokens == 900
    assert s.server.port == 3001

def test_offline_profile_disables_http():
    s = load_settings(config="config", profile="offline")
    assert s.general.profile == "offline"
    assert s.general.use_http_llm is False
    assert s.llm.model == "llama3"

def test_env_overrides(monkeypatch):
    monkeypatch.setenv("LLM_URL", "http://gpu-box:8000/v1/chat/completions")
    monkeypatch.setenv("LLM_MODEL", "mistral")
    monkeypatch.setenv("PORT", "4000")
    monkeypatch.setenv("PLANEDIT_USE_HTTP_LLM", "false")
    s = load_settings(config="config", profile="live")
    assert s.llm.url == "http://gpu-box:8000/v1/chat/completions"
    assert s.llm.model == "mistral"
    assert s.server.port == 4000
    assert s.general.use_http_llm is False

def test_cli_overrides_apply(tmp_path: Path):
    s = load_settings(config="config", profile="live", overrides={"log_dir": str(tmp_path), "nope": 1})
    assert s.general.log_dir == str(tmp_path)
    assert not hasattr(s.general, "nope")

def test_unknown_keys_filtered_and_profiles_dir(tmp_path: Path):
    (tmp_path / "profiles").mkdir()
    (tmp_path / "profiles" / "defaults.toml").write_text(
        '[llm]\nmodel = "qwen2"\nunknown = 1\n[extra]\nx = 1\n', encoding="utf-8"
    )
    (tmp_path / "profiles" / "offline.toml").write_text("[general]\nuse_http_llm = false\n", encoding="utf-8")
    s = load_settings(config=str(tmp_path), profile="offline")
    assert s.llm.model == "qwen2"
    assert s.general.use_http_llm is False

def test_missing_config_dir_uses_dataclass_defaults(tmp_path: Path):
    s = load_settings(config=str(tmp_path / "absent"), profile="live")
    assert s.llm.max_tokens == 900
    assert s.server.cors_origins == ["*"]
