from __future__ import annotations
from dataclasses import dataclass, field, fields
from pathlib import Path
import tomllib, os

PROFILES = ["live", "offline"]

@dataclass
class General:
    profile: str = "live"
    log_dir: str = "data/logs"
    # False -> on démarre directement en mode mock (pas d'appel HTTP)
    use_http_llm: bool = True

@dataclass
class LLM:
    # endpoint compatible OpenAI (Ollama, LM Studio, vLLM, ...)
    url: str = "http://localhost:11434/v1/chat/completions"
    model: str = "llama3"
    api_key: str = ""
    temperature: float = 0.4
    max_tokens: int = 900
    timeout_sec: float = 60.0

@dataclass
class Server:
    host: str = "127.0.0.1"
    port: int = 3001
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

@dataclass
class Settings:
    general: General
    llm: LLM
    server: Server

def _load_toml_if_exists(path: Path) -> dict:
    if path.exists():
        with path.open("rb") as f:
            return tomllib.load(f)
    return {}

def _read_profile_toml(config_path: Path, profile: str) -> dict:
    """
    Cherche dans:
      - config/defaults.toml et config/<profile>.toml
      - puis fallback: config/profiles/defaults.toml et config/profiles/<profile>.toml
    """
    cfg_dir = config_path if config_path.is_dir() else config_path.parent

    data = _load_toml_if_exists(cfg_dir / "defaults.toml")
    if not data:
        data = _load_toml_if_exists(cfg_dir / "profiles" / "defaults.toml")

    prof = _load_toml_if_exists(cfg_dir / f"{profile}.toml")
    if not prof:
        prof = _load_toml_if_exists(cfg_dir / "profiles" / f"{profile}.toml")

    # Fusion superficielle defaults <- profil
    base = data or {}
    for k, v in prof.items():
        if isinstance(v, dict) and isinstance(base.get(k), dict):
            base[k].update(v)
        else:
            base[k] = v
    return base

def _filter_for_dataclass(cls, data: dict) -> dict:
    """Ne garde que les clés connues du dataclass (évite TypeError sur clés en trop)."""
    allowed = {f.name for f in fields(cls)}
    return {k: v for k, v in (data or {}).items() if k in allowed}

def _apply_env(raw: dict) -> None:
    """Variables d'environnement prioritaires sur le TOML (mêmes noms que le proxy Node d'origine)."""
    llm = raw.setdefault("llm", {})
    server = raw.setdefault("server", {})
    general = raw.setdefault("general", {})
    if os.environ.get("LLM_URL"):
        llm["url"] = os.environ["LLM_URL"]
    if os.environ.get("LLM_MODEL"):
        llm["model"] = os.environ["LLM_MODEL"]
    if os.environ.get("LLM_API_KEY"):
        llm["api_key"] = os.environ["LLM_API_KEY"]
    if os.environ.get("PORT"):
        server["port"] = int(os.environ["PORT"])
    flag = os.environ.get("PLANEDIT_USE_HTTP_LLM")
    if flag is not None:
        general["use_http_llm"] = flag.strip().lower() != "false"

def load_settings(config: str | None, profile: str = "live", overrides: dict | None = None) -> Settings:
    config_path = Path(config) if config else Path("config")
    raw = _read_profile_toml(config_path, profile)
    _apply_env(raw)

    g = General(**_filter_for_dataclass(General, raw.get("general")))
    l = LLM(**_filter_for_dataclass(LLM, raw.get("llm")))
    srv = Server(**_filter_for_dataclass(Server, raw.get("server")))
    g.profile = profile

    # Overrides (seulement sur General pour l’instant)
    if overrides:
        for k, v in overrides.items():
            if hasattr(g, k):
                setattr(g, k, v)

    return Settings(general=g, llm=l, server=srv)
