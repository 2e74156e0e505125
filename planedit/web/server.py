from __future__ import annotations
import argparse
import uvicorn
from ..config import load_settings
from .app import create_app

def main() -> None:
    parser = argparse.ArgumentParser(description="Plan-Edit vs Chat (FastAPI)")
    parser.add_argument("--config", type=str, default="config", help="Dossier ou fichier config (par défaut: ./config)")
    parser.add_argument("--profile", type=str, default="live", help="Profil config (live|offline)")
    parser.add_argument("--host", type=str, default=None, help="Hôte (défaut: config.server.host)")
    parser.add_argument("--port", type=int, default=None, help="Port (défaut: config.server.port ou $PORT)")
    args = parser.parse_args()

    settings = load_settings(args.config, args.profile)
    app = create_app(settings)

    host = args.host or settings.server.host
    port = int(args.port or settings.server.port)
    print(f"LLM proxy listening on http://{host}:{port} (llm={settings.llm.url}, model={settings.llm.model})")
    uvicorn.run(app, host=host, port=port, log_level="info")

if __name__ == "__main__":
    main()
