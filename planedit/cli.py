from __future__ import annotations
import argparse, asyncio
from pathlib import Path
from . import __version__
from .config import load_settings
from .core.mock import MockPlanService
from .core.service import PlanService
from .core.session import PlanSession
from .llm.dummy import DummyLLM
from .llm.http import OpenAICompatLLM
from .plan.blocks import ListBlock, Paragraph, Section
from .tools.logs import log_event

# === Affichage ================================================================
def _print_banner(phase_label: str):
    print(f"Plan-Edit v{__version__} — {phase_label}")

def _print_settings(prompt: str | None, config: str, model: str, s):
    print(f"prompt  = {repr(prompt) if prompt is not None else 'None'}")
    print(f"config  = {repr(str(config))}")
    print(f"profile = {s.general.profile}")
    print(f"model   = {model}")
    print(f"llm = {{url={s.llm.url}, model={s.llm.model}, temperature={s.llm.temperature}, max_tokens={s.llm.max_tokens}}}")
    print(f"use_http_llm = {s.general.use_http_llm}")

def render_blocks(blocks) -> list[str]:
    """Rendu texte des blocs (terminal)."""
    out: list[str] = []
    for block in blocks:
        if isinstance(block, Section):
            out.append(f"## {block.title}")
            out.extend(render_blocks(block.content))
        elif isinstance(block, ListBlock):
            out.extend(f"  • {item}" for item in block.items)
        elif isinstance(block, Paragraph):
            out.append(block.text)
    return out

# === Arguments ================================================================
def _argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser("planedit", description="Plan-Edit vs Chat — chat direct ou plan éditable puis exécuté")
    ap.add_argument("--prompt", help="Demande envoyée aux deux volets (string).")
    ap.add_argument("--config", default="config", help="Chemin vers le dossier de configuration.")
    ap.add_argument("--profile", choices=["live", "offline"], default="live", help="Profil de configuration.")
    ap.add_argument("--model", choices=["http", "dummy", "mock"], default="http",
                    help="http: endpoint configuré | dummy: LLM déterministe local | mock: substitut sans LLM.")
    ap.add_argument("--drop", type=int, action="append", default=[],
                    help="Supprimer l'étape N (1-based) avant exécution; répétable.")
    ap.add_argument("--plan-only", action="store_true", help="S'arrêter après la génération du plan.")
    ap.add_argument("--version", action="store_true", help="Afficher la version et quitter.")
    return ap

def build_parser() -> argparse.ArgumentParser:
    return _argparser()

def _build_session(args, s) -> PlanSession:
    if args.model == "mock":
        return PlanSession(None, MockPlanService(), use_http=False, log_dir=s.general.log_dir)
    if args.model == "dummy":
        llm = DummyLLM()
    else:
        llm = OpenAICompatLLM(s.llm.url, s.llm.model, api_key=s.llm.api_key, timeout=s.llm.timeout_sec)
    service = PlanService(llm, max_tokens=s.llm.max_tokens, temperature=s.llm.temperature)
    return PlanSession(service, use_http=s.general.use_http_llm, log_dir=s.general.log_dir)

async def _run(session: PlanSession, args) -> int:
    answer = await session.submit(args.prompt)
    if session.notice:
        print(f"[LLM] {session.notice}")

    print("\n=== CHAT ===")
    print(answer.content if answer else "")

    print("\n=== PLAN ===")
    for i, step in enumerate(session.plan.steps, 1):
        print(f"{i}. {step}")
    if args.plan_only:
        return 0

    # suppression par index décroissant pour garder les positions 1-based valides
    for n in sorted(set(args.drop), reverse=True):
        if 1 <= n <= len(session.plan.steps):
            session.plan.remove_step(n - 1)
    if args.drop:
        print("\n=== PLAN (édité) ===")
        for i, step in enumerate(session.plan.steps, 1):
            print(f"{i}. {step}")

    result = await session.run()
    if result is None:
        print(f"ERR: {session.warning or 'aucun résultat'}")
        return 2
    if session.notice:
        print(f"[LLM] {session.notice}")

    print("\n=== RÉSULTAT ===")
    for line in render_blocks(session.result_blocks()):
        print(line)
    return 0

# === Main ====================================================================
def main(argv: list[str] | None = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    if args.version:
        print(__version__)
        return 0
    if not args.prompt or not args.prompt.strip():
        ap.error("--prompt est requis")

    s = load_settings(config=args.config, profile=args.profile)

    _print_banner("plan-edit")
    _print_settings(args.prompt, args.config, args.model, s)

    session = _build_session(args, s)
    code = asyncio.run(_run(session, args))
    if code != 0:
        return code

    print(f"\nSTATUS: ok (mode={session.mode})")
    log_event(
        Path(s.general.log_dir),
        f"prompt={args.prompt}",
        kind="cli",
        data={"status": "ok", "mode": session.mode, "steps": len(session.plan.steps)},
    )
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
