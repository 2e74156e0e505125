from __future__ import annotations
from pathlib import Path
from typing import Any, Literal
from fastapi import FastAPI, Request, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel
from ..config import Settings, load_settings
from ..core.session import PlanSession
from ..core.service import PlanService
from ..llm.base import LLM
from ..llm.errors import LLMCallError
from ..llm.http import OpenAICompatLLM

class PromptBody(BaseModel):
    prompt: str = ""

class RunPlanBody(BaseModel):
    prompt: str = ""
    steps: Any = None

class StepBody(BaseModel):
    text: str = ""

class MoveBody(BaseModel):
    direction: Literal["up", "down"]

def _llm_error(e: LLMCallError) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": str(e)})

def create_app(settings: Settings | None = None, *, llm: LLM | None = None) -> FastAPI:
    settings = settings or load_settings("config", "live")
    app = FastAPI(title="Plan-Edit vs Chat", docs_url=None, redoc_url=None)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.server.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    static_dir = Path(__file__).parent / "static"
    tmpl_dir = Path(__file__).parent / "templates"
    app.mount("/static", StaticFiles(directory=static_dir), name="static")
    templates = Jinja2Templates(directory=str(tmpl_dir))

    if llm is None:
        llm = OpenAICompatLLM(
            settings.llm.url,
            settings.llm.model,
            api_key=settings.llm.api_key,
            timeout=settings.llm.timeout_sec,
        )
    service = PlanService(llm, max_tokens=settings.llm.max_tokens, temperature=settings.llm.temperature)
    app.state.settings = settings
    app.state.service = service
    app.state.session = PlanSession(
        service,
        use_http=settings.general.use_http_llm,
        log_dir=settings.general.log_dir,
    )

    def _session() -> PlanSession:
        return app.state.session

    @app.get("/api/health")
    async def health() -> dict:
        return {"status": "ok", "mode": _session().mode}

    # -------- proxy LLM (sans état) --------
    @app.post("/api/chat")
    async def api_chat(body: PromptBody):
        try:
            return {"content": await service.chat(body.prompt)}
        except LLMCallError as e:
            return _llm_error(e)

    @app.post("/api/plan")
    async def api_plan(body: PromptBody):
        try:
            return {"steps": await service.generate_plan(body.prompt)}
        except LLMCallError as e:
            return _llm_error(e)

    @app.post("/api/run-plan")
    async def api_run_plan(body: RunPlanBody):
        steps = body.steps if isinstance(body.steps, list) else []
        try:
            return {"result": await service.execute_plan(body.prompt, steps)}
        except LLMCallError as e:
            return _llm_error(e)

    # -------- session de démo (deux volets) --------
    @app.get("/api/session")
    async def session_state() -> dict:
        return _session().state()

    @app.post("/api/session/send")
    async def session_send(body: PromptBody) -> dict:
        await _session().submit(body.prompt)
        return _session().state()

    @app.post("/api/session/steps")
    async def session_add_step(body: StepBody) -> dict:
        _session().add_step(body.text)
        return _session().state()

    @app.put("/api/session/steps/{index}")
    async def session_update_step(index: int, body: StepBody) -> dict:
        try:
            _session().plan.update_step(index, body.text)
        except IndexError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return _session().state()

    @app.delete("/api/session/steps/{index}")
    async def session_remove_step(index: int) -> dict:
        try:
            _session().plan.remove_step(index)
        except IndexError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return _session().state()

    @app.post("/api/session/steps/{index}/move")
    async def session_move_step(index: int, body: MoveBody) -> dict:
        if not (0 <= index < len(_session().plan.steps)):
            raise HTTPException(status_code=404, detail=f"étape {index} inexistante")
        _session().plan.move_step(index, body.direction)
        return _session().state()

    @app.post("/api/session/run")
    async def session_run() -> dict:
        await _session().run()
        return _session().state()

    @app.get("/", response_class=HTMLResponse)
    async def home(request: Request):
        session = _session()
        return templates.TemplateResponse(
            request,
            "index.html",
            {
                "title": "Plan-Edit vs Chat",
                "state": session.state(),
                "blocks": session.result_blocks(),
            },
        )

    return app
