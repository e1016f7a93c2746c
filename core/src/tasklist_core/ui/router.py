from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Form, HTTPException, Request
from fastapi import Path as PathParam
from fastapi.responses import HTMLResponse

from tasklist_core import handlers
from tasklist_core.render import Renderer
from tasklist_core.store import TaskStore

BASE_DIR = Path(__file__).resolve().parent
STATIC_DIR = BASE_DIR / "static"

router = APIRouter(tags=["ui"])

# Route functions are sync: FastAPI runs each one in its threadpool, and waiting
# on the store lock never blocks the event loop.


def _get_store(request: Request) -> TaskStore:
    store = getattr(request.app.state, "task_store", None)
    if store is None:
        raise HTTPException(status_code=500, detail="Task store not initialized")
    return store


def _get_renderer(request: Request) -> Renderer:
    renderer = getattr(request.app.state, "renderer", None)
    if renderer is None:
        raise HTTPException(status_code=500, detail="Renderer not initialized")
    return renderer


@router.get("/", response_class=HTMLResponse)
def ui_show_tasks(request: Request) -> HTMLResponse:
    html = handlers.show_all(_get_store(request), _get_renderer(request))
    return HTMLResponse(html)


@router.post("/add", response_class=HTMLResponse)
def ui_add_task(request: Request, task: str = Form(default="")) -> HTMLResponse:
    html = handlers.add_task(_get_store(request), _get_renderer(request), task)
    return HTMLResponse(html)


@router.delete("/delete/{task_id}", response_class=HTMLResponse)
def ui_delete_task(request: Request, task_id: int = PathParam(..., ge=0)) -> HTMLResponse:
    html = handlers.delete_task(_get_store(request), _get_renderer(request), task_id)
    return HTMLResponse(html)


@router.patch("/check/{task_id}", response_class=HTMLResponse)
def ui_check_task(request: Request, task_id: int = PathParam(..., ge=0)) -> HTMLResponse:
    html = handlers.check_task(_get_store(request), _get_renderer(request), task_id)
    return HTMLResponse(html)
