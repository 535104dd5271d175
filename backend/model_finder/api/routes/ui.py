from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import HTMLResponse

from model_finder.api.deps import get_session
from model_finder.schemas import CategoryFilter, Source
from model_finder.services.rendering import render_detail, render_grid
from model_finder.services.session import FinderSession


router = APIRouter()


@router.get("/grid", response_class=HTMLResponse)
def grid(session: FinderSession = Depends(get_session)):
    return HTMLResponse(render_grid(session.grid()))


@router.post("/category/{category}", response_class=HTMLResponse)
async def select_category(category: CategoryFilter, session: FinderSession = Depends(get_session)):
    view = await session.select_category(category)
    return HTMLResponse(render_grid(view))


@router.post("/source/{source}", response_class=HTMLResponse)
async def select_source(source: Source, session: FinderSession = Depends(get_session)):
    view = await session.select_source(source)
    return HTMLResponse(render_grid(view))


@router.post("/search", response_class=HTMLResponse)
async def search(q: str = "", session: FinderSession = Depends(get_session)):
    view = await session.search(q)
    if view is None:
        # A newer keystroke took over; the client keeps what it shows.
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return HTMLResponse(render_grid(view))


@router.get("/detail/{model_id:path}", response_class=HTMLResponse)
def detail(model_id: str, session: FinderSession = Depends(get_session)):
    model = session.find(model_id)
    if not model:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return HTMLResponse(render_detail(model))
