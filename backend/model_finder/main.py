import logging

from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from model_finder.api.deps import get_session
from model_finder.api.router import api_router
from model_finder.core.config import PACKAGE_DIR, settings
from model_finder.services.catalog_store import CatalogStore
from model_finder.services.hub_client import HubClient
from model_finder.services.rendering import render_page
from model_finder.services.session import FinderSession

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


app = FastAPI(title="Hugging Face Model Finder", version="0.1.0")


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    return JSONResponse(
        status_code=500,
        content={"detail": str(exc)},
    )

app.mount("/static", StaticFiles(directory=str(PACKAGE_DIR / "static")), name="static")
app.include_router(api_router)


@app.on_event("startup")
def on_startup():
    store = CatalogStore()
    store.load_curated(settings.catalog_path)
    hub_client = HubClient()
    app.state.hub_client = hub_client
    app.state.finder = FinderSession(store, hub_client)


@app.on_event("shutdown")
async def on_shutdown():
    hub_client = getattr(app.state, "hub_client", None)
    if hub_client is not None:
        await hub_client.aclose()


@app.get("/", response_class=HTMLResponse)
def index(session: FinderSession = Depends(get_session)):
    return HTMLResponse(render_page(session.grid()))


@app.get("/health")
def health():
    return {"ok": True}
