from fastapi import APIRouter

from model_finder.api.routes import hub
from model_finder.api.routes import models
from model_finder.api.routes import ui


api_router = APIRouter()

api_router.include_router(ui.router, prefix="/ui", tags=["ui"])
api_router.include_router(models.router, prefix="/models", tags=["models"])
api_router.include_router(hub.router, prefix="/hub", tags=["huggingface"])
