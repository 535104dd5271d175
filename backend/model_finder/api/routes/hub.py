from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, status

from model_finder.api.deps import get_hub_client
from model_finder.schemas import CategoryFilter, ModelEntry
from model_finder.services.hub_client import FetchFailure, HubClient
from model_finder.services.model_filter import filter_models


router = APIRouter()


@router.get("/models", response_model=list[ModelEntry])
async def search_models(
    source: Literal["trending", "new"] = "trending",
    category: CategoryFilter = "all",
    q: str | None = None,
    client: HubClient = Depends(get_hub_client),
):
    try:
        models = await client.fetch_models(source, category)
    except FetchFailure as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    return filter_models(models, category, q or "")
