from fastapi import APIRouter, Depends, HTTPException, status

from model_finder.api.deps import get_session
from model_finder.schemas import CategoryFilter, ModelEntry
from model_finder.services.model_filter import filter_models
from model_finder.services.session import FinderSession


router = APIRouter()


@router.get("/catalog", response_model=list[ModelEntry])
def get_catalog(
    category: CategoryFilter = "all",
    q: str | None = None,
    session: FinderSession = Depends(get_session),
):
    return filter_models(session.store.curated, category, q or "")


@router.get("/{model_id:path}", response_model=ModelEntry)
def get_model(model_id: str, session: FinderSession = Depends(get_session)):
    model = session.find(model_id)
    if not model:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Model not found")
    return model
