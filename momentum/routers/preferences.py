from fastapi import APIRouter, Depends, HTTPException

from ..deps import get_store, require_api_key
from ..errors import ValidationError
from ..store import GoalStore
from .. import schemas

router = APIRouter(prefix="/preferences", tags=["preferences"], dependencies=[Depends(require_api_key)])

@router.get("")
def get_preferences(store: GoalStore = Depends(get_store)):
    return {"theme": store.theme}

@router.put("/theme")
def set_theme(payload: schemas.ThemeUpdate, store: GoalStore = Depends(get_store)):
    try:
        theme = store.set_theme(payload.theme)
    except ValidationError as e:
        raise HTTPException(422, str(e))
    return {"ok": True, "theme": theme}
