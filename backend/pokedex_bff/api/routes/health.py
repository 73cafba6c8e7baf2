from fastapi import APIRouter

from pokedex_bff.core.settings import settings

router = APIRouter()


@router.get("/")
def health():
    return {"ok": True, "name": settings.PROJECT_NAME}
