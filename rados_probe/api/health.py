from fastapi import APIRouter

router = APIRouter()


@router.get("", summary="Liveness")
async def health() -> dict:
    return {"status": "ok"}
