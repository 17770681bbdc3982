from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health", response_model=str)
def health() -> str:
    """Liveness probe."""
    return "OK"
