from fastapi import APIRouter, Depends

from pos_pricing.services.rates.rate_service import RateService
from .deps import get_rate_service

router = APIRouter(tags=["health"])


@router.get("/health", summary="Liveness probe with rate status")
async def health(svc: RateService = Depends(get_rate_service)):
    current = svc.get_current()
    return {"status": "ok", "rate_known": current.is_known}
