from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from pos_pricing.core.config import Settings
from pos_pricing.services.barcode import BarcodeDecoder, KeyEvent, decode_stream
from .deps import get_app_settings

router = APIRouter(prefix="/scanner", tags=["scanner"])


class KeyEventIn(BaseModel):
    key: str = Field(..., min_length=1)
    timestamp_ms: float = Field(..., ge=0)
    ctrl: bool = False
    alt: bool = False
    meta: bool = False


class DecodeIn(BaseModel):
    events: List[KeyEventIn]


@router.post("/decode", summary="Decode barcodes from a recorded key-event stream")
async def decode(payload: DecodeIn, settings: Settings = Depends(get_app_settings)):
    decoder = BarcodeDecoder.from_settings(settings)
    events = [KeyEvent(**e.model_dump()) for e in payload.events]
    return {"codes": decode_stream(events, decoder)}
