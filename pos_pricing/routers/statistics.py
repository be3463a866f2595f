from datetime import date
from typing import List, Optional

from fastapi import APIRouter
from pydantic import BaseModel

from pos_pricing.models.sales import SaleRecord
from pos_pricing.services.sales_stats import summarize_sales

router = APIRouter(prefix="/statistics", tags=["statistics"])


class SummaryIn(BaseModel):
    sales: List[SaleRecord]
    date_from: Optional[date] = None
    date_to: Optional[date] = None


@router.post("/summary", summary="Revenue summary over a list of sales")
async def sales_summary(payload: SummaryIn):
    return summarize_sales(payload.sales, payload.date_from, payload.date_to).as_dict()
