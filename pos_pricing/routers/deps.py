from fastapi import Request

from pos_pricing.core.config import Settings
from pos_pricing.services.rates.rate_service import RateService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_rate_service(request: Request) -> RateService:
    return request.app.state.rate_service
