from fastapi import APIRouter, Depends

from stationery.core.constants import API_PREFIX
from stationery.dependencies import get_analytics
from stationery.schemas.analytics import AnalyticsRead
from stationery.services.analytics_service import AnalyticsAggregator

router = APIRouter(prefix=API_PREFIX, tags=["Analytics"])


@router.get("/analytics", response_model=AnalyticsRead)
def business_analytics(analytics: AnalyticsAggregator = Depends(get_analytics)):
    return AnalyticsRead(**analytics.compute())


__all__ = ["router"]
