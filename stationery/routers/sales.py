from fastapi import APIRouter, Depends

from stationery.core.constants import API_PREFIX
from stationery.dependencies import get_coordinator, get_ledger
from stationery.repositories.sales import SaleLedger
from stationery.schemas.sale import SaleCreate, SaleRead
from stationery.services.sale_service import SaleCoordinator

router = APIRouter(prefix=f"{API_PREFIX}/sales", tags=["Sales"])


@router.get("", response_model=list[SaleRead])
def list_sales(ledger: SaleLedger = Depends(get_ledger)):
    return ledger.list()


@router.post("", response_model=SaleRead)
def record_sale(payload: SaleCreate, coordinator: SaleCoordinator = Depends(get_coordinator)):
    return coordinator.record_sale(
        payload.product_id,
        payload.quantity,
        payload.sale_date,
        customer_name=payload.customer_name,
    )


__all__ = ["router"]
