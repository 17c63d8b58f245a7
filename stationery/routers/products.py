from fastapi import APIRouter, Depends

from stationery.core.constants import API_PREFIX
from stationery.dependencies import get_products
from stationery.repositories.products import ProductRepository
from stationery.schemas.product import ProductCreate, ProductDeleted, ProductRead, StockUpdate

router = APIRouter(prefix=f"{API_PREFIX}/products", tags=["Products"])


@router.get("", response_model=list[ProductRead])
def list_products(products: ProductRepository = Depends(get_products)):
    return products.list()


@router.post("", response_model=ProductRead)
def add_product(payload: ProductCreate, products: ProductRepository = Depends(get_products)):
    return products.add(
        payload.name,
        payload.purchase_price,
        payload.selling_price,
        payload.stock,
        min_stock=payload.min_stock,
    )


@router.get("/{product_id}", response_model=ProductRead)
def get_product(product_id: int, products: ProductRepository = Depends(get_products)):
    return products.get(product_id)


@router.put("/{product_id}/stock", response_model=ProductRead)
def update_product_stock(
    product_id: int,
    payload: StockUpdate,
    products: ProductRepository = Depends(get_products),
):
    return products.update_stock(product_id, payload.stock, payload.total_sold)


@router.delete("/{product_id}", response_model=ProductDeleted)
def delete_product(product_id: int, products: ProductRepository = Depends(get_products)):
    removed_sales = products.remove(product_id)
    return ProductDeleted(message="Product deleted successfully", removed_sales=removed_sales)


__all__ = ["router"]
