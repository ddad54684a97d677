from http import HTTPStatus
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from storefront.applications.interfaces.dtos.envelope import PaginatedResult, QResult
from storefront.applications.interfaces.dtos.filter_page import FilterProducts
from storefront.applications.interfaces.dtos.product import (
    ProductCategoryPublic,
    ProductPublic,
    ProductSchema,
    ProductUpdateSchema,
)
from storefront.applications.use_cases.product.attach_category import AttachCategoryUseCase
from storefront.applications.use_cases.product.attach_store import AttachStoreUseCase
from storefront.applications.use_cases.product.create_product import CreateProductUseCase
from storefront.applications.use_cases.product.delete_product import DeleteProductUseCase
from storefront.applications.use_cases.product.detach_category import DetachCategoryUseCase
from storefront.applications.use_cases.product.get_product import GetProductUseCase
from storefront.applications.use_cases.product.get_products import GetProductsUseCase
from storefront.applications.use_cases.product.update_product import UpdateProductUseCase
from storefront.domain.ports.repositories.category_repository import CategoryRepository
from storefront.domain.ports.repositories.product_repository import ProductRepository
from storefront.domain.ports.repositories.store_repository import StoreRepository
from storefront.infrastructure.config.dependencies import (
    get_category_repository,
    get_product_repository,
    get_store_repository,
)

router = APIRouter(prefix="/product", tags=["products"])

ProductRepositoryDep = Annotated[ProductRepository, Depends(get_product_repository)]


@router.get("", response_model=PaginatedResult[ProductPublic])
async def read_products(filter_products: Annotated[FilterProducts, Query()], product_repository: ProductRepositoryDep):
    use_case = GetProductsUseCase(product_repository)
    return await use_case.execute(filter_products)


@router.get("/{product_id}", response_model=QResult[ProductPublic])
async def read_product(product_id: int, product_repository: ProductRepositoryDep):
    use_case = GetProductUseCase(product_repository)
    return QResult(rows=await use_case.execute(product_id))


@router.post("", status_code=HTTPStatus.CREATED, response_model=QResult[ProductPublic])
async def create_product(product: ProductSchema, product_repository: ProductRepositoryDep):
    use_case = CreateProductUseCase(product_repository)
    return QResult(rows=await use_case.execute(product))


@router.put("/{product_id}", response_model=QResult[ProductPublic])
async def update_product(product_id: int, product: ProductUpdateSchema, product_repository: ProductRepositoryDep):
    use_case = UpdateProductUseCase(product_repository)
    return QResult(rows=await use_case.execute(product_id, product))


@router.delete("/{product_id}", response_model=QResult[ProductPublic])
async def delete_product(product_id: int, product_repository: ProductRepositoryDep):
    use_case = DeleteProductUseCase(product_repository)
    return QResult(rows=await use_case.execute(product_id))


@router.put("/{product_id}/category/{category_id}", response_model=QResult[ProductCategoryPublic])
async def attach_category(
    product_id: int,
    category_id: int,
    product_repository: ProductRepositoryDep,
    category_repository: Annotated[CategoryRepository, Depends(get_category_repository)],
):
    use_case = AttachCategoryUseCase(product_repository, category_repository)
    return QResult(rows=await use_case.execute(product_id, category_id))


@router.delete("/{product_id}/category/{category_id}", response_model=QResult[ProductCategoryPublic])
async def detach_category(product_id: int, category_id: int, product_repository: ProductRepositoryDep):
    use_case = DetachCategoryUseCase(product_repository)
    return QResult(rows=await use_case.execute(product_id, category_id))


@router.put("/{product_id}/store/{store_id}", response_model=QResult[ProductPublic])
async def attach_store(
    product_id: int,
    store_id: int,
    product_repository: ProductRepositoryDep,
    store_repository: Annotated[StoreRepository, Depends(get_store_repository)],
):
    use_case = AttachStoreUseCase(product_repository, store_repository)
    return QResult(rows=await use_case.execute(product_id, store_id))
