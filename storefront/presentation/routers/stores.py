from http import HTTPStatus
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from storefront.applications.interfaces.dtos.envelope import PaginatedResult, QResult
from storefront.applications.interfaces.dtos.filter_page import FilterStores
from storefront.applications.interfaces.dtos.store import (
    ProductCount,
    StoreDetailPublic,
    StorePublic,
    StoreSchema,
    StoreUpdateSchema,
)
from storefront.applications.use_cases.store.count_products import CountProductsUseCase
from storefront.applications.use_cases.store.create_store import CreateStoreUseCase
from storefront.applications.use_cases.store.delete_store import DeleteStoreUseCase
from storefront.applications.use_cases.store.get_store import GetStoreUseCase
from storefront.applications.use_cases.store.get_stores import GetStoresUseCase
from storefront.applications.use_cases.store.update_store import UpdateStoreUseCase
from storefront.domain.ports.repositories.store_repository import StoreRepository
from storefront.infrastructure.config.dependencies import get_store_repository

router = APIRouter(prefix="/store", tags=["stores"])

StoreRepositoryDep = Annotated[StoreRepository, Depends(get_store_repository)]


@router.get("", response_model=PaginatedResult[StorePublic])
async def read_stores(filter_stores: Annotated[FilterStores, Query()], store_repository: StoreRepositoryDep):
    use_case = GetStoresUseCase(store_repository)
    return await use_case.execute(filter_stores)


@router.get("/{store_id}", response_model=QResult[StoreDetailPublic])
async def read_store(store_id: int, store_repository: StoreRepositoryDep):
    use_case = GetStoreUseCase(store_repository)
    return QResult(rows=await use_case.execute(store_id))


@router.get("/{store_id}/count", response_model=QResult[ProductCount])
async def count_products(store_id: int, store_repository: StoreRepositoryDep):
    use_case = CountProductsUseCase(store_repository)
    return QResult(rows=await use_case.execute(store_id))


@router.post("", status_code=HTTPStatus.CREATED, response_model=QResult[StorePublic])
async def create_store(store: StoreSchema, store_repository: StoreRepositoryDep):
    use_case = CreateStoreUseCase(store_repository)
    return QResult(rows=await use_case.execute(store))


@router.put("/{store_id}", response_model=QResult[StorePublic])
async def update_store(store_id: int, store: StoreUpdateSchema, store_repository: StoreRepositoryDep):
    use_case = UpdateStoreUseCase(store_repository)
    return QResult(rows=await use_case.execute(store_id, store))


@router.delete("/{store_id}", response_model=QResult[StorePublic])
async def delete_store(store_id: int, store_repository: StoreRepositoryDep):
    use_case = DeleteStoreUseCase(store_repository)
    return QResult(rows=await use_case.execute(store_id))
