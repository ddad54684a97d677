from http import HTTPStatus
from typing import Annotated, List

from fastapi import APIRouter, Depends, Query

from storefront.applications.interfaces.dtos.category import CategoryPublic, CategorySchema, ManyIds
from storefront.applications.interfaces.dtos.envelope import PaginatedResult, QResult
from storefront.applications.interfaces.dtos.filter_page import FilterCategories
from storefront.applications.use_cases.category.create_category import CreateCategoryUseCase
from storefront.applications.use_cases.category.delete_category import DeleteCategoriesUseCase, DeleteCategoryUseCase
from storefront.applications.use_cases.category.get_categories import GetCategoriesUseCase
from storefront.applications.use_cases.category.get_category import GetCategoryUseCase
from storefront.applications.use_cases.category.update_category import UpdateCategoryUseCase
from storefront.domain.ports.repositories.category_repository import CategoryRepository
from storefront.infrastructure.config.dependencies import get_category_repository

router = APIRouter(prefix="/category", tags=["categories"])

CategoryRepositoryDep = Annotated[CategoryRepository, Depends(get_category_repository)]


@router.get("", response_model=PaginatedResult[CategoryPublic])
async def read_categories(
    filter_categories: Annotated[FilterCategories, Query()], category_repository: CategoryRepositoryDep
):
    use_case = GetCategoriesUseCase(category_repository)
    return await use_case.execute(filter_categories)


@router.get("/{category_id}", response_model=QResult[CategoryPublic])
async def read_category(category_id: int, category_repository: CategoryRepositoryDep):
    use_case = GetCategoryUseCase(category_repository)
    return QResult(rows=await use_case.execute(category_id))


@router.post("", status_code=HTTPStatus.CREATED, response_model=QResult[CategoryPublic])
async def create_category(category: CategorySchema, category_repository: CategoryRepositoryDep):
    use_case = CreateCategoryUseCase(category_repository)
    return QResult(rows=await use_case.execute(category))


@router.put("/{category_id}", response_model=QResult[CategoryPublic])
async def update_category(category_id: int, category: CategorySchema, category_repository: CategoryRepositoryDep):
    use_case = UpdateCategoryUseCase(category_repository)
    return QResult(rows=await use_case.execute(category_id, category))


@router.delete("/{category_id}", response_model=QResult[CategoryPublic])
async def delete_category(category_id: int, category_repository: CategoryRepositoryDep):
    use_case = DeleteCategoryUseCase(category_repository)
    return QResult(rows=await use_case.execute(category_id))


@router.delete("", response_model=QResult[List[CategoryPublic]])
async def delete_categories(many_ids: ManyIds, category_repository: CategoryRepositoryDep):
    use_case = DeleteCategoriesUseCase(category_repository)
    return QResult(rows=await use_case.execute(many_ids))
