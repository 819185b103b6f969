"""
Resource API endpoints following FastAPI best practices
Clean API layer with dependency injection
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from resource_service.core.errors import ErrorResponseModel
from resource_service.dependencies.resource import get_resource_service
from resource_service.schemas.resource import ResourceCreate, ResourceCreateRequest, ResourceResponse
from resource_service.services.resource import ResourceService

router = APIRouter()


@router.get(
    "",
    response_model=List[ResourceResponse],
    summary="Get all resources",
)
async def list_resources(
    service: ResourceService = Depends(get_resource_service),
):
    """Retrieve list of all resources"""
    return await service.list_resources()


@router.get(
    "/code/{code}",
    response_model=ResourceResponse,
    responses={404: {"model": ErrorResponseModel}},
    summary="Get resource by code",
)
async def get_resource_by_code(
    code: str,
    service: ResourceService = Depends(get_resource_service),
):
    """Retrieve a specific resource by its unique code"""
    return await service.get_by_code(code)


@router.get(
    "/{resource_id}",
    response_model=ResourceResponse,
    responses={404: {"model": ErrorResponseModel}},
    summary="Get resource by ID",
)
async def get_resource(
    resource_id: str,
    service: ResourceService = Depends(get_resource_service),
):
    """Retrieve a specific resource by its ID"""
    return await service.get_by_id(resource_id)


@router.post(
    "",
    response_model=ResourceResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponseModel}, 409: {"model": ErrorResponseModel}},
    summary="Create new resource",
)
async def create_resource(
    payload: ResourceCreateRequest,
    service: ResourceService = Depends(get_resource_service),
):
    """
    Create a new resource.

    - 400 when the request fails validation
    - 409 when another resource already uses the code
    """
    return await service.create(ResourceCreate(**payload.model_dump()))


@router.delete(
    "/{resource_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponseModel}},
    summary="Delete resource",
)
async def delete_resource(
    resource_id: str,
    service: ResourceService = Depends(get_resource_service),
):
    """Delete a resource by ID"""
    await service.delete(resource_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
