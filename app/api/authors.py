"""
Author API endpoints
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.core.errors import ErrorResponseModel
from app.dependencies.auth import require_author_role
from app.dependencies.services import get_author_service
from app.models.user import User
from app.schemas.author import AuthorRequest, AuthorResponse
from app.schemas.common import PageResponse
from app.services.author import AuthorService

router = APIRouter(
    responses={
        401: {"model": ErrorResponseModel},
        403: {"model": ErrorResponseModel},
    },
)


@router.post(
    "",
    response_model=AuthorResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponseModel}},
)
async def create_author(
    author: AuthorRequest,
    service: AuthorService = Depends(get_author_service),
    user: User = Depends(require_author_role),
):
    return await service.create_author(author, created_by=user.id)


@router.get("", response_model=PageResponse[AuthorResponse])
async def list_authors(
    skip: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=1, le=1000),
    service: AuthorService = Depends(get_author_service),
    user: User = Depends(require_author_role),
):
    return await service.get_authors(skip=skip, limit=limit)


@router.get(
    "/{author_id}",
    response_model=AuthorResponse,
    responses={404: {"model": ErrorResponseModel}},
)
async def get_author(
    author_id: int,
    service: AuthorService = Depends(get_author_service),
    user: User = Depends(require_author_role),
):
    return await service.get_author(author_id)


@router.put(
    "/{author_id}",
    response_model=AuthorResponse,
    responses={400: {"model": ErrorResponseModel}, 404: {"model": ErrorResponseModel}},
)
async def update_author(
    author_id: int,
    author: AuthorRequest,
    service: AuthorService = Depends(get_author_service),
    user: User = Depends(require_author_role),
):
    return await service.update_author(author_id, author, updated_by=user.id)


@router.delete(
    "/{author_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponseModel}, 409: {"model": ErrorResponseModel}},
)
async def delete_author(
    author_id: int,
    service: AuthorService = Depends(get_author_service),
    user: User = Depends(require_author_role),
):
    """
    Delete an author. Fails with 409 while any document still lists the author.
    """
    await service.delete_author(author_id, deleted_by=user.id)
