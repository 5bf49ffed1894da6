"""
Document API endpoints
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.core.errors import ErrorResponseModel
from app.dependencies.auth import require_document_role
from app.dependencies.services import get_document_service
from app.models.user import User
from app.schemas.common import PageResponse
from app.schemas.document import DocumentRequest, DocumentResponse
from app.services.document import DocumentService

router = APIRouter(
    responses={
        401: {"model": ErrorResponseModel},
        403: {"model": ErrorResponseModel},
    },
)


@router.post(
    "",
    response_model=DocumentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponseModel}},
)
async def create_document(
    document: DocumentRequest,
    service: DocumentService = Depends(get_document_service),
    user: User = Depends(require_document_role),
):
    """
    Create a document. Every author ID and reference document ID must exist.
    """
    return await service.create_document(document, created_by=user.id)


@router.get("", response_model=PageResponse[DocumentResponse])
async def list_documents(
    skip: int = Query(0, ge=0, description="Number of documents to skip"),
    limit: Optional[int] = Query(None, ge=1, le=1000, description="Max documents to return (omit for all)"),
    service: DocumentService = Depends(get_document_service),
    user: User = Depends(require_document_role),
):
    """
    List documents ordered by ID.
    """
    return await service.get_documents(skip=skip, limit=limit)


@router.get(
    "/{document_id}",
    response_model=DocumentResponse,
    responses={404: {"model": ErrorResponseModel}},
)
async def get_document(
    document_id: int,
    service: DocumentService = Depends(get_document_service),
    user: User = Depends(require_document_role),
):
    """
    Get a document by its ID.
    """
    return await service.get_document(document_id)


@router.put(
    "/{document_id}",
    response_model=DocumentResponse,
    responses={400: {"model": ErrorResponseModel}, 404: {"model": ErrorResponseModel}},
)
async def update_document(
    document_id: int,
    document: DocumentRequest,
    service: DocumentService = Depends(get_document_service),
    user: User = Depends(require_document_role),
):
    """
    Replace a document's title, body, authors and references.
    A document cannot list itself as a reference document.
    """
    return await service.update_document(document_id, document, updated_by=user.id)


@router.delete(
    "/{document_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponseModel}},
)
async def delete_document(
    document_id: int,
    service: DocumentService = Depends(get_document_service),
    user: User = Depends(require_document_role),
):
    """
    Delete a document. Documents citing it lose the citation.
    """
    await service.delete_document(document_id, deleted_by=user.id)
