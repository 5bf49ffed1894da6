"""
Dependency injection for services and repositories
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_session
from app.events.publisher import KafkaEventPublisher, get_event_publisher
from app.repositories.author import AuthorRepository
from app.repositories.document import DocumentRepository
from app.services.author import AuthorService
from app.services.document import DocumentService


async def get_author_repository(session: AsyncSession = Depends(get_session)) -> AuthorRepository:
    """Get author repository bound to the request session"""
    return AuthorRepository(session)


async def get_document_repository(session: AsyncSession = Depends(get_session)) -> DocumentRepository:
    """Get document repository bound to the request session"""
    return DocumentRepository(session)


async def get_document_service(
    repository: DocumentRepository = Depends(get_document_repository),
    author_repository: AuthorRepository = Depends(get_author_repository),
    publisher: KafkaEventPublisher = Depends(get_event_publisher),
) -> DocumentService:
    """Get document service instance"""
    return DocumentService(repository, author_repository, publisher)


async def get_author_service(
    repository: AuthorRepository = Depends(get_author_repository),
    publisher: KafkaEventPublisher = Depends(get_event_publisher),
) -> AuthorService:
    """Get author service instance"""
    return AuthorService(repository, publisher)
