"""
Author service containing business logic layer
"""

from typing import Optional

from app.core.errors import ConflictError, NotFoundError
from app.core.logger import logger
from app.db.models import Author
from app.events.publisher import KafkaEventPublisher
from app.repositories.author import AuthorRepository
from app.schemas.author import AuthorRequest, AuthorResponse
from app.schemas.common import PageResponse


class AuthorService:
    """Service layer for author business logic"""

    def __init__(self, repository: AuthorRepository, publisher: KafkaEventPublisher):
        self.repository = repository
        self.publisher = publisher

    async def _get_or_404(self, author_id: int) -> Author:
        author = await self.repository.get_by_id(author_id)
        if author is None:
            raise NotFoundError("Author not found", details={"author_id": author_id})
        return author

    async def create_author(self, request: AuthorRequest, created_by: str = "system") -> AuthorResponse:
        author = await self.repository.create(request)
        response = AuthorResponse.model_validate(author)

        logger.info(
            f"Created author {response.id}",
            metadata={"event": "create_author", "author_id": response.id}
        )

        await self.publisher.publish_author_created(
            author_id=response.id,
            author_data=response.model_dump(mode="json", by_alias=True),
            created_by=created_by,
        )
        return response

    async def get_authors(self, skip: int = 0, limit: Optional[int] = None) -> PageResponse[AuthorResponse]:
        authors, total = await self.repository.list_authors(skip=skip, limit=limit)
        return PageResponse[AuthorResponse](
            content=[AuthorResponse.model_validate(a) for a in authors],
            total=total,
        )

    async def get_author(self, author_id: int) -> AuthorResponse:
        return AuthorResponse.model_validate(await self._get_or_404(author_id))

    async def update_author(self, author_id: int, request: AuthorRequest, updated_by: str = "system") -> AuthorResponse:
        author = await self._get_or_404(author_id)
        author = await self.repository.update(author, request)
        response = AuthorResponse.model_validate(author)

        logger.info(
            f"Updated author {author_id}",
            metadata={"event": "update_author", "author_id": author_id}
        )

        await self.publisher.publish_author_updated(
            author_id=author_id,
            author_data=response.model_dump(mode="json", by_alias=True),
            updated_by=updated_by,
        )
        return response

    async def delete_author(self, author_id: int, deleted_by: str = "system") -> None:
        """Delete an author that no document lists anymore"""
        author = await self._get_or_404(author_id)

        referencing = await self.repository.count_documents(author_id)
        if referencing:
            raise ConflictError(
                "Author is still referenced by documents",
                details={"author_id": author_id, "documents": referencing}
            )

        await self.repository.delete(author)

        logger.info(
            f"Deleted author {author_id}",
            metadata={"event": "delete_author", "author_id": author_id}
        )

        await self.publisher.publish_author_deleted(author_id=author_id, deleted_by=deleted_by)
