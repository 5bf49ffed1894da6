"""
Author repository for data access layer following Repository pattern
"""

from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ErrorResponse
from app.core.logger import logger
from app.db.models import Author, document_authors
from app.schemas.author import AuthorRequest


class AuthorRepository:
    """Repository for author data access operations"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _fail(self, action: str, error: SQLAlchemyError):
        await self.session.rollback()
        logger.error(
            f"Database error during author {action}: {error}",
            metadata={"event": f"author_{action}_db_error"}
        )
        raise ErrorResponse(f"Database error during author {action}", status_code=503)

    async def create(self, author_data: AuthorRequest) -> Author:
        """Create a new author"""
        try:
            now = datetime.now(timezone.utc)
            author = Author(
                first_name=author_data.first_name,
                last_name=author_data.last_name,
                created_at=now,
                updated_at=now,
            )
            self.session.add(author)
            await self.session.commit()
            return author
        except SQLAlchemyError as e:
            await self._fail("creation", e)

    async def get_by_id(self, author_id: int) -> Optional[Author]:
        """Get author by ID"""
        try:
            result = await self.session.execute(select(Author).where(Author.id == author_id))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            await self._fail("retrieval", e)

    async def get_by_ids(self, author_ids: Iterable[int]) -> List[Author]:
        """Get all authors whose ID is in ``author_ids``, ordered by ID"""
        ids = set(author_ids)
        if not ids:
            return []
        try:
            result = await self.session.execute(
                select(Author).where(Author.id.in_(ids)).order_by(Author.id)
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            await self._fail("retrieval", e)

    async def list_authors(self, skip: int = 0, limit: Optional[int] = None) -> Tuple[List[Author], int]:
        """List authors ordered by ID with optional pagination"""
        try:
            total = await self.session.scalar(select(func.count()).select_from(Author))

            query = select(Author).order_by(Author.id).offset(skip)
            if limit is not None:
                query = query.limit(limit)
            result = await self.session.execute(query)
            return list(result.scalars().all()), total or 0
        except SQLAlchemyError as e:
            await self._fail("listing", e)

    async def update(self, author: Author, author_data: AuthorRequest) -> Author:
        """Replace an author's names"""
        try:
            author.first_name = author_data.first_name
            author.last_name = author_data.last_name
            author.updated_at = datetime.now(timezone.utc)
            await self.session.commit()
            return author
        except SQLAlchemyError as e:
            await self._fail("update", e)

    async def count_documents(self, author_id: int) -> int:
        """Number of documents listing this author"""
        try:
            count = await self.session.scalar(
                select(func.count())
                .select_from(document_authors)
                .where(document_authors.c.author_id == author_id)
            )
            return count or 0
        except SQLAlchemyError as e:
            await self._fail("retrieval", e)

    async def delete(self, author: Author) -> None:
        """Hard delete an author"""
        try:
            await self.session.delete(author)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self._fail("deletion", e)
