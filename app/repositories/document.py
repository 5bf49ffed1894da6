"""
Document repository for data access layer following Repository pattern
"""

from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.errors import ErrorResponse
from app.core.logger import logger
from app.db.models import Author, Document


class DocumentRepository:
    """Repository for document data access operations"""

    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _select_documents():
        """SELECT of documents with their authors, references and citing documents loaded"""
        return select(Document).options(
            selectinload(Document.authors),
            selectinload(Document.references),
            selectinload(Document.cited_by),
        )

    async def _fail(self, action: str, error: SQLAlchemyError):
        await self.session.rollback()
        logger.error(
            f"Database error during document {action}: {error}",
            metadata={"event": f"document_{action}_db_error"}
        )
        raise ErrorResponse(f"Database error during document {action}", status_code=503)

    async def create(
        self,
        title: str,
        body: str,
        authors: List[Author],
        references: List[Document],
    ) -> Document:
        """Create a new document with its author and reference sets"""
        try:
            now = datetime.now(timezone.utc)
            document = Document(
                title=title,
                body=body,
                authors=list(authors),
                references=list(references),
                created_at=now,
                updated_at=now,
            )
            self.session.add(document)
            await self.session.commit()
            return document
        except SQLAlchemyError as e:
            await self._fail("creation", e)

    async def get_by_id(self, document_id: int) -> Optional[Document]:
        """Get document by ID"""
        try:
            result = await self.session.execute(self._select_documents().where(Document.id == document_id))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            await self._fail("retrieval", e)

    async def get_by_ids(self, document_ids: Iterable[int]) -> List[Document]:
        """Get all documents whose ID is in ``document_ids``, ordered by ID"""
        ids = set(document_ids)
        if not ids:
            return []
        try:
            result = await self.session.execute(
                self._select_documents().where(Document.id.in_(ids)).order_by(Document.id)
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            await self._fail("retrieval", e)

    async def list_documents(self, skip: int = 0, limit: Optional[int] = None) -> Tuple[List[Document], int]:
        """List documents ordered by ID with optional pagination"""
        try:
            total = await self.session.scalar(select(func.count()).select_from(Document))

            query = self._select_documents().order_by(Document.id).offset(skip)
            if limit is not None:
                query = query.limit(limit)
            result = await self.session.execute(query)
            return list(result.scalars().all()), total or 0
        except SQLAlchemyError as e:
            await self._fail("listing", e)

    async def update(
        self,
        document: Document,
        title: str,
        body: str,
        authors: List[Author],
        references: List[Document],
    ) -> Document:
        """Replace title, body, author set and reference set of a document"""
        try:
            document.title = title
            document.body = body
            document.authors = list(authors)
            document.references = list(references)
            document.updated_at = datetime.now(timezone.utc)
            await self.session.commit()
            return document
        except SQLAlchemyError as e:
            await self._fail("update", e)

    async def delete(self, document: Document) -> None:
        """Hard delete a document; citations of it are removed with it"""
        try:
            await self.session.delete(document)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self._fail("deletion", e)
