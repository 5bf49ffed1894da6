"""
Document service containing business logic layer
"""

from typing import Iterable, List, Optional

from app.core.errors import NotFoundError, ValidationError
from app.core.logger import logger
from app.db.models import Author, Document
from app.events.publisher import KafkaEventPublisher
from app.repositories.author import AuthorRepository
from app.repositories.document import DocumentRepository
from app.schemas.common import PageResponse
from app.schemas.document import DocumentRequest, DocumentResponse


class DocumentService:
    """Service layer for document business logic"""

    def __init__(
        self,
        repository: DocumentRepository,
        author_repository: AuthorRepository,
        publisher: KafkaEventPublisher,
    ):
        self.repository = repository
        self.author_repository = author_repository
        self.publisher = publisher

    @staticmethod
    def _to_response(document: Document) -> DocumentResponse:
        return DocumentResponse.model_validate(document)

    async def _resolve_authors(self, author_ids: Iterable[int]) -> List[Author]:
        wanted = set(author_ids or ())
        if not wanted:
            raise ValidationError("At least one author is required", details={"field": "authorIds"})

        authors = await self.author_repository.get_by_ids(wanted)
        missing = sorted(wanted - {a.id for a in authors})
        if missing:
            raise ValidationError(
                "Unknown author id(s)",
                details={"field": "authorIds", "missing": missing}
            )
        return authors

    async def _resolve_references(self, reference_ids: Optional[Iterable[int]]) -> List[Document]:
        wanted = set(reference_ids or ())
        if not wanted:
            return []

        references = await self.repository.get_by_ids(wanted)
        missing = sorted(wanted - {d.id for d in references})
        if missing:
            raise ValidationError(
                "Unknown reference document id(s)",
                details={"field": "referenceDocIds", "missing": missing}
            )
        return references

    async def create_document(self, request: DocumentRequest, created_by: str = "system") -> DocumentResponse:
        """Create a new document after resolving its authors and references"""
        authors = await self._resolve_authors(request.author_ids)
        references = await self._resolve_references(request.reference_doc_ids)

        document = await self.repository.create(request.title, request.body, authors, references)
        response = self._to_response(document)

        logger.info(
            f"Created document {response.id}",
            metadata={"event": "create_document", "document_id": response.id, "created_by": created_by}
        )

        await self.publisher.publish_document_created(
            document_id=response.id,
            document_data=response.model_dump(mode="json", by_alias=True),
            created_by=created_by,
        )

        return response

    async def update_document(
        self,
        document_id: int,
        request: DocumentRequest,
        updated_by: str = "system",
    ) -> DocumentResponse:
        """Fully replace a document; a document may not reference itself"""
        document = await self.repository.get_by_id(document_id)
        if document is None:
            raise NotFoundError("Document not found", details={"document_id": document_id})

        if request.reference_doc_ids and document_id in request.reference_doc_ids:
            raise ValidationError(
                "A document cannot reference itself",
                details={"field": "referenceDocIds", "document_id": document_id}
            )

        authors = await self._resolve_authors(request.author_ids)
        references = await self._resolve_references(request.reference_doc_ids)

        document = await self.repository.update(document, request.title, request.body, authors, references)
        response = self._to_response(document)

        logger.info(
            f"Updated document {document_id}",
            metadata={"event": "update_document", "document_id": document_id, "updated_by": updated_by}
        )

        await self.publisher.publish_document_updated(
            document_id=document_id,
            document_data=response.model_dump(mode="json", by_alias=True),
            updated_by=updated_by,
        )

        return response

    async def get_documents(self, skip: int = 0, limit: Optional[int] = None) -> PageResponse[DocumentResponse]:
        """All documents ordered by ID; ``limit=None`` returns everything"""
        documents, total = await self.repository.list_documents(skip=skip, limit=limit)

        logger.info(
            f"Fetched {len(documents)} documents",
            metadata={"event": "list_documents", "count": len(documents), "total": total}
        )

        return PageResponse[DocumentResponse](
            content=[self._to_response(d) for d in documents],
            total=total,
        )

    async def get_document(self, document_id: int) -> DocumentResponse:
        """Get document by ID"""
        document = await self.repository.get_by_id(document_id)
        if document is None:
            raise NotFoundError("Document not found", details={"document_id": document_id})

        logger.debug(
            f"Fetched document {document_id}",
            metadata={"event": "get_document", "document_id": document_id}
        )

        return self._to_response(document)

    async def delete_document(self, document_id: int, deleted_by: str = "system") -> None:
        """Hard delete a document"""
        document = await self.repository.get_by_id(document_id)
        if document is None:
            raise NotFoundError("Document not found", details={"document_id": document_id})

        await self.repository.delete(document)

        logger.info(
            f"Deleted document {document_id}",
            metadata={"event": "delete_document", "document_id": document_id, "deleted_by": deleted_by}
        )

        await self.publisher.publish_document_deleted(document_id=document_id, deleted_by=deleted_by)
