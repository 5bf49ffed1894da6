"""
Relational models for authors and documents
"""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import relationship

from app.db.base import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


document_authors = Table(
    "document_authors",
    Base.metadata,
    Column("document_id", Integer, ForeignKey("documents.id", ondelete="CASCADE"), primary_key=True),
    Column("author_id", Integer, ForeignKey("authors.id", ondelete="RESTRICT"), primary_key=True),
)

document_references = Table(
    "document_references",
    Base.metadata,
    Column("document_id", Integer, ForeignKey("documents.id", ondelete="CASCADE"), primary_key=True),
    Column("reference_document_id", Integer, ForeignKey("documents.id", ondelete="CASCADE"), primary_key=True),
)


class Author(Base):
    __tablename__ = "authors"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)


class Document(Base):
    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    body = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    authors = relationship(
        "Author",
        secondary=document_authors,
        order_by=Author.id,
        lazy="selectin",
    )
    # Documents this one cites. Loaded by the repository with selectinload;
    # self-referential eager loading stops at the first level.
    references = relationship(
        "Document",
        secondary=document_references,
        primaryjoin=id == document_references.c.document_id,
        secondaryjoin=id == document_references.c.reference_document_id,
        back_populates="cited_by",
        order_by="Document.id",
    )
    # Documents citing this one
    cited_by = relationship(
        "Document",
        secondary=document_references,
        primaryjoin=id == document_references.c.reference_document_id,
        secondaryjoin=id == document_references.c.document_id,
        back_populates="references",
    )

    @property
    def reference_document_ids(self):
        return [ref.id for ref in self.references]
