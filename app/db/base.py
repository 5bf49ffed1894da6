from sqlalchemy.orm import declarative_base

# Single declarative base for all ORM models.
Base = declarative_base()

__all__ = ["Base"]
