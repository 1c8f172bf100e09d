"""ORM models. Importing the package registers every mapper with Base.metadata."""

from src.models.chunk import Chunk
from src.models.document import Document, DocumentStatus

__all__ = ["Chunk", "Document", "DocumentStatus"]
