from socialfeed.storage.base import DocumentStore, OrderBy
from socialfeed.storage.factory import create_document_store
from socialfeed.storage.memory import InMemoryDocumentStore

__all__ = ['DocumentStore', 'OrderBy', 'InMemoryDocumentStore', 'create_document_store']
