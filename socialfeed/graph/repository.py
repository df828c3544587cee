# socialfeed/graph/repository.py
import logging
from typing import Any, Dict, Generic, List, Mapping, Optional, Type, TypeVar

from socialfeed.core.errors import IndexUnavailable, NotFound
from socialfeed.models.base import FirestoreDocument
from socialfeed.storage.base import DocumentStore, OrderBy

logger = logging.getLogger(__name__)

E = TypeVar('E', bound=FirestoreDocument)


class EntityRepository(Generic[E]):
    """
    하나의 컬렉션에 대한 CRUD 및 쿼리를 담당하는 리포지토리.

    쿼리는 먼저 저장소의 색인 경로로 실행하고, 복합 색인이 없어 IndexUnavailable 이 발생하면
    컬렉션 전체를 읽어 메모리에서 필터링/정렬하는 경로로 다시 실행합니다.
    두 경로는 같은 데이터에 대해 같은 결과를 돌려줍니다.
    """

    def __init__(self, store: DocumentStore, model: Type[E]):
        self.store = store
        self.model = model
        self.collection = model.collection

    async def create(self, entity: E) -> str:
        return await self.store.create(self.collection, entity.to_document(), doc_id=entity.id)

    async def create_if_absent(self, entity: E) -> bool:
        return await self.store.create_if_absent(self.collection, entity.id, entity.to_document())

    async def find_by_id(self, entity_id: str) -> Optional[E]:
        data = await self.store.get(self.collection, entity_id)
        return self.model.from_document(data) if data is not None else None

    async def get_by_id(self, entity_id: str) -> E:
        entity = await self.find_by_id(entity_id)
        if entity is None:
            raise NotFound(f"{self.collection} 문서를 찾을 수 없습니다: {entity_id}")
        return entity

    async def update(self, entity_id: str, fields: Dict[str, Any]) -> None:
        await self.store.update(self.collection, entity_id, fields)

    async def delete(self, entity_id: str) -> bool:
        return await self.store.delete(self.collection, entity_id)

    async def query(self, filters: Mapping[str, Any], order_by: Optional[OrderBy] = None) -> List[E]:
        try:
            docs = await self.store.query(self.collection, filters, order_by)
        except IndexUnavailable as e:
            logger.warning(f"색인 쿼리 실패, 전체 스캔으로 대체합니다 (Collection: {self.collection}): {e}")
            docs = await self._scan_query(filters, order_by)
        return [self.model.from_document(doc) for doc in docs]

    async def _scan_query(self, filters: Mapping[str, Any], order_by: Optional[OrderBy]) -> List[Dict[str, Any]]:
        docs = [
            doc for doc in await self.store.scan(self.collection)
            if all(doc.get(field) == value for field, value in filters.items())
        ]
        if order_by is not None:
            # Firestore 는 정렬 필드가 없는 문서를 order_by 결과에서 제외합니다.
            docs = [doc for doc in docs if doc.get(order_by.field) is not None]
            docs = sorted(docs, key=lambda d: d[order_by.field], reverse=order_by.descending)
        return docs
