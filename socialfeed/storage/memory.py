# socialfeed/storage/memory.py
import copy
import uuid
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from socialfeed.core.errors import IndexUnavailable, NotFound
from socialfeed.storage.base import DocumentStore, OrderBy


# (컬렉션, 동등 조건 필드들, 정렬 필드)
CompositeIndex = Tuple[str, Tuple[str, ...], str]


class InMemoryDocumentStore(DocumentStore):
    """
    딕셔너리 기반 문서 저장소. 테스트와 로컬 실행용입니다.

    - 읽기/쓰기 시 깊은 복사를 하여 원격 저장소처럼 호출자와 상태를 공유하지 않습니다.
    - Firestore 의 복합 색인 규칙을 흉내 냅니다: 정렬 필드와 다른 필드에 동등 조건이 걸린 쿼리는
      composite_indexes 에 선언된 색인이 없으면 IndexUnavailable 을 발생시킵니다.
    - 모든 메서드는 await 지점 없이 실행되므로 단일 이벤트 루프 안에서 각 연산은 원자적입니다.
    """

    def __init__(self, composite_indexes: Optional[Iterable[CompositeIndex]] = None):
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = defaultdict(dict)
        self.composite_indexes = {
            (collection, tuple(sorted(filter_fields)), order_field)
            for collection, filter_fields, order_field in (composite_indexes or ())
        }

    def add_index(self, collection: str, filter_fields: Iterable[str], order_field: str) -> None:
        self.composite_indexes.add((collection, tuple(sorted(filter_fields)), order_field))

    async def create(self, collection: str, data: Dict[str, Any], doc_id: Optional[str] = None) -> str:
        doc_id = doc_id or uuid.uuid4().hex
        self._collections[collection][doc_id] = copy.deepcopy(data)
        return doc_id

    async def create_if_absent(self, collection: str, doc_id: str, data: Dict[str, Any]) -> bool:
        docs = self._collections[collection]
        if doc_id in docs:
            return False
        docs[doc_id] = copy.deepcopy(data)
        return True

    async def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        doc = self._collections[collection].get(doc_id)
        return copy.deepcopy(doc) if doc is not None else None

    async def update(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> None:
        doc = self._collections[collection].get(doc_id)
        if doc is None:
            raise NotFound(f"문서를 찾을 수 없습니다: {collection}/{doc_id}")
        doc.update(copy.deepcopy(fields))

    async def delete(self, collection: str, doc_id: str) -> bool:
        return self._collections[collection].pop(doc_id, None) is not None

    async def query(self, collection: str, filters: Mapping[str, Any],
                    order_by: Optional[OrderBy] = None) -> List[Dict[str, Any]]:
        if order_by is not None and self._needs_composite_index(filters, order_by):
            index = (collection, tuple(sorted(filters)), order_by.field)
            if index not in self.composite_indexes:
                raise IndexUnavailable(f"복합 색인이 없습니다: {index}")

        docs = [
            doc for doc in self._collections[collection].values()
            if all(doc.get(field) == value for field, value in filters.items())
        ]
        if order_by is not None:
            docs = [doc for doc in docs if doc.get(order_by.field) is not None]
            docs = sorted(docs, key=lambda d: d[order_by.field], reverse=order_by.descending)
        return copy.deepcopy(docs)

    async def scan(self, collection: str) -> List[Dict[str, Any]]:
        return copy.deepcopy(list(self._collections[collection].values()))

    async def increment(self, collection: str, doc_id: str, field: str, delta: int,
                        floor: Optional[int] = None) -> None:
        doc = self._collections[collection].get(doc_id)
        if doc is None:
            raise NotFound(f"카운터를 갱신할 문서를 찾을 수 없습니다: {collection}/{doc_id}")
        value = (doc.get(field) or 0) + delta
        if floor is not None:
            value = max(floor, value)
        doc[field] = value

    @staticmethod
    def _needs_composite_index(filters: Mapping[str, Any], order_by: OrderBy) -> bool:
        return any(field != order_by.field for field in filters)
