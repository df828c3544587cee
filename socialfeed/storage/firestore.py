# socialfeed/storage/firestore.py
import logging
import uuid
from contextlib import asynccontextmanager, contextmanager
from typing import Any, AsyncIterator, Dict, List, Mapping, Optional

import firebase_admin
from google.api_core import exceptions as google_exceptions
from google.cloud import firestore

from socialfeed.core.errors import IndexUnavailable, NotFound, RemoteUnavailable
from socialfeed.storage.base import DocumentStore, OrderBy

logger = logging.getLogger(__name__)


@contextmanager
def _remote_call(action: str, collection: str):
    """google-api-core 예외를 도메인 예외로 변환합니다."""
    try:
        yield
    except google_exceptions.FailedPrecondition as e:
        # 복합 색인이 없는 쿼리는 FailedPrecondition("The query requires an index...") 으로 실패합니다.
        if 'index' in str(e).lower():
            raise IndexUnavailable(f"Firestore 색인이 필요합니다 ({collection}): {e}") from e
        logger.error(f"Firestore {action} 실패 (Collection: {collection}): {e}", exc_info=True)
        raise RemoteUnavailable(f"Firestore {action} 실패: {e}") from e
    except google_exceptions.NotFound as e:
        raise NotFound(f"문서를 찾을 수 없습니다 ({collection}): {e}") from e
    except google_exceptions.AlreadyExists:
        # create_if_absent 가 직접 처리합니다.
        raise
    except google_exceptions.GoogleAPICallError as e:
        logger.error(f"Firestore {action} 실패 (Collection: {collection}): {e}", exc_info=True)
        raise RemoteUnavailable(f"Firestore {action} 실패: {e}") from e


class FirestoreDocumentStore(DocumentStore):
    """
    Cloud Firestore 비동기 클라이언트를 사용하는 문서 저장소.

    gRPC 비동기 채널은 생성된 이벤트 루프에 묶이고, Flask 의 async 뷰는 요청마다 새 이벤트 루프에서 실행됩니다.
    그래서 클라이언트를 보관하지 않고 연산마다 열고, 연산이 끝나면 채널을 닫습니다.
    """

    def __init__(self, app: Optional[firebase_admin.App] = None):
        self._app = app

    def _new_client(self) -> firestore.AsyncClient:
        app = self._app or firebase_admin.get_app()
        return firestore.AsyncClient(
            project=app.project_id,
            credentials=app.credential.get_credential()
        )

    @asynccontextmanager
    async def _connection(self) -> AsyncIterator[firestore.AsyncClient]:
        client = self._new_client()
        try:
            yield client
        finally:
            # AsyncClient 에는 공개 close 가 없으므로, 첫 호출 때 만들어진 전송 계층의 채널을 직접 닫습니다.
            transport = getattr(client, '_transport', None)
            if transport is not None:
                await transport.close()

    async def create(self, collection: str, data: Dict[str, Any], doc_id: Optional[str] = None) -> str:
        doc_id = doc_id or uuid.uuid4().hex
        async with self._connection() as client:
            with _remote_call('저장', collection):
                await client.collection(collection).document(doc_id).set(data)
        logger.info(f"Firestore 저장 성공 (Collection: {collection}, Doc ID: {doc_id})")
        return doc_id

    async def create_if_absent(self, collection: str, doc_id: str, data: Dict[str, Any]) -> bool:
        async with self._connection() as client:
            try:
                with _remote_call('생성', collection):
                    await client.collection(collection).document(doc_id).create(data)
                return True
            except google_exceptions.AlreadyExists:
                return False

    async def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        async with self._connection() as client:
            with _remote_call('조회', collection):
                snapshot = await client.collection(collection).document(doc_id).get()
        return snapshot.to_dict() if snapshot.exists else None

    async def update(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> None:
        async with self._connection() as client:
            with _remote_call('갱신', collection):
                await client.collection(collection).document(doc_id).update(fields)

    async def delete(self, collection: str, doc_id: str) -> bool:
        async with self._connection() as client:
            try:
                with _remote_call('삭제', collection):
                    await client.collection(collection).document(doc_id).delete(
                        option=client.write_option(exists=True)
                    )
                return True
            except NotFound:
                return False

    async def query(self, collection: str, filters: Mapping[str, Any],
                    order_by: Optional[OrderBy] = None) -> List[Dict[str, Any]]:
        async with self._connection() as client:
            query = client.collection(collection)
            for field, value in filters.items():
                query = query.where(field, '==', value)
            if order_by is not None:
                direction = firestore.Query.DESCENDING if order_by.descending else firestore.Query.ASCENDING
                query = query.order_by(order_by.field, direction=direction)

            with _remote_call('쿼리', collection):
                return [doc.to_dict() async for doc in query.stream()]

    async def scan(self, collection: str) -> List[Dict[str, Any]]:
        async with self._connection() as client:
            with _remote_call('전체 조회', collection):
                return [doc.to_dict() async for doc in client.collection(collection).stream()]

    async def increment(self, collection: str, doc_id: str, field: str, delta: int,
                        floor: Optional[int] = None) -> None:
        async with self._connection() as client:
            doc_ref = client.collection(collection).document(doc_id)

            if floor is None or delta >= 0:
                with _remote_call('카운터 갱신', collection):
                    await doc_ref.update({field: firestore.Increment(delta)})
                return

            # 하한이 있는 감소는 트랜잭션 안에서 읽고 씁니다.
            @firestore.async_transactional
            async def _decrement_in_transaction(transaction):
                snapshot = await doc_ref.get(transaction=transaction)
                if not snapshot.exists:
                    raise NotFound(f"카운터를 갱신할 문서를 찾을 수 없습니다: {collection}/{doc_id}")
                current = (snapshot.to_dict() or {}).get(field) or 0
                transaction.update(doc_ref, {field: max(floor, current + delta)})

            with _remote_call('카운터 갱신', collection):
                await _decrement_in_transaction(client.transaction())
