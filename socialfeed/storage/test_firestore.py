# socialfeed/storage/test_firestore.py
"""
Firestore 문서 저장소 테스트 (클라이언트는 MagicMock/AsyncMock 으로 대체)

사용법: python -m pytest socialfeed/storage/test_firestore.py -v
"""
from unittest.mock import AsyncMock, MagicMock

import pytest
from google.api_core import exceptions as google_exceptions
from google.cloud import firestore

from socialfeed.core.errors import IndexUnavailable, NotFound, RemoteUnavailable
from socialfeed.storage import OrderBy
from socialfeed.storage.firestore import FirestoreDocumentStore


async def _stream(docs):
    for doc in docs:
        yield doc


def _snapshot(data):
    snapshot = MagicMock()
    snapshot.exists = data is not None
    snapshot.to_dict.return_value = data
    return snapshot


@pytest.fixture
def clients():
    """_new_client 가 만든 클라이언트 목록."""
    return []


@pytest.fixture
def store(monkeypatch, clients):
    def _new_client(self):
        client = MagicMock()
        client._transport = MagicMock()
        client._transport.close = AsyncMock()
        query = client.collection.return_value
        query.where.return_value = query
        query.order_by.return_value = query
        doc_ref = query.document.return_value
        for method in ('set', 'create', 'get', 'update', 'delete'):
            setattr(doc_ref, method, AsyncMock())
        clients.append(client)
        return client

    monkeypatch.setattr(FirestoreDocumentStore, '_new_client', _new_client)
    return FirestoreDocumentStore()


def _doc_ref(client):
    return client.collection.return_value.document.return_value


@pytest.mark.asyncio
async def test_each_operation_closes_its_channel(store, clients):
    for _ in range(5):
        await store.get('posts', 'p1')

    assert len(clients) == 5
    for client in clients:
        client._transport.close.assert_awaited_once()
    assert not hasattr(store, '_clients')


@pytest.mark.asyncio
async def test_channel_is_closed_when_the_call_fails(store, clients, monkeypatch):
    original = FirestoreDocumentStore._new_client

    def _failing_client(self):
        client = original(self)
        _doc_ref(client).get.side_effect = google_exceptions.ServiceUnavailable("down")
        return client

    monkeypatch.setattr(FirestoreDocumentStore, '_new_client', _failing_client)

    with pytest.raises(RemoteUnavailable):
        await store.get('posts', 'p1')
    clients[0]._transport.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_query_builds_filters_and_ordering(store, clients, monkeypatch):
    original = FirestoreDocumentStore._new_client

    def _client_with_docs(self):
        client = original(self)
        client.collection.return_value.stream.return_value = _stream([_snapshot({'post_id': 'p2'}), _snapshot({'post_id': 'p1'})])
        return client

    monkeypatch.setattr(FirestoreDocumentStore, '_new_client', _client_with_docs)

    docs = await store.query('posts', {'user_id': 'alice'}, OrderBy('created_at', descending=True))

    assert [d['post_id'] for d in docs] == ['p2', 'p1']
    query = clients[0].collection.return_value
    query.where.assert_called_once_with('user_id', '==', 'alice')
    query.order_by.assert_called_once_with('created_at', direction=firestore.Query.DESCENDING)


@pytest.mark.asyncio
@pytest.mark.parametrize("error, expected", [
    (google_exceptions.FailedPrecondition("The query requires an index. You can create it here: ..."), IndexUnavailable),
    (google_exceptions.FailedPrecondition("transaction is no longer valid"), RemoteUnavailable),
    (google_exceptions.ServiceUnavailable("unavailable"), RemoteUnavailable),
    (google_exceptions.PermissionDenied("denied"), RemoteUnavailable),
])
async def test_query_errors_are_mapped(store, monkeypatch, error, expected):
    original = FirestoreDocumentStore._new_client

    def _failing_client(self):
        client = original(self)
        client.collection.return_value.stream.side_effect = error
        return client

    monkeypatch.setattr(FirestoreDocumentStore, '_new_client', _failing_client)

    with pytest.raises(expected):
        await store.query('comments', {'post_id': 'p1'}, OrderBy('created_at'))


@pytest.mark.asyncio
async def test_update_on_missing_document_raises_not_found(store, clients, monkeypatch):
    original = FirestoreDocumentStore._new_client

    def _failing_client(self):
        client = original(self)
        _doc_ref(client).update.side_effect = google_exceptions.NotFound("no document")
        return client

    monkeypatch.setattr(FirestoreDocumentStore, '_new_client', _failing_client)

    with pytest.raises(NotFound):
        await store.update('users', 'u1', {'bio': 'hi'})


@pytest.mark.asyncio
async def test_get_returns_none_for_missing_document(store, clients, monkeypatch):
    original = FirestoreDocumentStore._new_client

    def _client(self):
        client = original(self)
        _doc_ref(client).get.return_value = _snapshot(None)
        return client

    monkeypatch.setattr(FirestoreDocumentStore, '_new_client', _client)

    assert await store.get('posts', 'missing') is None


@pytest.mark.asyncio
async def test_create_if_absent(store, clients, monkeypatch):
    assert await store.create_if_absent('likes', 'post_u1_p1', {'user_id': 'u1'}) is True
    _doc_ref(clients[0]).create.assert_awaited_once_with({'user_id': 'u1'})

    original = FirestoreDocumentStore._new_client

    def _existing(self):
        client = original(self)
        _doc_ref(client).create.side_effect = google_exceptions.AlreadyExists("exists")
        return client

    monkeypatch.setattr(FirestoreDocumentStore, '_new_client', _existing)

    assert await store.create_if_absent('likes', 'post_u1_p1', {'user_id': 'u1'}) is False


@pytest.mark.asyncio
async def test_delete_uses_exists_precondition(store, clients, monkeypatch):
    assert await store.delete('likes', 'post_u1_p1') is True
    client = clients[0]
    client.write_option.assert_called_once_with(exists=True)
    _doc_ref(client).delete.assert_awaited_once_with(option=client.write_option.return_value)

    original = FirestoreDocumentStore._new_client

    def _missing(self):
        client = original(self)
        _doc_ref(client).delete.side_effect = google_exceptions.NotFound("no document")
        return client

    monkeypatch.setattr(FirestoreDocumentStore, '_new_client', _missing)

    assert await store.delete('likes', 'post_u1_p1') is False


@pytest.mark.asyncio
async def test_increment_without_floor_uses_atomic_increment(store, clients):
    await store.increment('posts', 'p1', 'like_count', 1, floor=0)

    _doc_ref(clients[0]).update.assert_awaited_once_with({'like_count': firestore.Increment(1)})
    clients[0].transaction.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize("current, expected", [(3, 2), (1, 0), (0, 0), (None, 0)])
async def test_floored_decrement_runs_in_transaction(store, clients, monkeypatch, current, expected):
    monkeypatch.setattr(firestore, 'async_transactional', lambda fn: fn)
    original = FirestoreDocumentStore._new_client

    def _client(self):
        client = original(self)
        _doc_ref(client).get.return_value = _snapshot({'like_count': current})
        return client

    monkeypatch.setattr(FirestoreDocumentStore, '_new_client', _client)

    await store.increment('posts', 'p1', 'like_count', -1, floor=0)

    client = clients[0]
    transaction = client.transaction.return_value
    _doc_ref(client).get.assert_awaited_once_with(transaction=transaction)
    transaction.update.assert_called_once_with(_doc_ref(client), {'like_count': expected})
    _doc_ref(client).update.assert_not_called()


@pytest.mark.asyncio
async def test_floored_decrement_on_missing_document(store, monkeypatch):
    monkeypatch.setattr(firestore, 'async_transactional', lambda fn: fn)
    original = FirestoreDocumentStore._new_client

    def _client(self):
        client = original(self)
        _doc_ref(client).get.return_value = _snapshot(None)
        return client

    monkeypatch.setattr(FirestoreDocumentStore, '_new_client', _client)

    with pytest.raises(NotFound):
        await store.increment('posts', 'missing', 'like_count', -1, floor=0)
