# socialfeed/storage/factory.py
"""
설정값(STORAGE_BACKEND)에 따라 문서 저장소 구현을 선택합니다.
"""
import logging
from typing import Any, Mapping

from socialfeed.storage.base import DocumentStore
from socialfeed.storage.memory import InMemoryDocumentStore


def create_document_store(config: Mapping[str, Any]) -> DocumentStore:
    """
    Args:
        config: Flask app.config (또는 같은 키를 가진 매핑)

    Returns:
        'memory' 이면 InMemoryDocumentStore, 그 외에는 FirestoreDocumentStore

    Config Keys:
        STORAGE_BACKEND: 'firestore'(기본값) 또는 'memory'
    """
    backend = (config.get('STORAGE_BACKEND') or 'firestore').lower()

    if backend == 'memory':
        logging.info("문서 저장소: InMemoryDocumentStore")
        return InMemoryDocumentStore()
    if backend != 'firestore':
        raise ValueError(f"'{backend}'은(는) 지원하지 않는 STORAGE_BACKEND 입니다.")

    # firebase_admin 초기화가 끝난 뒤에만 Firestore 저장소를 만들 수 있습니다.
    from socialfeed.storage.firestore import FirestoreDocumentStore
    logging.info("문서 저장소: FirestoreDocumentStore")
    return FirestoreDocumentStore()
