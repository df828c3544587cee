# socialfeed/storage/base.py
"""
문서 저장소 추상 인터페이스.

Firestore 와 인메모리 구현이 모두 이 인터페이스를 따릅니다.
모든 메서드는 코루틴이며 원격 왕복 동안 호출한 태스크만 일시 중단합니다.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional


@dataclass(frozen=True)
class OrderBy:
    """쿼리 정렬 조건."""
    field: str
    descending: bool = False


class DocumentStore(ABC):
    """컬렉션 단위 문서 저장소의 추상 기반 클래스."""

    @abstractmethod
    async def create(self, collection: str, data: Dict[str, Any], doc_id: Optional[str] = None) -> str:
        """
        새 문서를 저장하고 문서 ID를 반환합니다.
        doc_id 가 없으면 저장소가 생성합니다. 같은 ID의 문서가 있으면 덮어씁니다.
        """

    @abstractmethod
    async def create_if_absent(self, collection: str, doc_id: str, data: Dict[str, Any]) -> bool:
        """
        문서가 없을 때만 원자적으로 생성합니다.

        Returns:
            새로 생성했으면 True, 이미 존재하면 False
        """

    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        """문서를 조회합니다. 없으면 None."""

    @abstractmethod
    async def update(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> None:
        """일부 필드를 갱신합니다. 문서가 없으면 NotFound."""

    @abstractmethod
    async def delete(self, collection: str, doc_id: str) -> bool:
        """
        문서를 삭제합니다.

        Returns:
            실제로 삭제된 문서가 있었으면 True
        """

    @abstractmethod
    async def query(self, collection: str, filters: Mapping[str, Any],
                    order_by: Optional[OrderBy] = None) -> List[Dict[str, Any]]:
        """
        동등 조건(filters)과 정렬 조건으로 문서를 조회합니다.
        필요한 복합 색인이 없으면 IndexUnavailable 을 발생시킵니다.
        """

    @abstractmethod
    async def scan(self, collection: str) -> List[Dict[str, Any]]:
        """컬렉션 전체 문서를 조회합니다. 색인이 필요 없습니다."""

    @abstractmethod
    async def increment(self, collection: str, doc_id: str, field: str, delta: int,
                        floor: Optional[int] = None) -> None:
        """
        숫자 필드를 원자적으로 증감합니다.
        floor 가 주어지면 결과 값은 floor 아래로 내려가지 않습니다. 문서가 없으면 NotFound.
        """
