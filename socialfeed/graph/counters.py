# socialfeed/graph/counters.py
import logging

from socialfeed.core.errors import CounterSyncError, SocialFeedError
from socialfeed.storage.base import DocumentStore

logger = logging.getLogger(__name__)

# 컬렉션별로 조정 가능한 비정규화 카운터 필드
COUNTER_FIELDS = {
    'posts': frozenset({'like_count', 'comment_count', 'share_count'}),
    'comments': frozenset({'like_count', 'reply_count'}),
}


class CounterSynchronizer:
    """
    좋아요/댓글/답글 생성·삭제 시 부모 문서의 카운터를 1씩 원자적으로 조정합니다.
    결과 값은 0 아래로 내려가지 않습니다.
    """

    def __init__(self, store: DocumentStore):
        self.store = store

    async def adjust(self, collection: str, entity_id: str, field: str, delta: int) -> None:
        if field not in COUNTER_FIELDS.get(collection, ()):
            raise ValueError(f"'{collection}.{field}'은(는) 조정할 수 있는 카운터가 아닙니다.")
        if delta not in (1, -1):
            raise ValueError(f"카운터 변화량은 +1 또는 -1 이어야 합니다: {delta}")

        try:
            await self.store.increment(collection, entity_id, field, delta, floor=0)
        except SocialFeedError as e:
            # 자식 문서는 이미 기록된 상태이므로 카운터가 실제 개수와 어긋납니다.
            logger.error(
                f"카운터 동기화 실패, 불일치 상태로 남습니다 "
                f"({collection}/{entity_id}.{field} {delta:+d}): {e}",
                exc_info=True
            )
            raise CounterSyncError(
                f"카운터 갱신에 실패했습니다: {collection}/{entity_id}.{field}",
                collection=collection, entity_id=entity_id, field=field, delta=delta
            ) from e
