# socialfeed/models/like.py
from dataclasses import dataclass, field
from datetime import datetime

from socialfeed.models.base import FirestoreDocument
from socialfeed.utils.datetime_utils import DateTimeUtils

@dataclass(frozen=True)
class Like(FirestoreDocument):
    """
    Firestore 'likes' 컬렉션 문서. 게시글 좋아요 1건.
    문서 ID가 (user_id, post_id) 로 결정되므로 한 사용자는 게시글당 하나의 좋아요만 가질 수 있습니다.
    """
    collection = 'likes'
    id_field = 'like_id'

    like_id: str
    post_id: str
    user_id: str
    created_at: datetime = field(default_factory=DateTimeUtils.now)

    @staticmethod
    def key_for(user_id: str, post_id: str) -> str:
        return f"post_{user_id}_{post_id}"


@dataclass(frozen=True)
class CommentLike(FirestoreDocument):
    """Firestore 'comment_likes' 컬렉션 문서. 댓글 좋아요 1건."""
    collection = 'comment_likes'
    id_field = 'like_id'

    like_id: str
    comment_id: str
    user_id: str
    user_display_name: str
    created_at: datetime = field(default_factory=DateTimeUtils.now)

    @staticmethod
    def key_for(user_id: str, comment_id: str) -> str:
        return f"comment_{user_id}_{comment_id}"
