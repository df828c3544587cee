# socialfeed/models/comment.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from socialfeed.models.base import FirestoreDocument
from socialfeed.utils.datetime_utils import DateTimeUtils

@dataclass(frozen=True)
class Comment(FirestoreDocument):
    """
    Firestore 'comments' 컬렉션의 문서 구조를 정의하는 데이터클래스.
    parent_comment_id 가 None 이면 최상위 댓글, 값이 있으면 해당 댓글에 대한 답글입니다.
    """
    collection = 'comments'
    id_field = 'comment_id'
    derived_fields = ('is_liked_by_current_user',)

    comment_id: str
    post_id: str
    user_id: str
    user_display_name: str
    text: str
    image_url: Optional[str] = None
    created_at: datetime = field(default_factory=DateTimeUtils.now)
    like_count: int = 0
    reply_count: int = 0
    parent_comment_id: Optional[str] = None
    is_liked_by_current_user: bool = False

    @property
    def is_reply(self) -> bool:
        return self.parent_comment_id is not None
