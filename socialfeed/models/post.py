# socialfeed/models/post.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from socialfeed.models.base import FirestoreDocument
from socialfeed.utils.datetime_utils import DateTimeUtils

@dataclass(frozen=True)
class Post(FirestoreDocument):
    """
    Firestore 'posts' 컬렉션의 문서 구조를 정의하는 데이터클래스.
    like_count / comment_count 는 CounterSynchronizer 만 변경합니다.
    """
    collection = 'posts'
    id_field = 'post_id'
    derived_fields = ('is_liked_by_current_user',)

    post_id: str
    user_id: str
    user_display_name: str
    text: str
    image_url: Optional[str] = None
    like_count: int = 0
    comment_count: int = 0
    share_count: int = 0
    created_at: datetime = field(default_factory=DateTimeUtils.now)
    # 조회한 사용자 기준으로 계산되는 값 (저장하지 않음)
    is_liked_by_current_user: bool = False
