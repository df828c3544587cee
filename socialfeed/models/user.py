# socialfeed/models/user.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from socialfeed.models.base import FirestoreDocument
from socialfeed.utils.datetime_utils import DateTimeUtils

@dataclass(frozen=True)
class User(FirestoreDocument):
    """
    Firestore 'users' 컬렉션의 문서 구조를 정의하는 데이터클래스.
    """
    collection = 'users'
    id_field = 'user_id'

    user_id: str
    display_name: str
    email: str
    photo_url: Optional[str] = None
    bio: Optional[str] = None
    created_at: datetime = field(default_factory=DateTimeUtils.now)
