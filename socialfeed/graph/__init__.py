# socialfeed/graph/__init__.py
"""
소셜 그래프 정합성 모듈.

게시글/댓글/답글/좋아요 문서와 비정규화 카운터(like_count, comment_count, reply_count),
사용자별 좋아요 여부를 일관되게 유지하는 구성요소를 하나로 묶습니다.
"""
from datetime import datetime
from typing import Callable

from socialfeed.graph.counters import CounterSynchronizer
from socialfeed.graph.projector import ViewerStateProjector
from socialfeed.graph.repository import EntityRepository
from socialfeed.graph.toggle import LikeToggler
from socialfeed.models import Comment, CommentLike, Like, Post, User
from socialfeed.storage.base import DocumentStore
from socialfeed.utils.datetime_utils import DateTimeUtils


class SocialGraph:
    """저장소 하나를 받아 리포지토리, 카운터 동기화, 좋아요 상태 주석, 좋아요 토글을 구성합니다."""

    def __init__(self, store: DocumentStore, clock: Callable[[], datetime] = DateTimeUtils.now):
        self.store = store
        self.clock = clock

        self.users = EntityRepository(store, User)
        self.posts = EntityRepository(store, Post)
        self.comments = EntityRepository(store, Comment)
        self.likes = EntityRepository(store, Like)
        self.comment_likes = EntityRepository(store, CommentLike)

        self.counters = CounterSynchronizer(store)
        self.projector = ViewerStateProjector(self.likes, self.comment_likes)
        self.toggler = LikeToggler(
            self.posts, self.comments, self.likes, self.comment_likes,
            counters=self.counters, clock=clock
        )


__all__ = [
    'SocialGraph', 'EntityRepository', 'CounterSynchronizer', 'ViewerStateProjector', 'LikeToggler'
]
