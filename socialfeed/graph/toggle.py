# socialfeed/graph/toggle.py
import logging
from datetime import datetime
from typing import Callable, Optional

from socialfeed.core.identity import Viewer, require_viewer
from socialfeed.graph.counters import CounterSynchronizer
from socialfeed.graph.repository import EntityRepository
from socialfeed.models import Comment, CommentLike, Like, Post

logger = logging.getLogger(__name__)


class LikeToggler:
    """
    (대상, 사용자) 쌍의 좋아요 상태를 NotLiked <-> Liked 로 전환합니다.

    좋아요 문서 ID가 (user_id, target_id) 로 결정되므로 '없을 때만 생성' / '있을 때만 삭제'
    하나의 조건부 원자 연산으로 상태를 전환합니다. 동시에 토글이 들어와도 중복 문서가 생기지 않고,
    경쟁에서 진 쪽은 카운터를 건드리지 않은 채 결과 상태만 돌려줍니다.
    """

    def __init__(self, posts: EntityRepository[Post], comments: EntityRepository[Comment],
                 likes: EntityRepository[Like], comment_likes: EntityRepository[CommentLike],
                 counters: CounterSynchronizer, clock: Callable[[], datetime]):
        self.posts = posts
        self.comments = comments
        self.likes = likes
        self.comment_likes = comment_likes
        self.counters = counters
        self.clock = clock

    async def toggle_post_like(self, viewer: Optional[Viewer], post_id: str) -> bool:
        """
        게시글 좋아요를 누르거나 취소합니다.

        Returns:
            토글 후 좋아요 상태 (True: 좋아요, False: 취소)
        """
        viewer = require_viewer(viewer)
        await self.posts.get_by_id(post_id)

        like = Like(
            like_id=Like.key_for(viewer.user_id, post_id),
            post_id=post_id,
            user_id=viewer.user_id,
            created_at=self.clock()
        )
        if await self.likes.create_if_absent(like):
            await self.counters.adjust('posts', post_id, 'like_count', 1)
            logger.info(f"게시글 좋아요: {viewer.user_id} -> {post_id}")
            return True

        if await self.likes.delete(like.like_id):
            await self.counters.adjust('posts', post_id, 'like_count', -1)
            logger.info(f"게시글 좋아요 취소: {viewer.user_id} -> {post_id}")
        return False

    async def toggle_comment_like(self, viewer: Optional[Viewer], comment_id: str) -> bool:
        """댓글(답글 포함) 좋아요를 누르거나 취소하고, 토글 후 상태를 반환합니다."""
        viewer = require_viewer(viewer)
        await self.comments.get_by_id(comment_id)

        like = CommentLike(
            like_id=CommentLike.key_for(viewer.user_id, comment_id),
            comment_id=comment_id,
            user_id=viewer.user_id,
            user_display_name=viewer.display_name,
            created_at=self.clock()
        )
        if await self.comment_likes.create_if_absent(like):
            await self.counters.adjust('comments', comment_id, 'like_count', 1)
            logger.info(f"댓글 좋아요: {viewer.user_id} -> {comment_id}")
            return True

        if await self.comment_likes.delete(like.like_id):
            await self.counters.adjust('comments', comment_id, 'like_count', -1)
            logger.info(f"댓글 좋아요 취소: {viewer.user_id} -> {comment_id}")
        return False
