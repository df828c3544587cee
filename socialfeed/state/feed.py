# socialfeed/state/feed.py
import logging
from typing import Dict, List, Optional

from socialfeed.api.comments.services import CommentService
from socialfeed.api.posts.services import PostService
from socialfeed.core.identity import Viewer
from socialfeed.graph.merger import (
    merge_like_result, merge_like_result_into_replies, merge_replies, merge_reply_added
)
from socialfeed.models import Comment, Post
from socialfeed.models.state import Error, FetchState, Loading, NotRequested, Success
from socialfeed.state.base import Session

logger = logging.getLogger(__name__)


class FeedSession(Session):
    """피드/게시글 상세/댓글 화면의 상태 컨테이너."""

    def __init__(self, post_service: PostService, comment_service: CommentService, viewer: Optional[Viewer]):
        super().__init__(viewer)
        self.post_service = post_service
        self.comment_service = comment_service

        self.posts_state: FetchState = NotRequested()
        self.comments_state: FetchState = NotRequested()
        self.current_post_state: FetchState = NotRequested()
        self.replies: Dict[str, List[Comment]] = {}
        self.replying_to: Optional[Comment] = None

    # --- 게시글 ---

    async def load_posts(self) -> None:
        self._publish('posts_state', Loading())
        try:
            posts = await self.post_service.get_posts(self.viewer)
            self._publish('posts_state', Success(posts))
        except Exception as e:
            logger.error(f"게시글 목록 조회 실패: {e}", exc_info=True)
            self._publish('posts_state', Error(str(e) or "게시글을 불러오지 못했습니다."))

    async def create_post(self, text: str, image_path: Optional[str] = None) -> None:
        self._publish('posts_state', Loading())
        try:
            await self.post_service.create_post(self.viewer, text, image_path)
        except Exception as e:
            logger.error(f"게시글 작성 실패: {e}", exc_info=True)
            self._publish('posts_state', Error(str(e) or "게시글을 작성하지 못했습니다."))
            return
        await self.load_posts()

    async def load_post(self, post_id: str) -> None:
        self._publish('current_post_state', Loading())
        try:
            post = await self.post_service.get_post_by_id(post_id, self.viewer)
        except Exception as e:
            self._publish('current_post_state', Error(str(e) or "게시글을 불러오지 못했습니다."))
            return
        self._publish('current_post_state', Success(post))
        await self.load_comments(post_id)

    def clear_current_post(self) -> None:
        self._publish('current_post_state', NotRequested())

    async def toggle_like(self, post_id: str) -> None:
        """좋아요를 토글하고, 조회해 둔 목록에 결과를 바로 반영합니다."""
        try:
            is_liked = await self.post_service.toggle_like(self.viewer, post_id)
        except Exception as e:
            logger.error(f"게시글 좋아요 토글 실패: {e}", exc_info=True)
            self._publish('posts_state', Error(str(e) or "좋아요를 처리하지 못했습니다."))
            return

        posts = self._payload(self.posts_state)
        self._publish('posts_state', Success(merge_like_result(posts, post_id, is_liked)))

        # 상세 화면에 같은 게시글이 열려 있으면 다시 불러옵니다.
        current = self.current_post_state
        if isinstance(current, Success) and current.payload.post_id == post_id:
            await self.load_post(post_id)

    # --- 댓글 / 답글 ---

    async def load_comments(self, post_id: str) -> None:
        self._publish('comments_state', Loading())
        try:
            comments = await self.comment_service.get_comments_for_post(post_id, self.viewer)
            self._publish('comments_state', Success(comments))
        except Exception as e:
            self._publish('comments_state', Error(str(e) or "댓글을 불러오지 못했습니다."))

    async def add_comment(self, post_id: str, text: str, image_path: Optional[str] = None) -> None:
        try:
            await self.comment_service.add_comment(self.viewer, post_id, text, image_path)
        except Exception as e:
            self._publish('comments_state', Error(str(e) or "댓글을 작성하지 못했습니다."))
            return
        await self.load_comments(post_id)

    async def toggle_comment_like(self, comment_id: str) -> None:
        try:
            is_liked = await self.comment_service.toggle_comment_like(self.viewer, comment_id)
        except Exception as e:
            logger.error(f"댓글 좋아요 토글 실패: {e}", exc_info=True)
            return

        if isinstance(self.comments_state, Success):
            self._publish('comments_state', Success(merge_like_result(self.comments_state.payload, comment_id, is_liked)))
        self._publish('replies', merge_like_result_into_replies(self.replies, comment_id, is_liked))

    async def add_reply(self, parent_comment_id: str, text: str, image_path: Optional[str] = None) -> None:
        try:
            reply = await self.comment_service.add_reply(self.viewer, parent_comment_id, text, image_path)
        except Exception as e:
            logger.error(f"답글 작성 실패: {e}", exc_info=True)
            return

        if isinstance(self.comments_state, Success):
            self._publish('comments_state', Success(merge_reply_added(self.comments_state.payload, parent_comment_id)))
        self._publish('replies', merge_replies(self.replies, parent_comment_id, reply))
        self._publish('replying_to', None)

    async def load_replies(self, comment_id: str) -> None:
        try:
            replies = await self.comment_service.get_replies_for_comment(comment_id, self.viewer)
        except Exception as e:
            logger.error(f"답글 조회 실패: {e}", exc_info=True)
            return
        self._publish('replies', merge_replies(self.replies, comment_id, replies))

    def set_replying_to(self, comment: Comment) -> None:
        self._publish('replying_to', comment)

    def cancel_reply(self) -> None:
        self._publish('replying_to', None)

    @staticmethod
    def _payload(state: FetchState) -> List[Post]:
        return state.payload if isinstance(state, Success) else []

