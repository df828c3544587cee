# socialfeed/api/comments/services.py

import logging
import uuid
from typing import Optional, List

from socialfeed.core.errors import InvalidReplyTarget
from socialfeed.core.identity import Viewer, require_viewer
from socialfeed.graph import SocialGraph
from socialfeed.models import Comment
from socialfeed.services.image_resolver import resolve_image_url
from socialfeed.services.storage_service import StorageService
from socialfeed.storage.base import OrderBy

OLDEST_FIRST = OrderBy('created_at')

class CommentService:
    """
    댓글 관련 비즈니스 로직을 담당하는 서비스 클래스.
    - 댓글/답글 작성, 조회, 좋아요 토글을 포함합니다.
    - 답글은 한 단계까지만 허용합니다 (답글의 답글 불가).
    - 최상위 댓글은 게시글의 comment_count, 답글은 부모 댓글의 reply_count 를 1 증가시킵니다.
    """
    def __init__(self, graph: SocialGraph, storage_service: Optional[StorageService] = None):
        self.graph = graph
        self.storage_service = storage_service

    async def add_comment(self, viewer: Optional[Viewer], post_id: str, text: str,
                          image_path: Optional[str] = None) -> Comment:
        """게시글에 최상위 댓글을 작성합니다."""
        viewer = require_viewer(viewer)
        await self.graph.posts.get_by_id(post_id)
        image_url = await resolve_image_url(self.storage_service, image_path, viewer.user_id)

        new_comment = Comment(
            comment_id=str(uuid.uuid4()),
            post_id=post_id,
            user_id=viewer.user_id,
            user_display_name=viewer.display_name,
            text=text,
            image_url=image_url,
            created_at=self.graph.clock()
        )
        await self.graph.comments.create(new_comment)
        await self.graph.counters.adjust('posts', post_id, 'comment_count', 1)
        logging.info(f"댓글 작성 완료 (post_id: {post_id}, comment_id: {new_comment.comment_id})")
        return new_comment

    async def get_comments_for_post(self, post_id: str, viewer: Optional[Viewer]) -> List[Comment]:
        """게시글의 최상위 댓글을 오래된 순으로 조회합니다. 답글은 get_replies_for_comment 로 조회합니다."""
        comments = await self.graph.comments.query({'post_id': post_id}, OLDEST_FIRST)
        top_level = [comment for comment in comments if not comment.is_reply]
        return await self.graph.projector.annotate_comments(top_level, viewer.user_id if viewer else None)

    async def add_reply(self, viewer: Optional[Viewer], parent_comment_id: str, text: str,
                        image_path: Optional[str] = None) -> Comment:
        """
        댓글에 답글을 작성합니다.
        답글은 부모 댓글과 같은 게시글에 속하며, 부모 댓글의 reply_count 만 증가시킵니다.
        """
        viewer = require_viewer(viewer)
        parent = await self.graph.comments.get_by_id(parent_comment_id)
        if parent.is_reply:
            raise InvalidReplyTarget("답글에는 답글을 작성할 수 없습니다.")
        image_url = await resolve_image_url(self.storage_service, image_path, viewer.user_id)

        reply = Comment(
            comment_id=str(uuid.uuid4()),
            post_id=parent.post_id,
            user_id=viewer.user_id,
            user_display_name=viewer.display_name,
            text=text,
            image_url=image_url,
            created_at=self.graph.clock(),
            parent_comment_id=parent_comment_id
        )
        await self.graph.comments.create(reply)
        await self.graph.counters.adjust('comments', parent_comment_id, 'reply_count', 1)
        logging.info(f"답글 작성 완료 (parent: {parent_comment_id}, comment_id: {reply.comment_id})")
        return reply

    async def get_replies_for_comment(self, comment_id: str, viewer: Optional[Viewer]) -> List[Comment]:
        """댓글의 답글을 오래된 순으로 조회합니다."""
        replies = await self.graph.comments.query({'parent_comment_id': comment_id}, OLDEST_FIRST)
        return await self.graph.projector.annotate_comments(replies, viewer.user_id if viewer else None)

    async def toggle_comment_like(self, viewer: Optional[Viewer], comment_id: str) -> bool:
        """댓글 좋아요를 누르거나 취소하고, 토글 후 상태를 반환합니다."""
        try:
            return await self.graph.toggler.toggle_comment_like(viewer, comment_id)
        except Exception as e:
            logging.error(f"댓글 좋아요 토글 실패 (comment_id: {comment_id}): {e}", exc_info=True)
            raise
