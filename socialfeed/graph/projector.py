# socialfeed/graph/projector.py
from dataclasses import replace
from typing import List, Optional, Sequence, Union

from socialfeed.graph.repository import EntityRepository
from socialfeed.models import Comment, CommentLike, Like, Post


class ViewerStateProjector:
    """
    조회한 게시글/댓글 목록에 현재 사용자 기준 is_liked_by_current_user 값을 채웁니다.
    입력 순서를 그대로 유지하며, 항목을 걸러내지 않습니다.
    """

    def __init__(self, likes: EntityRepository[Like], comment_likes: EntityRepository[CommentLike]):
        self.likes = likes
        self.comment_likes = comment_likes

    async def annotate_posts(self, posts: Sequence[Post], viewer_id: Optional[str]) -> List[Post]:
        if not viewer_id:
            return [replace(post, is_liked_by_current_user=False) for post in posts]
        likes = await self.likes.query({'user_id': viewer_id})
        liked_post_ids = {like.post_id for like in likes}
        return [replace(post, is_liked_by_current_user=post.post_id in liked_post_ids) for post in posts]

    async def annotate_comments(self, comments: Sequence[Comment], viewer_id: Optional[str]) -> List[Comment]:
        if not viewer_id:
            return [replace(comment, is_liked_by_current_user=False) for comment in comments]
        likes = await self.comment_likes.query({'user_id': viewer_id})
        liked_comment_ids = {like.comment_id for like in likes}
        return [
            replace(comment, is_liked_by_current_user=comment.comment_id in liked_comment_ids)
            for comment in comments
        ]

    async def annotate(self, items: Sequence[Union[Post, Comment]],
                       viewer_id: Optional[str]) -> List[Union[Post, Comment]]:
        """항목 타입에 따라 게시글/댓글 주석 메서드로 위임합니다."""
        if not items:
            return []
        if all(isinstance(item, Post) for item in items):
            return await self.annotate_posts(items, viewer_id)
        if all(isinstance(item, Comment) for item in items):
            return await self.annotate_comments(items, viewer_id)
        raise TypeError("게시글과 댓글을 섞어서 주석할 수 없습니다.")
