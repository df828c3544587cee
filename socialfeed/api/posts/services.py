# socialfeed/api/posts/services.py
import logging
import uuid
from typing import Optional, List

from socialfeed.core.identity import Viewer, require_viewer
from socialfeed.graph import SocialGraph
from socialfeed.models import Post
from socialfeed.services.image_resolver import resolve_image_url
from socialfeed.services.storage_service import StorageService
from socialfeed.storage.base import OrderBy

NEWEST_FIRST = OrderBy('created_at', descending=True)

class PostService:
    """
    게시글 관련 비즈니스 로직을 담당하는 서비스 클래스.
    저장소 접근은 SocialGraph 의 리포지토리를 통해서만 이루어집니다.
    """
    def __init__(self, graph: SocialGraph, storage_service: Optional[StorageService] = None):
        self.graph = graph
        self.storage_service = storage_service

    async def create_post(self, viewer: Optional[Viewer], text: str, image_path: Optional[str] = None) -> Post:
        """새로운 게시글을 생성합니다. 이미지 처리에 실패하면 이미지 없이 게시글을 만듭니다."""
        viewer = require_viewer(viewer)
        image_url = await resolve_image_url(self.storage_service, image_path, viewer.user_id)

        new_post = Post(
            post_id=str(uuid.uuid4()),
            user_id=viewer.user_id,
            user_display_name=viewer.display_name,
            text=text,
            image_url=image_url,
            created_at=self.graph.clock()
        )
        try:
            await self.graph.posts.create(new_post)
        except Exception as e:
            logging.error(f"게시글 생성 실패 (user_id: {viewer.user_id}): {e}", exc_info=True)
            raise
        return new_post

    async def get_posts(self, viewer: Optional[Viewer]) -> List[Post]:
        """전체 게시글을 최신순으로 조회하고, 현재 사용자의 좋아요 여부를 채웁니다."""
        posts = await self.graph.posts.query({}, NEWEST_FIRST)
        return await self.graph.projector.annotate_posts(posts, viewer.user_id if viewer else None)

    async def get_post_by_id(self, post_id: str, viewer: Optional[Viewer]) -> Post:
        post = await self.graph.posts.get_by_id(post_id)
        annotated = await self.graph.projector.annotate_posts([post], viewer.user_id if viewer else None)
        return annotated[0]

    async def get_user_posts(self, viewer: Optional[Viewer], author_id: Optional[str] = None) -> List[Post]:
        """
        특정 사용자가 작성한 게시글을 최신순으로 조회합니다.
        author_id 가 없으면 현재 로그인된 사용자의 게시글을 조회합니다.
        """
        if author_id is None:
            author_id = require_viewer(viewer).user_id
        posts = await self.graph.posts.query({'user_id': author_id}, NEWEST_FIRST)
        return await self.graph.projector.annotate_posts(posts, viewer.user_id if viewer else None)

    async def toggle_like(self, viewer: Optional[Viewer], post_id: str) -> bool:
        """게시글 좋아요를 누르거나 취소하고, 토글 후 상태를 반환합니다."""
        try:
            return await self.graph.toggler.toggle_post_like(viewer, post_id)
        except Exception as e:
            logging.error(f"게시글 좋아요 토글 실패 (post_id: {post_id}): {e}", exc_info=True)
            raise
