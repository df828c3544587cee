# socialfeed/api/users/services.py
import logging
from typing import Optional

from socialfeed.core.identity import DEFAULT_DISPLAY_NAME, Viewer, require_viewer
from socialfeed.graph import SocialGraph
from socialfeed.models import User
from socialfeed.services.image_resolver import resolve_image_url
from socialfeed.services.storage_service import StorageService

class UserService:
    """사용자 프로필 관련 비즈니스 로직을 담당하는 서비스 클래스."""
    def __init__(self, graph: SocialGraph, storage_service: Optional[StorageService] = None):
        self.graph = graph
        self.storage_service = storage_service

    async def get_current_user(self, viewer: Optional[Viewer]) -> Optional[User]:
        """현재 로그인된 사용자의 프로필을 조회합니다. 프로필 문서가 없으면 None."""
        viewer = require_viewer(viewer)
        return await self.graph.users.find_by_id(viewer.user_id)

    async def create_user_profile(self, viewer: Optional[Viewer], email: Optional[str] = None) -> User:
        """인증 제공자의 정보로 기본 프로필을 생성합니다."""
        viewer = require_viewer(viewer)
        email = email or viewer.email or ""
        display_name = viewer.display_name
        if display_name == DEFAULT_DISPLAY_NAME and email:
            display_name = email.split('@')[0]

        user = User(
            user_id=viewer.user_id,
            display_name=display_name,
            email=email,
            created_at=self.graph.clock()
        )
        await self.graph.users.create(user)
        logging.info(f"사용자 프로필 생성 완료 (user_id: {viewer.user_id})")
        return user

    async def ensure_profile(self, viewer: Optional[Viewer], email: Optional[str] = None) -> User:
        """프로필이 있으면 그대로, 없으면 새로 만들어 반환합니다."""
        user = await self.get_current_user(viewer)
        if user is not None:
            return user
        return await self.create_user_profile(viewer, email)

    async def update_user_profile(self, viewer: Optional[Viewer], display_name: str,
                                  bio: Optional[str] = None, photo_path: Optional[str] = None) -> User:
        """
        표시 이름, 소개, 프로필 사진을 수정합니다.
        사진 처리에 실패하면 기존 사진을 유지한 채 나머지 항목만 수정합니다.
        """
        current = await self.ensure_profile(viewer)

        photo_url = current.photo_url
        if photo_path:
            photo_url = await resolve_image_url(self.storage_service, photo_path, current.user_id) or current.photo_url

        update_data = {"display_name": display_name, "bio": bio, "photo_url": photo_url}
        await self.graph.users.update(current.user_id, update_data)
        return await self.graph.users.get_by_id(current.user_id)
