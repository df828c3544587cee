# socialfeed/state/profile.py
from typing import Optional

from socialfeed.api.posts.services import PostService
from socialfeed.api.users.services import UserService
from socialfeed.core.identity import Viewer
from socialfeed.models.state import Error, FetchState, Loading, NotRequested, Success
from socialfeed.state.base import Session


class ProfileSession(Session):
    """프로필 화면의 상태 컨테이너."""

    def __init__(self, user_service: UserService, post_service: PostService, viewer: Optional[Viewer]):
        super().__init__(viewer)
        self.user_service = user_service
        self.post_service = post_service

        self.profile_state: FetchState = NotRequested()
        self.user_posts_state: FetchState = NotRequested()

    async def load_profile(self) -> None:
        """프로필을 불러옵니다. 프로필 문서가 없으면 인증 정보로 새로 만든 뒤 게시글을 불러옵니다."""
        self._publish('profile_state', Loading())
        try:
            user = await self.user_service.ensure_profile(self.viewer)
        except Exception as e:
            self._publish('profile_state', Error(str(e) or "프로필을 불러오지 못했습니다."))
            return
        self._publish('profile_state', Success(user))
        await self.load_user_posts()

    async def load_user_posts(self) -> None:
        self._publish('user_posts_state', Loading())
        try:
            posts = await self.post_service.get_user_posts(self.viewer)
            self._publish('user_posts_state', Success(posts))
        except Exception as e:
            self._publish('user_posts_state', Error(str(e) or "게시글을 불러오지 못했습니다."))

    async def update_profile(self, display_name: str, bio: Optional[str] = None,
                             photo_path: Optional[str] = None) -> None:
        try:
            await self.user_service.update_user_profile(self.viewer, display_name, bio, photo_path)
        except Exception as e:
            self._publish('profile_state', Error(str(e) or "프로필을 수정하지 못했습니다."))
            return
        await self.load_profile()
