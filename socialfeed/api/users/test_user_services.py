# socialfeed/api/users/test_user_services.py
from unittest.mock import MagicMock

import pytest

from socialfeed.api.users.services import UserService
from socialfeed.core.errors import NotAuthenticated
from socialfeed.core.identity import Viewer


@pytest.mark.asyncio
async def test_ensure_profile_creates_once(user_service, alice):
    assert await user_service.get_current_user(alice) is None

    created = await user_service.ensure_profile(alice)
    again = await user_service.ensure_profile(alice)

    assert created == again
    assert (created.display_name, created.email) == ('Alice', 'alice@example.com')


@pytest.mark.asyncio
async def test_unknown_display_name_falls_back_to_email_prefix(user_service):
    viewer = Viewer(user_id='carol', email='carol.kim@example.com')

    user = await user_service.create_user_profile(viewer)

    assert user.display_name == 'carol.kim'


@pytest.mark.asyncio
async def test_update_profile_keeps_photo_when_upload_fails(graph, alice):
    storage = MagicMock()
    storage.make_public_and_get_url.side_effect = [
        "https://cdn.example.com/profile/alice/1.jpg",
        RuntimeError("bucket unavailable"),
    ]
    service = UserService(graph, storage_service=storage)

    first = await service.update_user_profile(alice, "앨리스", bio="안녕하세요", photo_path="profile/alice/1.jpg")
    second = await service.update_user_profile(alice, "Alice K", photo_path="profile/alice/2.jpg")

    assert (first.display_name, first.bio) == ("앨리스", "안녕하세요")
    assert second.display_name == "Alice K"
    assert second.photo_url == "https://cdn.example.com/profile/alice/1.jpg"


@pytest.mark.asyncio
async def test_profile_requires_viewer(user_service):
    with pytest.raises(NotAuthenticated):
        await user_service.ensure_profile(None)
