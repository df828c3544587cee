# socialfeed/conftest.py
"""
공용 pytest 픽스처

- 저장소는 인메모리 구현을 사용합니다 (Firestore 불필요).
- 시계는 호출할 때마다 1초씩 증가하므로 created_at 정렬 결과가 항상 같습니다.
"""
from datetime import datetime, timedelta, timezone

import pytest
from flask_jwt_extended import create_access_token

from socialfeed import create_app
from socialfeed.api.comments.services import CommentService
from socialfeed.api.posts.services import PostService
from socialfeed.api.users.services import UserService
from socialfeed.core.identity import Viewer
from socialfeed.graph import SocialGraph
from socialfeed.storage.memory import InMemoryDocumentStore


class FakeClock:
    def __init__(self, start: datetime = datetime(2024, 1, 15, 9, 0, tzinfo=timezone.utc)):
        self.current = start

    def __call__(self) -> datetime:
        self.current = self.current + timedelta(seconds=1)
        return self.current


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def graph(store, clock):
    return SocialGraph(store, clock=clock)


@pytest.fixture
def alice():
    return Viewer(user_id="alice", display_name="Alice", email="alice@example.com")


@pytest.fixture
def bob():
    return Viewer(user_id="bob", display_name="Bob", email="bob@example.com")


@pytest.fixture
def post_service(graph):
    return PostService(graph)


@pytest.fixture
def comment_service(graph):
    return CommentService(graph)


@pytest.fixture
def user_service(graph):
    return UserService(graph)


@pytest.fixture
def app():
    app = create_app('testing')
    app.services['graph'].clock = FakeClock()
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(app):
    """사용자 ID와 표시 이름으로 Authorization 헤더를 만듭니다."""
    def _make(user_id: str, display_name: str = None):
        claims = {"display_name": display_name} if display_name else {}
        with app.app_context():
            token = create_access_token(identity=user_id, additional_claims=claims)
        return {"Authorization": f"Bearer {token}"}
    return _make
