# socialfeed/graph/test_toggle.py
import asyncio

import pytest

from socialfeed.core.errors import NotAuthenticated, NotFound
from socialfeed.graph import SocialGraph
from socialfeed.models import Comment, Like, Post
from socialfeed.storage import InMemoryDocumentStore


class YieldingDocumentStore(InMemoryDocumentStore):
    """토글이 쓰는 저장소 호출마다 이벤트 루프에 제어를 넘겨, 동시에 실행한 토글이 서로 끼어들게 합니다."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls = []

    async def _yield(self, name, collection):
        self.calls.append((name, collection))
        await asyncio.sleep(0)

    async def create(self, collection, data, doc_id=None):
        await self._yield("create", collection)
        return await super().create(collection, data, doc_id)

    async def create_if_absent(self, collection, doc_id, data):
        await self._yield("create_if_absent", collection)
        return await super().create_if_absent(collection, doc_id, data)

    async def get(self, collection, doc_id):
        await self._yield("get", collection)
        return await super().get(collection, doc_id)

    async def delete(self, collection, doc_id):
        await self._yield("delete", collection)
        return await super().delete(collection, doc_id)

    async def query(self, collection, filters, order_by=None):
        await self._yield("query", collection)
        return await super().query(collection, filters, order_by)

    async def increment(self, collection, doc_id, field, delta, floor=None):
        await self._yield("increment", collection)
        return await super().increment(collection, doc_id, field, delta, floor)


@pytest.fixture
def interleaving_graph(clock):
    return SocialGraph(YieldingDocumentStore(), clock=clock)


@pytest.fixture
def post(clock):
    return Post(post_id='p1', user_id='author', user_display_name='Author', text='hello', created_at=clock())


@pytest.mark.asyncio
@pytest.mark.parametrize("toggles", [1, 2, 3, 4, 7])
async def test_post_like_state_follows_toggle_parity(graph, post, alice, toggles):
    await graph.posts.create(post)

    results = [await graph.toggler.toggle_post_like(alice, post.post_id) for _ in range(toggles)]

    liked = toggles % 2 == 1
    assert results[-1] is liked
    assert results == [i % 2 == 0 for i in range(toggles)]
    assert (await graph.posts.get_by_id(post.post_id)).like_count == (1 if liked else 0)
    assert (await graph.likes.find_by_id(Like.key_for(alice.user_id, post.post_id)) is not None) is liked


@pytest.mark.asyncio
async def test_like_count_tracks_distinct_users(graph, post, alice, bob):
    await graph.posts.create(post)

    assert await graph.toggler.toggle_post_like(alice, 'p1') is True
    assert await graph.toggler.toggle_post_like(bob, 'p1') is True
    assert (await graph.posts.get_by_id('p1')).like_count == 2

    assert await graph.toggler.toggle_post_like(alice, 'p1') is False
    assert (await graph.posts.get_by_id('p1')).like_count == 1
    assert len(await graph.likes.query({'post_id': 'p1'})) == 1


@pytest.mark.asyncio
async def test_concurrent_toggles_by_same_user_never_create_duplicates(interleaving_graph, post, alice):
    graph = interleaving_graph
    await graph.posts.create(post)
    graph.store.calls.clear()

    results = await asyncio.gather(
        graph.toggler.toggle_post_like(alice, 'p1'),
        graph.toggler.toggle_post_like(alice, 'p1'),
    )

    # 두 토글이 실제로 교차 실행되었는지: 두 번의 조건부 생성이 어느 쪽의 카운터 갱신보다 먼저 일어납니다.
    steps = [name for name, _ in graph.store.calls]
    assert steps[:4] == ['get', 'get', 'create_if_absent', 'create_if_absent']

    likes = await graph.likes.query({'user_id': alice.user_id})
    like_count = (await graph.posts.get_by_id('p1')).like_count
    assert len(likes) <= 1
    assert like_count == len(likes)
    assert sorted(results) == [False, True]


@pytest.mark.asyncio
async def test_comment_like_toggle_adjusts_comment_counter(graph, post, alice, clock):
    await graph.posts.create(post)
    comment = Comment(comment_id='c1', post_id='p1', user_id='bob', user_display_name='Bob', text='hi', created_at=clock())
    await graph.comments.create(comment)

    assert await graph.toggler.toggle_comment_like(alice, 'c1') is True
    assert (await graph.comments.get_by_id('c1')).like_count == 1
    assert (await graph.posts.get_by_id('p1')).like_count == 0

    assert await graph.toggler.toggle_comment_like(alice, 'c1') is False
    assert (await graph.comments.get_by_id('c1')).like_count == 0


@pytest.mark.asyncio
async def test_toggle_requires_viewer(graph, post):
    await graph.posts.create(post)

    with pytest.raises(NotAuthenticated):
        await graph.toggler.toggle_post_like(None, 'p1')
    with pytest.raises(NotAuthenticated):
        await graph.toggler.toggle_comment_like(None, 'c1')
    assert await graph.likes.query({'post_id': 'p1'}) == []


@pytest.mark.asyncio
async def test_toggle_on_missing_target_raises_not_found(graph, alice):
    with pytest.raises(NotFound):
        await graph.toggler.toggle_post_like(alice, 'missing')
    with pytest.raises(NotFound):
        await graph.toggler.toggle_comment_like(alice, 'missing')


@pytest.mark.asyncio
async def test_concurrent_likes_by_different_users_are_all_counted(interleaving_graph, post, alice, bob):
    graph = interleaving_graph
    await graph.posts.create(post)

    results = await asyncio.gather(
        graph.toggler.toggle_post_like(alice, 'p1'),
        graph.toggler.toggle_post_like(bob, 'p1'),
    )

    assert results == [True, True]
    assert (await graph.posts.get_by_id('p1')).like_count == 2
    assert len(await graph.likes.query({'post_id': 'p1'})) == 2
