# socialfeed/api/comments/test_comment_services.py
import pytest

from socialfeed.core.errors import InvalidReplyTarget, NotAuthenticated, NotFound


@pytest.mark.asyncio
async def test_add_comment_increments_post_comment_count(post_service, comment_service, alice, bob):
    post = await post_service.create_post(alice, "글")

    comment = await comment_service.add_comment(bob, post.post_id, "첫 댓글")

    assert comment.parent_comment_id is None
    assert comment.user_display_name == 'Bob'
    assert (await post_service.get_post_by_id(post.post_id, bob)).comment_count == 1


@pytest.mark.asyncio
async def test_add_comment_to_missing_post_writes_nothing(comment_service, graph, alice):
    with pytest.raises(NotFound):
        await comment_service.add_comment(alice, 'missing', "댓글")
    assert await graph.comments.query({}) == []


@pytest.mark.asyncio
async def test_add_comment_requires_viewer(post_service, comment_service, alice):
    post = await post_service.create_post(alice, "글")
    with pytest.raises(NotAuthenticated):
        await comment_service.add_comment(None, post.post_id, "익명 댓글")


@pytest.mark.asyncio
async def test_reply_increments_only_parent_reply_count(post_service, comment_service, alice, bob):
    post = await post_service.create_post(alice, "글")
    parent = await comment_service.add_comment(alice, post.post_id, "부모 댓글")
    sibling = await comment_service.add_comment(alice, post.post_id, "다른 댓글")

    r1 = await comment_service.add_reply(bob, parent.comment_id, "답글")

    assert r1.parent_comment_id == parent.comment_id
    assert r1.post_id == post.post_id
    comments = await comment_service.get_comments_for_post(post.post_id, bob)
    assert [(c.comment_id, c.reply_count) for c in comments] == [(parent.comment_id, 1), (sibling.comment_id, 0)]
    # 답글은 게시글의 comment_count 를 바꾸지 않습니다.
    assert (await post_service.get_post_by_id(post.post_id, bob)).comment_count == 2

    replies = await comment_service.get_replies_for_comment(parent.comment_id, bob)
    assert [r.comment_id for r in replies] == [r1.comment_id]


@pytest.mark.asyncio
async def test_replies_are_oldest_first(post_service, comment_service, alice, bob):
    post = await post_service.create_post(alice, "글")
    parent = await comment_service.add_comment(alice, post.post_id, "부모")
    texts = ["하나", "둘", "셋"]
    for text in texts:
        await comment_service.add_reply(bob, parent.comment_id, text)

    replies = await comment_service.get_replies_for_comment(parent.comment_id, None)

    assert [r.text for r in replies] == texts
    assert all(r.is_liked_by_current_user is False for r in replies)


@pytest.mark.asyncio
async def test_reply_to_reply_is_rejected(post_service, comment_service, graph, alice, bob):
    post = await post_service.create_post(alice, "글")
    parent = await comment_service.add_comment(alice, post.post_id, "부모")
    reply = await comment_service.add_reply(bob, parent.comment_id, "답글")

    with pytest.raises(InvalidReplyTarget):
        await comment_service.add_reply(alice, reply.comment_id, "답글의 답글")

    assert (await graph.comments.get_by_id(reply.comment_id)).reply_count == 0
    assert len(await graph.comments.query({'post_id': post.post_id})) == 2


@pytest.mark.asyncio
async def test_reply_to_missing_parent(comment_service, alice):
    with pytest.raises(NotFound):
        await comment_service.add_reply(alice, 'missing', "답글")


@pytest.mark.asyncio
async def test_comments_are_the_same_with_and_without_index(post_service, comment_service, graph, store, alice, bob):
    post = await post_service.create_post(alice, "글")
    for text in ["a", "b", "c"]:
        await comment_service.add_comment(bob, post.post_id, text)
    await comment_service.add_comment(bob, (await post_service.create_post(bob, "다른 글")).post_id, "x")

    fallback = await comment_service.get_comments_for_post(post.post_id, alice)
    store.add_index('comments', ['post_id'], 'created_at')
    indexed = await comment_service.get_comments_for_post(post.post_id, alice)

    assert [c.text for c in fallback] == ["a", "b", "c"]
    assert indexed == fallback


@pytest.mark.asyncio
async def test_comment_like_toggle_and_annotation(post_service, comment_service, alice, bob):
    post = await post_service.create_post(alice, "글")
    comment = await comment_service.add_comment(alice, post.post_id, "댓글")

    assert await comment_service.toggle_comment_like(bob, comment.comment_id) is True
    [annotated] = await comment_service.get_comments_for_post(post.post_id, bob)
    assert (annotated.like_count, annotated.is_liked_by_current_user) == (1, True)

    [for_alice] = await comment_service.get_comments_for_post(post.post_id, alice)
    assert for_alice.is_liked_by_current_user is False

    assert await comment_service.toggle_comment_like(bob, comment.comment_id) is False
    [after] = await comment_service.get_comments_for_post(post.post_id, bob)
    assert (after.like_count, after.is_liked_by_current_user) == (0, False)
