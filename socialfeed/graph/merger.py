# socialfeed/graph/merger.py
"""
변경 요청이 성공한 직후, 이미 조회해 둔 목록에 결과를 바로 반영하는 헬퍼.
전체 목록을 다시 조회하지 않으며, 다음 전체 조회 때 실제 값과 맞춰집니다.
모든 함수는 새 컬렉션을 반환하고 대상이 아닌 항목은 같은 객체를 그대로 전달합니다.
"""
from dataclasses import replace
from typing import Dict, List, Mapping, Sequence, TypeVar, Union

from socialfeed.models import Comment, Post

T = TypeVar('T', Post, Comment)


def _with_like(item: T, liked: bool) -> T:
    like_count = item.like_count + 1 if liked else item.like_count - 1
    return replace(item, like_count=max(0, like_count), is_liked_by_current_user=liked)


def merge_like_result(collection: Sequence[T], target_id: str, new_liked_state: bool) -> List[T]:
    return [
        _with_like(item, new_liked_state) if item.id == target_id else item
        for item in collection
    ]


def merge_like_result_into_replies(replies_by_parent: Mapping[str, Sequence[Comment]], target_id: str,
                                   new_liked_state: bool) -> Dict[str, List[Comment]]:
    return {
        parent_id: merge_like_result(replies, target_id, new_liked_state)
        for parent_id, replies in replies_by_parent.items()
    }


def merge_reply_added(comments: Sequence[Comment], parent_comment_id: str) -> List[Comment]:
    return [
        replace(comment, reply_count=comment.reply_count + 1) if comment.comment_id == parent_comment_id else comment
        for comment in comments
    ]


def merge_replies(replies_by_parent: Mapping[str, Sequence[Comment]], parent_comment_id: str,
                  reply: Union[Comment, Sequence[Comment]]) -> Dict[str, List[Comment]]:
    """
    부모 댓글별 답글 맵에 답글을 추가합니다.
    reply 가 목록이면 해당 부모의 답글 목록을 통째로 교체합니다 (답글 목록을 새로 불러온 경우).
    """
    merged = {parent_id: list(replies) for parent_id, replies in replies_by_parent.items()}
    if isinstance(reply, Comment):
        merged[parent_comment_id] = merged.get(parent_comment_id, []) + [reply]
    else:
        merged[parent_comment_id] = list(reply)
    return merged
