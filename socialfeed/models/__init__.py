from socialfeed.models.comment import Comment
from socialfeed.models.like import CommentLike, Like
from socialfeed.models.post import Post
from socialfeed.models.user import User

__all__ = ['Comment', 'CommentLike', 'Like', 'Post', 'User']
