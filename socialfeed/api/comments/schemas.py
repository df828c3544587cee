# socialfeed/api/comments/schemas.py
from marshmallow import Schema, fields, validate

class CommentCreateSchema(Schema):
    """
    POST /api/posts/{post_id}/comments
    POST /api/comments/{comment_id}/replies
    댓글/답글 작성 요청의 데이터 형식을 정의하고 유효성을 검사합니다.
    """
    text = fields.Str(required=True, validate=validate.Length(min=1, max=1000, error="댓글은 1~1000자 사이여야 합니다."))
    image_path = fields.Str(load_default=None, allow_none=True)

class CommentResponseSchema(Schema):
    """
    댓글 정보 응답을 위한 최종 JSON 형식을 정의합니다.
    """
    comment_id = fields.Str(required=True)
    post_id = fields.Str(required=True)
    user_id = fields.Str(required=True)
    user_display_name = fields.Str(required=True)
    text = fields.Str(required=True)
    image_url = fields.Str(allow_none=True)
    like_count = fields.Int(required=True)
    reply_count = fields.Int(required=True)
    parent_comment_id = fields.Str(allow_none=True)
    created_at = fields.DateTime(required=True)

    # 서비스 로직에서 채워주는 응답 전용 필드
    is_liked = fields.Bool(dump_only=True, attribute="is_liked_by_current_user")
