# socialfeed/api/posts/schemas.py
from marshmallow import Schema, fields, validate

# --- API 요청/응답 스키마 ---

class PostCreateSchema(Schema):
    """POST /api/posts 요청 본문의 유효성을 검사합니다."""
    text = fields.Str(required=True, validate=validate.Length(min=1, max=2000))
    # Pre-signed URL로 업로드를 마친 파일 경로 (선택)
    image_path = fields.Str(load_default=None, allow_none=True)

class PostResponseSchema(Schema):
    """게시글 정보 응답을 위한 최종 JSON 형식을 정의합니다."""
    post_id = fields.Str(dump_only=True)
    user_id = fields.Str(required=True)
    user_display_name = fields.Str(required=True)
    text = fields.Str(required=True)
    image_url = fields.Str(allow_none=True)
    like_count = fields.Int(required=True)
    comment_count = fields.Int(required=True)
    share_count = fields.Int(required=True)
    created_at = fields.DateTime(required=True)
    is_liked = fields.Bool(dump_only=True, attribute="is_liked_by_current_user")

class LikeToggleResponseSchema(Schema):
    """좋아요 토글 결과 응답."""
    target_id = fields.Str(required=True)
    is_liked = fields.Bool(required=True)
