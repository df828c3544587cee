# socialfeed/api/users/schemas.py
from marshmallow import Schema, fields, validate

class UserResponseSchema(Schema):
    """
    GET /api/users/me
    현재 로그인된 사용자의 프로필 응답 스키마.
    """
    user_id = fields.Str(required=True, dump_only=True)
    display_name = fields.Str(required=True)
    email = fields.Str(required=True)
    photo_url = fields.Str(allow_none=True)
    bio = fields.Str(allow_none=True)
    created_at = fields.DateTime(required=True)

class ProfileUpdateSchema(Schema):
    """
    PATCH /api/users/me
    프로필 수정 요청 본문의 유효성을 검사하는 스키마.
    """
    display_name = fields.Str(required=True, validate=validate.Length(min=1, max=50),
                              error_messages={"required": "display_name은 필수 항목입니다."})
    bio = fields.Str(load_default=None, allow_none=True, validate=validate.Length(max=500))
    photo_path = fields.Str(load_default=None, allow_none=True)
