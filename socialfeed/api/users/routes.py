# socialfeed/api/users/routes.py
from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required
from marshmallow import ValidationError

from socialfeed.api.posts.schemas import PostResponseSchema
from socialfeed.api.users.schemas import UserResponseSchema, ProfileUpdateSchema
from socialfeed.core.identity import current_viewer

users_bp = Blueprint('users_bp', __name__)

@users_bp.route('/me', methods=['GET'])
@jwt_required()
async def get_my_profile():
    """현재 로그인된 사용자의 프로필을 조회합니다. 프로필 문서가 없으면 토큰 정보로 새로 만듭니다."""
    user_service = current_app.services['users']
    user = await user_service.ensure_profile(current_viewer())
    return jsonify(UserResponseSchema().dump(user)), 200


@users_bp.route('/me', methods=['PATCH'])
@jwt_required()
async def update_my_profile():
    """
    현재 로그인된 사용자의 표시 이름, 소개, 프로필 사진을 수정합니다.
    """
    user_service = current_app.services['users']
    try:
        data = ProfileUpdateSchema().load(request.get_json() or {})
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400

    updated_user = await user_service.update_user_profile(
        current_viewer(), data['display_name'], data.get('bio'), data.get('photo_path')
    )
    return jsonify(UserResponseSchema().dump(updated_user)), 200


@users_bp.route('/me/posts', methods=['GET'])
@jwt_required()
async def get_my_posts():
    post_service = current_app.services['posts']
    posts = await post_service.get_user_posts(current_viewer())
    return jsonify({"posts": PostResponseSchema(many=True).dump(posts)}), 200


@users_bp.route('/<string:user_id>/posts', methods=['GET'])
@jwt_required(optional=True)
async def get_user_posts(user_id: str):
    """특정 사용자가 작성한 게시글을 최신순으로 조회합니다."""
    post_service = current_app.services['posts']
    posts = await post_service.get_user_posts(current_viewer(), author_id=user_id)
    return jsonify({"posts": PostResponseSchema(many=True).dump(posts)}), 200
