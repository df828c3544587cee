# socialfeed/api/posts/routes.py
from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required
from marshmallow import ValidationError

from socialfeed.api.posts.schemas import PostCreateSchema, PostResponseSchema, LikeToggleResponseSchema
from socialfeed.core.identity import current_viewer

posts_bp = Blueprint('posts_bp', __name__)

@posts_bp.route('', methods=['POST'])
@jwt_required()
async def create_post():
    """
    새 게시글을 작성합니다.
    - image_path 는 /api/uploads/url 로 업로드를 마친 파일 경로입니다 (선택).
    """
    post_service = current_app.services['posts']
    try:
        data = PostCreateSchema().load(request.get_json() or {})
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400

    new_post = await post_service.create_post(current_viewer(), data['text'], data.get('image_path'))
    return jsonify(PostResponseSchema().dump(new_post)), 201


@posts_bp.route('', methods=['GET'])
@jwt_required(optional=True)
async def get_posts():
    """전체 게시글을 최신순으로 조회합니다. 로그인한 경우 is_liked 가 채워집니다."""
    post_service = current_app.services['posts']
    posts = await post_service.get_posts(current_viewer())
    return jsonify({"posts": PostResponseSchema(many=True).dump(posts)}), 200


@posts_bp.route('/<string:post_id>', methods=['GET'])
@jwt_required(optional=True)
async def get_post(post_id: str):
    post_service = current_app.services['posts']
    post = await post_service.get_post_by_id(post_id, current_viewer())
    return jsonify(PostResponseSchema().dump(post)), 200


@posts_bp.route('/<string:post_id>/like', methods=['POST'])
@jwt_required()
async def toggle_post_like(post_id: str):
    """게시글 좋아요를 누르거나 취소합니다. 응답의 is_liked 는 토글 후 상태입니다."""
    post_service = current_app.services['posts']
    is_liked = await post_service.toggle_like(current_viewer(), post_id)
    return jsonify(LikeToggleResponseSchema().dump({"target_id": post_id, "is_liked": is_liked})), 200
