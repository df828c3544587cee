# socialfeed/api/comments/routes.py
from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required
from marshmallow import ValidationError

from socialfeed.api.comments.schemas import CommentCreateSchema, CommentResponseSchema
from socialfeed.api.posts.schemas import LikeToggleResponseSchema
from socialfeed.core.identity import current_viewer


comments_bp = Blueprint('comments_bp', __name__)

@comments_bp.route('/posts/<string:post_id>/comments', methods=['POST'])
@jwt_required()
async def create_comment(post_id: str):
    """
    특정 게시글에 새로운 댓글을 작성합니다.
    - 성공 시 게시글의 comment_count 가 1 증가합니다.
    """
    comment_service = current_app.services['comments']
    try:
        data = CommentCreateSchema().load(request.get_json() or {})
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400

    new_comment = await comment_service.add_comment(current_viewer(), post_id, data['text'], data.get('image_path'))
    return jsonify(CommentResponseSchema().dump(new_comment)), 201


@comments_bp.route('/posts/<string:post_id>/comments', methods=['GET'])
@jwt_required(optional=True)
async def get_comments(post_id: str):
    """특정 게시글의 최상위 댓글 목록을 오래된 순으로 조회합니다."""
    comment_service = current_app.services['comments']
    comments = await comment_service.get_comments_for_post(post_id, current_viewer())
    return jsonify({"comments": CommentResponseSchema(many=True).dump(comments)}), 200


@comments_bp.route('/comments/<string:comment_id>/replies', methods=['POST'])
@jwt_required()
async def create_reply(comment_id: str):
    """
    댓글에 답글을 작성합니다.
    - 답글의 답글은 허용하지 않습니다 (400 INVALID_REPLY_TARGET).
    - 성공 시 부모 댓글의 reply_count 가 1 증가합니다.
    """
    comment_service = current_app.services['comments']
    try:
        data = CommentCreateSchema().load(request.get_json() or {})
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400

    reply = await comment_service.add_reply(current_viewer(), comment_id, data['text'], data.get('image_path'))
    return jsonify(CommentResponseSchema().dump(reply)), 201


@comments_bp.route('/comments/<string:comment_id>/replies', methods=['GET'])
@jwt_required(optional=True)
async def get_replies(comment_id: str):
    comment_service = current_app.services['comments']
    replies = await comment_service.get_replies_for_comment(comment_id, current_viewer())
    return jsonify({"replies": CommentResponseSchema(many=True).dump(replies)}), 200


@comments_bp.route('/comments/<string:comment_id>/like', methods=['POST'])
@jwt_required()
async def toggle_comment_like(comment_id: str):
    """특정 댓글의 좋아요를 누르거나 취소합니다."""
    comment_service = current_app.services['comments']
    is_liked = await comment_service.toggle_comment_like(current_viewer(), comment_id)
    return jsonify(LikeToggleResponseSchema().dump({"target_id": comment_id, "is_liked": is_liked})), 200
