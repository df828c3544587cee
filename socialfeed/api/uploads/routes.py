# socialfeed/api/uploads/routes.py

import logging
from flask import request, jsonify, Blueprint, current_app
from flask_jwt_extended import jwt_required, get_jwt_identity
from marshmallow import Schema, fields, validate, ValidationError

from socialfeed.services.storage_service import StorageService

# 이 블루프린트에 속한 모든 API는 '/api/uploads' 접두사 URL을 갖습니다.
uploads_bp = Blueprint('uploads', __name__)

class UploadUrlRequestSchema(Schema):
    """업로드 URL 발급 요청 스키마"""
    upload_type = fields.Str(required=True, validate=validate.OneOf(list(StorageService.PATH_MAP)))
    filename = fields.Str(required=True)
    content_type = fields.Str(required=True)


@uploads_bp.route('/url', methods=['POST'])
@jwt_required()
def get_upload_url():
    """
    이미지 업로드를 위한 Pre-signed URL을 발급합니다.
    클라이언트는 받은 URL로 파일을 올린 뒤, file_path 를 게시글/댓글/프로필 요청에 담아 보냅니다.
    """
    user_id = get_jwt_identity()

    try:
        data = UploadUrlRequestSchema().load(request.get_json() or {})
    except ValidationError as err:
        logging.warning(f"URL 발급 요청 실패 (잘못된 파라미터): {err.messages}")
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400

    storage_service = current_app.services.get('storage')
    if storage_service is None:
        return jsonify({"error_code": "STORAGE_NOT_CONFIGURED", "message": "파일 저장소가 설정되지 않았습니다."}), 503

    try:
        url_info = storage_service.generate_upload_url(user_id, data['upload_type'], data['filename'], data['content_type'])
        return jsonify(url_info), 200
    except ValueError as e:
        logging.warning(f"URL 발급 요청 실패 (잘못된 업로드 타입): {e}")
        return jsonify({"error_code": "INVALID_UPLOAD_TYPE", "message": str(e)}), 400
    except Exception as e:
        logging.error(f"Pre-signed URL 생성 중 서버 오류 발생: {e}", exc_info=True)
        return jsonify({"error_code": "URL_GENERATION_FAILED", "message": "URL 생성 중 서버 오류가 발생했습니다."}), 500
