# socialfeed/services/storage_service.py
import uuid
import logging
from datetime import timedelta
from typing import Optional
from flask import Flask
from firebase_admin import storage

class StorageService:
    """
    게시글/댓글/프로필 이미지를 Firebase Storage 에 올리고 공개 URL 을 발급하는 서비스입니다.

    1. 클라이언트가 generate_upload_url 로 Pre-signed URL 을 받아 직접 업로드합니다.
    2. 게시글/댓글/프로필 요청에 file_path 를 담아 보내면, 서비스가 make_public_and_get_url 로 공개 URL 을 받습니다.
    """

    # 업로드 목적별 저장 폴더
    PATH_MAP = {
        "post_image": "posts/{user_id}",
        "comment_image": "comments/{user_id}",
        "user_profile": "profiles/{user_id}",
    }

    ALLOWED_CONTENT_TYPES = ("image/jpeg", "image/png", "image/gif", "image/webp")

    UPLOAD_URL_EXPIRATION = timedelta(minutes=15)

    def __init__(self):
        self.bucket = None

    def init_app(self, app: Flask):
        """
        create_app 에서 한 번 호출되어 Storage 버킷을 설정합니다.

        :param app: Flask 애플리케이션 객체
        """
        bucket_name = app.config.get('FIREBASE_STORAGE_BUCKET')
        if not bucket_name:
            raise ValueError("FIREBASE_STORAGE_BUCKET 설정이 .env 또는 설정 파일에 필요합니다.")

        self.bucket = storage.bucket(bucket_name)
        logging.info(f"StorageService: 버킷 '{bucket_name}' 연결 완료")

    def _require_bucket(self):
        if not self.bucket:
            raise RuntimeError("StorageService가 초기화되지 않았습니다. init_app을 먼저 호출해주세요.")
        return self.bucket

    @classmethod
    def owns_path(cls, user_id: str, file_path: str) -> bool:
        """file_path 가 해당 사용자의 업로드 폴더 중 하나에 속하는지 확인합니다."""
        return any(
            file_path.startswith(template.format(user_id=user_id) + "/")
            for template in cls.PATH_MAP.values()
        )

    def generate_upload_url(self, user_id: str, upload_type: str, filename: str, content_type: str) -> dict:
        """
        업로드 목적에 맞는 폴더로 이미지를 올릴 수 있는 Pre-signed URL 을 생성합니다.

        :param user_id: 현재 로그인된 사용자의 ID
        :param upload_type: "post_image", "comment_image", "user_profile" 중 하나
        :param filename: 원본 파일명 (확장자 파악에 사용)
        :param content_type: 업로드할 이미지의 MIME 타입
        :return: upload_url, file_path 가 담긴 딕셔너리
        """
        folder_template = self.PATH_MAP.get(upload_type)
        if not folder_template:
            raise ValueError(f"'{upload_type}'은(는) 유효한 업로드 타입이 아닙니다.")
        if content_type not in self.ALLOWED_CONTENT_TYPES:
            raise ValueError(f"'{content_type}'은(는) 허용되지 않는 이미지 형식입니다.")
        bucket = self._require_bucket()

        extension = filename.rsplit('.', 1)[-1].lower() if '.' in filename else ''
        unique_filename = f"{uuid.uuid4()}.{extension}" if extension else str(uuid.uuid4())
        file_path = f"{folder_template.format(user_id=user_id)}/{unique_filename}"

        upload_url = bucket.blob(file_path).generate_signed_url(
            version="v4",
            expiration=self.UPLOAD_URL_EXPIRATION,
            method="PUT",
            content_type=content_type
        )
        return {"upload_url": upload_url, "file_path": file_path}

    def make_public_and_get_url(self, file_path: str, owner_id: Optional[str] = None) -> str:
        """
        업로드가 끝난 파일을 공개로 전환하고 URL 을 반환합니다.
        owner_id 가 주어지면 그 사용자의 폴더에 있는 파일만 허용합니다.
        """
        if owner_id is not None and not self.owns_path(owner_id, file_path):
            raise PermissionError(f"다른 사용자의 파일은 첨부할 수 없습니다: {file_path}")

        blob = self._require_bucket().blob(file_path)
        if not blob.exists():
            raise FileNotFoundError(f"파일을 찾을 수 없습니다: {file_path}")

        blob.make_public()
        return blob.public_url
