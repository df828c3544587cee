# socialfeed/services/image_resolver.py
import asyncio
import logging
from typing import Optional

from socialfeed.services.storage_service import StorageService


async def resolve_image_url(storage_service: Optional[StorageService], file_path: Optional[str],
                            owner_id: Optional[str] = None) -> Optional[str]:
    """
    업로드된 이미지 경로를 공개 URL로 바꿉니다.
    이미지 처리에 실패해도 게시글/댓글 작성은 이미지 없이 계속 진행하므로 None 을 반환합니다.
    """
    if not file_path:
        return None
    if storage_service is None:
        logging.warning(f"Storage 서비스가 설정되지 않아 이미지를 첨부하지 않습니다 (file_path: {file_path})")
        return None
    try:
        # Cloud Storage SDK는 동기 API이므로 별도 스레드에서 실행합니다.
        return await asyncio.to_thread(storage_service.make_public_and_get_url, file_path, owner_id)
    except Exception as e:
        logging.error(f"이미지 URL 발급 실패, 이미지 없이 진행합니다 (file_path: {file_path}): {e}", exc_info=True)
        return None
