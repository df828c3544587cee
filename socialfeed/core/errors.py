# socialfeed/core/errors.py
"""
소셜 피드 도메인의 예외 계층.

- IndexUnavailable 은 저장소 계층에서 발생하지만 리포지토리가 전체 스캔으로 복구하므로
  호출자에게 전달되지 않습니다.
- 나머지 예외는 호출자에게 그대로 전파되며, Flask 전역 에러 핸들러가
  error_code / status_code 를 사용해 JSON 응답으로 변환합니다.
"""


class SocialFeedError(Exception):
    """모든 도메인 예외의 기반 클래스."""
    error_code = "INTERNAL_SERVER_ERROR"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotAuthenticated(SocialFeedError):
    """로그인된 사용자(viewer)가 필요한 작업에 식별 정보가 없는 경우."""
    error_code = "NOT_AUTHENTICATED"
    status_code = 401

    def __init__(self, message: str = "로그인이 필요합니다."):
        super().__init__(message)


class NotFound(SocialFeedError):
    """참조한 문서가 존재하지 않는 경우 (게시글, 부모 댓글 등)."""
    error_code = "RESOURCE_NOT_FOUND"
    status_code = 404


class InvalidReplyTarget(SocialFeedError):
    """답글의 답글을 만들려는 경우. 답글은 한 단계까지만 허용됩니다."""
    error_code = "INVALID_REPLY_TARGET"
    status_code = 400


class RemoteUnavailable(SocialFeedError):
    """원격 저장소 호출이 실패한 경우."""
    error_code = "REMOTE_UNAVAILABLE"
    status_code = 503


class CounterSyncError(RemoteUnavailable):
    """
    자식 문서 쓰기는 성공했지만 카운터 조정이 실패한 경우.
    보상 트랜잭션이 없으므로 해당 카운터는 실제 개수와 어긋난 상태로 남습니다.
    """
    error_code = "COUNTER_SYNC_FAILED"

    def __init__(self, message: str, collection: str, entity_id: str, field: str, delta: int):
        super().__init__(message)
        self.collection = collection
        self.entity_id = entity_id
        self.field = field
        self.delta = delta


class IndexUnavailable(SocialFeedError):
    """필터/정렬 쿼리에 필요한 복합 색인이 없는 경우. 리포지토리 내부에서만 처리됩니다."""
    error_code = "INDEX_UNAVAILABLE"
    status_code = 500
