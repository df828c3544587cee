# socialfeed/core/identity.py
"""
인증 제공자가 발급한 JWT에서 현재 사용자(viewer)를 읽어오는 헬퍼.
이 서비스는 자격 증명을 관리하지 않고, 토큰의 identity 와 'display_name' 클레임만 읽습니다.
"""
from dataclasses import dataclass
from typing import Optional, Union

from flask import current_app
from flask_jwt_extended import get_jwt, get_jwt_identity

from socialfeed.core.errors import NotAuthenticated

DEFAULT_DISPLAY_NAME = "Unknown User"


@dataclass(frozen=True)
class Viewer:
    """요청을 보낸 사용자의 식별 정보."""
    user_id: str
    display_name: str = DEFAULT_DISPLAY_NAME
    email: Optional[str] = None


# --- 인증 상태 (Authenticated / Unauthenticated / Loading / Error) ---

@dataclass(frozen=True)
class Authenticated:
    viewer: Viewer

@dataclass(frozen=True)
class Unauthenticated:
    pass

@dataclass(frozen=True)
class AuthLoading:
    pass

@dataclass(frozen=True)
class AuthError:
    message: str

AuthState = Union[Authenticated, Unauthenticated, AuthLoading, AuthError]


def auth_state_for(viewer: Optional[Viewer]) -> AuthState:
    return Authenticated(viewer) if viewer is not None else Unauthenticated()


def current_viewer() -> Optional[Viewer]:
    """
    현재 요청의 JWT에서 Viewer 를 만듭니다.
    @jwt_required(optional=True) 라우트에서 토큰이 없으면 None 을 반환합니다.
    """
    user_id = get_jwt_identity()
    if not user_id:
        return None
    claims = get_jwt()
    fallback = current_app.config.get('UNKNOWN_DISPLAY_NAME', DEFAULT_DISPLAY_NAME)
    return Viewer(
        user_id=str(user_id),
        display_name=claims.get('display_name') or fallback,
        email=claims.get('email')
    )


def require_viewer(viewer: Optional[Viewer]) -> Viewer:
    if viewer is None:
        raise NotAuthenticated()
    return viewer
