# socialfeed/state/__init__.py
"""
화면 단위 상태 컨테이너 패키지
"""

from .feed import FeedSession
from .profile import ProfileSession

__all__ = ['FeedSession', 'ProfileSession']
