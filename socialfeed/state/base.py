# socialfeed/state/base.py
"""
화면(세션) 단위 상태 컨테이너의 공통 기반.

전역 싱글턴 대신 화면마다 세션 객체를 만들어 UI 계층에 참조로 넘깁니다.
상태는 세션의 메서드를 통해서만 바뀌며, 조회 상태는 NotRequested / Loading / Success / Error 로 표현합니다.

close() 해도 진행 중인 작업은 취소하지 않고 끝까지 실행되지만, 그 결과는 더 이상 상태에 반영되지 않습니다.
"""
import asyncio
import logging
from typing import Any, Awaitable, Optional, Set

from socialfeed.core.identity import AuthState, Viewer, auth_state_for

logger = logging.getLogger(__name__)


class Session:
    """상태 반영과 fire-and-forget 작업 관리를 담당합니다."""

    def __init__(self, viewer: Optional[Viewer]):
        self.viewer = viewer
        self.closed = False
        self._tasks: Set[asyncio.Task] = set()

    @property
    def auth_state(self) -> AuthState:
        return auth_state_for(self.viewer)

    def _publish(self, name: str, value: Any) -> None:
        if self.closed:
            logger.debug(f"닫힌 세션의 결과는 반영하지 않습니다: {name}")
            return
        setattr(self, name, value)

    def launch(self, operation: Awaitable[Any]) -> asyncio.Task:
        """작업을 백그라운드로 실행합니다. 호출자는 결과를 기다리지 않아도 됩니다."""
        task = asyncio.ensure_future(operation)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def wait_idle(self) -> None:
        """launch 로 시작한 작업이 모두 끝날 때까지 기다립니다."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def close(self) -> None:
        self.closed = True
