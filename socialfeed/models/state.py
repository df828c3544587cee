# socialfeed/models/state.py
"""
비동기 조회 결과를 표현하는 상태 타입.
NotRequested(아직 요청 전) -> Loading -> Success(payload) | Error(message)
"""
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar('T')


@dataclass(frozen=True)
class NotRequested:
    pass


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Success(Generic[T]):
    payload: T


@dataclass(frozen=True)
class Error:
    message: str


FetchState = Union[NotRequested, Loading, Success[Any], Error]
