# socialfeed/models/base.py
from dataclasses import asdict, fields
from typing import Any, ClassVar, Dict, Tuple, Type, TypeVar

from socialfeed.utils.datetime_utils import DateTimeUtils

D = TypeVar('D', bound='FirestoreDocument')


class FirestoreDocument:
    """
    Firestore 문서와 데이터클래스 사이의 변환을 담당하는 믹스인.
    - id_field: 문서 ID로 사용되는 필드 이름
    - derived_fields: 조회 시점에 계산되며 저장하지 않는 필드
    """
    collection: ClassVar[str]
    id_field: ClassVar[str]
    derived_fields: ClassVar[Tuple[str, ...]] = ()
    datetime_fields: ClassVar[Tuple[str, ...]] = ('created_at',)

    @property
    def id(self) -> str:
        return getattr(self, self.id_field)

    def to_document(self) -> Dict[str, Any]:
        data = asdict(self)
        for name in self.derived_fields:
            data.pop(name, None)
        return DateTimeUtils.for_firestore(data)

    @classmethod
    def from_document(cls: Type[D], data: Dict[str, Any]) -> D:
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known and k not in cls.derived_fields}
        for name in cls.datetime_fields:
            if values.get(name) is not None:
                values[name] = DateTimeUtils.from_firestore(values[name])
        return cls(**values)
