"""
services/bulk_write.py

순서 없는(unordered) 일괄 upsert.
- 각 연산은 자신의 SAVEPOINT 안에서 실행 → 실패한 연산만 롤백되고 나머지는 계속 적용
- 결과는 문서 저장소의 bulk-write 결과와 같은 모양으로 반환 (부분 실패를 호출자가 해석)
- 재시도 없음 (단, 조회 후 삽입 사이 같은 키 충돌은 한 번 갱신으로 다시 적용)
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


@dataclass
class UpsertOp:
    key: Dict[str, Any]        # 유니크 키 (예: student_id, course_id, date)
    values: Dict[str, Any]     # 매칭 시 덮어쓸 값 / 신규 생성 시 함께 넣을 값


@dataclass
class BulkWriteResult:
    matched_count: int = 0
    modified_count: int = 0
    upserted_count: int = 0
    upserted_ids: Dict[int, int] = field(default_factory=dict)
    write_errors: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.write_errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "matchedCount": self.matched_count,
            "modifiedCount": self.modified_count,
            "upsertedCount": self.upserted_count,
            "upsertedIds": {str(k): v for k, v in self.upserted_ids.items()},
            "writeErrors": self.write_errors,
        }


class InvalidOperation(ValueError):
    """저장 전에 검증에서 걸린 연산 (해당 연산만 실패 처리)"""


def _find(db: Session, model, key: Dict[str, Any], for_update: bool = False):
    query = db.query(model).filter_by(**key)
    if for_update:
        # 잠금 읽기: 스냅샷이 아닌 최신 커밋 행을 봄 (SQLite 는 무시)
        query = query.with_for_update()
    return query.one_or_none()


def _apply(db: Session, model, index: int, op: UpsertOp, result: BulkWriteResult, for_update: bool = False):
    existing = _find(db, model, op.key, for_update=for_update)
    if existing is not None:
        changed = False
        for name, value in op.values.items():
            if getattr(existing, name) != value:
                setattr(existing, name, value)
                changed = True
        if changed:
            db.flush()
            result.modified_count += 1
        result.matched_count += 1
        return
    row = model(**op.key, **op.values)
    db.add(row)
    db.flush()
    result.upserted_count += 1
    result.upserted_ids[index] = row.id


def bulk_upsert(
    db: Session,
    model,
    ops: Sequence[UpsertOp],
    validate: Optional[Callable[[UpsertOp], None]] = None,
) -> BulkWriteResult:
    result = BulkWriteResult()

    for index, op in enumerate(ops):
        try:
            if validate is not None:
                validate(op)
            try:
                with db.begin_nested():
                    _apply(db, model, index, op, result)
            except IntegrityError:
                # 조회와 삽입 사이에 다른 요청이 같은 키를 먼저 커밋한 경우
                # → 한 번만 다시 조회해서 갱신 (나중 쓰기가 이김)
                with db.begin_nested():
                    _apply(db, model, index, op, result, for_update=True)
        except InvalidOperation as exc:
            result.write_errors.append({"index": index, "code": "INVALID", "message": str(exc)})
        except SQLAlchemyError as exc:
            logger.warning(f"bulk upsert op {index} on {model.__tablename__} failed: {exc}")
            result.write_errors.append({"index": index, "code": "WRITE_ERROR", "message": str(getattr(exc, "orig", None) or exc)})

    db.commit()
    return result
