"""
날짜 파싱 유틸

- 출결 날짜는 UTC 달력 기준 '일' 단위로 저장/조회
- 오프셋이 있는 datetime 문자열은 UTC로 변환한 뒤 날짜만 취함
"""

from datetime import date, datetime, timedelta, timezone
from typing import Optional, Union

DateInput = Union[str, date, datetime, None]


def parse_datetime(value: DateInput) -> Optional[datetime]:
    """ISO 문자열/date/datetime → tz-aware(UTC) datetime. 파싱 실패 시 None"""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_day(value: DateInput) -> Optional[date]:
    """입력값을 UTC 기준 날짜로 변환"""
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    dt = parse_datetime(value)
    return dt.date() if dt else None


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def last_n_days(n: int, end: Optional[date] = None) -> list[date]:
    """end(기본: 오늘)를 포함해 과거 n일을 오름차순으로 반환"""
    end = end or utc_today()
    start = end - timedelta(days=n - 1)
    return [start + timedelta(days=i) for i in range(n)]
