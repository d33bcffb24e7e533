from typing import Any, Iterable, List, Optional


def parse_id(value: Any) -> Optional[int]:
    """
    요청에 담긴 식별자 검증
    - 양의 정수 또는 숫자 문자열만 허용
    - 그 외(빈 값, "not-an-id", bool 등)는 None
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, str):
        text = value.strip()
        if text.isdigit() and text.isascii():
            number = int(text)
            return number if number > 0 else None
    return None


def valid_ids(values: Iterable[Any]) -> List[int]:
    """잘못된 식별자는 조용히 제외하고 중복 없이 순서 유지"""
    seen = []
    for value in values:
        parsed = parse_id(value)
        if parsed is not None and parsed not in seen:
            seen.append(parsed)
    return seen
