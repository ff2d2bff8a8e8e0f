"""
postgrest 조회 결과를 다루는 공통 헬퍼.
"""
from datetime import datetime, timezone
from typing import Any

from pydantic import TypeAdapter

_DATETIME = TypeAdapter(datetime)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def rows_of(response: Any) -> list[dict[str, Any]]:
    data = getattr(response, "data", None)
    if not data:
        return []
    if isinstance(data, dict):
        return [data]
    return list(data)


def first_row(response: Any) -> dict[str, Any] | None:
    rows = rows_of(response)
    return rows[0] if rows else None


def normalize_embedded(value: Any) -> dict[str, Any] | None:
    """
    FK 조인 결과 정규화.

    조회 형태에 따라 단일 객체 또는 1개짜리 리스트로 오는 값을 단일 객체(또는 None)로 맞춘다.
    """
    if isinstance(value, list):
        return value[0] if value else None
    if isinstance(value, dict):
        return value
    return None


def search_term(q: str | None) -> str:
    """검색어 앞뒤 공백만 정리. 내용은 그대로 둔다"""
    return (q or "").strip()


def like_pattern(keyword: str) -> str:
    """
    ilike 부분 일치 패턴.

    LIKE 와일드카드(% _)와 역슬래시는 이스케이프해서 글자 그대로 매칭한다.
    """
    escaped = keyword.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def ilike_any(columns: list[str], keyword: str) -> str:
    """
    여러 컬럼 중 하나라도 부분 일치하는 or 필터 문자열.

    값은 큰따옴표로 감싸서 , ( ) 가 or 문법으로 해석되지 않게 한다.
    """
    quoted = like_pattern(keyword).replace("\\", "\\\\").replace('"', '\\"')
    return ",".join(f'{column}.ilike."{quoted}"' for column in columns)


def parse_timestamp(value: Any) -> datetime:
    """postgrest timestamptz 문자열 파싱 (Z 접미사, 임의 자릿수 소수초 허용)"""
    return _DATETIME.validate_python(value)


def page_range(page: int, limit: int) -> tuple[int, int]:
    """1부터 시작하는 page 번호를 range(from, to) 로 변환 (to 포함)"""
    page = max(1, page)
    start = (page - 1) * limit
    return start, start + limit - 1
