import re


def theme_slug(name: str) -> str:
    """테마 slug: 공백만 '-' 로 치환 (한글 유지)"""
    return re.sub(r"\s+", "-", (name or "").strip())


def area_slug(name: str) -> str:
    """지역 slug: 소문자 + 공백 '-' + 영숫자/-/_ 외 제거"""
    s = re.sub(r"\s+", "-", (name or "").strip().lower())
    return re.sub(r"[^a-z0-9\-_]", "", s)
