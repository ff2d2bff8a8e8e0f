import math
import uuid
from typing import Any

from tourbook.schemas.product import ItineraryDay, ItineraryRow


def clamp_int(value: Any, fallback: int = 0) -> int:
    """숫자 입력을 0 이상 정수로 보정. 숫자가 아니면 fallback"""
    try:
        n = float(value)
    except (TypeError, ValueError):
        return fallback
    if math.isnan(n) or math.isinf(n):
        return fallback
    return max(0, math.floor(n))


def new_item_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def renumber_days(days: list[ItineraryDay]) -> list[ItineraryDay]:
    """일차 번호를 1..N 으로 다시 매긴다. 제목이 비어 있으면 "N일차" 로 채움"""
    out: list[ItineraryDay] = []
    for idx, day in enumerate(days, start=1):
        out.append(day.model_copy(update={"day_no": idx, "title": day.title or f"{idx}일차"}))
    return out


def append_day(days: list[ItineraryDay]) -> list[ItineraryDay]:
    n = len(days) + 1
    new_day = ItineraryDay(id=new_item_id("day"), day_no=n, title=f"{n}일차", date_text="", rows=[])
    return renumber_days([*days, new_day])


def insert_day(days: list[ItineraryDay], index: int) -> list[ItineraryDay]:
    index = max(0, min(index, len(days)))
    new_day = ItineraryDay(id=new_item_id("day"), day_no=index + 1, title="", date_text="", rows=[])
    return renumber_days([*days[:index], new_day, *days[index:]])


def remove_day(days: list[ItineraryDay], index: int) -> list[ItineraryDay]:
    return renumber_days([d for i, d in enumerate(days) if i != index])


def new_row() -> ItineraryRow:
    return ItineraryRow(id=new_item_id("row"))
