"""
출발일/오퍼 조회 헬퍼 (상품 상세 화면의 달력/가격 표시용).
"""
from tourbook.schemas.product import Departure


def sort_departures(departures: list[Departure]) -> list[Departure]:
    # 날짜 → 상태 → 오퍼 타입 → 가격 순
    return sorted(departures, key=lambda d: (d.date_iso, d.status, d.offer_type, d.price_adult or 0))


def group_by_date(departures: list[Departure]) -> dict[str, list[Departure]]:
    grouped: dict[str, list[Departure]] = {}
    for dep in sort_departures(departures):
        grouped.setdefault(dep.date_iso, []).append(dep)
    return grouped


def pick_default_departure(departures: list[Departure]) -> Departure | None:
    """가격이 있는(INQUIRY 제외, 0원 제외) 오퍼 중 최저가. 없으면 첫 번째"""
    if not departures:
        return None
    priced = [d for d in departures if d.status != "INQUIRY" and (d.price_adult or 0) > 0]
    if priced:
        return min(priced, key=lambda d: d.price_adult)
    return departures[0]


def total_price(departure: Departure | None, adults: int) -> int | None:
    """성인 인원 기준 총액. 가격문의(INQUIRY)면 None"""
    if departure is None or departure.status == "INQUIRY":
        return None
    return max(0, adults) * (departure.price_adult or 0)
