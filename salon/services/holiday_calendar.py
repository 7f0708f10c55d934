"""
Korean public holidays for red-day marking on the calendar.

Sundays are red by weekday column and are handled by the caller. Movable
holidays (Seollal, Chuseok, elections, substitute days) only exist for the
years listed in VARIABLE_HOLIDAYS; the table has to be extended every year.
"""

RED_WEEKDAY = 0  # Sunday in a Sunday-first week

FIXED_HOLIDAYS = frozenset({
    '01-01',  # 신정
    '03-01',  # 삼일절
    '05-05',  # 어린이날
    '06-06',  # 현충일
    '08-15',  # 광복절
    '10-03',  # 개천절
    '10-09',  # 한글날
    '12-25',  # 성탄절
})

VARIABLE_HOLIDAYS = frozenset({
    # 2024
    '2024-02-09', '2024-02-10', '2024-02-11', '2024-02-12',
    '2024-04-10', '2024-05-06', '2024-05-15',
    '2024-09-16', '2024-09-17', '2024-09-18',
    # 2025
    '2025-01-28', '2025-01-29', '2025-01-30', '2025-03-03', '2025-05-06',
    '2025-10-05', '2025-10-06', '2025-10-07', '2025-10-08',
})


def is_korean_holiday(date_str: str) -> bool:
    if not date_str:
        return False
    if date_str[5:10] in FIXED_HOLIDAYS:
        return True
    return date_str in VARIABLE_HOLIDAYS


def is_red_day(column: int, date_str: str) -> bool:
    """column is the cell's position in the month grid (Sunday-first)."""
    return column % 7 == RED_WEEKDAY or is_korean_holiday(date_str)
