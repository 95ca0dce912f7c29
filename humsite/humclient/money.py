import math


def format_vnd(amount):
    """1234567 -> '1.234.567đ' (làm tròn, không có phần lẻ)"""
    if amount is None:
        return '0đ'
    try:
        value = float(amount)
    except (TypeError, ValueError):
        return '0đ'
    if math.isnan(value):
        return '0đ'
    rounded = int(round(value))
    sign = '-' if rounded < 0 else ''
    return f"{sign}{abs(rounded):,}đ".replace(',', '.')
