#
# Copyright (c) 2025 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#


"""Decimal helpers for Rupiah amounts."""


from decimal import Decimal, ROUND_FLOOR, ROUND_HALF_UP


def D(value:int|float|str|Decimal) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # Shortest repr, so 0.1 becomes Decimal('0.1') and not its binary expansion
        return Decimal(repr(value))
    return Decimal(value)


def floor_to(value:Decimal, step:int|Decimal) -> Decimal:
    step = D(step)
    assert step > 0
    return (value / step).to_integral_value(rounding=ROUND_FLOOR) * step


# https://peraturan.bpk.go.id/Details/36741/pp-no-94-tahun-2010 (Pasal 2: PKP dibulatkan ke bawah dalam ribuan rupiah)
def round_down_thousand(value:Decimal) -> Decimal:
    return floor_to(value, 1000)


# Round if necessary, but don't quantize if not
def dround(d:Decimal, places:int=0, rounding=None) -> Decimal:
    assert isinstance(d, Decimal)
    _, _, exponent = d.as_tuple()
    if isinstance(exponent, str):
        return d
    elif exponent >= -places:
        return d
    else:
        q = Decimal((0, (1,), -places))
        return d.quantize(q, rounding=rounding)


def _group(n:int) -> str:
    # id-ID uses '.' as the thousands separator
    return f'{n:,}'.replace(',', '.')


def format_idr(value:Decimal|int) -> str:
    value = dround(D(value), 0, ROUND_HALF_UP)
    sign = '-' if value < 0 else ''
    return f'{sign}Rp {_group(int(abs(value)))}'


def format_percent(value:Decimal|int, places:int=2) -> str:
    value = D(value).quantize(Decimal((0, (1,), -places)), rounding=ROUND_HALF_UP)
    sign = '-' if value < 0 else ''
    integer, _, fraction = f'{abs(value):f}'.partition('.')
    if fraction:
        return f'{sign}{_group(int(integer))},{fraction}%'
    return f'{sign}{_group(int(integer))}%'
