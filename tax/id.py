#
# Copyright (c) 2025 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#


"""Indonesian tax constants and functions."""


import logging
import typing

from decimal import Decimal
from enum import Enum

from money import D


logger = logging.getLogger('tax.id')


# https://www.pajak.go.id/id/peraturan/pmk-101pmk0102016
ptkp_rates = {
    'TK': Decimal(54_000_000), # Single
    'K1': Decimal(58_500_000), # Married
    'K2': Decimal(63_000_000), # Married + 1 dependent
    'K3': Decimal(67_500_000), # Married + 2 dependents
}

default_ptkp_status = 'TK'


# UU HPP, Pasal 17 ayat (1) huruf a
income_tax_bands:tuple[tuple[Decimal|None, Decimal], ...] = (
    ( Decimal(   50_000_000), Decimal('0.05') ),
    ( Decimal(  250_000_000), Decimal('0.15') ),
    ( Decimal(  500_000_000), Decimal('0.25') ),
    ( Decimal(5_000_000_000), Decimal('0.30') ),
    (                   None, Decimal('0.35') ),
)


# TER category, derived from the PTKP status (A: TK/0, TK/1, K/0; B: TK/2, TK/3, K/1, K/2; C: K/3)
class Category(str, Enum):
    A = 'A'
    B = 'B'
    C = 'C'


class TERBand(typing.NamedTuple):

    min_income: Decimal
    max_income: Decimal|None
    rate_a: Decimal
    rate_b: Decimal
    rate_c: Decimal

    def __contains__(self, income:object) -> bool:
        assert isinstance(income, Decimal)
        return self.min_income <= income and (self.max_income is None or income <= self.max_income)

    def rate(self, category:Category|str) -> Decimal:
        return getattr(self, 'rate_' + category.lower())


def _ter(min_income:int, max_income:int|None, a:str, b:str, c:str) -> TERBand:
    return TERBand(
        Decimal(min_income),
        None if max_income is None else Decimal(max_income),
        Decimal(a), Decimal(b), Decimal(c),
    )


# Simplified PP 58/2023 TER (Tarif Efektif Rata-rata) monthly table, one column per category
ter_monthly_bands:tuple[TERBand, ...] = (
    _ter(         0,  5_000_000, '0.0000', '0.0000', '0.0000'),
    _ter( 5_000_001,  6_000_000, '0.0025', '0.0050', '0.0075'),
    _ter( 6_000_001,  7_000_000, '0.0050', '0.0075', '0.0100'),
    _ter( 7_000_001,  8_000_000, '0.0075', '0.0100', '0.0125'),
    _ter( 8_000_001, 10_000_000, '0.0100', '0.0150', '0.0200'),
    _ter(10_000_001, 15_000_000, '0.0200', '0.0300', '0.0400'),
    _ter(15_000_001, 25_000_000, '0.0400', '0.0600', '0.0800'),
    _ter(25_000_001, 50_000_000, '0.0800', '0.1200', '0.1600'),
    _ter(50_000_001,       None, '0.1500', '0.2000', '0.2500'),
)

# Used when an income is not covered by any band.  Same as the top band.
ter_fallback_rates = {
    Category.A: Decimal('0.15'),
    Category.B: Decimal('0.20'),
    Category.C: Decimal('0.25'),
}


# PMK 168/2023, Pasal 8
biaya_jabatan_rate = Decimal('0.05')
biaya_jabatan_cap  = Decimal(6_000_000)


# Default percentages for the flat-rate taxes
ppn_rate    = Decimal(12)   # UU HPP, Pasal 7 (from 2025)
ppnbm_rate  = Decimal(20)
pph22_rate  = Decimal('1.5')
pph23_rate  = Decimal(2)
pph4_2_rate = Decimal(10)


def _check_tables() -> None:
    prev_limit = Decimal(0)
    for limit, rate in income_tax_bands[:-1]:
        assert limit is not None and limit > prev_limit
        assert Decimal(0) < rate < Decimal(1)
        prev_limit = limit
    assert income_tax_bands[-1][0] is None

    assert ter_monthly_bands[0].min_income == 0
    for band, next_band in zip(ter_monthly_bands, ter_monthly_bands[1:]):
        assert band.max_income is not None
        assert band.min_income < band.max_income
        assert next_band.min_income == band.max_income + 1
    assert ter_monthly_bands[-1].max_income is None
    top = ter_monthly_bands[-1]
    assert ter_fallback_rates == {category: top.rate(category) for category in Category}

_check_tables()


def is_known_ptkp_status(status:str) -> bool:
    return status in ptkp_rates


def ptkp(status:str) -> Decimal:
    try:
        return ptkp_rates[status]
    except KeyError:
        logger.warning('unknown PTKP status %r, using %s', status, default_ptkp_status)
        return ptkp_rates[default_ptkp_status]


def progressive_tax(pkp:Decimal|int) -> Decimal:
    pkp = D(pkp)
    if pkp <= 0:
        return Decimal(0)

    tax = Decimal(0)
    prev_limit = Decimal(0)
    for limit, rate in income_tax_bands:
        upper = pkp if limit is None else min(pkp, limit)
        taxable = upper - prev_limit
        if taxable > 0:
            tax += taxable * rate
        if limit is None or pkp <= limit:
            break
        prev_limit = limit

    return tax


def ter_band(monthly_income:Decimal|int) -> TERBand|None:
    monthly_income = D(monthly_income)
    for band in ter_monthly_bands:
        if monthly_income in band:
            return band
    return None


def ter_rate(monthly_income:Decimal|int, category:Category|str) -> Decimal:
    category = Category(category.upper())
    band = ter_band(monthly_income)
    if band is None:
        logger.warning('monthly income %s not covered by the TER table, using top rate', monthly_income)
        return ter_fallback_rates[category]
    return band.rate(category)


def biaya_jabatan(gross_annual:Decimal|int) -> Decimal:
    return min(D(gross_annual) * biaya_jabatan_rate, biaya_jabatan_cap)
