#
# Copyright (c) 2025 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#


"""Flat-rate Indonesian taxes: PPh 22, PPh 23, PPh 4(2), PPN and PPnBM.

Rates are percentages, so ``ppn(amount, 12, ...)`` is 12% PPN.
"""


import typing

from decimal import Decimal
from enum import Enum

from money import D


Number = Decimal|float|int|str


class PPNMode(Enum):
    EXCLUSIVE = 'exclusive' # amount is the tax base (DPP)
    INCLUSIVE = 'inclusive' # amount already includes PPN


class PPh22Result(typing.NamedTuple):
    dpp: Decimal
    rate: Decimal
    tax: Decimal


class WithholdingResult(typing.NamedTuple):
    gross_income: Decimal
    rate: Decimal
    tax: Decimal


class PPNResult(typing.NamedTuple):
    dpp: Decimal
    rate: Decimal
    mode: PPNMode
    ppn: Decimal
    total: Decimal


class PPnBMResult(typing.NamedTuple):
    dpp: Decimal
    ppn_rate: Decimal
    ppnbm_rate: Decimal
    ppn: Decimal
    ppnbm: Decimal
    total: Decimal


def _percent(rate:Decimal) -> Decimal:
    return rate / 100


def pph22(dpp:Number, rate:Number) -> PPh22Result:
    """Import / procurement withholding tax."""
    dpp, rate = D(dpp), D(rate)
    return PPh22Result(dpp, rate, dpp * _percent(rate))


def pph23(gross_income:Number, rate:Number) -> WithholdingResult:
    """Withholding tax on services, royalties, dividends and interest."""
    gross_income, rate = D(gross_income), D(rate)
    return WithholdingResult(gross_income, rate, gross_income * _percent(rate))


def pph4_2(gross_income:Number, rate:Number) -> WithholdingResult:
    """Final income tax (e.g. land/building rental, construction services)."""
    gross_income, rate = D(gross_income), D(rate)
    return WithholdingResult(gross_income, rate, gross_income * _percent(rate))


def ppn(amount:Number, rate:Number, mode:PPNMode|str=PPNMode.EXCLUSIVE) -> PPNResult:
    amount, rate = D(amount), D(rate)
    mode = PPNMode(mode)
    if mode is PPNMode.EXCLUSIVE:
        dpp = amount
        ppn_ = dpp * _percent(rate)
        total = dpp + ppn_
    else:
        assert mode is PPNMode.INCLUSIVE
        total = amount
        dpp = total / (1 + _percent(rate))
        ppn_ = total - dpp
    return PPNResult(dpp, rate, mode, ppn_, total)


def ppnbm(dpp:Number, ppn_rate:Number, ppnbm_rate:Number) -> PPnBMResult:
    dpp, ppn_rate, ppnbm_rate = D(dpp), D(ppn_rate), D(ppnbm_rate)
    ppn_ = dpp * _percent(ppn_rate)
    ppnbm_ = dpp * _percent(ppnbm_rate)
    return PPnBMResult(dpp, ppn_rate, ppnbm_rate, ppn_, ppnbm_, dpp + ppn_ + ppnbm_)
