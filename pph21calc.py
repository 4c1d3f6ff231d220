#!/usr/bin/env python3
#
# Copyright (c) 2025 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#

#
# Indonesian payroll withholding tax (PPh 21) calculator.
#
# Supports both the traditional scheme (annual Pasal 17 progressive tax spread
# evenly over twelve months) and the TER scheme (PP 58/2023), where months 1-11
# are withheld at a monthly effective rate and month 12 reconciles against the
# annual progressive liability.
#


import argparse
import dataclasses
import logging
import sys
import typing

from decimal import Decimal, InvalidOperation
from enum import Enum

import environ

from money import D, round_down_thousand, format_idr, format_percent
from report import Report, TextReport, HtmlReport
from tax import id as tax_id
from tax.id import Category


logger = logging.getLogger('pph21calc')


__all__ = [
    'Bonus',
    'Category',
    'MonthBreakdown',
    'Result',
    'Scheme',
    'TERWithholding',
    'calculate',
]


class Scheme(Enum):
    TRADITIONAL = 'traditional'
    TER = 'ter'


months_per_year = 12


@dataclasses.dataclass(frozen=True)
class Bonus:
    name: str
    amount: Decimal
    month: int

    @classmethod
    def from_string(cls, s:str) -> 'Bonus':
        """Parse a 'name, amount, month' line.  The name may contain commas."""
        try:
            name, amount, month = s.rsplit(',', maxsplit=2)
        except ValueError:
            raise ValueError(f'expected "name, amount, month" but got {s!r}') from None
        name = name.strip()
        if not name:
            raise ValueError(f'missing bonus name in {s!r}')
        try:
            amount_ = Decimal(amount.strip().replace('_', ''))
        except InvalidOperation:
            raise ValueError(f'invalid bonus amount {amount.strip()!r}') from None
        if not amount_.is_finite() or amount_ <= 0:
            raise ValueError(f'bonus amount must be positive but got {amount.strip()}')
        try:
            month_ = int(month.strip())
        except ValueError:
            raise ValueError(f'invalid bonus month {month.strip()!r}') from None
        if not 1 <= month_ <= months_per_year:
            raise ValueError(f'bonus month must be between 1 and 12 but got {month_}')
        return cls(name, amount_, month_)

    def __str__(self) -> str:
        return f'{self.name}, {self.amount}, {self.month}'


@dataclasses.dataclass(frozen=True)
class MonthBreakdown:
    month: int
    income: Decimal
    ter_rate: Decimal
    tax: Decimal
    has_bonus: bool
    bonus_names: str|None = None


@dataclasses.dataclass(frozen=True)
class TERWithholding:
    category: Category
    months: tuple[MonthBreakdown, ...]
    ter_paid: Decimal
    month12_adjustment: Decimal

    def __post_init__(self) -> None:
        assert len(self.months) <= months_per_year - 1


@dataclasses.dataclass(frozen=True)
class Result:
    gross_monthly: Decimal
    work_months: int
    gross_from_salary: Decimal
    bonus_total: Decimal
    bonuses: tuple[Bonus, ...]
    gross_annual: Decimal

    biaya_jabatan: Decimal
    pension_annual: Decimal
    zakat_donation: Decimal
    total_deductions: Decimal

    netto_annual: Decimal
    ptkp_status: str
    ptkp: Decimal
    pkp: Decimal

    scheme: Scheme
    annual_tax: Decimal
    monthly_tax: Decimal
    effective_tax_rate: Decimal

    take_home_annual: Decimal
    take_home_monthly: Decimal

    # Only for the TER scheme
    ter: TERWithholding|None = None

    warnings: tuple[str, ...] = ()

    @property
    def ter_category(self) -> Category|None:
        return None if self.ter is None else self.ter.category

    @property
    def ter_paid(self) -> Decimal|None:
        return None if self.ter is None else self.ter.ter_paid

    @property
    def month12_adjustment(self) -> Decimal|None:
        return None if self.ter is None else self.ter.month12_adjustment

    @property
    def monthly_breakdown(self) -> tuple[MonthBreakdown, ...]|None:
        return None if self.ter is None else self.ter.months

    def write(self, report:Report) -> None:
        report.start('PPh 21 Calculation')

        report.write_heading('Income')
        report.write_items([
            ('Gross monthly salary', format_idr(self.gross_monthly)),
            ('Months worked', str(self.work_months)),
            ('Gross salary', format_idr(self.gross_from_salary)),
            ('Bonuses', format_idr(self.bonus_total)),
            ('Gross annual income', format_idr(self.gross_annual)),
        ])

        if self.bonuses:
            rows = [[bonus.name, format_idr(bonus.amount), str(bonus.month)] for bonus in self.bonuses]
            report.write_table(rows, header=['Bonus', 'Amount', 'Month'], just='lrr', indent='  ')

        report.write_heading('Deductions')
        report.write_items([
            ('Biaya jabatan', format_idr(self.biaya_jabatan)),
            ('Pension contributions', format_idr(self.pension_annual)),
            ('Zakat / donations', format_idr(self.zakat_donation)),
            ('Total deductions', format_idr(self.total_deductions)),
            ('Net annual income', format_idr(self.netto_annual)),
        ])

        report.write_heading('Tax')
        report.write_items([
            (f'PTKP ({self.ptkp_status})', format_idr(self.ptkp)),
            ('PKP', format_idr(self.pkp)),
            ('Scheme', 'TER' if self.scheme is Scheme.TER else 'Traditional'),
            ('Annual tax', format_idr(self.annual_tax)),
            ('Monthly tax', format_idr(self.monthly_tax)),
            ('Effective tax rate', format_percent(self.effective_tax_rate)),
            ('Take-home (annual)', format_idr(self.take_home_annual)),
            ('Take-home (monthly)', format_idr(self.take_home_monthly)),
        ])

        if self.ter is not None:
            report.write_heading(f'TER Withholding (category {self.ter.category.value})')
            rows = []
            for m in self.ter.months:
                rows.append([
                    str(m.month),
                    format_idr(m.income),
                    format_percent(m.ter_rate * 100),
                    format_idr(m.tax),
                    m.bonus_names or '',
                ])
            footer = ['Paid', '', '', format_idr(self.ter.ter_paid), '']
            report.write_table(rows, header=['Month', 'Income', 'TER Rate', 'Tax', 'Bonuses'], footer=footer, just='rrrrl', indent='  ')
            if self.ter.month12_adjustment < 0:
                report.write_paragraph(f'Month 12 adjustment: {format_idr(self.ter.month12_adjustment)} (overpaid, to be refunded).')
            else:
                report.write_paragraph(f'Month 12 adjustment: {format_idr(self.ter.month12_adjustment)}.')

        if self.warnings:
            report.write_heading('Warnings')
            for warning in self.warnings:
                report.write_paragraph(warning)

        report.write_heading('About')
        report.write_paragraph(f'Generated by pph21calc.py version {environ.get_version()}.')

        report.end()


def _scheme(scheme:Scheme|str) -> Scheme:
    if isinstance(scheme, Scheme):
        return scheme
    return Scheme(scheme.lower())


def _category(category:Category|str) -> Category:
    if isinstance(category, Category):
        return category
    return Category(category.upper())


def calculate(
        gross_monthly:Decimal|float|int|str,
        ptkp_status:str,
        work_months:int = months_per_year,
        scheme:Scheme|str = Scheme.TRADITIONAL,
        ter_category:Category|str = Category.B,
        pension_monthly:Decimal|float|int|str = 0,
        zakat_annual:Decimal|float|int|str = 0,
        bonuses:typing.Iterable[Bonus] = (),
    ) -> Result:

    scheme = _scheme(scheme)
    gross_monthly = D(gross_monthly)
    pension_monthly = D(pension_monthly)
    zakat_annual = D(zakat_annual)
    work_months = max(1, min(months_per_year, int(work_months)))
    bonuses = tuple(bonuses)

    warnings = []

    gross_from_salary = gross_monthly * work_months
    bonus_total = sum([D(bonus.amount) for bonus in bonuses], Decimal(0))
    gross_annual = gross_from_salary + bonus_total

    pension_annual = pension_monthly * work_months

    biaya_jabatan = tax_id.biaya_jabatan(gross_annual)
    total_deductions = biaya_jabatan + pension_annual + zakat_annual

    netto_annual = gross_annual - total_deductions

    if not tax_id.is_known_ptkp_status(ptkp_status):
        warnings.append(f'unknown PTKP status {ptkp_status!r}; using {tax_id.default_ptkp_status}')
    ptkp = tax_id.ptkp(ptkp_status)

    pkp = round_down_thousand(max(Decimal(0), netto_annual - ptkp))
    assert pkp % 1000 == 0

    annual_tax = tax_id.progressive_tax(pkp)

    ter = None
    if scheme is Scheme.TER:
        ter_category = _category(ter_category)

        monthly_income = [Decimal(0)] * months_per_year
        for i in range(work_months):
            monthly_income[i] = gross_monthly

        # Bonuses paid in a month not worked still count towards the annual
        # gross, but are left out of the monthly withholding
        for bonus in bonuses:
            month_index = bonus.month - 1
            if 0 <= month_index < work_months:
                monthly_income[month_index] += D(bonus.amount)
            else:
                logger.info('bonus %r paid in month %d outside the %d month(s) worked', bonus.name, bonus.month, work_months)
                warnings.append(f'bonus {bonus.name!r} in month {bonus.month} is outside the {work_months} month(s) worked; excluded from TER withholding')

        # Month 12 is never withheld at the TER rate
        months = []
        ter_paid = Decimal(0)
        for i in range(min(months_per_year - 1, work_months)):
            income = monthly_income[i]
            if tax_id.ter_band(income) is None:
                warnings.append(f'month {i + 1} income {income} is not covered by the TER table; using the top rate')
            rate = tax_id.ter_rate(income, ter_category)
            month_tax = income * rate

            month_bonuses = [bonus for bonus in bonuses if bonus.month == i + 1]
            has_bonus = bool(month_bonuses)
            bonus_names = ', '.join([bonus.name for bonus in month_bonuses]) if has_bonus else None

            months.append(MonthBreakdown(i + 1, income, rate, month_tax, has_bonus, bonus_names))
            ter_paid += month_tax

        month12_adjustment = annual_tax - ter_paid
        assert ter_paid + month12_adjustment == annual_tax

        ter = TERWithholding(ter_category, tuple(months), ter_paid, month12_adjustment)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug('ter_paid = %s', ter_paid)
            logger.debug('month12_adjustment = %s', month12_adjustment)

    monthly_tax = annual_tax / months_per_year
    if gross_annual > 0:
        effective_tax_rate = annual_tax / gross_annual * 100
    else:
        effective_tax_rate = Decimal(0)
    take_home_annual = gross_annual - annual_tax
    take_home_monthly = take_home_annual / months_per_year

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug('gross_annual = %s', gross_annual)
        logger.debug('netto_annual = %s', netto_annual)
        logger.debug('pkp = %s', pkp)
        logger.debug('annual_tax = %s', annual_tax)

    return Result(
        gross_monthly=gross_monthly,
        work_months=work_months,
        gross_from_salary=gross_from_salary,
        bonus_total=bonus_total,
        bonuses=bonuses,
        gross_annual=gross_annual,
        biaya_jabatan=biaya_jabatan,
        pension_annual=pension_annual,
        zakat_donation=zakat_annual,
        total_deductions=total_deductions,
        netto_annual=netto_annual,
        ptkp_status=ptkp_status if tax_id.is_known_ptkp_status(ptkp_status) else tax_id.default_ptkp_status,
        ptkp=ptkp,
        pkp=pkp,
        scheme=scheme,
        annual_tax=annual_tax,
        monthly_tax=monthly_tax,
        effective_tax_rate=effective_tax_rate,
        take_home_annual=take_home_annual,
        take_home_monthly=take_home_monthly,
        ter=ter,
        warnings=tuple(warnings),
    )


def main() -> None:
    logging.basicConfig(format=environ.log_format, level=environ.log_level)

    argparser = argparse.ArgumentParser(description='Indonesian PPh 21 calculator.')
    argparser.add_argument('-s', '--status', metavar='STATUS', default=tax_id.default_ptkp_status, help='PTKP status (%s)' % ', '.join(tax_id.ptkp_rates))
    argparser.add_argument('-m', '--months', metavar='MONTHS', type=int, default=months_per_year, help='months worked in the year (1-12)')
    argparser.add_argument('--scheme', choices=[scheme.value for scheme in Scheme], default=Scheme.TRADITIONAL.value)
    argparser.add_argument('-c', '--category', choices=[category.value for category in Category], default=Category.B.value, help='TER category')
    argparser.add_argument('--pension', metavar='AMOUNT', default='0', help='monthly pension contribution')
    argparser.add_argument('--zakat', metavar='AMOUNT', default='0', help='annual zakat or religious donations')
    argparser.add_argument('-b', '--bonus', metavar='BONUS', action='append', default=[], help='bonus as "name, amount, month" (may be repeated)')
    argparser.add_argument('--format', choices=['text', 'html'], default='text')
    argparser.add_argument('gross_monthly', metavar='GROSS_MONTHLY', help='gross monthly salary')
    args = argparser.parse_args()

    amounts = {}
    for name in ('gross_monthly', 'pension', 'zakat'):
        value = getattr(args, name)
        try:
            amount = Decimal(value.replace('_', ''))
        except InvalidOperation:
            argparser.error(f'invalid amount {value!r}')
        if not amount.is_finite() or amount < 0:
            argparser.error(f'invalid amount {value!r}')
        amounts[name] = amount
    if amounts['gross_monthly'] <= 0:
        argparser.error('gross monthly salary must be positive')

    bonuses = []
    for s in args.bonus:
        try:
            bonuses.append(Bonus.from_string(s))
        except ValueError as e:
            argparser.error(f'invalid bonus {s!r}: {e}')

    result = calculate(
        amounts['gross_monthly'],
        args.status,
        work_months=args.months,
        scheme=args.scheme,
        ter_category=args.category,
        pension_monthly=amounts['pension'],
        zakat_annual=amounts['zakat'],
        bonuses=bonuses,
    )
    if result.warnings:
        for warning in result.warnings:
            sys.stderr.write(f'warning: {warning}\n')
        sys.stderr.write('\n')

    stream = sys.stdout
    report: Report
    if args.format == 'text':
        report = TextReport(stream)
    else:
        assert args.format == 'html'
        report = HtmlReport(stream)
    result.write(report)


if __name__ == '__main__':
    main()
