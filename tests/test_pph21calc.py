#
# Copyright (c) 2025 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#


import dataclasses
import io
import sys
import typing

import pytest

from contextlib import nullcontext
from decimal import Decimal

import pph21calc

from pph21calc import Bonus, Category, Scheme, calculate
from report import TextReport, HtmlReport


def test_traditional() -> None:
    result = calculate(10_000_000, 'TK')

    assert result.scheme is Scheme.TRADITIONAL
    assert result.work_months == 12
    assert result.gross_from_salary == 120_000_000
    assert result.bonus_total == 0
    assert result.gross_annual == 120_000_000
    assert result.biaya_jabatan == 6_000_000
    assert result.pension_annual == 0
    assert result.zakat_donation == 0
    assert result.total_deductions == 6_000_000
    assert result.netto_annual == 114_000_000
    assert result.ptkp == 54_000_000
    assert result.pkp == 60_000_000
    assert result.annual_tax == 4_000_000
    assert result.monthly_tax.quantize(Decimal('0.01')) == Decimal('333333.33')
    assert result.effective_tax_rate.quantize(Decimal('0.0001')) == Decimal('3.3333')
    assert result.take_home_annual == 116_000_000
    assert result.take_home_monthly.quantize(Decimal('0.01')) == Decimal('9666666.67')

    assert result.ter is None
    assert result.ter_category is None
    assert result.ter_paid is None
    assert result.month12_adjustment is None
    assert result.monthly_breakdown is None
    assert result.warnings == ()


def test_ter() -> None:
    result = calculate(8_000_000, 'TK', scheme=Scheme.TER, ter_category=Category.B)

    assert result.scheme is Scheme.TER
    assert result.ter_category is Category.B

    breakdown = result.monthly_breakdown
    assert breakdown is not None
    assert [m.month for m in breakdown] == list(range(1, 12))
    for m in breakdown:
        assert m.income == 8_000_000
        assert m.ter_rate == Decimal('0.0100')
        assert m.tax == 80_000
        assert not m.has_bonus
        assert m.bonus_names is None

    assert result.ter_paid == 880_000

    # Same annual liability as the traditional scheme
    assert result.pkp == 37_200_000
    assert result.annual_tax == 1_860_000
    assert result.annual_tax == calculate(8_000_000, 'TK').annual_tax

    assert result.month12_adjustment == 980_000


def test_ter_bonus() -> None:
    bonuses = [Bonus('Bonus', Decimal(5_000_000), 6)]
    result = calculate(8_000_000, 'TK', scheme='ter', ter_category='B', bonuses=bonuses)

    assert result.bonus_total == 5_000_000
    assert result.gross_annual == 101_000_000

    assert result.ter is not None
    for m in result.ter.months:
        if m.month == 6:
            assert m.income == 13_000_000
            assert m.ter_rate == Decimal('0.03')
            assert m.tax == 390_000
            assert m.has_bonus
            assert m.bonus_names == 'Bonus'
        else:
            assert m.income == 8_000_000
            assert m.tax == 80_000
            assert not m.has_bonus

    assert result.ter.ter_paid == 1_190_000
    assert result.pkp == 41_950_000
    assert result.annual_tax == 2_097_500
    assert result.ter.month12_adjustment == 907_500


def test_ter_bonus_names() -> None:
    bonuses = [
        Bonus('THR', Decimal(8_000_000), 4),
        Bonus('Insentif', Decimal(1_000_000), 4),
    ]
    result = calculate(8_000_000, 'K1', scheme=Scheme.TER, bonuses=bonuses)
    assert result.monthly_breakdown is not None
    april = result.monthly_breakdown[3]
    assert april.month == 4
    assert april.income == 17_000_000
    assert april.has_bonus
    assert april.bonus_names == 'THR, Insentif'


def test_ter_bonus_in_month_12() -> None:
    # Only settled through the month 12 adjustment
    bonuses = [Bonus('Bonus tahunan', Decimal(20_000_000), 12)]
    result = calculate(8_000_000, 'TK', scheme=Scheme.TER, bonuses=bonuses)

    assert result.gross_annual == 116_000_000
    assert result.monthly_breakdown is not None
    assert len(result.monthly_breakdown) == 11
    assert not any(m.has_bonus for m in result.monthly_breakdown)
    assert result.ter_paid == 880_000
    assert result.pkp == 56_200_000
    assert result.annual_tax == 3_430_000
    assert result.month12_adjustment == 2_550_000
    assert result.warnings == ()


def test_ter_bonus_outside_work_months() -> None:
    bonuses = [Bonus('Bonus', Decimal(10_000_000), 9)]
    result = calculate(8_000_000, 'TK', work_months=6, scheme=Scheme.TER, bonuses=bonuses)

    # Counted in the annual gross...
    assert result.gross_from_salary == 48_000_000
    assert result.bonus_total == 10_000_000
    assert result.gross_annual == 58_000_000

    # ...but not in the monthly withholding
    assert result.monthly_breakdown is not None
    assert len(result.monthly_breakdown) == 6
    for m in result.monthly_breakdown:
        assert m.income == 8_000_000
        assert not m.has_bonus

    assert result.ter_paid == 480_000
    assert result.pkp == 1_100_000
    assert result.annual_tax == 55_000

    # Overpaid, refunded in the last month
    assert result.month12_adjustment == -425_000

    assert len(result.warnings) == 1
    assert 'outside the 6 month(s) worked' in result.warnings[0]


@pytest.mark.parametrize("work_months,expected_months", [
    (1, 1),
    (5, 5),
    (11, 11),
    (12, 11),
])
def test_ter_months_withheld(work_months:int, expected_months:int) -> None:
    result = calculate(12_000_000, 'K2', work_months=work_months, scheme=Scheme.TER, ter_category=Category.C)
    assert result.monthly_breakdown is not None
    assert len(result.monthly_breakdown) == expected_months
    assert result.gross_from_salary == 12_000_000 * work_months


@pytest.mark.parametrize("work_months,expected", [(-3, 1), (0, 1), (7, 7), (12, 12), (13, 12), (99, 12)])
def test_work_months_clamped(work_months:int, expected:int) -> None:
    result = calculate(10_000_000, 'TK', work_months=work_months)
    assert result.work_months == expected
    assert result.gross_annual == 10_000_000 * expected


# gross_monthly, status, work_months, category, pension_monthly, zakat_annual, bonuses
reconciliation_test_cases = [
    (8_000_000, 'TK', 12, 'B', 0, 0, []),
    (4_500_000, 'K3', 12, 'C', 0, 0, []),
    (12_345_678.9, 'K1', 12, 'A', 150_000, 1_200_000, [('THR', 12_345_678.9, 3)]),
    (25_000_000, 'K2', 9, 'B', 100_000, 0, [('Bonus', 50_000_000, 2), ('Insentif', 3_000_000, 10)]),
    (75_000_000, 'TK', 12, 'C', 0, 5_000_000, [('Bonus', 300_000_000, 11)]),
    (1_000_000_000, 'K3', 3, 'A', 0, 0, []),
    (Decimal('7654371.55'), 'XX', 12, 'B', 0, 0, [('A, B', Decimal('1234567.89'), 1)]),
]


@pytest.mark.parametrize("gross_monthly,status,work_months,category,pension_monthly,zakat_annual,bonuses", reconciliation_test_cases)
def test_ter_reconciliation(gross_monthly, status, work_months, category, pension_monthly, zakat_annual, bonuses) -> None:
    bonuses = [Bonus(name, amount, month) for name, amount, month in bonuses]
    result = calculate(gross_monthly, status, work_months, Scheme.TER, category, pension_monthly, zakat_annual, bonuses)

    assert result.ter_paid is not None and result.month12_adjustment is not None
    assert result.ter_paid + result.month12_adjustment == result.annual_tax
    assert result.ter_paid == sum([m.tax for m in result.monthly_breakdown or ()], Decimal(0))

    assert result.pkp % 1000 == 0
    assert result.pkp >= 0
    assert 0 <= result.biaya_jabatan <= 6_000_000

    traditional = calculate(gross_monthly, status, work_months, Scheme.TRADITIONAL, category, pension_monthly, zakat_annual, bonuses)
    assert traditional.annual_tax == result.annual_tax
    assert traditional.pkp == result.pkp


def test_pkp_rounded_down() -> None:
    # Net minus PTKP is 33,259,829.40, which must not round up to 33,260,000
    result = calculate(7_654_371, 'TK')
    assert result.gross_annual == 91_852_452
    assert result.biaya_jabatan == Decimal('4592622.60')
    assert result.netto_annual == Decimal('87259829.40')
    assert result.pkp == 33_259_000


def test_pkp_never_negative() -> None:
    result = calculate(3_000_000, 'K3')
    assert result.netto_annual - result.ptkp < 0
    assert result.pkp == 0
    assert result.annual_tax == 0


def test_deductions() -> None:
    result = calculate(10_000_000, 'TK', pension_monthly=200_000, zakat_annual=2_400_000)
    assert result.pension_annual == 2_400_000
    assert result.zakat_donation == 2_400_000
    assert result.total_deductions == 10_800_000
    assert result.netto_annual == 109_200_000
    assert result.pkp == 55_200_000
    assert result.annual_tax == 3_280_000


def test_pension_prorated_by_work_months() -> None:
    result = calculate(10_000_000, 'TK', work_months=4, pension_monthly=200_000)
    assert result.pension_annual == 800_000


@pytest.mark.parametrize("status,annual_tax", [
    ('TK', 4_000_000),
    ('K1', 3_325_000),
    ('K2', 2_650_000),
    ('K3', 2_325_000),
])
def test_ptkp_status(status:str, annual_tax:int) -> None:
    result = calculate(10_000_000, status)
    assert result.ptkp_status == status
    assert result.annual_tax == annual_tax
    assert result.warnings == ()


def test_unknown_ptkp_status() -> None:
    result = calculate(10_000_000, 'K9')
    assert result.ptkp_status == 'TK'
    assert result.ptkp == 54_000_000
    assert result.annual_tax == 4_000_000
    assert len(result.warnings) == 1
    assert 'unknown PTKP status' in result.warnings[0]


def test_zero_income() -> None:
    result = calculate(0, 'TK')
    assert result.gross_annual == 0
    assert result.annual_tax == 0
    assert result.effective_tax_rate == 0
    assert result.take_home_monthly == 0


def test_float_inputs_are_exact() -> None:
    result = calculate(10_000_000.1, 'TK')
    assert result.gross_monthly == Decimal('10000000.1')
    assert result.gross_from_salary == Decimal('120000001.2')


def test_invalid_scheme() -> None:
    with pytest.raises(ValueError):
        calculate(10_000_000, 'TK', scheme='monthly')


def test_category_ignored_by_traditional() -> None:
    result = calculate(10_000_000, 'TK', ter_category='Z')
    assert result.ter is None


def test_invalid_category() -> None:
    with pytest.raises(ValueError):
        calculate(10_000_000, 'TK', scheme='ter', ter_category='Z')


def test_result_is_immutable() -> None:
    result = calculate(10_000_000, 'TK')
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.annual_tax = Decimal(0)  # type: ignore[misc]


def test_bonuses_not_mutated() -> None:
    bonuses = [Bonus('THR', Decimal(10_000_000), 4)]
    result = calculate(10_000_000, 'TK', scheme=Scheme.TER, bonuses=bonuses)
    assert bonuses == [Bonus('THR', Decimal(10_000_000), 4)]
    assert result.bonuses == tuple(bonuses)


bonus_from_string_params = [
    ("THR, 10000000, 4",                  nullcontext(Bonus('THR', Decimal(10_000_000), 4))),
    ("  THR ,10_000_000,  4 ",            nullcontext(Bonus('THR', Decimal(10_000_000), 4))),
    ("Bonus Q1, 2025, 2500000.50, 3",     nullcontext(Bonus('Bonus Q1, 2025', Decimal('2500000.50'), 3))),
    ("THR",                               pytest.raises(ValueError)),
    ("THR, 4",                            pytest.raises(ValueError)),
    (", 100, 4",                          pytest.raises(ValueError)),
    ("THR, abc, 4",                       pytest.raises(ValueError)),
    ("THR, 0, 4",                         pytest.raises(ValueError)),
    ("THR, -5, 4",                        pytest.raises(ValueError)),
    ("THR, NaN, 4",                       pytest.raises(ValueError)),
    ("THR, 100, 0",                       pytest.raises(ValueError)),
    ("THR, 100, 13",                      pytest.raises(ValueError)),
    ("THR, 100, April",                   pytest.raises(ValueError)),
]

@pytest.mark.parametrize("s,ebc", [pytest.param(s, ebc, id=s) for s, ebc in bonus_from_string_params])
def test_bonus_from_string(s:str, ebc:typing.ContextManager) -> None:
    with ebc as eb:
        assert Bonus.from_string(s) == eb


def test_text_report() -> None:
    bonuses = [Bonus('Bonus', Decimal(5_000_000), 6)]
    result = calculate(8_000_000, 'TK', scheme=Scheme.TER, bonuses=bonuses)

    stream = io.StringIO()
    result.write(TextReport(stream))
    text = stream.getvalue()

    assert text.startswith('PPH 21 CALCULATION\n\n')
    assert 'TER WITHHOLDING (CATEGORY B)' in text
    assert 'Rp 101.000.000' in text
    assert 'Rp 1.190.000' in text
    assert 'Month 12 adjustment: Rp 907.500.' in text
    assert 'WARNINGS' not in text


def test_text_report_refund() -> None:
    bonuses = [Bonus('Bonus', Decimal(10_000_000), 9)]
    result = calculate(8_000_000, 'TK', work_months=6, scheme=Scheme.TER, bonuses=bonuses)

    stream = io.StringIO()
    result.write(TextReport(stream))
    text = stream.getvalue()

    assert 'Month 12 adjustment: -Rp 425.000 (overpaid, to be refunded).' in text
    assert 'WARNINGS' in text


def test_html_report() -> None:
    result = calculate(10_000_000, 'TK')

    stream = io.StringIO()
    result.write(HtmlReport(stream))
    html = stream.getvalue()

    assert html.startswith('<!doctype html>')
    assert '<h2>Income</h2>' in html
    assert 'Rp 4.000.000' in html
    assert 'TER Withholding' not in html
    assert html.rstrip().endswith('</html>')


def test_main(monkeypatch:pytest.MonkeyPatch, capsys:pytest.CaptureFixture) -> None:
    monkeypatch.setattr(sys, 'argv', ['pph21calc.py', '--scheme', 'ter', '-c', 'B', '-b', 'Bonus, 5000000, 6', '8000000'])
    pph21calc.main()
    captured = capsys.readouterr()
    assert 'Month 12 adjustment: Rp 907.500.' in captured.out
    assert captured.err == ''


def test_main_html(monkeypatch:pytest.MonkeyPatch, capsys:pytest.CaptureFixture) -> None:
    monkeypatch.setattr(sys, 'argv', ['pph21calc.py', '--format', 'html', '-s', 'K1', '10_000_000'])
    pph21calc.main()
    captured = capsys.readouterr()
    assert captured.out.startswith('<!doctype html>')
    assert 'Rp 3.325.000' in captured.out


def test_main_warnings(monkeypatch:pytest.MonkeyPatch, capsys:pytest.CaptureFixture) -> None:
    monkeypatch.setattr(sys, 'argv', ['pph21calc.py', '-s', 'XX', '10000000'])
    pph21calc.main()
    captured = capsys.readouterr()
    assert "warning: unknown PTKP status 'XX'" in captured.err


@pytest.mark.parametrize("argv", [
    ['-b', 'THR, 100, 13', '10000000'],
    ['abc'],
    ['0'],
    ['--pension', '-1', '10000000'],
    ['--scheme', 'monthly', '10000000'],
])
def test_main_errors(argv:list[str], monkeypatch:pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, 'argv', ['pph21calc.py'] + argv)
    with pytest.raises(SystemExit) as excinfo:
        pph21calc.main()
    assert excinfo.value.code == 2
