#
# Copyright (c) 2025 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#


import io

import pandas as pd
import streamlit as st

import common

from money import format_idr, format_percent
from pph21calc import Bonus, Category, Scheme, calculate
from report import Report, HtmlReport, TextReport
from tax import id as tax_id


common.set_page_config(
    page_title="PPh 21 Calculator",
    layout="wide",
)


st.title('PPh 21 Calculator')


st.markdown('''This is an Indonesian payroll withholding tax (PPh 21) calculator.

With the _traditional_ scheme the annual progressive tax is spread evenly over twelve months.
With the _TER_ scheme months 1 to 11 are withheld at the monthly effective rate (TER) for the month's income,
and month 12 settles the difference against the annual progressive tax.
''')


status_labels = {
    'TK': 'TK (single)',
    'K1': 'K1 (married)',
    'K2': 'K2 (married, 1 dependent)',
    'K3': 'K3 (married, 2 dependents)',
}

scheme_labels = {
    Scheme.TRADITIONAL.value: 'Traditional',
    Scheme.TER.value: 'TER',
}


#
# Parameters
#

with st.sidebar:
    st.header("Parameters")

    ptkp_status = st.selectbox('PTKP status', list(tax_id.ptkp_rates), format_func=status_labels.get, key='ptkp_status')

    work_months = st.number_input('Months worked', min_value=1, max_value=12, value=12, step=1, key='work_months')

    scheme = st.radio('Scheme', list(scheme_labels), format_func=scheme_labels.get, key='scheme')

    ter_category = st.selectbox(
        'TER category',
        [category.value for category in Category],
        index=1,
        key='ter_category',
        disabled=scheme != Scheme.TER.value,
        help='A: TK/0, TK/1, K/0.  B: TK/2, TK/3, K/1, K/2.  C: K/3.',
    )

    format_ = st.selectbox('Format', ['HTML', 'Text'], key='format')


#
# Inputs
#

col1, col2, col3 = st.columns(3)
with col1:
    gross_monthly = st.number_input('Gross monthly salary (Rp):', min_value=0, value=10_000_000, step=100_000, key='gross_monthly')
with col2:
    pension_monthly = st.number_input('Monthly pension contribution (Rp):', min_value=0, value=0, step=10_000, key='pension_monthly')
with col3:
    zakat_annual = st.number_input('Annual zakat / donations (Rp):', min_value=0, value=0, step=100_000, key='zakat_annual')

bonuses_text = st.text_area(
    label="Bonuses",
    key='bonuses',
    placeholder='THR, 10000000, 4\nBonus tahunan, 20000000, 12',
    help='One bonus per line, as `name, amount, month`.',
)


#
# Calculation
#

errors = []

if gross_monthly <= 0:
    errors.append('Please enter a valid gross monthly income.')

bonuses = []
for lineno, line in enumerate((bonuses_text or '').splitlines(), start=1):
    if not line.strip():
        continue
    try:
        bonuses.append(Bonus.from_string(line))
    except ValueError as e:
        errors.append(f'Bonus on line {lineno}: {e}')

if errors:
    for error in errors:
        st.error(error, icon="🚨")
else:
    result = calculate(
        gross_monthly,
        ptkp_status,
        work_months=work_months,
        scheme=scheme,
        ter_category=ter_category,
        pension_monthly=pension_monthly,
        zakat_annual=zakat_annual,
        bonuses=bonuses,
    )
    for warning in result.warnings:
        st.warning(warning, icon="⚠️")

    col1, col2, col3 = st.columns(3)
    col1.metric('Annual tax', format_idr(result.annual_tax))
    col2.metric('Monthly tax', format_idr(result.monthly_tax))
    col3.metric('Effective tax rate', format_percent(result.effective_tax_rate))

    if result.ter is not None:
        st.subheader('TER withholding')

        col1, col2 = st.columns(2)
        col1.metric('TER paid (months 1-11)', format_idr(result.ter.ter_paid))
        col2.metric('Month 12 adjustment', format_idr(result.ter.month12_adjustment))

        df = pd.DataFrame({
            'Month': [m.month for m in result.ter.months],
            'Income': [format_idr(m.income) for m in result.ter.months],
            'TER Rate': [format_percent(m.ter_rate * 100) for m in result.ter.months],
            'Tax': [format_idr(m.tax) for m in result.ter.months],
            'Bonuses': [m.bonus_names or '' for m in result.ter.months],
        })
        st.dataframe(df, hide_index=True)

    report:Report
    with st.container(border=True):
        if format_ == 'HTML':
            html = io.StringIO()
            report = HtmlReport(html)
            result.write(report)
            st.iframe(html.getvalue(), height=768)
        else:
            assert format_ == 'Text'
            text = io.StringIO()
            report = TextReport(text)
            result.write(report)
            st.markdown('```\n' + text.getvalue() + '```\n')


common.footer()
