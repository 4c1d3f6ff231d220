#
# Copyright (c) 2025 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#


import streamlit as st

import common
import flatcalc

from money import format_idr, format_percent
from tax import id as tax_id


common.set_page_config(
    page_title="Other Taxes",
    layout="centered",
)


st.title('Other Taxes')


tax_types = {
    'pph22': 'PPh 22 (import / procurement)',
    'pph23': 'PPh 23 (services, royalties)',
    'pph4_2': 'PPh 4(2) (final income tax)',
    'ppn': 'PPN (value added tax)',
    'ppnbm': 'PPnBM (luxury goods sales tax)',
}

tax_type = st.selectbox('Tax type', list(tax_types), format_func=tax_types.get, key='tax_type')


def amount_input(label, key):
    return st.number_input(label, min_value=0, value=100_000_000, step=100_000, key=key)


def rate_input(label, value, key):
    return st.number_input(label, min_value=0.0, max_value=100.0, value=float(value), step=0.5, format='%.2f', key=key)


rows:list[tuple[str, str]]
if tax_type == 'pph22':
    dpp = amount_input('Tax base (DPP, Rp):', 'pph22_dpp')
    rate = rate_input('Rate (%):', tax_id.pph22_rate, 'pph22_rate')
    r22 = flatcalc.pph22(dpp, rate)
    rows = [
        ('Tax base (DPP)', format_idr(r22.dpp)),
        ('Rate', format_percent(r22.rate)),
        ('PPh 22', format_idr(r22.tax)),
    ]
elif tax_type in ('pph23', 'pph4_2'):
    if tax_type == 'pph23':
        calculator, default_rate, name = flatcalc.pph23, tax_id.pph23_rate, 'PPh 23'
    else:
        calculator, default_rate, name = flatcalc.pph4_2, tax_id.pph4_2_rate, 'PPh 4(2)'
    gross_income = amount_input('Gross income (Rp):', f'{tax_type}_gross_income')
    rate = rate_input('Rate (%):', default_rate, f'{tax_type}_rate')
    rw = calculator(gross_income, rate)
    rows = [
        ('Gross income', format_idr(rw.gross_income)),
        ('Rate', format_percent(rw.rate)),
        (name, format_idr(rw.tax)),
    ]
elif tax_type == 'ppn':
    mode = st.radio('Amount', [mode.value for mode in flatcalc.PPNMode], format_func={'exclusive': 'Excludes PPN (DPP)', 'inclusive': 'Includes PPN (total)'}.get, key='ppn_mode', horizontal=True)
    amount = amount_input('Amount (Rp):', 'ppn_amount')
    rate = rate_input('PPN rate (%):', tax_id.ppn_rate, 'ppn_rate')
    rn = flatcalc.ppn(amount, rate, mode)
    rows = [
        ('Tax base (DPP)', format_idr(rn.dpp)),
        ('Rate', format_percent(rn.rate)),
        ('PPN', format_idr(rn.ppn)),
        ('Total', format_idr(rn.total)),
    ]
else:
    assert tax_type == 'ppnbm'
    dpp = amount_input('Tax base (DPP, Rp):', 'ppnbm_dpp')
    ppn_rate = rate_input('PPN rate (%):', tax_id.ppn_rate, 'ppnbm_ppn_rate')
    ppnbm_rate = rate_input('PPnBM rate (%):', tax_id.ppnbm_rate, 'ppnbm_rate')
    rb = flatcalc.ppnbm(dpp, ppn_rate, ppnbm_rate)
    rows = [
        ('Tax base (DPP)', format_idr(rb.dpp)),
        ('PPN rate', format_percent(rb.ppn_rate)),
        ('PPnBM rate', format_percent(rb.ppnbm_rate)),
        ('PPN', format_idr(rb.ppn)),
        ('PPnBM', format_idr(rb.ppnbm)),
        ('Total', format_idr(rb.total)),
    ]

with st.container(border=True):
    st.table({'Item': [label for label, _ in rows], 'Amount': [value for _, value in rows]})


common.footer()
