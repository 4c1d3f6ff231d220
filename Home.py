#
# Copyright (c) 2025 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#


import logging

import streamlit as st

import common
import environ


logging.basicConfig(
    level=environ.log_level,
    format=environ.log_format,
    datefmt='%Y-%m-%d %H:%M:%S',
    force=True,
)


common.set_page_config(
    page_title="Indonesian tax calculators",
    layout="centered",
    initial_sidebar_state="expanded"
)

st.title("Indonesian tax calculators")

st.markdown('''Welcome!

This site hosts calculators for Indonesian taxes, using the 2025 rate tables:

- **PPh 21 Calculator**: payroll withholding tax, with both the traditional (annual progressive) and
  the TER (monthly effective rate) schemes, including bonuses and the month 12 adjustment.
- **Other Taxes**: flat-rate PPh 22, PPh 23, PPh 4(2), PPN and PPnBM.

Data entered into the website is not stored and will not persist across page reloads.

Please read the [disclaimer](/Disclaimer) and choose a calculator on the left sidebar.
''')

common.footer()
