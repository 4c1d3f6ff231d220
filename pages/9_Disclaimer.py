#
# Copyright (c) 2025 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#


import streamlit as st

import common


common.set_page_config(
    page_title="Disclaimer",
    layout="centered",
    initial_sidebar_state="expanded",
)

st.title('Disclaimer')

st.html("<style>.stMarkdown { text-align: justify; }</style>")

st.markdown('''
The calculators on this site are provided for general informational purposes only. They implement a simplified model of
the 2025 Indonesian rate tables (PTKP, Pasal 17 progressive rates and a condensed TER table) and do not cover every
rule of the applicable regulations. The information is provided in good faith, however we make no representation or
warranty of any kind, express or implied, regarding the accuracy, adequacy, validity, reliability, or completeness of any
result. YOUR USE OF THE SITE AND YOUR RELIANCE ON ANY RESULT IS SOLELY AT YOUR OWN RISK.

The calculators do not contain tax advice. Before acting on any result, consult a registered tax consultant or the
Direktorat Jenderal Pajak.
''')

common.footer()
