#
# Copyright (c) 2025 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#


import streamlit as st

import environ


# https://docs.streamlit.io/library/api-reference/utilities/st.set_page_config
def set_page_config(page_title, page_icon=":material/receipt_long:", layout="centered", initial_sidebar_state="auto"):
    st.set_page_config(
        page_title=page_title,
        page_icon=page_icon,
        layout=layout,
        initial_sidebar_state=initial_sidebar_state,
        menu_items={
            "About": """Indonesian tax calculators (PPh 21, PPh 22, PPh 23, PPh 4(2), PPN, PPnBM).

Based on the 2025 rate tables.
""",
        }
    )


@st.cache_data
def get_version():
    return environ.get_version()


def footer():
    # An invisible test marker, used when testing to ensure a page ran till the end
    st.html('<span id="test-marker" style="display:none"></span>')

    if not environ.production:
        st.caption(f'Version {get_version()}')
