#
# Copyright (c) 2025 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#


import io

from report import TextReport, HtmlReport


def test_text_heading() -> None:
    stream = io.StringIO()
    report = TextReport(stream)
    report.write_heading('Summary')
    report.write_paragraph('Hello')
    report.write_heading('Details', level=2)
    assert stream.getvalue() == 'SUMMARY\n\nHello\n\n\nDetails\n\n'


def test_text_table() -> None:
    stream = io.StringIO()
    report = TextReport(stream)
    report.write_table([['a', '1'], ['bb', '22']], header=['X', 'Y'], just='lr')
    assert stream.getvalue() == 'X    Y\n──────\na    1\nbb  22\n\n'


def test_text_table_footer() -> None:
    stream = io.StringIO()
    report = TextReport(stream)
    report.write_table([['a', '1'], ['bb', '22']], header=['X', 'Y'], footer=['T', '23'], just='lr', indent='  ')
    assert stream.getvalue() == '  X    Y\n  ──────\n  a    1\n  bb  22\n  ──────\n  T   23\n\n'


def test_text_items() -> None:
    stream = io.StringIO()
    report = TextReport(stream)
    report.write_items([('Gross', 'Rp 1'), ('PKP', None)])
    assert stream.getvalue() == 'Gross  Rp 1\nPKP\n\n'


def test_html_escape() -> None:
    stream = io.StringIO()
    report = HtmlReport(stream)
    report.write_heading('A & B')
    report.write_paragraph('<b>')
    assert stream.getvalue() == '\n<h2>A &amp; B</h2>\n\n<p>&lt;b&gt;</p>\n\n'


def test_html_table() -> None:
    stream = io.StringIO()
    report = HtmlReport(stream)
    report.write_table([['a', 1]], header=['X', 'Y'], footer=['T', 1], just='lr')
    assert stream.getvalue() == (
        '<table class="table">\n'
        '<thead><tr><th class="text-left">X</th><th class="text-right">Y</th></tr></thead>\n'
        '<tbody>\n'
        '<tr><td class="text-left">a</td><td class="text-right">1</td></tr>\n'
        '</tbody>\n'
        '<tfoot><tr><th class="text-left">T</th><th class="text-right">1</th></tr></tfoot>\n'
        '</table>\n'
    )
