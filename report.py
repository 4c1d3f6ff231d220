#
# Copyright (c) 2025 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#


import html
import sys
import textwrap


from typing import Sequence, Any, Callable, TextIO
from abc import ABC, abstractmethod


class Report(ABC):

    def start(self, title:str) -> None:
        pass

    @abstractmethod
    def write_heading(self, heading:str, level:int=1) -> None:  # pragma: no cover
        raise NotImplementedError

    @abstractmethod
    def write_paragraph(self, paragraph:str) -> None:  # pragma: no cover
        raise NotImplementedError

    @abstractmethod
    def write_table(self, rows:list[list], header:Sequence[Any]|None=None, footer:Sequence[Any]|None=None, just:Sequence[Any]|None=None, indent:str='') -> None:  # pragma: no cover
        raise NotImplementedError

    def write_items(self, items:Sequence[tuple[str, Any]], indent:str='') -> None:
        """Label/value pairs, as a two column table."""
        self.write_table([[label, value] for label, value in items], just='lr', indent=indent)

    @staticmethod
    def format(field:Any) -> str:
        if field is None or field != field:
            return ''
        else:
            return str(field)

    def end(self) -> None:
        pass


_str_just:dict[str, Callable[[str, int], str]] = {
    'c': str.center,
    'l': str.ljust,
    'r': str.rjust,
}


class TextReport(Report):

    sep = '  '

    def __init__(self, stream:TextIO=sys.stdout):
        if sys.platform == 'win32' and not stream.isatty():
            stream.reconfigure(encoding='utf-8-sig')  # type: ignore[attr-defined]
        self.stream = stream
        self.heading_sep = ''

    def start(self, title:str) -> None:
        self.write_heading(title)

    def write_heading(self, heading:str, level:int=1) -> None:
        if level <= 1:
            heading = heading.upper()
        if sys.platform != 'win32' and self.stream.isatty():
            # Ansi escape
            _csi = '\33['
            normal = _csi + '0m'
            bold = _csi + '1m'
            heading = bold + heading + normal
        self.stream.write(self.heading_sep + heading + '\n\n')
        self.heading_sep = ''

    def write_paragraph(self, paragraph:str) -> None:
        paragraph = '\n'.join(textwrap.wrap(paragraph, width=120))
        self.stream.write(paragraph + '\n\n')
        self.heading_sep = '\n'

    def _layout(self, rows:list[list], header:Sequence[Any]|None, footer:Sequence[Any]|None, just:Sequence[Any]|None) -> tuple[list[list[str]], list[str]|None, list[str]|None, int]:
        ncols = len(header) if header is not None else len(rows[0]) if rows else len(footer or [])
        columns = [[self.format(cell) for cell in col] for col in zip(*rows)] or [[] for _ in range(ncols)]
        assert len(columns) == ncols
        header_ = None if header is None else [self.format(cell) for cell in header]
        footer_ = None if footer is None else [self.format(cell) for cell in footer]
        for line in (header_, footer_):
            assert line is None or len(line) == ncols
        justs = [str.center]*ncols if just is None else [_str_just[j] for j in just]
        assert len(justs) == ncols

        widths = []
        for c, column in enumerate(columns):
            width = max([len(cell) for cell in column] + [len(line[c]) for line in (header_, footer_) if line is not None])
            columns[c] = [justs[c](cell, width) for cell in column]
            for line in (header_, footer_):
                if line is not None:
                    line[c] = justs[c](line[c], width)
            widths.append(width)

        line_width = len(self.sep.join([' '*width for width in widths]))
        return columns, header_, footer_, line_width

    def write_table(self, rows:list[list], header:Sequence[Any]|None=None, footer:Sequence[Any]|None=None, just:Sequence[Any]|None=None, indent:str='') -> None:
        stream = self.stream
        sep = self.sep

        columns, header_, footer_, line_width = self._layout(rows, header, footer, just)
        rule = '─' * line_width

        if header_ is not None:
            stream.write(indent + sep.join(header_).rstrip() + '\n')
            stream.write(indent + rule + '\n')
        for row in zip(*columns):
            stream.write(indent + sep.join(row).rstrip() + '\n')
        if footer_ is not None:
            stream.write(indent + rule + '\n')
            stream.write(indent + sep.join(footer_).rstrip() + '\n')

        stream.write('\n')

        self.heading_sep = '\n'


class HtmlReport(Report):

    _css = '''
body {
  font-family: "Noto Sans Mono", monospace;
  font-size: 0.75rem; /* 12px */
  background-color: white;
}

h1, h2, h3, h4 {
  font-size: 100%;
  font-weight: bold;
  margin-top: 2em;
  margin-bottom: 1em;
}

h1 {
  text-align: center;
}

h1, h2, h3 {
  text-transform: uppercase;
}

.text-center { text-align: center; }
.text-right { text-align: right; }
.text-left { text-align: left; }

.warning { color: #b45309; }

@media print {
  body { font-size: 10px; }
}

.table {
  margin: 1em auto 1em 2ch;
  border-spacing: 0;
}

thead tr th {
  border-bottom: 1.5px solid;
}

tfoot tr th {
  border-top: 1.5px solid;
}

th, td {
  padding: 0.25em 1ch 0.25em 1ch;
}
'''

    _html_just = {
        'c': 'text-center',
        'l': 'text-left',
        'r': 'text-right',
    }

    def __init__(self, stream:TextIO):
        if sys.platform == 'win32' and not stream.isatty():
            stream.reconfigure(encoding='utf-8-sig')  # type: ignore[attr-defined]
        self.stream = stream

    def start(self, title:str) -> None:
        title = html.escape(title)
        self.stream.write(f'''<!doctype html>
<html lang="id">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{title}</title>
<style>{self._css}</style>
</head>
<body>
<h1>{title}</h1>
''')

    def write_heading(self, heading:str, level:int=1) -> None:
        level += 1
        heading = html.escape(heading)
        self.stream.write(f'\n<h{level}>{heading}</h{level}>\n\n')

    def write_paragraph(self, paragraph:str) -> None:
        paragraph = html.escape(paragraph)
        self.stream.write(f'<p>{paragraph}</p>\n\n')

    @staticmethod
    def format_and_escape(field:Any) -> str:
        field = Report.format(field)
        field = html.escape(field)
        return field

    def write_table(self, rows:list[list], header:Sequence[Any]|None=None, footer:Sequence[Any]|None=None, just:Sequence[Any]|None=None, indent:str='') -> None:
        fmt = self.format_and_escape

        ncols = len(header) if header is not None else len(rows[0]) if rows else len(footer or [])
        if just is None:
            classes = ['text-center'] * ncols
        else:
            classes = [self._html_just[j] for j in just]

        def tr(cells:Sequence[Any], tag:str) -> str:
            return '<tr>' + ''.join([f'<{tag} class="{c}">{fmt(cell)}</{tag}>' for cell, c in zip(cells, classes)]) + '</tr>'

        self.stream.write('<table class="table">\n')
        if header:
            self.stream.write('<thead>' + tr(header, 'th') + '</thead>\n')
        self.stream.write('<tbody>\n')
        for row in rows:
            self.stream.write(tr(row, 'td') + '\n')
        self.stream.write('</tbody>\n')
        if footer:
            self.stream.write('<tfoot>' + tr(footer, 'th') + '</tfoot>\n')
        self.stream.write('</table>\n')

    def end(self) -> None:
        self.stream.write('\n')
        self.stream.write('</body>\n')
        self.stream.write('</html>\n')
