from __future__ import annotations
from html import escape
from typing import Iterable

from ..models import SocketRecord
from ..render import HEADER, table_rows, NO_MATCHES

HTML = """<!doctype html>
<html>
<head>
  <meta charset="utf-8"/>
  <title>Listening sockets</title>
  <style>
    body {{ background:#14181d; color:#e8eaed; font-family: ui-sans-serif,system-ui,Segoe UI,Arial; }}
    table {{ border-collapse: collapse; }}
    th, td {{ padding: 2px 10px; border-bottom: 1px solid #2a2f36; text-align: left; }}
    td.num {{ text-align: right; font-variant-numeric: tabular-nums; }}
    .muted {{ color:#9aa0a6; }}
  </style>
</head>
<body>
  <h2>{title}</h2>
  <p class="muted">{count} socket(s) &middot; JSON at <a href="/api/ports">/api/ports</a></p>
  <table>
    <thead><tr>{head}</tr></thead>
    <tbody>
{body}
    </tbody>
  </table>
</body>
</html>
"""

NUMERIC_COLS = {2, 3, 4}

def render_html(records: Iterable[SocketRecord], show_all: bool = False) -> str:
    records = list(records)
    head = "".join(f"<th>{escape(h)}</th>" for h in HEADER)
    rows = []
    for row in table_rows(records):
        cells = "".join(
            f'<td class="num">{escape(c)}</td>' if i in NUMERIC_COLS else f"<td>{escape(c)}</td>"
            for i, c in enumerate(row))
        rows.append(f"      <tr>{cells}</tr>")
    if not rows:
        rows.append(f'      <tr><td colspan="{len(HEADER)}" class="muted">{escape(NO_MATCHES)}</td></tr>')
    title = "All sockets" if show_all else "Listening sockets"
    return HTML.format(title=title, count=len(records), head=head, body="\n".join(rows))
