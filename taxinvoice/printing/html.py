"""HTML layout of an :class:`InvoiceDocument` for QTextDocument printing."""

from __future__ import annotations

from html import escape
from typing import List

from taxinvoice.rendering.document import Field, InvoiceDocument, Section, Table

STYLE = """
    body { font-family: 'Helvetica'; font-size: 9pt; }
    .container { border: 2px solid #000; }
    .header { font-size: 14pt; font-weight: bold; text-align: center; padding: 8px; }
    .header small { font-size: 8pt; font-weight: normal; }
    .section { padding: 6px 10px; border-top: 1px solid #000; }
    .label { font-weight: bold; }
    .emphasis { font-weight: bold; font-size: 11pt; }
    table.items { width: 100%; border-collapse: collapse; font-size: 7pt; }
    table.items th { background-color: #f0f0f0; border: 1px solid #000; padding: 4px; }
    table.items td { border: 1px solid #000; padding: 4px; }
    table.totals { width: 100%; font-size: 8pt; font-weight: bold; }
    table.totals td.rule { border-top: 1px solid #000; padding-top: 4px; }
    .footer { text-align: center; font-size: 7pt; padding: 5px; border-top: 1px solid #000; }
"""

# Amount-like columns are right aligned.
_RIGHT_ALIGNED = {"Qty", "Rate", "Amount"}


def _field_html(field: Field) -> str:
    value = escape(field.value)
    if field.emphasis:
        value = f"<span class='emphasis'>{value}</span>"
    if field.label:
        return f"<div><span class='label'>{escape(field.label)}: </span>{value}</div>"
    return f"<div>{value}</div>"


def _table_html(table: Table) -> str:
    align = ["right" if column in _RIGHT_ALIGNED else "left" for column in table.columns]
    head = "".join(
        f"<th align='{side}'>{escape(column)}</th>" for column, side in zip(table.columns, align)
    )
    body: List[str] = []
    for row in table.rows:
        cells = "".join(f"<td align='{side}'>{escape(cell)}</td>" for cell, side in zip(row, align))
        body.append(f"<tr>{cells}</tr>")
    if table.footer:
        cells = "".join(
            f"<td align='{side}'><b>{escape(cell)}</b></td>" for cell, side in zip(table.footer, align)
        )
        body.append(f"<tr>{cells}</tr>")
    return f"<table class='items'><tr>{head}</tr>{''.join(body)}</table>"


def _totals_html(section: Section) -> str:
    rows: List[str] = []
    for field in section.fields:
        css = " class='rule'" if field.rule_above else ""
        rows.append(
            f"<tr><td{css}>{escape(field.label or '')}</td>"
            f"<td{css} align='right'>{escape(field.value)}</td></tr>"
        )
    return f"<table class='totals'>{''.join(rows)}</table>"


def _section_html(section: Section) -> str:
    if section.name == "header":
        subtitle = "".join(f" <small>{escape(field.value)}</small>" for field in section.fields)
        return f"<div class='header'>{escape(section.title or '')}{subtitle}</div>"
    if section.name == "footer":
        return "".join(f"<div class='footer'>{escape(field.value)}</div>" for field in section.fields)

    parts: List[str] = []
    if section.title:
        parts.append(f"<div class='label'>{escape(section.title)}</div>")
    if section.name == "totals":
        parts.append(_totals_html(section))
    else:
        parts.extend(_field_html(field) for field in section.fields)
    if section.table is not None:
        parts.append(_table_html(section.table))
    return f"<div class='section section-{section.name}'>{''.join(parts)}</div>"


def build_html(document: InvoiceDocument) -> str:
    """Return the full HTML page for ``document``; same document, same HTML."""
    body = "".join(_section_html(section) for section in document.sections)
    return (
        "<html><head><meta charset='utf-8'/>"
        f"<style>{STYLE}</style></head>"
        f"<body><div class='container'>{body}</div></body></html>"
    )
