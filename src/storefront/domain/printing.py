"""Printable HTML for the chart of accounts and for invoices and bills."""

from html import escape
from typing import Optional

from storefront.domain.chart import ChartSection
from storefront.domain.entities import DocumentType, FinanceDocument
from storefront.utils.amount_parser import format_currency

_PAGE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
body {{ font-family: Arial, sans-serif; margin: 20px; color: #333; }}
h1 {{ color: #0052CC; }}
h2 {{ color: #0052CC; border-bottom: 1px solid #eee; padding-bottom: 5px; }}
table {{ width: 100%; border-collapse: collapse; }}
th, td {{ padding: 6px 8px; border-bottom: 1px solid #eee; text-align: left; }}
td.amount, th.amount {{ text-align: right; }}
.badge {{ background-color: #f0f0f0; padding: 2px 6px; border-radius: 10px; font-size: 12px; }}
.muted {{ color: #888; font-style: italic; }}
</style>
</head>
<body>
<h1>{title}</h1>
{body}
</body>
</html>
"""


def _page(title: str, body: str) -> str:
    return _PAGE.format(title=escape(title), body=body)


def render_chart_html(sections: list[ChartSection], title: str = "Chart of Accounts") -> str:
    """Render the full chart of accounts as a printable HTML page."""
    parts = []
    for section in sections:
        parts.append(f"<h2>{escape(section.account_type.label)}</h2>")
        for line in section.categories:
            category = line.category
            badge = ' <span class="badge">System</span>' if category.is_system else ""
            parts.append(f"<h3>{escape(line.code)} - {escape(category.name)}{badge}</h3>")
            if category.description:
                parts.append(f'<p class="muted">{escape(category.description)}</p>')

            if not line.accounts:
                parts.append('<p class="muted">No accounts in this category</p>')
                continue

            rows = []
            for acc_line in line.accounts:
                account = acc_line.account
                inactive = ' <span class="badge">Inactive</span>' if not account.is_active else ""
                rows.append(
                    f"<tr><td>{escape(acc_line.code)} - {escape(account.name)}{inactive}</td>"
                    f'<td class="amount">{escape(format_currency(acc_line.balance))}</td></tr>'
                )
            parts.append("<table>\n" + "\n".join(rows) + "\n</table>")
    return _page(title, "\n".join(parts))


def render_document_html(document: FinanceDocument, business_name: Optional[str] = None) -> str:
    """Render an invoice or bill as a printable HTML page."""
    is_invoice = document.document_type == DocumentType.INVOICE
    heading = "Invoice" if is_invoice else "Purchase Bill"
    contact_label = "Bill To" if is_invoice else "Vendor"
    payment_label = "Payment Received" if is_invoice else "Payment Made"

    header = [
        f"<p><strong>{heading} #:</strong> {escape(document.document_number)}</p>",
        f"<p><strong>Date:</strong> {document.issue_date:%Y-%m-%d}</p>",
    ]
    if document.due_date:
        header.append(f"<p><strong>Due Date:</strong> {document.due_date:%Y-%m-%d}</p>")
    header.append(f"<p><strong>Status:</strong> {escape(document.status.value.title())}</p>")
    if business_name:
        header.insert(0, f"<p><strong>{escape(business_name)}</strong></p>")
    if document.contact_name:
        header.append(f"<p><strong>{contact_label}:</strong> {escape(document.contact_name)}</p>")

    rows = []
    for item in document.items:
        rows.append(
            "<tr>"
            f"<td>{escape(item.description)}</td>"
            f'<td class="amount">{item.quantity}</td>'
            f'<td class="amount">{escape(format_currency(item.unit_price))}</td>'
            f'<td class="amount">{item.discount_percent}%</td>'
            f'<td class="amount">{item.tax_rate_percent}%</td>'
            f'<td class="amount">{escape(format_currency(item.amount))}</td>'
            "</tr>"
        )
    items_table = (
        "<table>\n<tr><th>Description</th><th class=\"amount\">Qty</th>"
        '<th class="amount">Unit Price</th><th class="amount">Discount</th>'
        '<th class="amount">Tax</th><th class="amount">Amount</th></tr>\n'
        + "\n".join(rows)
        + "\n</table>"
    )

    totals = [("Subtotal", document.subtotal), ("Tax", document.tax_amount)]
    if document.adjustment:
        totals.append(("Transport & Other", document.adjustment))
    totals.append(("Total", document.total_amount))
    if document.payment_received:
        totals.append((payment_label, document.payment_received))
        totals.append(("Balance Due", document.balance_due))
    totals_table = "<table>\n" + "\n".join(
        f'<tr><td>{label}</td><td class="amount">{escape(format_currency(value))}</td></tr>'
        for label, value in totals
    ) + "\n</table>"

    body = "\n".join(header) + "\n" + items_table + "\n" + totals_table
    if document.notes:
        body += f'\n<p class="muted">{escape(document.notes)}</p>'
    return _page(f"{heading} {document.document_number}", body)
