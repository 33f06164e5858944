"""Invoice and bill commands.

Both document kinds share one set of commands; ``build_document_group``
creates the click group for either kind.
"""

from pathlib import Path

import click

from storefront.cli.resolution import resolve_account_or_exit
from storefront.cli.date_filters import period_options, resolve_cli_date_range
from storefront.cli.error_handling import handle_domain_error, report_problems
from storefront.domain.account import AccountService
from storefront.domain.bill_status import bill_status
from storefront.domain.document import DocumentService
from storefront.domain.document_form import (
    AddLineItem,
    ChooseProduct,
    DocumentEvent,
    DocumentState,
    RemoveLineItem,
    SetAdjustment,
    SetPaymentReceived,
    SetStatus,
    UpdateLineItem,
    reduce_all,
    state_from_document,
    validate_document,
)
from storefront.domain.entities import DocumentStatus, DocumentType, FinanceDocument, Product
from storefront.domain.printing import render_document_html
from storefront.domain.product import ProductService
from storefront.utils.amount_parser import format_currency
from storefront.utils.date_parser import parse_date
from storefront.utils.item_parser import parse_item_option

STATUS_CHOICES = [status.value for status in DocumentStatus]


def _product_for_ref(ctx: click.Context, product_service: ProductService, product_ref: str) -> Product | None:
    """Look up a product given by ID; anything else is left for the form to reject."""
    try:
        product_id = int(product_ref)
    except ValueError:
        return None
    if product_id <= 0:
        return None
    product = product_service.get_product(product_id)
    if product is None:
        click.echo(f"Error: Product {product_id} not found", err=True)
        ctx.exit(1)
    return product


def item_events(
    ctx: click.Context,
    product_service: ProductService,
    item_options: tuple[str, ...],
) -> list[DocumentEvent]:
    """Turn --item options into events that append one line item each."""
    events: list[DocumentEvent] = []
    for index, text in enumerate(item_options):
        try:
            fields = parse_item_option(text)
        except ValueError as e:
            handle_domain_error(ctx, e)

        events.append(AddLineItem())
        product_ref = fields.pop("product_id", None)
        if product_ref:
            events.append(UpdateLineItem(index, "product_id", product_ref))
            product = _product_for_ref(ctx, product_service, product_ref)
            if product is not None:
                events.append(ChooseProduct(index, product))

        for field_name, value in fields.items():
            events.append(UpdateLineItem(index, field_name, value))
    return events


def header_events(transport: str | None, payment: str | None, status: str | None) -> list[DocumentEvent]:
    events: list[DocumentEvent] = []
    if status:
        events.append(SetStatus(status))
    if transport:
        events.append(SetAdjustment(transport))
    # After the status so a payment can still mark the document paid
    if payment:
        events.append(SetPaymentReceived(payment))
    return events


def save_edits(
    ctx: click.Context,
    service: DocumentService,
    document: FinanceDocument,
    events: list[DocumentEvent],
    **header,
) -> FinanceDocument:
    """Check edits against a stored document, then save them."""
    try:
        state = reduce_all(state_from_document(document), events)
    except ValueError as e:
        handle_domain_error(ctx, e)
    problems = validate_document(state)
    if problems:
        report_problems(ctx, problems)

    try:
        return service.update(document.id, events, **header)
    except ValueError as e:
        handle_domain_error(ctx, e)


def parse_received_option(text: str, line_count: int) -> tuple[int, str]:
    """Parse "LINE=QTY" with a 1-based line number into (index, quantity).

    Raises:
        ValueError: If the text is malformed or the line doesn't exist
    """
    line, sep, quantity = text.partition("=")
    line = line.strip()
    if not sep or not line.isdigit() or not quantity.strip():
        raise ValueError(f"Invalid received quantity '{text}'. Use LINE=QTY, e.g. 1=5")
    number = int(line)
    if not 1 <= number <= line_count:
        raise ValueError(f"Line {number} does not exist; the document has {line_count} line(s)")
    return number - 1, quantity.strip()


def _echo_totals(document: FinanceDocument) -> None:
    click.echo(f"  Subtotal: {format_currency(document.subtotal)}")
    click.echo(f"  Tax: {format_currency(document.tax_amount)}")
    if document.adjustment:
        click.echo(f"  Transport & other: {format_currency(document.adjustment)}")
    click.echo(f"  Total: {format_currency(document.total_amount)}")
    if document.payment_received:
        click.echo(f"  Paid: {format_currency(document.payment_received)}")
        click.echo(f"  Remaining: {format_currency(document.balance_due)}")
    click.echo(f"  Status: {document.status.value}")
    if document.document_type == DocumentType.BILL:
        click.echo(f"  Bill status: {bill_status(document).label}")


def build_document_group(document_type: DocumentType, contact_option: str) -> click.Group:
    """Create the command group for invoices or bills.

    Args:
        document_type: Kind of document the commands manage
        contact_option: Option name for the other party ("customer" or "vendor")
    """
    noun = document_type.value

    @click.group(help=f"Manage {noun}s.")
    def group():
        pass

    @group.command("create")
    @click.option("--account", required=True, help="Bank or cash account name or ID")
    @click.option(f"--{contact_option}", "contact", help=f"{contact_option.title()} name")
    @click.option(
        "--item",
        "items",
        multiple=True,
        required=True,
        help='Line item, e.g. "product=1,qty=2,price=10.00,tax=10,discount=0"',
    )
    @click.option("--number", help="Document number (generated if not provided)")
    @click.option("--date", "issue_date", help="Issue date (YYYY-MM-DD or 'today')")
    @click.option("--due-date", help="Due date (defaults to 30 days after the issue date)")
    @click.option("--transport", help="Transport or other flat cost added to the total")
    @click.option("--payment", help="Payment received so far")
    @click.option("--status", type=click.Choice(STATUS_CHOICES), help="Initial status")
    @click.option("--notes", help="Notes")
    @click.pass_context
    def create_document(ctx, account, contact, items, number, issue_date, due_date, transport, payment, status, notes):
        """Create a document from line items."""
        db = ctx.obj["db"]
        account_id = resolve_account_or_exit(ctx, AccountService(db), account)

        try:
            issued = parse_date(issue_date) if issue_date else None
            due = parse_date(due_date) if due_date else None
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

        events = item_events(ctx, ProductService(db), items) + header_events(transport, payment, status)
        state = reduce_all(DocumentState(), events)
        problems = validate_document(state)
        if problems:
            report_problems(ctx, problems)

        service = DocumentService(db)
        try:
            document_id = service.save(
                document_type,
                state,
                account_id=account_id,
                document_number=number,
                contact_name=contact,
                issue_date=issued,
                due_date=due,
                notes=notes,
            )
        except ValueError as e:
            handle_domain_error(ctx, e)

        document = service.get_document(document_id)
        click.echo(f"Created {noun} {document.document_number} (ID: {document_id})")
        _echo_totals(document)

    @group.command("list")
    @click.option("--status", type=click.Choice(STATUS_CHOICES), help="Only documents with this status")
    @click.option("--account", help="Only documents booked to this account")
    @click.option("--start-date", help="Start date (YYYY-MM-DD)")
    @click.option("--end-date", help="End date (YYYY-MM-DD)")
    @period_options
    @click.pass_context
    def list_documents(ctx, status, account, start_date, end_date, this_month, this_year, last_month, last_year):
        """List documents, newest first."""
        db = ctx.obj["db"]
        start, end = resolve_cli_date_range(
            ctx,
            start_date=start_date,
            end_date=end_date,
            period_flags={
                "this-month": this_month,
                "this-year": this_year,
                "last-month": last_month,
                "last-year": last_year,
            },
        )
        account_id = resolve_account_or_exit(ctx, AccountService(db), account) if account else None

        documents = DocumentService(db).list_documents(
            document_type=document_type,
            start_date=start,
            end_date=end,
            status=status,
            account_id=account_id,
        )
        if not documents:
            click.echo(f"No {noun}s found.")
            return

        click.echo(f"\n{noun.title()}s:")
        click.echo("-" * 90)
        for doc in documents:
            click.echo(
                f"ID: {doc.id:3d} | {doc.document_number:20s} | {doc.issue_date} | "
                f"{(doc.contact_name or '-'):15.15s} | {format_currency(doc.total_amount):>12s} | "
                f"Paid: {format_currency(doc.payment_received):>12s} | {doc.status.value}"
            )

    @group.command("show")
    @click.argument("document", metavar="DOCUMENT")
    @click.option("--html", "html_path", type=click.Path(dir_okay=False), help="Write a printable HTML page")
    @click.pass_context
    def show_document(ctx, document, html_path):
        """Show a document with its line items.

        DOCUMENT can be a document ID or number.
        """
        try:
            doc = DocumentService(ctx.obj["db"]).require_document(document)
        except ValueError as e:
            handle_domain_error(ctx, e)

        click.echo(f"{noun.title()} {doc.document_number} (ID: {doc.id})")
        click.echo(f"  Date: {doc.issue_date}")
        if doc.due_date:
            click.echo(f"  Due: {doc.due_date}")
        if doc.contact_name:
            click.echo(f"  {contact_option.title()}: {doc.contact_name}")
        click.echo("  Items:")
        for item in doc.items:
            line = (
                f"    {item.description:25s} {item.quantity} x {format_currency(item.unit_price)}"
                f" = {format_currency(item.amount)}"
            )
            if item.discount_percent:
                line += f" (discount {item.discount_percent}%)"
            if item.tax_rate_percent:
                line += f" (tax {item.tax_rate_percent}%)"
            if document_type == DocumentType.BILL:
                line += f" [received {item.quantity_received}]"
            click.echo(line)
        _echo_totals(doc)

        if html_path:
            Path(html_path).write_text(render_document_html(doc), encoding="utf-8")
            click.echo(f"Wrote {html_path}")

    @group.command("pay")
    @click.argument("document", metavar="DOCUMENT")
    @click.argument("amount", metavar="AMOUNT")
    @click.pass_context
    def record_payment(ctx, document, amount):
        """Set the total payment received for a document.

        The status becomes 'paid' when the payment covers the total and
        'sent' when it covers part of it.
        """
        try:
            doc = DocumentService(ctx.obj["db"]).record_payment(document, amount)
        except ValueError as e:
            handle_domain_error(ctx, e)

        click.echo(f"Recorded payment of {format_currency(doc.payment_received)} on {doc.document_number}")
        click.echo(f"Status: {doc.status.value}")

    @group.command("status")
    @click.argument("document", metavar="DOCUMENT")
    @click.argument("status", type=click.Choice(STATUS_CHOICES))
    @click.pass_context
    def set_status(ctx, document, status):
        """Set the status of a document."""
        try:
            DocumentService(ctx.obj["db"]).set_status(document, status)
        except ValueError as e:
            handle_domain_error(ctx, e)
        click.echo(f"Status of {document} set to '{status}'")

    @group.command("edit")
    @click.argument("document", metavar="DOCUMENT")
    @click.option(
        "--item",
        "items",
        multiple=True,
        help="Line item; when given, the listed items replace all existing ones",
    )
    @click.option(f"--{contact_option}", "contact", help=f"New {contact_option} name")
    @click.option("--due-date", help="New due date (YYYY-MM-DD)")
    @click.option("--transport", help="Transport or other flat cost added to the total")
    @click.option("--payment", help="Total payment received so far")
    @click.option("--status", type=click.Choice(STATUS_CHOICES), help="New status")
    @click.option("--notes", help="New notes")
    @click.pass_context
    def edit_document(ctx, document, items, contact, due_date, transport, payment, status, notes):
        """Change the items, costs or details of a document.

        Options that are not given leave the document as it is. Changing
        items keeps the status; only --payment or --status change it.
        """
        db = ctx.obj["db"]
        service = DocumentService(db)
        try:
            doc = service.require_document(document)
        except ValueError as e:
            handle_domain_error(ctx, e)

        try:
            due = parse_date(due_date) if due_date else None
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

        events: list[DocumentEvent] = []
        if items:
            events.extend(RemoveLineItem(0) for _ in doc.items)
            events.extend(item_events(ctx, ProductService(db), items))
        events.extend(header_events(transport, payment, status))

        if not events and contact is None and due is None and notes is None:
            click.echo("Nothing to change.")
            return

        updated = save_edits(ctx, service, doc, events, contact_name=contact, due_date=due, notes=notes)
        click.echo(f"Updated {noun} {updated.document_number}")
        _echo_totals(updated)

    if document_type == DocumentType.BILL:

        @group.command("receive")
        @click.argument("document", metavar="DOCUMENT")
        @click.argument("quantities", nargs=-1, metavar="[LINE=QTY]...")
        @click.option("--all", "receive_all", is_flag=True, help="Mark every line as fully received")
        @click.pass_context
        def receive_goods(ctx, document, quantities, receive_all):
            """Record goods received against a bill.

            LINE is the line number shown by 'bill show' (starting at 1) and
            QTY the total quantity received so far on that line.
            """
            service = DocumentService(ctx.obj["db"])
            try:
                doc = service.require_document(document)
            except ValueError as e:
                handle_domain_error(ctx, e)

            if receive_all == bool(quantities):
                click.echo("Error: Give either LINE=QTY pairs or --all", err=True)
                ctx.exit(1)

            if receive_all:
                events = [
                    UpdateLineItem(index, "quantity_received", item.quantity)
                    for index, item in enumerate(doc.items)
                ]
            else:
                events = []
                for text in quantities:
                    try:
                        index, quantity = parse_received_option(text, len(doc.items))
                    except ValueError as e:
                        handle_domain_error(ctx, e)
                    events.append(UpdateLineItem(index, "quantity_received", quantity))

            updated = save_edits(ctx, service, doc, events)
            click.echo(f"Recorded goods received on {updated.document_number}")
            _echo_totals(updated)

    @group.command("delete")
    @click.argument("document", metavar="DOCUMENT")
    @click.option("--yes", is_flag=True, help="Do not ask for confirmation")
    @click.pass_context
    def delete_document(ctx, document, yes):
        """Delete a document."""
        service = DocumentService(ctx.obj["db"])
        try:
            doc = service.require_document(document)
        except ValueError as e:
            handle_domain_error(ctx, e)

        if not yes and not click.confirm(f"Are you sure you want to delete {noun} {doc.document_number}?"):
            click.echo("Deletion cancelled.")
            return

        service.delete_document(doc.id)
        click.echo(f"Deleted {noun} {doc.document_number}")

    return group


def register_commands(cli):
    """Register invoice and bill commands with main CLI."""
    cli.add_command(build_document_group(DocumentType.INVOICE, "customer"), name="invoice")
    cli.add_command(build_document_group(DocumentType.BILL, "vendor"), name="bill")
