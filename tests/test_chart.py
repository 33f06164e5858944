"""Tests for the chart of accounts."""

from storefront.cli.main import cli
from storefront.domain.chart import DEFAULT_CHART
from storefront.domain.document_form import AddLineItem, DocumentState, reduce
from storefront.domain.entities import AccountType, DocumentType, LineItem
from storefront.domain.printing import render_chart_html

DEFAULT_ACCOUNT_COUNT = sum(len(accounts) for _, _, _, accounts in DEFAULT_CHART)


class TestChartOfAccountsService:
    """Tests for ChartOfAccountsService."""

    def test_seed_default_chart(self, chart_service, category_service):
        created = chart_service.seed_default_chart()

        assert created == (len(DEFAULT_CHART), DEFAULT_ACCOUNT_COUNT)
        assert all(cat.is_system for cat in category_service.list_categories())

    def test_seed_is_repeatable(self, chart_service):
        chart_service.seed_default_chart()
        assert chart_service.seed_default_chart() == (0, 0)

    def test_build_chart_groups_by_type(self, chart_service):
        chart_service.seed_default_chart()
        sections = chart_service.build_chart()

        assert [s.account_type for s in sections] == list(AccountType)
        assets = sections[0]
        assert assets.categories[0].code == "A0001"
        assert assets.categories[0].accounts[0].code == "A0001"
        assert assets.categories[0].accounts[0].account.name == "Cash"

    def test_empty_types_are_omitted(self, chart_service, sample_account):
        sections = chart_service.build_chart()
        assert [s.account_type for s in sections] == [AccountType.ASSET]

    def test_totals_use_balances(self, chart_service, document_service, sample_account):
        state = reduce(DocumentState(), AddLineItem(LineItem(description="Sale", unit_price=2500)))
        document_service.save(DocumentType.INVOICE, state, account_id=sample_account.id)

        section = chart_service.build_chart()[0]
        assert section.categories[0].accounts[0].balance == 12500
        assert section.categories[0].total == 12500
        assert section.total == 12500

    def test_inactive_accounts_can_be_hidden(self, chart_service, account_service, sample_account):
        account_service.set_active(sample_account.id, False)

        assert len(chart_service.build_chart()[0].categories[0].accounts) == 1
        assert chart_service.build_chart(include_inactive=False)[0].categories[0].accounts == ()


def test_render_chart_html_escapes_names(chart_service, category_service, account_service):
    category_id = category_service.create_category(name="R&D <lab>", category_type="expense")
    account_service.create_account(name="Parts", category_id=category_id, initial_balance="12.34")

    html = render_chart_html(chart_service.build_chart())

    assert "<h2>Expenses</h2>" in html
    assert "R&amp;D &lt;lab&gt;" in html
    assert "X0001 - Parts" in html
    assert "$12.34" in html


class TestChartCommands:
    """Tests for chart CLI commands."""

    def test_init_chart(self, cli_runner, temp_db):
        result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "init-chart"])
        assert result.exit_code == 0
        assert f"Created {len(DEFAULT_CHART)} categories and {DEFAULT_ACCOUNT_COUNT} accounts." in result.output

        result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "init-chart"])
        assert "already exists" in result.output

    def test_show_empty(self, cli_runner, temp_db):
        result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "chart", "show"])
        assert result.exit_code == 0
        assert "Chart of accounts is empty" in result.output

    def test_show_collapsed_and_expanded(self, cli_runner, temp_db, sample_account):
        collapsed = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "chart", "show"])
        assert collapsed.exit_code == 0
        assert "Assets" in collapsed.output
        assert "Bank Accounts" in collapsed.output
        assert "Checking" not in collapsed.output
        assert "$100.00" in collapsed.output

        expanded = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "chart", "show", "--expand"]
        )
        assert expanded.exit_code == 0
        assert "Checking" in expanded.output

    def test_show_writes_html(self, cli_runner, temp_db, sample_account, tmp_path):
        out = tmp_path / "chart.html"
        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "chart", "show", "--html", str(out)]
        )
        assert result.exit_code == 0
        assert "Checking" in out.read_text(encoding="utf-8")
