"""Storefront back office: chart of accounts, catalog, invoices and bills."""

__version__ = "0.1.0"


# The CLI imports every service; load it only when asked for
def __getattr__(name):
    if name == "main":
        from storefront.cli.main import main
        return main
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
