"""Parsing of line item options given on the command line."""

# Short names accepted in "--item" options, mapped to LineItem field names
ITEM_FIELD_ALIASES = {
    "product": "product_id",
    "product_id": "product_id",
    "desc": "description",
    "description": "description",
    "qty": "quantity",
    "quantity": "quantity",
    "price": "unit_price",
    "unit_price": "unit_price",
    "discount": "discount_percent",
    "tax": "tax_rate_percent",
    "received": "quantity_received",
}


def parse_item_option(text: str) -> dict[str, str]:
    """Parse an item option into raw field values.

    Example:
        "product=1,qty=2,price=10.00,tax=10" ->
        {"product_id": "1", "quantity": "2", "unit_price": "10.00", "tax_rate_percent": "10"}

    Descriptions containing commas can be quoted with double quotes:
    'desc="Bolts, 10mm",qty=5'.

    Args:
        text: Comma separated key=value pairs

    Returns:
        Dict of LineItem field name to raw text value

    Raises:
        ValueError: If a pair is malformed or the key is unknown
    """
    if not text or not text.strip():
        raise ValueError("Empty item option")

    pairs = []
    current = []
    in_quotes = False
    for char in text:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            pairs.append("".join(current))
            current = []
            continue
        current.append(char)
    if in_quotes:
        raise ValueError(f"Unterminated quote in item option '{text}'")
    pairs.append("".join(current))

    fields: dict[str, str] = {}
    for pair in pairs:
        if not pair.strip():
            continue
        if "=" not in pair:
            raise ValueError(f"Expected key=value in item option, got '{pair.strip()}'")
        key, value = pair.split("=", 1)
        key = key.strip().lower()
        if key not in ITEM_FIELD_ALIASES:
            known = ", ".join(sorted(ITEM_FIELD_ALIASES))
            raise ValueError(f"Unknown item field '{key}'. Known fields: {known}")
        fields[ITEM_FIELD_ALIASES[key]] = value.strip().strip('"')
    return fields
