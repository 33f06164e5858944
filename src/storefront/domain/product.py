"""Product catalog domain service."""

import logging
from typing import Optional

from storefront.database.base import Database
from storefront.domain.entities import Product
from storefront.domain.errors import NotFoundError, ValidationError, product_not_found
from storefront.utils.amount_parser import to_stored_cents

logger = logging.getLogger(__name__)


class ProductService:
    """Service for managing catalog products."""

    def __init__(self, db: Database):
        self.db = db

    def create_product(
        self,
        name: str,
        price: str | int,
        description: Optional[str] = None,
        sku: Optional[str] = None,
        inventory: int = 0,
    ) -> int:
        """Create a product.

        Args:
            name: Product name
            price: Price as entered, e.g. "19.99"
            description: Optional description
            sku: Optional stock keeping unit
            inventory: Units in stock

        Returns:
            Product ID

        Raises:
            ValidationError: If name is empty, price is invalid or negative
        """
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        cents = to_stored_cents(price)
        if cents < 0:
            raise ValidationError("Price cannot be negative")
        if inventory < 0:
            raise ValidationError("Inventory cannot be negative")

        product_id = self.db.create_product(
            name=name, price=cents, description=description, sku=sku, inventory=inventory
        )
        logger.info(f"Created product '{name}' (ID {product_id}) at {cents} cents")
        return product_id

    def get_product(self, product_id: int) -> Optional[Product]:
        return self.db.get_product(product_id)

    def require_product(self, product_id: int) -> Product:
        """Get product by ID, raising when it is missing."""
        product = self.db.get_product(product_id)
        if product is None:
            raise NotFoundError(product_not_found(product_id))
        return product

    def list_products(self) -> list[Product]:
        return self.db.list_products()

    def update_price(self, product_id: int, price: str | int) -> None:
        """Change a product price."""
        self.require_product(product_id)
        cents = to_stored_cents(price)
        if cents < 0:
            raise ValidationError("Price cannot be negative")
        self.db.update_product_price(product_id, cents)

    def delete_product(self, product_id: int) -> None:
        self.require_product(product_id)
        self.db.delete_product(product_id)
        logger.info(f"Deleted product {product_id}")
