"""
Module: stock_kernel.selectors.report_selector
Responsibility: Aggregate inventory reports -- best sellers, stock per
    category and low-stock listings.
Architecture position: Kernel > Selectors.

Invariants enforced:
    - "Sold" means the sum of EXIT movements.  Products with no exits
      appear with total_sold == 0 (LEFT OUTER JOIN + COALESCE).
    - Ties in a ranking are broken by ascending product id / category
      name so that results are stable.
"""

from __future__ import annotations

from sqlalchemy import and_, func, select

from stock_kernel.domain.dtos import CategoryStockRow, ProductInfo, TopSellerRow
from stock_kernel.domain.validation import require_positive_limit
from stock_kernel.models.movement import Movement, MovementKind
from stock_kernel.models.product import Product
from stock_kernel.selectors.base import BaseSelector


class ReportSelector(BaseSelector):
    """Inventory-wide reports."""

    def top_selling_products(self, limit: int) -> list[TopSellerRow]:
        """
        The ``limit`` products with the highest total EXIT quantity.

        Raises:
            InvalidLimitError: ``limit`` <= 0.
        """
        require_positive_limit(limit)

        total_sold = func.coalesce(func.sum(Movement.quantity), 0).label("total_sold")
        rows = self.session.execute(
            select(
                Product.id,
                Product.name,
                Product.category,
                Product.price,
                total_sold,
            )
            .outerjoin(
                Movement,
                and_(
                    Movement.product_id == Product.id,
                    # Kind filter lives in the ON clause; in WHERE it would
                    # drop products that never sold.
                    Movement.kind == MovementKind.EXIT.value,
                ),
            )
            .group_by(Product.id, Product.name, Product.category, Product.price)
            .order_by(total_sold.desc(), Product.id)
            .limit(limit)
        ).all()

        return [
            TopSellerRow(
                product_id=row.id,
                name=row.name,
                category=row.category,
                price=row.price,
                total_sold=int(row.total_sold),
            )
            for row in rows
        ]

    def stock_by_category(self) -> list[CategoryStockRow]:
        """Product count and total stock per category, largest stock first."""
        total_stock = func.coalesce(func.sum(Product.stock), 0).label("total_stock")
        product_count = func.count(Product.id).label("product_count")
        rows = self.session.execute(
            select(Product.category, product_count, total_stock)
            .group_by(Product.category)
            .order_by(total_stock.desc(), Product.category)
        ).all()

        return [
            CategoryStockRow(
                category=row.category,
                product_count=int(row.product_count),
                total_stock=int(row.total_stock),
            )
            for row in rows
        ]

    def low_stock_products(self, threshold: int) -> list[ProductInfo]:
        """Products with stock strictly below ``threshold``, by id."""
        products = self.session.execute(
            select(Product)
            .where(Product.stock < threshold)
            .order_by(Product.id)
            .execution_options(populate_existing=True)
        ).scalars()
        return [ProductInfo.from_model(p) for p in products]
