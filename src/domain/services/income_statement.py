"""Management income statement (DRE) builder."""

from collections.abc import Iterable, Mapping
from decimal import Decimal
from logging import Logger

from src.domain.models import (
    BranchFilter,
    DateRange,
    EntryKind,
    ExpenseCategoryTotal,
    ExpenseLine,
    IncomeStatement,
    LedgerEntry,
    Product,
    Sale,
    SaleStatus,
)
from src.domain.services.normalization import (
    normalize_category,
    normalize_description,
)
from src.domain.services.validation import iter_valid_entries, iter_valid_sales
from src.utils.decimal_utils import HUNDRED, ZERO, coerce_decimal


def build_income_statement(
    sales: Iterable[Sale],
    entries: Iterable[LedgerEntry],
    products: Iterable[Product] | Mapping[str, Product],
    branch_filter: BranchFilter,
    date_range: DateRange | None = None,
    *,
    logger: Logger,
) -> IncomeStatement:
    """Build the income statement for a branch selection and date range.

    Cost of goods sold uses each product's current unit cost rather than a
    cost captured at sale time, so historical margins move when costs are
    edited. The statement never carries balances from earlier periods.

    Args:
        sales: Sales of any status.
        entries: Ledger entries.
        products: Products by id, or an iterable of products.
        branch_filter: Branch selection.
        date_range: Optional inclusive date range.
        logger: Logger used for warnings.

    Returns:
        IncomeStatement: Revenue, costs, grouped expenses and net result.
    """
    date_range = date_range or DateRange.all_time()
    costs = _cost_map(products)

    gross_revenue = ZERO
    cogs = ZERO
    missing_products: set[str] = set()
    for sale, sale_date, total in iter_valid_sales(sales, logger):
        if sale.status is not SaleStatus.COMPLETED:
            continue
        if not branch_filter.matches(sale.branch):
            continue
        if not date_range.contains(sale_date):
            continue
        gross_revenue += total
        for item in sale.items:
            cost = costs.get(item.product_id)
            if cost is None:
                if item.product_id not in missing_products:
                    missing_products.add(item.product_id)
                    logger.warning(
                        f"Missing product {item.product_id} in sale {sale.id}; "
                        "counting zero cost"
                    )
                continue
            cogs += coerce_decimal(item.quantity) * cost

    grouped: dict[str, dict[str, Decimal]] = {}
    total_expenses = ZERO
    for entry, entry_date, amount in iter_valid_entries(entries, logger):
        if entry.kind is not EntryKind.EXPENSE:
            continue
        if not branch_filter.matches(entry.branch):
            continue
        if not date_range.contains(entry_date):
            continue
        category = normalize_category(entry.category)
        description = normalize_description(entry.description)
        lines = grouped.setdefault(category, {})
        lines[description] = lines.get(description, ZERO) + amount
        total_expenses += amount

    gross_profit = gross_revenue - cogs
    net_profit = gross_profit - total_expenses
    margin_pct = (
        net_profit / gross_revenue * HUNDRED if gross_revenue > 0 else ZERO
    )
    return IncomeStatement(
        gross_revenue=gross_revenue,
        cogs=cogs,
        gross_profit=gross_profit,
        expenses_by_category=_sorted_categories(grouped),
        total_expenses=total_expenses,
        net_profit=net_profit,
        margin_pct=margin_pct,
    )


def _cost_map(
    products: Iterable[Product] | Mapping[str, Product],
) -> dict[str, Decimal]:
    values = products.values() if isinstance(products, Mapping) else products
    return {product.id: coerce_decimal(product.cost) for product in values}


def _sorted_categories(
    grouped: dict[str, dict[str, Decimal]],
) -> list[ExpenseCategoryTotal]:
    categories = []
    for category, lines in grouped.items():
        expense_lines = [
            ExpenseLine(description=description, amount=amount)
            for description, amount in sorted(
                lines.items(),
                key=lambda item: (-item[1], item[0]),
            )
        ]
        categories.append(
            ExpenseCategoryTotal(
                category=category,
                total=sum((line.amount for line in expense_lines), ZERO),
                lines=expense_lines,
            )
        )
    return sorted(categories, key=lambda item: (-item.total, item.category))


__all__ = ["build_income_statement"]
