"""Select examples: fields, joins, where/having, grouping, ordering, paging."""

from __future__ import annotations

import sqlite3
import sys
from pathlib import Path

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "fluent_sql").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fluent_sql import Database, OrderDirection, Sql


def seed(db: Database) -> None:
    db.execute("CREATE TABLE customers (id INTEGER PRIMARY KEY, name TEXT, email TEXT)")
    db.execute(
        "CREATE TABLE orders (id INTEGER PRIMARY KEY, customer_id INTEGER,"
        " order_date TEXT, status TEXT, total REAL)"
    )
    with db.transaction():
        db.execute(
            Sql.insert_into("customers")
            .columns("id", "name", "email")
            .values(1, "Alice", "alice@example.com")
            .values(2, "Bob", "bob@example.com")
            .values(3, "Carol", "carol@example.com")
        )
        db.execute(
            Sql.insert_into("orders").values_many(
                [
                    {"id": 1, "customer_id": 1, "order_date": "2024-01-03", "status": "COMPLETED", "total": 40.0},
                    {"id": 2, "customer_id": 1, "order_date": "2024-02-11", "status": "COMPLETED", "total": 12.5},
                    {"id": 3, "customer_id": 2, "order_date": "2024-02-20", "status": "PENDING", "total": 99.0},
                    {"id": 4, "customer_id": 3, "order_date": "2024-03-01", "status": "COMPLETED", "total": 7.0},
                ]
            )
        )


def main() -> None:
    db = Database(sqlite3.connect(":memory:"))

    try:
        seed(db)

        # Plain filter with a bound value; the parameter is named after `:status`.
        completed = (
            Sql.select("id", "customer_id", "total")
            .from_("orders")
            .where("status = :status", "COMPLETED")
            .order_by("order_date", OrderDirection.DESC)
        )
        print(completed.render())
        print(completed.parameters())
        print("Completed orders:", db.fetchall(completed))

        # Aliased fields, join, grouping, having and paging.
        report = (
            Sql.select()
            .field("c.name", "customer")
            .field("COUNT(o.id)", "orders")
            .field("SUM(o.total)", "spent")
            .from_("customers", "c")
            .left_join("orders o", "o.customer_id = c.id")
            .where("o.order_date >= :dateFrom", "2024-01-01")
            .and_("o.order_date <= :dateTo", "2024-12-31")
            .group_by("c.name")
            .having("SUM(o.total) > :minSpent", 10)
            .order_by_desc("spent")
            .limit(10, 0)
        )
        print(report.render())
        print("Spending report:", db.fetchall(report))

        # Mixed connectors are flat; group OR branches inside one expression.
        flat = Sql.select("id").from_("orders").where("status = 'PENDING'").or_("total < :cap", 10)
        grouped = Sql.select("id").from_("orders").where("(status = 'PENDING' OR total < :cap)", 10)
        print(flat.render())
        print(grouped.render())
    finally:
        db.close()


if __name__ == "__main__":
    main()
