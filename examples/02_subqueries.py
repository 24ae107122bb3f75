"""Subquery examples: scalar select, FROM, JOIN, EXISTS and IN."""

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

from fluent_sql import Database, Sql


def seed(db: Database) -> None:
    db.execute("CREATE TABLE customers (id INTEGER PRIMARY KEY, name TEXT, active INTEGER)")
    db.execute("CREATE TABLE orders (id INTEGER PRIMARY KEY, customer_id INTEGER, status TEXT)")
    with db.transaction():
        db.execute(
            Sql.insert_into("customers").columns("id", "name", "active")
            .values(1, "Alice", 1)
            .values(2, "Bob", 1)
            .values(3, "Carol", 0)
        )
        db.execute(
            Sql.insert_into("orders").columns("id", "customer_id", "status")
            .values(1, 1, "COMPLETED")
            .values(2, 1, "COMPLETED")
            .values(3, 2, "ACTIVE")
        )


def main() -> None:
    db = Database(sqlite3.connect(":memory:"))

    try:
        seed(db)

        # Scalar subquery in the select list.
        order_count = Sql.select("COUNT(*)").from_("orders").where("customer_id = c.id")
        with_counts = (
            Sql.select("c.id", "c.name")
            .sub_select("order_count", order_count)
            .from_("customers", "c")
            .where("c.active = :active", True)
            .order_by("c.name")
        )
        print(with_counts.render())
        print("Customers with order count:", db.fetchall(with_counts))

        # Subquery as row source; its parameters travel with it.
        per_customer = (
            Sql.select("customer_id")
            .field("COUNT(*)", "order_count")
            .from_("orders")
            .where("status = :status", "COMPLETED")
            .group_by("customer_id")
            .having("COUNT(*) >= :minOrders", 2)
        )
        top = (
            Sql.select("c.name", "co.order_count")
            .from_subquery(per_customer, "co")
            .left_join("customers c", "co.customer_id = c.id")
            .order_by_desc("co.order_count")
            .limit(10)
        )
        print(top.render())
        print(top.parameters())
        print("Top customers:", db.fetchall(top))

        # EXISTS and IN predicates.
        active_orders = (
            Sql.select("1")
            .from_("orders o")
            .where("o.customer_id = c.id")
            .and_("o.status = :orderStatus", "ACTIVE")
        )
        with_active = Sql.select("c.name").from_("customers", "c").where_exists(active_orders)
        print("With active orders:", db.fetchall(with_active))

        buyers = Sql.select("DISTINCT customer_id").from_("orders")
        never_ordered = Sql.select("name").from_("customers").where_not_in("id", buyers)
        print("Never ordered:", db.fetchall(never_ordered))
    finally:
        db.close()


if __name__ == "__main__":
    main()
