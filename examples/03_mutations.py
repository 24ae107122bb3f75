"""Mutation examples: multi-row insert, update and delete."""

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

from fluent_sql import ArgumentCountError, Database, Sql, StatementStateError


def main() -> None:
    db = Database(sqlite3.connect(":memory:"))

    try:
        db.execute("CREATE TABLE products (id INTEGER PRIMARY KEY, name TEXT, price REAL)")

        insert = (
            Sql.insert_into("products")
            .columns("name", "price")
            .values("Pen", 1.5)
            .values("Notebook", 4.0)
            .values("Lamp", 30.0)
        )
        # Later rows get `_<index>` suffixes: :name_1, :price_1, ...
        print(insert.render())
        print(insert.parameters())
        with db.transaction():
            db.execute(insert)

        update = Sql.update("products").set("price", 150.0).where("name = :name_filter", "Lamp")
        print(update.render())
        print(update.parameters())
        with db.transaction():
            db.execute(update)

        delete = Sql.delete_from("products").where("price < :maxPrice", 2)
        print(delete.render())
        with db.transaction():
            db.execute(delete)

        print("Products:", db.fetchall(Sql.select("name", "price").from_("products").order_by("id")))

        try:
            Sql.insert_into("products").columns("name", "price").values("Only name")
        except ArgumentCountError as exc:
            print("Rejected row:", exc)

        try:
            Sql.insert_into("products").render()
        except StatementStateError as exc:
            print("Rejected insert:", exc)
    finally:
        db.close()


if __name__ == "__main__":
    main()
