from __future__ import annotations

import random
import unittest

from fluent_sql import Sql
from fluent_sql.core.clauses import JoinKind, OrderDirection
from fluent_sql.core.parameters import ParamNameGenerator
from fluent_sql.core.select import SelectBuilder


class SelectRenderingTests(unittest.TestCase):
    def test_no_fields_renders_star(self) -> None:
        self.assertEqual(Sql.select().from_("users").render(), "SELECT * FROM users")
        self.assertEqual(Sql.select_distinct().from_("users").render(), "SELECT DISTINCT * FROM users")

    def test_without_from_omits_clause(self) -> None:
        self.assertEqual(Sql.select("1").render(), "SELECT 1")

    def test_simple_where_order(self) -> None:
        query = (
            Sql.select("id", "name")
            .from_("users")
            .where("active = :active", True)
            .order_by("name")
        )
        self.assertEqual(
            query.render(),
            "SELECT id, name FROM users WHERE active = :active ORDER BY name ASC",
        )
        self.assertEqual(query.parameters(), {"active": True})

    def test_aliased_field_and_left_join(self) -> None:
        query = (
            Sql.select()
            .field("u.id", "userId")
            .from_("users", "u")
            .left_join("profiles p", "u.id = p.user_id")
        )
        self.assertEqual(
            query.render(),
            "SELECT u.id AS userId FROM users u LEFT JOIN profiles p ON u.id = p.user_id",
        )

    def test_fields_accepts_pairs(self) -> None:
        query = Sql.select("id", ("COUNT(*)", "total")).fields(("name", None)).from_("t")
        self.assertEqual(query.render(), "SELECT id, COUNT(*) AS total, name FROM t")

    def test_distinct_flag_independent_of_fields(self) -> None:
        query = Sql.select().distinct().field("customer_id").from_("orders")
        self.assertEqual(query.render(), "SELECT DISTINCT customer_id FROM orders")

    def test_second_from_replaces_first(self) -> None:
        query = Sql.select().from_("users", "u").from_("accounts")
        self.assertEqual(query.render(), "SELECT * FROM accounts")

    def test_all_join_kinds_in_declaration_order(self) -> None:
        query = (
            Sql.select()
            .from_("a")
            .join("b", "a.id = b.a_id")
            .right_join("c", "a.id = c.a_id", "cc")
            .full_join("d", "a.id = d.a_id")
            .inner_join("e", "a.id = e.a_id")
            .join("f", "a.id = f.a_id", kind="left")
        )
        self.assertEqual(
            query.render(),
            "SELECT * FROM a"
            " INNER JOIN b ON a.id = b.a_id"
            " RIGHT JOIN c cc ON a.id = c.a_id"
            " FULL OUTER JOIN d ON a.id = d.a_id"
            " INNER JOIN e ON a.id = e.a_id"
            " LEFT JOIN f ON a.id = f.a_id",
        )

    def test_full_clause_order(self) -> None:
        query = (
            SelectBuilder()
            .limit(50)
            .order_by_desc("totalRevenue")
            .having("SUM(oi.quantity) > :minQuantity", 10)
            .group_by("p.id", "p.name")
            .where("o.status = :status", "COMPLETED")
            .left_join("orders o", "oi.order_id = o.id")
            .from_("products", "p")
            .field("p.id", "productId")
            .field("SUM(oi.quantity * oi.price)", "totalRevenue")
            .offset(100)
        )
        self.assertEqual(
            query.render(),
            "SELECT p.id AS productId, SUM(oi.quantity * oi.price) AS totalRevenue"
            " FROM products p"
            " LEFT JOIN orders o ON oi.order_id = o.id"
            " WHERE o.status = :status"
            " GROUP BY p.id, p.name"
            " HAVING SUM(oi.quantity) > :minQuantity"
            " ORDER BY totalRevenue DESC"
            " LIMIT 50 OFFSET 100",
        )
        self.assertEqual(query.parameters(), {"status": "COMPLETED", "minQuantity": 10})

    def test_where_connectors(self) -> None:
        query = (
            Sql.select()
            .from_("t")
            .or_("a = 1")
            .and_("b = 2")
            .or_("c = :c", 3)
            .where("d = 4")
        )
        self.assertEqual(
            query.render(),
            "SELECT * FROM t WHERE a = 1 AND b = 2 OR c = :c AND d = 4",
        )
        self.assertEqual(query.parameters(), {"c": 3})

    def test_mixed_connectors_are_not_parenthesized(self) -> None:
        query = Sql.select().from_("t").where("a = 1").or_("b = 2").and_("c = 3")
        self.assertNotIn("(", query.render())

    def test_having_connectors_and_values(self) -> None:
        query = (
            Sql.select("category")
            .from_("products")
            .group_by("category")
            .having("COUNT(*) > :min", 2)
            .having_or("SUM(price) > :revenue", 1000)
            .having_and("AVG(price) < 50")
        )
        self.assertEqual(
            query.render(),
            "SELECT category FROM products GROUP BY category"
            " HAVING COUNT(*) > :min OR SUM(price) > :revenue AND AVG(price) < 50",
        )
        self.assertEqual(query.parameters(), {"min": 2, "revenue": 1000})

    def test_group_by_keeps_duplicates(self) -> None:
        query = Sql.select().from_("t").group_by("a", "b").group_by("a")
        self.assertEqual(query.render(), "SELECT * FROM t GROUP BY a, b, a")

    def test_order_by_terms_append(self) -> None:
        query = (
            Sql.select()
            .from_("p")
            .order_by("category")
            .order_by("price", OrderDirection.DESC)
            .order_by("name", "desc")
            .order_by_asc("id")
        )
        self.assertEqual(
            query.render(),
            "SELECT * FROM p ORDER BY category ASC, price DESC, name DESC, id ASC",
        )

    def test_limit_and_offset(self) -> None:
        self.assertEqual(Sql.select().from_("t").limit(10).render(), "SELECT * FROM t LIMIT 10")
        self.assertEqual(Sql.select().from_("t").offset(5).render(), "SELECT * FROM t OFFSET 5")
        self.assertEqual(
            Sql.select().from_("t").limit(10, 20).render(),
            "SELECT * FROM t LIMIT 10 OFFSET 20",
        )
        self.assertEqual(Sql.select().from_("t").limit(0).render(), "SELECT * FROM t LIMIT 0")

    def test_limit_rejects_invalid_values(self) -> None:
        with self.assertRaises(ValueError):
            Sql.select().limit(-1)
        with self.assertRaises(ValueError):
            Sql.select().offset(-1)
        with self.assertRaises(ValueError):
            Sql.select().limit(1, -5)
        with self.assertRaises(ValueError):
            Sql.select().limit(True)  # type: ignore[arg-type]

    def test_unknown_join_kind_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            Sql.select().join("t", "1 = 1", kind="cross")

    def test_render_is_idempotent_and_str(self) -> None:
        query = Sql.select("id").from_("t").where("x = :x", 1).limit(3)
        self.assertEqual(query.render(), query.render())
        self.assertEqual(str(query), query.render())
        self.assertEqual(query.parameters(), {"x": 1})

    def test_render_reflects_later_mutation(self) -> None:
        query = Sql.select().from_("t")
        before = query.render()
        query.where("a = 1")
        self.assertEqual(before, "SELECT * FROM t")
        self.assertEqual(query.render(), "SELECT * FROM t WHERE a = 1")

    def test_fluent_methods_return_same_instance(self) -> None:
        query = Sql.select()
        self.assertIs(query.field("a"), query)
        self.assertIs(query.from_("t"), query)
        self.assertIs(query.where("a = 1"), query)
        self.assertIs(query.param("p", 1), query)
        self.assertIs(query.params({"q": 2}), query)


class SelectParameterTests(unittest.TestCase):
    def test_named_value_derives_name(self) -> None:
        query = Sql.select().from_("users").where("status = :status", "ACTIVE")
        self.assertEqual(query.parameters(), {"status": "ACTIVE"})

    def test_none_is_a_bound_value(self) -> None:
        query = Sql.select().from_("t").where("parent_id IS :parent", None)
        self.assertEqual(query.parameters(), {"parent": None})

    def test_param_overwrites_previous_value(self) -> None:
        query = (
            Sql.select()
            .from_("t")
            .where("a = :a", 1)
            .param("a", 2)
            .params({"a": 3, "b": 4})
        )
        self.assertEqual(query.parameters(), {"a": 3, "b": 4})

    def test_parameters_returns_defensive_copy(self) -> None:
        query = Sql.select().from_("t").where("a = :a", 1)
        params = query.parameters()
        params["a"] = 100
        params["injected"] = True
        self.assertEqual(query.parameters(), {"a": 1})

    def test_fallback_names_are_sequential(self) -> None:
        query = Sql.select().from_("t")
        with self.assertLogs("fluent_sql.core.parameters", level="WARNING"):
            query.where("a IS NOT NULL", 1).or_("b IS NULL", 2)
        self.assertEqual(query.parameters(), {"param_1": 1, "param_2": 2})

    def test_custom_name_generator(self) -> None:
        query = SelectBuilder(name_generator=ParamNameGenerator(prefix="p"))
        with self.assertLogs("fluent_sql.core.parameters", level="WARNING"):
            query.from_("t").having("COUNT(*) > 1", 5)
        self.assertEqual(query.parameters(), {"p_1": 5})

    def test_compile_bundles_sql_and_params(self) -> None:
        compiled = Sql.select("id").from_("t").where("id = :id", 7).compile()
        self.assertEqual(compiled.sql, "SELECT id FROM t WHERE id = :id")
        self.assertEqual(compiled.params, {"id": 7})


class SubqueryTests(unittest.TestCase):
    def test_sub_select_in_select_list(self) -> None:
        order_count = Sql.select("COUNT(*)").from_("orders").where("customer_id = c.id")
        query = (
            Sql.select("c.id", "c.name")
            .sub_select("order_count", order_count)
            .from_("customers", "c")
            .where("c.active = :active", True)
        )
        self.assertEqual(
            query.render(),
            "SELECT c.id, c.name,"
            " (SELECT COUNT(*) FROM orders WHERE customer_id = c.id) AS order_count"
            " FROM customers c WHERE c.active = :active",
        )
        self.assertEqual(query.parameters(), {"active": True})

    def test_from_subquery_merges_parameters(self) -> None:
        inner = (
            Sql.select("customer_id")
            .field("COUNT(*)", "order_count")
            .from_("orders")
            .where("status = :status", "COMPLETED")
            .group_by("customer_id")
            .having("COUNT(*) >= :minOrders", 5)
        )
        query = (
            Sql.select("c.name", "co.order_count")
            .from_subquery(inner, "co")
            .left_join("customers c", "co.customer_id = c.id")
            .order_by_desc("co.order_count")
            .limit(10)
        )
        self.assertEqual(
            query.render(),
            "SELECT c.name, co.order_count FROM (SELECT customer_id, COUNT(*) AS order_count"
            " FROM orders WHERE status = :status GROUP BY customer_id"
            " HAVING COUNT(*) >= :minOrders) co"
            " LEFT JOIN customers c ON co.customer_id = c.id"
            " ORDER BY co.order_count DESC LIMIT 10",
        )
        self.assertEqual(query.parameters(), {"status": "COMPLETED", "minOrders": 5})

    def test_join_subquery(self) -> None:
        totals = (
            Sql.select("user_id")
            .field("SUM(amount)", "total")
            .from_("payments")
            .where("paid_at >= :since", "2024-01-01")
            .group_by("user_id")
        )
        query = (
            Sql.select("u.name", "t.total")
            .from_("users", "u")
            .left_join_subquery(totals, "t", "t.user_id = u.id")
            .join_subquery(Sql.select("id").from_("vips"), "v", "v.id = u.id")
        )
        self.assertEqual(
            query.render(),
            "SELECT u.name, t.total FROM users u"
            " LEFT JOIN (SELECT user_id, SUM(amount) AS total FROM payments"
            " WHERE paid_at >= :since GROUP BY user_id) t ON t.user_id = u.id"
            " INNER JOIN (SELECT id FROM vips) v ON v.id = u.id",
        )
        self.assertEqual(query.parameters(), {"since": "2024-01-01"})

    def test_right_and_full_join_subquery(self) -> None:
        sub = Sql.select("id").from_("x")
        query = (
            Sql.select()
            .from_("a")
            .right_join_subquery(sub, "r", "r.id = a.id")
            .full_join_subquery(sub, "f", "f.id = a.id")
            .join_subquery(sub, None, "1 = 1", kind=JoinKind.LEFT)
        )
        self.assertEqual(
            query.render(),
            "SELECT * FROM a"
            " RIGHT JOIN (SELECT id FROM x) r ON r.id = a.id"
            " FULL OUTER JOIN (SELECT id FROM x) f ON f.id = a.id"
            " LEFT JOIN (SELECT id FROM x) ON 1 = 1",
        )

    def test_exists_and_in_predicates(self) -> None:
        active_orders = (
            Sql.select("1")
            .from_("order_items oi")
            .where("oi.product_id = p.id")
            .and_("oi.status = :orderStatus", "ACTIVE")
        )
        recent = Sql.select("customer_id").from_("orders").where("created >= :since", "2024-06-01")
        banned = Sql.select("user_id").from_("bans")
        archived = Sql.select("1").from_("archive a").where("a.id = p.id")

        query = (
            Sql.select("p.id")
            .from_("products", "p")
            .where_exists(active_orders)
            .where_in("p.owner_id", recent)
            .where_not_in("p.owner_id", banned)
            .or_("p.featured = :featured", True)
            .where_not_exists(archived)
        )
        self.assertEqual(
            query.render(),
            "SELECT p.id FROM products p"
            " WHERE EXISTS (SELECT 1 FROM order_items oi WHERE oi.product_id = p.id"
            " AND oi.status = :orderStatus)"
            " AND p.owner_id IN (SELECT customer_id FROM orders WHERE created >= :since)"
            " AND p.owner_id NOT IN (SELECT user_id FROM bans)"
            " OR p.featured = :featured"
            " AND NOT EXISTS (SELECT 1 FROM archive a WHERE a.id = p.id)",
        )
        self.assertEqual(
            query.parameters(),
            {"orderStatus": "ACTIVE", "since": "2024-06-01", "featured": True},
        )

    def test_nested_parameters_from_inner_and_outer(self) -> None:
        inner = Sql.select("id").from_("a").where("x = :p1", 1)
        outer = Sql.select().from_subquery(inner, "s").where("y = :p2", 2)
        self.assertEqual(outer.parameters(), {"p1": 1, "p2": 2})

    def test_deeply_nested_parameters(self) -> None:
        level3 = Sql.select("id").from_("c").where("c.v = :v3", 3)
        level2 = Sql.select("id").from_("b").where_in("b.c_id", level3).where("b.v = :v2", 2)
        level1 = Sql.select().from_("a").where_exists(level2).where("a.v = :v1", 1)
        self.assertEqual(level1.parameters(), {"v3": 3, "v2": 2, "v1": 1})
        self.assertEqual(level1.render().count("("), 2)

    def test_colliding_names_follow_last_write(self) -> None:
        inner = Sql.select("id").from_("a").where("status = :status", "inner")
        outer = Sql.select().from_("b").where("status = :status", "outer").where_in("id", inner)
        self.assertEqual(outer.parameters(), {"status": "inner"})

    def test_subquery_is_captured_at_call_time(self) -> None:
        inner = Sql.select("id").from_("a")
        outer = Sql.select().from_subquery(inner, "s")
        inner.where("late = :late", 1)
        self.assertEqual(outer.render(), "SELECT * FROM (SELECT id FROM a) s")
        self.assertEqual(outer.parameters(), {})

    def test_outer_parameters_do_not_leak_into_subquery(self) -> None:
        inner = Sql.select("id").from_("a").where("x = :x", 1)
        outer = Sql.select().from_subquery(inner, "s").where("y = :y", 2)
        self.assertEqual(outer.parameters(), {"x": 1, "y": 2})
        self.assertEqual(inner.parameters(), {"x": 1})


class ConnectorPropertyTests(unittest.TestCase):
    def test_property_connectors_in_where_clause(self) -> None:
        rng = random.Random(20261019)
        for _ in range(200):
            query = Sql.select().from_("t")
            expected = []
            for index in range(rng.randint(1, 6)):
                expression = f"c{index} = :v{index}"
                if rng.random() < 0.5:
                    query.or_(expression, index)
                    connector = "OR"
                else:
                    query.where(expression, index)
                    connector = "AND"
                if expected:
                    expected.append(connector)
                expected.append(expression)

            sql = query.render()
            where_sql = sql.split(" WHERE ", 1)[1]
            self.assertEqual(where_sql, " ".join(expected))
            self.assertFalse(where_sql.startswith(("AND", "OR")))
            self.assertEqual(len(query.parameters()), (len(expected) + 1) // 2)


if __name__ == "__main__":
    unittest.main()
