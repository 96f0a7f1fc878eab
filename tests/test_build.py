"""Unit tests for the statement builder and its sub-builders."""

from __future__ import annotations

import pytest

from bindql.build.builder import StatementBuilder
from bindql.build.clause_builders import ClauseBuilder
from bindql.build.context import BindContext, BuildContext, bind_name
from bindql.build.data_binder import DataBinder
from bindql.build.mysql import MySQLDialect
from bindql.build.options import Raw, SelectOptions
from bindql.build.predicate import Condition, PredicateBuilder
from bindql.errors import EmptyPayloadError, MissingPredicateError, OptionShapeError

CTX = BuildContext(dialect=MySQLDialect())


def _pred() -> tuple[PredicateBuilder, BindContext]:
    binds = BindContext()
    return PredicateBuilder(CTX, binds), binds


# ---------------------------------------------------------------------------
# Bind context
# ---------------------------------------------------------------------------


class TestBindContext:
    def test_duplicate_names_get_suffix(self):
        binds = BindContext()
        assert binds.add_value("d_a", 1) == "d_a"
        assert binds.add_value("d_a", 2) == "d_a_1"
        assert binds.params == {"d_a": 1, "d_a_1": 2}

    def test_numbered_names_are_monotonic(self):
        binds = BindContext()
        assert binds.add_numbered("w_id", 1) == "w_id_0"
        assert binds.add_numbered("w_id", 2) == "w_id_1"
        assert binds.add_numbered("w_name", "x") == "w_name_2"

    def test_bind_name_replaces_unsafe_characters(self):
        assert bind_name("users.id") == "users_id"
        assert bind_name("`order date`") == "order_date"


# ---------------------------------------------------------------------------
# Data binder
# ---------------------------------------------------------------------------


class TestDataBinder:
    def test_one_placeholder_per_column(self):
        binds = BindContext()
        columns = DataBinder(CTX, binds).bind({"name": "ann", "users.age": 30})
        assert columns == {":d_name": "name", ":d_users_age": "`users`.`age`"}
        assert binds.params == {"d_name": "ann", "d_users_age": 30}

    def test_empty_input_yields_empty_output(self):
        binds = BindContext()
        assert DataBinder(CTX, binds).bind({}) == {}
        assert binds.params == {}

    def test_colliding_bind_names_stay_unique(self):
        binds = BindContext()
        columns = DataBinder(CTX, binds).bind({"a.b": 1, "a_b": 2})
        assert list(columns) == [":d_a_b", ":d_a_b_1"]
        assert binds.params == {"d_a_b": 1, "d_a_b_1": 2}


# ---------------------------------------------------------------------------
# Predicate builder
# ---------------------------------------------------------------------------


class TestPredicateBuilder:
    def test_two_and_three_element_forms_match(self):
        two, _ = _pred()
        three, _ = _pred()
        assert two.build([("id", 5)]) == three.build([("id", "=", 5)])

    def test_tokens_and_values(self):
        pred, binds = _pred()
        tokens = pred.build([("id", ">", 3), ("name", "LIKE", "a%", "or")])
        assert tokens == ["WHERE", "id", ">", ":w_id_0", "OR", "name", "LIKE", ":w_name_1"]
        assert binds.params == {"w_id_0": 3, "w_name_1": "a%"}

    def test_same_column_twice_gets_distinct_placeholders(self):
        pred, binds = _pred()
        sql = pred.build_clause([("age", ">", 18), ("age", "<", 65, "AND")])
        assert sql == "WHERE age > :w_age_0 AND age < :w_age_1"
        assert binds.params == {"w_age_0": 18, "w_age_1": 65}

    def test_unknown_connector_is_dropped(self):
        pred, _ = _pred()
        sql = pred.build_clause([("a", 1), ("b", "=", 2, "XOR")])
        assert sql == "WHERE a = :w_a_0 b = :w_b_1"

    def test_not_connector(self):
        pred, _ = _pred()
        sql = pred.build_clause([("a", 1), ("b", "=", 2, "not")])
        assert sql == "WHERE a = :w_a_0 NOT b = :w_b_1"

    def test_qualified_column_is_escaped(self):
        pred, binds = _pred()
        assert pred.build_clause([("users.id", 1)]) == "WHERE `users`.`id` = :w_users_id_0"
        assert binds.params == {"w_users_id_0": 1}

    def test_values_never_inlined(self):
        pred, _ = _pred()
        sql = pred.build_clause([("name", "'; DROP TABLE users; --")])
        assert "DROP" not in sql

    def test_placeholder_count_matches_condition_count(self):
        pred, binds = _pred()
        conditions = [("a", 1), ("b", 2, ), ("c", "<>", 3, "and"), ("a", "=", 4, "or")]
        tokens = pred.build(conditions)
        assert sum(t.startswith(":w_") for t in tokens) == len(conditions)
        assert sorted(binds.params.values()) == [1, 2, 3, 4]

    def test_empty_conditions_produce_no_tokens(self):
        pred, _ = _pred()
        assert pred.build([]) == []

    @pytest.mark.parametrize("bad", [("only",), ("a", "=", 1, "AND", "x"), "a = 1", 42])
    def test_bad_condition_shape_raises(self, bad):
        pred, _ = _pred()
        with pytest.raises(OptionShapeError):
            pred.build([bad])

    def test_condition_objects_accepted(self):
        pred, binds = _pred()
        assert pred.build_clause([Condition("x", "!=", None)]) == "WHERE x != :w_x_0"
        assert binds.params == {"w_x_0": None}


# ---------------------------------------------------------------------------
# Select options
# ---------------------------------------------------------------------------


class TestClauseBuilder:
    def test_base_cannot_be_instantiated(self):
        with pytest.raises(TypeError):
            ClauseBuilder(CTX)


class TestSelectOptions:
    def test_strings_become_raw(self):
        opts = SelectOptions.coerce({"where": "id > 3", "order": "id ASC"})
        assert opts.where == Raw("id > 3")
        assert opts.order == Raw("id ASC")

    def test_numeric_limit_string_is_a_count(self):
        assert SelectOptions.coerce({"limit": "10"}).limit == 10

    def test_blank_string_is_absent(self):
        assert SelectOptions.coerce({"field": "  "}).field is None

    def test_unknown_key_raises(self):
        with pytest.raises(OptionShapeError):
            SelectOptions.coerce({"having": "x > 1"})


# ---------------------------------------------------------------------------
# Statement builder
# ---------------------------------------------------------------------------


class TestInsert:
    def test_insert_sql_and_params(self, mysql: StatementBuilder):
        r = mysql.insert("users", {"name": "ann", "age": 30})
        assert r.sql == "INSERT INTO users (name, age) VALUES(:d_name, :d_age)"
        assert r.params == {"d_name": "ann", "d_age": 30}
        assert r.dialect == "mysql"

    def test_insert_qualified_table(self, mysql: StatementBuilder):
        r = mysql.insert("shop.users", {"name": "ann"})
        assert r.sql == "INSERT INTO `shop`.`users` (name) VALUES(:d_name)"

    def test_empty_insert_raises(self, mysql: StatementBuilder):
        with pytest.raises(EmptyPayloadError) as exc_info:
            mysql.insert("users", {})
        assert exc_info.value.operation == "insert"


class TestUpdate:
    def test_update_with_where(self, mysql: StatementBuilder):
        r = mysql.update("users", {"name": "bob", "age": 31}, [("id", 1)])
        assert r.sql == "UPDATE users SET name = :d_name, age = :d_age WHERE id = :w_id_0"
        assert r.params == {"d_name": "bob", "d_age": 31, "w_id_0": 1}

    def test_data_and_where_on_same_column_do_not_collide(self, mysql: StatementBuilder):
        r = mysql.update("users", {"status": "active"}, [("status", "pending")])
        assert r.params == {"d_status": "active", "w_status_0": "pending"}

    def test_update_without_where_has_no_dangling_keyword(self, mysql: StatementBuilder):
        r = mysql.update("users", {"active": 0})
        assert r.sql == "UPDATE users SET active = :d_active"

    def test_empty_update_raises(self, mysql: StatementBuilder):
        with pytest.raises(EmptyPayloadError):
            mysql.update("users", {}, [("id", 1)])


class TestSelect:
    def test_no_options(self, mysql: StatementBuilder):
        r = mysql.select("users")
        assert r.sql == "SELECT * FROM users"
        assert r.params == {}

    def test_empty_field_list_selects_star(self, mysql: StatementBuilder):
        assert mysql.select("users", {"field": []}).sql == "SELECT * FROM users"

    def test_empty_structured_options_emit_nothing(self, mysql: StatementBuilder):
        r = mysql.select("users", {"limit": [], "order": {}, "join": {}, "group": [], "where": []})
        assert r.sql == "SELECT * FROM users"
        assert r.params == {}

    def test_field_list(self, mysql: StatementBuilder):
        r = mysql.select("users", {"field": ["id", "users.name"]})
        assert r.sql == "SELECT id, `users`.`name` FROM users"

    def test_raw_field(self, mysql: StatementBuilder):
        r = mysql.select("users", {"field": "COUNT(*) AS n"})
        assert r.sql == "SELECT COUNT(*) AS n FROM users"

    def test_join_defaults(self, mysql: StatementBuilder):
        r = mysql.select("users", {"join": {"orders": ["users.id", "orders.user_id"]}})
        assert r.sql == "SELECT * FROM users INNER JOIN orders ON users.id = orders.user_id"

    def test_join_type_and_operator(self, mysql: StatementBuilder):
        r = mysql.select(
            "users",
            {
                "join": {
                    "orders": ["users.id", "=", "orders.user_id", "left"],
                    "shop.items": ["orders.item_id", "=", "items.id", "CROSS"],
                }
            },
        )
        assert r.sql == (
            "SELECT * FROM users "
            "LEFT JOIN orders ON users.id = orders.user_id "
            "INNER JOIN `shop`.`items` ON orders.item_id = items.id"
        )

    def test_join_spec_values_need_not_be_strings(self, mysql: StatementBuilder):
        r = mysql.select("users", {"join": {"t": ["a.n", ">", 5]}})
        assert r.sql == "SELECT * FROM users INNER JOIN t ON a.n > 5"

    def test_raw_join(self, mysql: StatementBuilder):
        r = mysql.select("u", {"join": "orders o ON o.uid = u.id"})
        assert r.sql == "SELECT * FROM u INNER JOIN orders o ON o.uid = u.id"
        r = mysql.select("u", {"join": "left join orders o ON o.uid = u.id"})
        assert r.sql == "SELECT * FROM u left join orders o ON o.uid = u.id"

    def test_bad_join_shape_raises(self, mysql: StatementBuilder):
        with pytest.raises(OptionShapeError):
            mysql.select("u", {"join": {"orders": ["only_left"]}})

    def test_raw_where(self, mysql: StatementBuilder):
        r = mysql.select("users", {"where": "id IN (1, 2)"})
        assert r.sql == "SELECT * FROM users WHERE id IN (1, 2)"
        assert r.params == {}

    def test_order_directions(self, mysql: StatementBuilder):
        r = mysql.select("users", {"order": {"name": "asc", "age": "sideways", "id": None}})
        assert r.sql == "SELECT * FROM users ORDER BY name ASC, age DESC, id DESC"

    def test_group(self, mysql: StatementBuilder):
        r = mysql.select("users", {"field": "age, COUNT(*)", "group": ["age"]})
        assert r.sql == "SELECT age, COUNT(*) FROM users GROUP BY age"

    def test_raw_order_and_group(self, mysql: StatementBuilder):
        r = mysql.select("users", {"order": "age DESC", "group": "age"})
        assert r.sql == "SELECT * FROM users GROUP BY age ORDER BY age DESC"

    def test_limit_forms_are_equivalent(self, mysql: StatementBuilder):
        single = mysql.select("users", {"limit": 5})
        pair = mysql.select("users", {"limit": [0, 5]})
        assert single.sql == pair.sql == "SELECT * FROM users LIMIT :l_start, :l_offset"
        assert single.params == pair.params == {"l_start": 0, "l_offset": 5}

    def test_limit_pair_coerced_to_int(self, mysql: StatementBuilder):
        r = mysql.select("users", {"limit": ["10", "20"]})
        assert r.params == {"l_start": 10, "l_offset": 20}

    def test_raw_limit(self, mysql: StatementBuilder):
        assert mysql.select("users", {"limit": "5 OFFSET 10"}).sql == "SELECT * FROM users LIMIT 5 OFFSET 10"

    def test_bad_limit_shape_raises(self, mysql: StatementBuilder):
        with pytest.raises(OptionShapeError):
            mysql.select("users", {"limit": [1, 2, 3]})

    def test_full_clause_order(self, mysql: StatementBuilder):
        r = mysql.select(
            "users",
            SelectOptions(
                field=["users.id", "name"],
                join={"orders": ["users.id", "orders.user_id"]},
                where=[("age", ">", 18), ("name", "=", "ann", "or")],
                order={"name": "ASC"},
                group=["users.id"],
                limit=[20, 10],
            ),
        )
        assert r.sql == (
            "SELECT `users`.`id`, name FROM users "
            "INNER JOIN orders ON users.id = orders.user_id "
            "WHERE age > :w_age_0 OR name = :w_name_1 "
            "GROUP BY `users`.`id` "
            "ORDER BY name ASC "
            "LIMIT :l_start, :l_offset"
        )
        assert r.params == {"w_age_0": 18, "w_name_1": "ann", "l_start": 20, "l_offset": 10}

    def test_rebuilding_is_deterministic(self, mysql: StatementBuilder):
        opts = {"where": [("a", 1), ("a", "<", 9, "and")], "limit": 3}
        first = mysql.select("t", opts)
        second = mysql.select("t", opts)
        assert first.sql == second.sql
        assert first.params == second.params

    def test_postgres_rendering(self, pg: StatementBuilder):
        r = pg.select("public.users", {"where": [("users.id", 1)], "limit": 5})
        assert r.sql == (
            'SELECT * FROM "public"."users" WHERE "users"."id" = :w_users_id_0 '
            "LIMIT :l_offset OFFSET :l_start"
        )
        assert r.params == {"w_users_id_0": 1, "l_start": 0, "l_offset": 5}
        assert r.dialect == "postgres"


class TestDelete:
    def test_delete_sql(self, mysql: StatementBuilder):
        r = mysql.delete("users", [("id", 4)])
        assert r.sql == "DELETE FROM users WHERE id = :w_id_0"
        assert r.params == {"w_id_0": 4}

    def test_delete_without_where_raises(self, mysql: StatementBuilder):
        with pytest.raises(MissingPredicateError) as exc_info:
            mysql.delete("users", [])
        assert exc_info.value.table == "users"
