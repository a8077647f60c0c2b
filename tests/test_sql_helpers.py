"""
Unit tests for the SQL fragment helpers.

Tests:
- Partial update SET clauses
- Filter WHERE conditions
- Positional placeholder binding
"""

import pytest

from app.core.database import bind_positional
from app.core.exceptions import BadRequestError
from app.crud import company as company_crud
from app.crud import job as job_crud
from app.helpers.sql import (
    COMPANY_FILTERS,
    FilterCondition,
    SqlFragment,
    parameterize_filter_query,
    quote_identifier,
    select_list,
    sql_for_partial_update,
    where,
)


class TestSqlForPartialUpdate:
    """Tests for building SET clauses"""

    def test_single_field_translated(self):
        result = sql_for_partial_update({"numEmployees": 5}, {"numEmployees": "num_employees"})

        assert result.clause == '"num_employees"=$1'
        assert result.values == [5]

    def test_field_without_mapping_uses_own_name(self):
        result = sql_for_partial_update({"foo": 1}, {})

        assert result.clause == '"foo"=$1'
        assert result.values == [1]

    def test_multiple_fields_keep_input_order(self):
        """Placeholders follow the order the fields were given in"""
        result = sql_for_partial_update(
            {"logoUrl": "http://x.img", "name": "X", "numEmployees": 7},
            company_crud.JS_TO_SQL,
        )

        assert result.clause == '"logo_url"=$1, "name"=$2, "num_employees"=$3'
        assert result.values == ["http://x.img", "X", 7]

    def test_placeholder_count_matches_values(self):
        data = {"a": 1, "b": "two", "c": None, "d": 4.5}
        result = sql_for_partial_update(data)

        assert result.clause.count("=$") == len(result.values)
        for idx, value in enumerate(data.values(), start=1):
            assert f"=${idx}" in result.clause
            assert result.values[idx - 1] == value

    def test_none_is_a_value(self):
        """None means set NULL, not skip the field"""
        result = sql_for_partial_update({"logoUrl": None}, company_crud.JS_TO_SQL)

        assert result.clause == '"logo_url"=$1'
        assert result.values == [None]

    def test_no_data_is_bad_request(self):
        with pytest.raises(BadRequestError):
            sql_for_partial_update({}, {"numEmployees": "num_employees"})

    def test_next_placeholder_follows_values(self):
        result = sql_for_partial_update({"a": 1, "b": 2})

        assert result.next_placeholder == "$3"

    def test_identifier_quotes_are_escaped(self):
        assert quote_identifier('we"ird') == '"we""ird"'

    def test_dollar_in_field_name(self):
        """A $n inside a quoted column name is not a placeholder"""
        result = sql_for_partial_update({"price$1": 5, "note": "x"}, {})

        assert result.clause == '"price$1"=$1, "note"=$2'
        assert result.values == [5, "x"]
        assert result.next_placeholder == "$3"


class TestParameterizeFilterQuery:
    """Tests for building WHERE conditions"""

    def test_no_criteria(self):
        result = company_crud.parameterize_filter_query({})

        assert result.clause == ""
        assert result.values == []
        assert not result

    def test_name_like_only(self):
        result = company_crud.parameterize_filter_query({"nameLike": "c"})

        assert result.clause == "name ILIKE $1"
        assert result.values == ["%c%"]

    def test_max_only_is_numbered_first(self):
        result = company_crud.parameterize_filter_query({"maxEmployees": 3})

        assert result.clause == "num_employees <= $1"
        assert result.values == [3]

    def test_all_keys_in_fixed_order(self):
        """Numbering follows the recognized key order, not the input order"""
        result = company_crud.parameterize_filter_query(
            {"nameLike": "c", "maxEmployees": 3, "minEmployees": 2}
        )

        assert result.clause == "num_employees >= $1 AND num_employees <= $2 AND name ILIKE $3"
        assert result.values == [2, 3, "%c%"]

    def test_values_are_not_coerced(self):
        result = company_crud.parameterize_filter_query({"minEmployees": "2"})

        assert result.values == ["2"]

    def test_unrecognized_keys_ignored(self):
        result = parameterize_filter_query({"color": "red"}, COMPANY_FILTERS)

        assert result.clause == ""
        assert result.values == []

    def test_flag_condition_binds_nothing(self):
        result = job_crud.parameterize_filter_query({"hasEquity": True, "minSalary": 50})

        assert result.clause == "salary >= $1 AND equity > 0"
        assert result.values == [50]

    def test_false_flag_adds_no_condition(self):
        result = job_crud.parameterize_filter_query({"hasEquity": False})

        assert result.clause == ""
        assert result.values == []

    def test_job_title_is_substring_match(self):
        result = job_crud.parameterize_filter_query({"title": "eng", "minSalary": 1})

        assert result.clause == "title ILIKE $1 AND salary >= $2"
        assert result.values == ["%eng%", 1]

    def test_custom_conditions(self):
        conditions = [
            FilterCondition("after", "created_at > {}"),
            FilterCondition("tag", "tags @> {}", lambda v: [v]),
        ]
        result = parameterize_filter_query({"tag": "x", "after": "2024-01-01"}, conditions)

        assert result.clause == "created_at > $1 AND tags @> $2"
        assert result.values == ["2024-01-01", ["x"]]


class TestSqlFragment:
    """Tests for fragment invariants and rendering helpers"""

    def test_mismatched_values_rejected(self):
        with pytest.raises(ValueError):
            SqlFragment("a = $1 AND b = $2", [1])

    def test_where_omitted_for_empty_fragment(self):
        assert where(SqlFragment("")) == ""
        assert where(SqlFragment("a = $1", [1])) == "WHERE a = $1"

    def test_select_list_aliases_renamed_columns(self):
        rendered = select_list({"handle": "handle", "numEmployees": "num_employees"})

        assert rendered.split(",\n") == ["handle", '       num_employees AS "numEmployees"']


class TestBindPositional:
    """Tests for turning $n placeholders into named binds"""

    def test_binds_in_position(self):
        sql, params = bind_positional("UPDATE t SET a=$1, b=$2 WHERE id = $3", ["x", None, 9])

        assert sql == "UPDATE t SET a=:p1, b=:p2 WHERE id = :p3"
        assert params == {"p1": "x", "p2": None, "p3": 9}

    def test_multi_digit_placeholders(self):
        values = list(range(1, 12))
        sql, params = bind_positional("SELECT $10, $11, $1", values)

        assert sql == "SELECT :p10, :p11, :p1"
        assert params == {"p10": 10, "p11": 11, "p1": 1}

    def test_quoted_identifier_left_alone(self):
        sql, params = bind_positional('UPDATE t SET "price$1"=$1 WHERE id = $2', [5, 7])

        assert sql == 'UPDATE t SET "price$1"=:p1 WHERE id = :p2'
        assert params == {"p1": 5, "p2": 7}

    def test_string_literal_left_alone(self):
        sql, params = bind_positional("SELECT 'cost $1' AS label, $1 AS v", [3])

        assert sql == "SELECT 'cost $1' AS label, :p1 AS v"
        assert params == {"p1": 3}

    def test_missing_value(self):
        with pytest.raises(ValueError):
            bind_positional("SELECT $2", ["only one"])
