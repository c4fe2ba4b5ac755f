"""
Tests for the partial UPDATE builder and identifier checks
"""

import pytest

from exceptions import ValidationError
from query.fields import FieldMap
from query.sql import (
    UpdateClause,
    bind,
    build_update,
    join_predicates,
    quote_identifier,
    validate_column_ref,
    validate_identifier,
)


class TestBuildUpdate:
    def test_maps_and_numbers_columns(self):
        result = build_update({"firstName": "Kevin", "age": 32}, {"firstName": "first_name"})

        assert result.assignments == ['"first_name"=$1', '"age"=$2']
        assert result.values == ["Kevin", 32]

    def test_set_cols_and_next_index(self):
        result = build_update(
            {"firstName": "Kevin", "lastName": "Johnson"},
            {"firstName": "first_name", "lastName": "last_name"},
        )

        assert result.set_cols == '"first_name"=$1, "last_name"=$2'
        assert result.next_index == 3

    def test_accepts_field_map_instance(self):
        result = build_update({"logoUrl": "http://x.img"}, FieldMap({"logoUrl": "logo_url"}))
        assert result.assignments == ['"logo_url"=$1']

    def test_without_field_map(self):
        result = build_update({"name": "New"})
        assert result.assignments == ['"name"=$1']
        assert result.values == ["New"]

    def test_preserves_input_order(self):
        data = {"z": 1, "a": 2, "m": 3}
        result = build_update(data, {})

        assert result.assignments == ['"z"=$1', '"a"=$2', '"m"=$3']
        assert result.values == [1, 2, 3]

    def test_placeholders_follow_value_count(self):
        data = {f"col_{i}": i for i in range(12)}
        result = build_update(data, {"col_3": "renamed"})

        assert len(result.assignments) == len(result.values) == 12
        for i, assignment in enumerate(result.assignments):
            assert assignment.endswith(f"=${i + 1}")

    def test_none_value_is_still_assigned(self):
        result = build_update({"logoUrl": None}, {"logoUrl": "logo_url"})

        assert result.assignments == ['"logo_url"=$1']
        assert result.values == [None]

    @pytest.mark.parametrize("field_map", [{}, {"a": "b"}, FieldMap({"x": "y"}), None])
    def test_empty_data_fails(self, field_map):
        with pytest.raises(ValidationError, match="No data supplied for update"):
            build_update({}, field_map)

    @pytest.mark.parametrize("bad", ['name"; DROP TABLE companies; --', "first name", "a-b", "x.y", ""])
    def test_unsafe_key_is_rejected(self, bad):
        with pytest.raises(ValidationError, match="Invalid identifier"):
            build_update({bad: 1})

    def test_unsafe_mapped_column_is_rejected(self):
        with pytest.raises(ValidationError):
            build_update({"name": "x"}, {"name": 'name"=1, "handle'})

    def test_repeated_calls_are_identical(self):
        data = {"numEmployees": 10, "description": "d"}
        fields = {"numEmployees": "num_employees"}

        assert build_update(data, fields) == build_update(data, fields)

    def test_does_not_mutate_input(self):
        data = {"a": 1}
        build_update(data)
        assert data == {"a": 1}


class TestIdentifiers:
    def test_valid_identifier(self):
        assert validate_identifier("num_employees") == "num_employees"

    def test_quote_identifier(self):
        assert quote_identifier("logo_url") == '"logo_url"'

    def test_qualified_column_ref(self):
        assert validate_column_ref("j.salary") == "j.salary"

    @pytest.mark.parametrize("bad", ["j..salary", "j.sal ary", ".salary", None])
    def test_bad_column_ref(self, bad):
        with pytest.raises(ValidationError):
            validate_column_ref(bad)

    def test_non_string_identifier(self):
        with pytest.raises(ValidationError):
            validate_identifier(42)


class TestHelpers:
    def test_bind_numbers_from_current_length(self):
        values = ["already", "there"]
        assert bind(values, "x") == "$3"
        assert values == ["already", "there", "x"]

    def test_join_predicates(self):
        assert join_predicates([]) == ""
        assert join_predicates(["a > 0"]) == "WHERE a > 0"
        assert join_predicates(["a > 0", "b = $1"]) == "WHERE a > 0 AND b = $1"
        assert join_predicates(["a > 0", "b = $1"], keyword=None) == "a > 0 AND b = $1"

    def test_update_clause_defaults(self):
        clause = UpdateClause()
        assert clause.set_cols == ""
        assert clause.next_index == 1
