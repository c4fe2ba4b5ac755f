"""
Tests for external → column field name translation
"""

import pytest

from query.fields import FieldMap, translate
from query.entities import COMPANY_FIELDS, JOB_FIELDS


class TestFieldMap:
    def test_mapped_name(self):
        fields = FieldMap({"firstName": "first_name"})
        assert fields.translate("firstName") == "first_name"

    @pytest.mark.parametrize("name", ["age", "first_name", "", "FirstName", "first name"])
    def test_unmapped_name_is_returned_unchanged(self, name):
        fields = FieldMap({"firstName": "first_name"})
        assert fields.translate(name) == name

    def test_empty_map_is_identity(self):
        assert FieldMap().translate("anything") == "anything"

    def test_module_function_accepts_plain_dict(self):
        assert translate("logoUrl", {"logoUrl": "logo_url"}) == "logo_url"
        assert translate("name", {"logoUrl": "logo_url"}) == "name"
        assert translate("name", None) == "name"

    def test_map_is_read_only(self):
        source = {"a": "b"}
        fields = FieldMap(source)
        source["a"] = "changed"

        assert fields["a"] == "b"
        with pytest.raises(TypeError):
            fields["a"] = "c"

    def test_behaves_as_mapping(self):
        fields = FieldMap({"a": "b", "c": "d"})
        assert len(fields) == 2
        assert dict(fields) == {"a": "b", "c": "d"}


class TestEntityFieldMaps:
    def test_company_fields(self):
        assert COMPANY_FIELDS.translate("numEmployees") == "num_employees"
        assert COMPANY_FIELDS.translate("logoUrl") == "logo_url"
        assert COMPANY_FIELDS.translate("description") == "description"

    def test_job_fields(self):
        assert JOB_FIELDS.translate("companyHandle") == "company_handle"
        assert JOB_FIELDS.translate("salary") == "salary"
