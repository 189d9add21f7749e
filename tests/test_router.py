"""Tests for advisory REST/SOAP routing."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest
from mce_mcp.router import WireProtocol, route, REST_PREFERRED, SOAP_PREFERRED


class TestRoutingTables:

    def test_bulk_import_with_many_rows_goes_to_soap(self):
        assert route("bulk_data_import", {"rowCount": 5000}) == WireProtocol.SOAP

    def test_rest_preferred(self):
        assert route("list_emails", {}) == WireProtocol.REST

    def test_soap_preferred(self):
        assert route("automation_trigger", {}) == WireProtocol.SOAP

    def test_unknown_defaults_to_rest(self):
        assert route("unknown_op", {}) == WireProtocol.REST

    def test_params_optional(self):
        assert route("complex_retrieve") == WireProtocol.SOAP

    @pytest.mark.parametrize("operation", sorted(REST_PREFERRED))
    def test_all_rest_preferred_operations(self, operation):
        assert route(operation, {}) == WireProtocol.REST

    @pytest.mark.parametrize("operation", sorted(SOAP_PREFERRED))
    def test_all_soap_preferred_operations(self, operation):
        assert route(operation, {}) == WireProtocol.SOAP


class TestBulkHeuristic:
    """The row-count rule is checked before the static tables."""

    def test_bulk_rule_overrides_rest_table(self):
        # list_data_extensions is REST-preferred but contains "data"
        assert route("list_data_extensions", {"rowCount": 1001}) == WireProtocol.SOAP

    def test_threshold_is_exclusive(self):
        assert route("list_data_extensions", {"rowCount": 1000}) == WireProtocol.REST

    def test_requires_data_in_name(self):
        assert route("list_emails", {"rowCount": 50000}) == WireProtocol.REST

    def test_small_bulk_import_still_soap_via_table(self):
        assert route("bulk_data_import", {"rowCount": 10}) == WireProtocol.SOAP

    def test_non_numeric_row_count_ignored(self):
        assert route("import_data", {"rowCount": "lots"}) == WireProtocol.REST

    def test_numeric_string_row_count(self):
        assert route("import_data", {"rowCount": "2500"}) == WireProtocol.SOAP
