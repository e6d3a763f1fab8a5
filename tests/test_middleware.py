"""
Tests for request logging helpers
"""

import pytest

from notevault.middleware import operation_name_from_payload, sanitize_query_params


class TestSanitizeQueryParams:
    def test_sensitive_params_are_redacted(self):
        params = {"page": "2", "password": "hunter22", "X-Auth-Token": "t"}

        assert sanitize_query_params(params) == {
            "page": "2",
            "password": "[REDACTED]",
            "X-Auth-Token": "[REDACTED]",
        }


class TestOperationName:
    @pytest.mark.parametrize(
        ("payload", "expected"),
        [
            ({"operationName": "CreateNote", "query": "mutation X { a }"}, "CreateNote"),
            ({"query": "query Notes { notes { id } }"}, "Notes"),
            ({"query": "mutation Trash { softDeleteNote(id: 1) { id } }"}, "mutation:Trash"),
            ({"query": "{ hello }"}, "unnamed_operation"),
            ({"query": "query IntrospectionQuery { __schema { types { name } } }"}, "__introspection"),
            ({}, None),
        ],
    )
    def test_operation_name_from_payload(self, payload, expected):
        assert operation_name_from_payload(payload) == expected
