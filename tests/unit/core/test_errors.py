"""
Tests pour la classification des erreurs en messages utilisateur.
"""

import pytest

from popcorn.core.errors import (
    NO_CONNECTION_MESSAGE,
    NOT_FOUND_MESSAGE,
    SERVER_ERROR_MESSAGE,
    UNKNOWN_ERROR_MESSAGE,
    error_message,
)
from popcorn.core.ports.api_clients import ConnectivityError, HttpStatusError


class TestErrorMessage:
    """Tests pour error_message()."""

    def test_connectivity_error(self):
        assert error_message(ConnectivityError("dns failure")) == NO_CONNECTION_MESSAGE

    def test_raw_socket_error_is_connectivity(self):
        assert error_message(ConnectionRefusedError()) == NO_CONNECTION_MESSAGE

    def test_not_found(self):
        assert error_message(HttpStatusError(404)) == "Resource not found."
        assert NOT_FOUND_MESSAGE == "Resource not found."

    @pytest.mark.parametrize("status", [500, 502, 503])
    def test_server_errors(self, status):
        assert error_message(HttpStatusError(status)) == SERVER_ERROR_MESSAGE

    @pytest.mark.parametrize("status", [401, 429, 504])
    def test_other_status_includes_code(self, status):
        assert error_message(HttpStatusError(status)) == f"Unexpected error occurred ({status})."

    def test_unclassified_error_uses_description(self):
        assert error_message(ValueError("bad payload")) == "bad payload"

    def test_unclassified_error_without_description(self):
        assert error_message(KeyError()) == UNKNOWN_ERROR_MESSAGE
