"""Tests for the Google API client factory."""

from unittest import mock

import pytest

from conftest import http_error
from certificate_mailer import api_clients
from certificate_mailer.utils.error_handler import APIError, AuthenticationError


@pytest.fixture(autouse=True)
def empty_cache(monkeypatch):
    monkeypatch.setattr(api_clients, "_service_cache", {})


def valid_credentials():
    credentials = mock.MagicMock()
    credentials.valid = True
    return credentials


def test_invalid_credentials_rejected():
    credentials = mock.MagicMock()
    credentials.valid = False

    with pytest.raises(AuthenticationError):
        api_clients.build_service("drive", "v3", credentials)


def test_services_are_cached():
    with mock.patch("certificate_mailer.api_clients.build") as build:
        first = api_clients.build_service("drive", "v3", valid_credentials())
        second = api_clients.build_service("drive", "v3", valid_credentials())

    assert first is second
    build.assert_called_once()


def test_forbidden_build_is_authentication_error():
    with mock.patch("certificate_mailer.api_clients.build", side_effect=http_error(403)):
        with pytest.raises(AuthenticationError):
            api_clients.build_service("gmail", "v1", valid_credentials())


def test_server_error_build_is_api_error():
    with mock.patch("certificate_mailer.api_clients.build", side_effect=http_error(503)):
        with pytest.raises(APIError) as excinfo:
            api_clients.build_service("sheets", "v4", valid_credentials())

    assert excinfo.value.status_code == 503
