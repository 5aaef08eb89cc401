"""Tests for credential loading."""

from unittest import mock

import pytest
from google.auth.exceptions import RefreshError

from certificate_mailer import auth, config
from certificate_mailer.utils.error_handler import AuthenticationError


@pytest.fixture
def paths(tmp_path, monkeypatch):
    token_file = tmp_path / "token.json"
    secrets_file = tmp_path / "client_secrets.json"
    monkeypatch.setattr(config, "TOKEN_FILE", str(token_file))
    monkeypatch.setattr(config, "CLIENT_SECRETS_FILE", str(secrets_file))
    return token_file, secrets_file


def test_cached_valid_token_is_used(paths):
    token_file, _ = paths
    token_file.write_text("{}")
    creds = mock.MagicMock(valid=True)

    with mock.patch.object(auth.Credentials, "from_authorized_user_file", return_value=creds):
        assert auth.get_credentials() is creds


def test_expired_token_is_refreshed_and_saved(paths):
    token_file, _ = paths
    token_file.write_text("{}")
    creds = mock.MagicMock(valid=False, expired=True, refresh_token="r")
    creds.to_json.return_value = '{"token": "new"}'

    with mock.patch.object(auth.Credentials, "from_authorized_user_file", return_value=creds):
        assert auth.get_credentials() is creds

    creds.refresh.assert_called_once()
    assert token_file.read_text() == '{"token": "new"}'


def test_failed_refresh_discards_token(paths):
    token_file, _ = paths
    token_file.write_text("{}")
    creds = mock.MagicMock(valid=False, expired=True, refresh_token="r")
    creds.refresh.side_effect = RefreshError("revoked")

    with mock.patch.object(auth.Credentials, "from_authorized_user_file", return_value=creds):
        with pytest.raises(AuthenticationError):
            auth.get_credentials()

    assert not token_file.exists()


def test_missing_client_secrets(paths):
    with pytest.raises(FileNotFoundError):
        auth.get_credentials()
