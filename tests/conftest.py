"""Shared fixtures and fakes for the awsssohelper tests."""

from datetime import datetime, timezone

import pytest
from botocore.exceptions import ClientError

from awsssohelper import config as config_module
from awsssohelper.config import ConfigManager
from awsssohelper.models import AccountInfo, RoleCredential

START_URL = "https://d-1234567890.awsapps.com/start"
EXPIRATION = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def client_error(code: str, operation: str = "Operation") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


class FakeSSOService:
    """In-memory SSOService recording every call it receives."""

    def __init__(
        self,
        accounts=(),
        roles=None,
        token_succeeds_on=1,
        register_error=None,
        rejected_tokens=(),
        role_errors=(),
        credential_errors=(),
    ):
        self.accounts = [AccountInfo(account_id=a, account_name=f"acct-{a}") for a in accounts]
        self.roles = roles or {}
        self.token_succeeds_on = token_succeeds_on
        self.register_error = register_error
        self.rejected_tokens = set(rejected_tokens)
        self.role_errors = set(role_errors)
        self.credential_errors = set(credential_errors)
        self.token_attempts = 0
        self.calls = []

    def register_client(self, client_name, client_type):
        self.calls.append(("register_client", client_name, client_type))
        if self.register_error is not None:
            raise self.register_error
        return {"clientId": "client-id", "clientSecret": "client-secret"}

    def start_device_authorization(self, client_id, client_secret, start_url):
        self.calls.append(("start_device_authorization", client_id, start_url))
        return {
            "verificationUri": "https://device.sso.us-east-1.amazonaws.com/",
            "verificationUriComplete": "https://device.sso.us-east-1.amazonaws.com/?user_code=ABCD-EFGH",
            "userCode": "ABCD-EFGH",
            "deviceCode": "device-code",
            "expiresIn": 600,
            "interval": 1,
        }

    def create_token(self, client_id, client_secret, device_code):
        self.token_attempts += 1
        self.calls.append(("create_token", device_code))
        if self.token_succeeds_on is None or self.token_attempts < self.token_succeeds_on:
            raise client_error("AuthorizationPendingException", "CreateToken")
        return {"accessToken": "new-token", "expiresIn": 28800, "tokenType": "Bearer"}

    def list_accounts(self, access_token, max_results=None):
        self.calls.append(("list_accounts", access_token, max_results))
        if access_token in self.rejected_tokens:
            raise client_error("UnauthorizedException", "ListAccounts")
        if max_results is not None:
            return self.accounts[:max_results]
        return list(self.accounts)

    def list_account_roles(self, access_token, account_id):
        self.calls.append(("list_account_roles", account_id))
        if account_id in self.role_errors:
            raise client_error("ForbiddenException", "ListAccountRoles")
        return list(self.roles.get(account_id, []))

    def get_role_credentials(self, access_token, account_id, role_name):
        self.calls.append(("get_role_credentials", account_id, role_name))
        if account_id in self.credential_errors:
            raise client_error("ForbiddenException", "GetRoleCredentials")
        return make_credential(account_id, role_name)

    def called(self, name):
        return [call for call in self.calls if call[0] == name]


class FakeClock:
    """Monotonic clock that only advances when ``sleep`` is called."""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


def make_credential(account_id="111111111111", role_name="ReadOnly"):
    return RoleCredential(
        account_id=account_id,
        role_name=role_name,
        access_key=f"AKIA{account_id}",
        secret_key="secret",
        session_token="session",
        expiration=EXPIRATION,
    )


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def config_manager(tmp_path, monkeypatch):
    """Point get_config_manager() at a temporary directory."""
    manager = ConfigManager(tmp_path / "config")
    monkeypatch.setattr(config_module, "_config_manager", manager)
    return manager
