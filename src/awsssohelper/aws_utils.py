# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
AWS SSO service access for awsssohelper.

The device flow, the token cache and the credential resolver only talk to
AWS through the ``SSOService`` interface defined here, so they can be
exercised against a fake in tests. ``Boto3SSOService`` is the real
implementation on top of the ``sso-oidc`` and ``sso`` boto3 clients.

Classes:
    SSOService: Calls the helper needs from SSO OIDC and the SSO portal
    Boto3SSOService: boto3-backed implementation bound to one region
"""

from typing import Any, Optional, Protocol

import boto3

from awsssohelper.models import AccountInfo, RoleCredential

DEVICE_CODE_GRANT = "urn:ietf:params:oauth:grant-type:device_code"


class SSOService(Protocol):
    def register_client(self, client_name: str, client_type: str) -> dict[str, Any]:
        ...

    def start_device_authorization(self, client_id: str, client_secret: str, start_url: str) -> dict[str, Any]:
        ...

    def create_token(self, client_id: str, client_secret: str, device_code: str) -> dict[str, Any]:
        ...

    def list_accounts(self, access_token: str, max_results: Optional[int] = None) -> list[AccountInfo]:
        ...

    def list_account_roles(self, access_token: str, account_id: str) -> list[str]:
        ...

    def get_role_credentials(self, access_token: str, account_id: str, role_name: str) -> RoleCredential:
        ...


class Boto3SSOService:
    """SSOService backed by boto3 clients for a single region.

    botocore exceptions propagate unchanged; callers decide which of them
    are recoverable.
    """

    def __init__(self, region: str, session: Optional[boto3.Session] = None):
        self.region = region
        self._session = session or boto3.Session(region_name=region)
        self._oidc = self._session.client("sso-oidc", region_name=region)
        self._sso = self._session.client("sso", region_name=region)

    def register_client(self, client_name: str, client_type: str) -> dict[str, Any]:
        return self._oidc.register_client(clientName=client_name, clientType=client_type)

    def start_device_authorization(self, client_id: str, client_secret: str, start_url: str) -> dict[str, Any]:
        return self._oidc.start_device_authorization(
            clientId=client_id,
            clientSecret=client_secret,
            startUrl=start_url,
        )

    def create_token(self, client_id: str, client_secret: str, device_code: str) -> dict[str, Any]:
        return self._oidc.create_token(
            clientId=client_id,
            clientSecret=client_secret,
            grantType=DEVICE_CODE_GRANT,
            deviceCode=device_code,
        )

    def list_accounts(self, access_token: str, max_results: Optional[int] = None) -> list[AccountInfo]:
        """List accounts visible to the token.

        With ``max_results`` a single page is requested, which is what the
        token validity probe uses. Without it every page is collected.
        """
        if max_results is not None:
            resp = self._sso.list_accounts(accessToken=access_token, maxResults=max_results)
            return [AccountInfo.model_validate(a) for a in resp.get("accountList", [])]

        accounts = []
        paginator = self._sso.get_paginator("list_accounts")
        for page in paginator.paginate(accessToken=access_token):
            accounts.extend(AccountInfo.model_validate(a) for a in page.get("accountList", []))
        return accounts

    def list_account_roles(self, access_token: str, account_id: str) -> list[str]:
        roles = []
        paginator = self._sso.get_paginator("list_account_roles")
        for page in paginator.paginate(accessToken=access_token, accountId=account_id):
            roles.extend(role["roleName"] for role in page.get("roleList", []))
        return roles

    def get_role_credentials(self, access_token: str, account_id: str, role_name: str) -> RoleCredential:
        resp = self._sso.get_role_credentials(
            accessToken=access_token,
            accountId=account_id,
            roleName=role_name,
        )
        return RoleCredential.from_response(account_id, role_name, resp["roleCredentials"])
