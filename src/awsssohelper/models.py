# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
Data models shared by the token cache, the device flow and the resolver.

Field aliases are the camelCase names used by the SSO service responses, the
cached token file and the CLI output.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

PASS_THRU_FIELDS = ("accessKey", "secretKey", "sessionToken")


class CachedToken(BaseModel):
    """Device-flow access token persisted per client name."""

    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(alias="accessToken")
    logged_at: datetime = Field(alias="loggedAt")
    expires_in: int = Field(alias="expiresIn", description="Lifetime in seconds")
    start_url: Optional[str] = Field(default=None, alias="startUrl")
    region: Optional[str] = None
    client_name: Optional[str] = Field(default=None, alias="clientName")

    @field_validator("logged_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # Hand-edited cache files may carry naive timestamps
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)


class DeviceAuthorization(BaseModel):
    """State of one device authorization; never written to disk."""

    model_config = ConfigDict(populate_by_name=True)

    client_id: str = Field(alias="clientId")
    client_secret: str = Field(alias="clientSecret")
    verification_uri: str = Field(alias="verificationUri")
    verification_uri_complete: Optional[str] = Field(default=None, alias="verificationUriComplete")
    user_code: str = Field(alias="userCode")
    device_code: str = Field(alias="deviceCode")
    expires_in: Optional[int] = Field(default=None, alias="expiresIn")
    interval: Optional[int] = None

    @property
    def browser_url(self) -> str:
        """URL to open for the user, with the user code pre-filled when available."""
        return self.verification_uri_complete or self.verification_uri


class AccountInfo(BaseModel):
    """An account visible to an access token."""

    model_config = ConfigDict(populate_by_name=True)

    account_id: str = Field(alias="accountId")
    account_name: Optional[str] = Field(default=None, alias="accountName")
    email_address: Optional[str] = Field(default=None, alias="emailAddress")

    @property
    def label(self) -> str:
        parts = [self.account_id]
        if self.account_name:
            parts.append(self.account_name)
        if self.email_address:
            parts.append(f"({self.email_address})")
        return " ".join(parts)


class RoleCredential(BaseModel):
    """Temporary credentials for one account and role."""

    model_config = ConfigDict(populate_by_name=True)

    account_id: str = Field(alias="accountId")
    role_name: str = Field(alias="roleName")
    access_key: str = Field(alias="accessKey")
    secret_key: str = Field(alias="secretKey")
    session_token: str = Field(alias="sessionToken")
    expiration: datetime

    @classmethod
    def from_response(cls, account_id: str, role_name: str, role_credentials: dict[str, Any]) -> "RoleCredential":
        """Build from the ``roleCredentials`` member of GetRoleCredentials.

        The service reports expiration as epoch milliseconds.
        """
        expiration = datetime.fromtimestamp(role_credentials["expiration"] / 1000, tz=timezone.utc)
        return cls(
            account_id=account_id,
            role_name=role_name,
            access_key=role_credentials["accessKeyId"],
            secret_key=role_credentials["secretAccessKey"],
            session_token=role_credentials["sessionToken"],
            expiration=expiration,
        )

    def to_output(self, pass_thru: bool = False) -> dict[str, Any]:
        """Return the fields written by the CLI.

        Args:
            pass_thru: Restrict the result to the access key, secret key and session token

        Returns:
            Dictionary keyed by the camelCase field names
        """
        data = self.model_dump(mode="json", by_alias=True)
        if pass_thru:
            return {key: data[key] for key in PASS_THRU_FIELDS}
        return data
