# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
Library entry point tying the token cache, device flow and resolver together.
"""

from pathlib import Path
from typing import Optional

from awsssohelper.aws_utils import Boto3SSOService, SSOService
from awsssohelper.config import DEFAULT_CACHE_PATH, HelperConfig, resolve_region
from awsssohelper.device_flow import DeviceAuthFlow
from awsssohelper.models import RoleCredential
from awsssohelper.resolver import CredentialResolver
from awsssohelper.token_cache import TokenCacheManager
from awsssohelper.ui import InteractivePicker, Picker


def get_sso_credentials(
    start_url: str,
    account_id: Optional[str] = None,
    role_name: Optional[str] = None,
    all_account_roles: bool = False,
    refresh_access_token: bool = False,
    region: Optional[str] = None,
    client_name: str = "default",
    client_type: str = "public",
    timeout_seconds: int = 120,
    cache_path: Path = DEFAULT_CACHE_PATH,
    poll_interval: int = 5,
    picker: Optional[Picker] = None,
    service: Optional[SSOService] = None,
) -> list[RoleCredential]:
    """Get temporary AWS credentials through AWS SSO.

    Reuses the access token cached for ``client_name`` when it is still
    valid, otherwise runs the device authorization flow and caches the new
    token.

    Args:
        start_url: SSO portal start URL
        account_id: Space-separated account IDs; prompts when omitted
        role_name: Role to use; prompts when omitted and an account has several
        all_account_roles: Use every account visible to the token
        refresh_access_token: Log in again even if the cached token looks valid
        region: SSO region; falls back to the ambient boto3 default
        client_name: OIDC client name, also names the cache file
        client_type: OIDC client type
        timeout_seconds: How long to wait for the browser login
        cache_path: Directory holding cached tokens
        poll_interval: Seconds between token polls
        picker: Prompt implementation; defaults to the interactive picker
        service: SSO service; defaults to boto3 clients for ``region``

    Returns:
        Credentials in account order

    Raises:
        ConfigurationError: If no region is available
        AuthRegistrationError: If the device authorization cannot be started
        AuthTimeoutError: If the login is not completed in time
        AccountListingError: If the token cannot list accounts
        CredentialResolutionError: If every requested account failed
    """
    if service is None:
        region = resolve_region(region, HelperConfig())
        service = Boto3SSOService(region)

    flow = DeviceAuthFlow(
        service,
        client_name=client_name,
        client_type=client_type,
        timeout_seconds=timeout_seconds,
        poll_interval=poll_interval,
        region=region,
    )
    cache = TokenCacheManager(
        cache_path,
        client_name=client_name,
        service=service,
        flow=flow,
        start_url=start_url,
    )
    token = cache.get_token(force_refresh=refresh_access_token)

    resolver = CredentialResolver(service, picker or InteractivePicker())
    return resolver.resolve(
        token.access_token,
        account_id=account_id,
        role_name=role_name,
        all_accounts=all_account_roles,
    )
