# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
awsssohelper Credentials Command.

This module provides the command that logs in through AWS SSO (reusing the
cached access token when possible) and prints temporary role credentials.
"""

from enum import Enum
from pathlib import Path
from typing import Optional

import typer

from awsssohelper import api
from awsssohelper.config import get_config_manager, resolve_region, resolve_start_url
from awsssohelper.errors import SSOHelperError
from awsssohelper.helpers import emit_credentials
from awsssohelper.ui import InteractivePicker, ScriptedPicker, render_status


class ClientType(str, Enum):
    public = "public"


class OutputFormat(str, Enum):
    json = "json"
    env = "env"
    table = "table"


def credentials(
    start_url: Optional[str] = typer.Option(None, "--start-url", "-u", help="SSO portal start URL (default: from config)"),
    account_id: Optional[str] = typer.Option(None, "--account-id", "-a", help="Account ID(s), space-separated"),
    role_name: Optional[str] = typer.Option(None, "--role-name", "-r", help="Role to assume in each account"),
    all_account_roles: bool = typer.Option(False, "--all-account-roles", help="Get credentials for every accessible account"),
    refresh_access_token: bool = typer.Option(False, "--refresh-access-token", help="Log in again even if a cached token exists"),
    region: Optional[str] = typer.Option(None, "--region", help="SSO region (default: from config or AWS environment)"),
    pass_thru: bool = typer.Option(False, "--pass-thru", help="Only output access key, secret key and session token"),
    client_name: Optional[str] = typer.Option(None, "--client-name", help="OIDC client name and cache file name"),
    client_type: Optional[ClientType] = typer.Option(None, "--client-type", help="OIDC client type"),
    timeout: Optional[int] = typer.Option(None, "--timeout", min=1, help="Seconds to wait for the browser login"),
    cache_path: Optional[Path] = typer.Option(None, "--cache-path", help="Directory holding cached tokens"),
    output_format: OutputFormat = typer.Option(OutputFormat.json, "--format", "-f", help="Output format"),
    no_input: bool = typer.Option(False, "--no-input", help="Never prompt; skip accounts or roles that need a choice"),
):
    """Get temporary AWS credentials through AWS SSO."""
    # Load configuration and apply CLI overrides
    config_manager = get_config_manager()
    config = config_manager.load()

    if client_name is not None:
        config.client_name = client_name
    if client_type is not None:
        config.client_type = client_type.value
    if timeout is not None:
        config.timeout_seconds = timeout
    if cache_path is not None:
        config.cache_path = cache_path

    try:
        resolved_url = resolve_start_url(start_url, config)
        resolved_region = resolve_region(region, config)

        results = api.get_sso_credentials(
            resolved_url,
            account_id=account_id,
            role_name=role_name,
            all_account_roles=all_account_roles,
            refresh_access_token=refresh_access_token,
            region=resolved_region,
            client_name=config.client_name,
            client_type=config.client_type,
            timeout_seconds=config.timeout_seconds,
            cache_path=config.cache_path,
            poll_interval=config.poll_interval_seconds,
            picker=ScriptedPicker() if no_input else InteractivePicker(),
        )
    except SSOHelperError as e:
        render_status(str(e), level="error", footer=e.hint)
        raise typer.Exit(1)

    if not results:
        render_status("No credentials were produced.", level="warning")
    emit_credentials(results, fmt=output_format.value, pass_thru=pass_thru)
