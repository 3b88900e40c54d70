# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
awsssohelper Token Cache Commands.

This module provides commands to inspect and delete the cached SSO access
token of a client name. Neither command contacts AWS.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import typer

from awsssohelper.config import get_config_manager
from awsssohelper.token_cache import TokenCacheManager
from awsssohelper.ui import render_card, render_status


def _cache_manager(client_name: Optional[str], cache_path: Optional[Path]) -> TokenCacheManager:
    config = get_config_manager().load()
    return TokenCacheManager(
        cache_path or config.cache_path,
        client_name=client_name or config.client_name,
    )


def status(
    client_name: Optional[str] = typer.Option(None, "--client-name", help="OIDC client name (default: from config)"),
    cache_path: Optional[Path] = typer.Option(None, "--cache-path", help="Directory holding cached tokens"),
):
    """Show the cached SSO access token for a client name."""
    cache = _cache_manager(client_name, cache_path)
    token = cache.load()

    if token is None:
        render_status(f"No cached token for client '{cache.client_name}'.", level="warning")
        raise typer.Exit(1)

    now = datetime.now(timezone.utc)
    expired = cache.is_expired(token, now=now)
    remaining = max(0, int(token.expires_in - (now - token.logged_at).total_seconds()))

    body = "\n".join([
        f"Start URL:  {token.start_url or '-'}",
        f"Region:     {token.region or '-'}",
        f"Logged at:  {token.logged_at.isoformat()}",
        f"Expires in: {token.expires_in}s",
        f"Remaining:  {'expired' if expired else f'{remaining}s'}",
    ])
    render_card(
        f"Client '{cache.client_name}'",
        body,
        footer=str(cache.cache_file),
    )


def logout(
    client_name: Optional[str] = typer.Option(None, "--client-name", help="OIDC client name (default: from config)"),
    cache_path: Optional[Path] = typer.Option(None, "--cache-path", help="Directory holding cached tokens"),
):
    """Delete the cached SSO access token for a client name."""
    cache = _cache_manager(client_name, cache_path)

    if cache.clear():
        render_status(f"Removed cached token {cache.cache_file}", level="success")
    else:
        render_status(f"No cached token for client '{cache.client_name}'.", level="warning")
