# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
awsssohelper Configuration Commands.

This module provides commands to show and update the persisted defaults used
by the credentials command.
"""

from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from awsssohelper.config import HelperConfig, get_config_manager
from awsssohelper.ui import render_card, render_status

config_app = typer.Typer(help="Show or change saved defaults")


@config_app.command("show")
def show():
    """Show the current configuration."""
    config_manager = get_config_manager()
    config = config_manager.load()

    body = "\n".join(f"{name}: {value}" for name, value in config.model_dump().items())
    render_card("Configuration", body, footer=str(config_manager.config_file))


@config_app.command("set")
def set_values(
    start_url: Optional[str] = typer.Option(None, "--start-url", "-u", help="SSO portal start URL"),
    region: Optional[str] = typer.Option(None, "--region", help="SSO region"),
    client_name: Optional[str] = typer.Option(None, "--client-name", help="OIDC client name"),
    timeout: Optional[int] = typer.Option(None, "--timeout", help="Seconds to wait for the browser login"),
    poll_interval: Optional[int] = typer.Option(None, "--poll-interval", help="Seconds between token polls"),
    cache_path: Optional[Path] = typer.Option(None, "--cache-path", help="Directory holding cached tokens"),
):
    """Save default values for the credentials command."""
    updates = {
        "start_url": start_url,
        "region": region,
        "client_name": client_name,
        "timeout_seconds": timeout,
        "poll_interval_seconds": poll_interval,
        "cache_path": cache_path,
    }
    updates = {key: value for key, value in updates.items() if value is not None}
    if not updates:
        render_status("Nothing to change. Pass at least one option.", level="warning")
        raise typer.Exit(1)

    config_manager = get_config_manager()
    current = config_manager.load()
    try:
        config = HelperConfig.model_validate({**current.model_dump(), **updates})
    except ValidationError as e:
        render_status(f"Invalid configuration value: {e}", level="error")
        raise typer.Exit(1)

    path = config_manager.save(config)
    render_status(f"Saved configuration to {path}", level="success")
