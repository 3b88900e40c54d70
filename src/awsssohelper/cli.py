# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
awsssohelper Command Line Interface.

This module provides the main CLI interface for awsssohelper, a tool that
gets temporary AWS credentials through AWS SSO while caching the device-flow
access token between runs.

Main Commands:
    credentials: Log in if needed and print role credentials
    status: Show the cached access token for a client name
    logout: Delete the cached access token for a client name
    config: Configuration management (show, set)
"""

import typer

from awsssohelper.commands import (
    credentials,
    status,
    logout,
    config_app,
)


app = typer.Typer(help="Get temporary AWS credentials through AWS SSO.", no_args_is_help=True)


# Register commands from modules
app.command()(credentials)
app.command()(status)
app.command()(logout)
app.add_typer(config_app, name="config")


if __name__ == "__main__":
    app()
