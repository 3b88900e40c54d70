# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
awsssohelper Shared Utility Functions.

Output formatting for resolved credentials, used by the CLI commands.
"""

import json
import shlex

import typer
from rich.console import Console
from rich.table import Table

from awsssohelper.models import RoleCredential

OUTPUT_FORMATS = ("json", "env", "table")

ENV_VARS = {
    "accessKey": "AWS_ACCESS_KEY_ID",
    "secretKey": "AWS_SECRET_ACCESS_KEY",
    "sessionToken": "AWS_SESSION_TOKEN",
}


def format_json(credentials: list[RoleCredential], pass_thru: bool = False) -> str:
    """Serialize credentials as a JSON list."""
    return json.dumps([c.to_output(pass_thru) for c in credentials], indent=2)


def format_env(credentials: list[RoleCredential], pass_thru: bool = False) -> str:
    """Render credentials as shell ``export`` statements.

    Each credential gets its own block. Unless ``pass_thru`` is set, a comment
    line naming the account and role precedes the block.
    """
    blocks = []
    for credential in credentials:
        output = credential.to_output(pass_thru)
        lines = []
        if not pass_thru:
            lines.append(f"# {output['accountId']} {output['roleName']} (expires {output['expiration']})")
        lines.extend(f"export {var}={shlex.quote(output[key])}" for key, var in ENV_VARS.items())
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def build_table(credentials: list[RoleCredential], pass_thru: bool = False) -> Table:
    """Build a rich table with one row per credential."""
    rows = [c.to_output(pass_thru) for c in credentials]
    columns = list(rows[0].keys()) if rows else ["accountId", "roleName"]

    table = Table()
    for column in columns:
        table.add_column(column, overflow="fold")
    for row in rows:
        table.add_row(*(str(row[column]) for column in columns))
    return table


def emit_credentials(credentials: list[RoleCredential], fmt: str = "json", pass_thru: bool = False) -> None:
    """Write credentials to stdout in the requested format.

    Raises:
        ValueError: If ``fmt`` is not one of OUTPUT_FORMATS
    """
    if fmt not in OUTPUT_FORMATS:
        raise ValueError(f"Unknown output format {fmt!r}; expected one of {', '.join(OUTPUT_FORMATS)}")

    if fmt == "table":
        Console().print(build_table(credentials, pass_thru))
    elif fmt == "env":
        if credentials:
            typer.echo(format_env(credentials, pass_thru))
    else:
        typer.echo(format_json(credentials, pass_thru))
