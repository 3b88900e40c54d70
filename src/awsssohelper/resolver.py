# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
Resolution of SSO accounts and roles into temporary role credentials.
"""

from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError

from awsssohelper.aws_utils import SSOService
from awsssohelper.errors import AccountListingError, CredentialResolutionError
from awsssohelper.models import AccountInfo, RoleCredential
from awsssohelper.ui import Picker, render_status


class CredentialResolver:
    """Turns an access token into credentials for selected accounts and roles.

    Failures for a single account are reported and skipped so the remaining
    accounts still produce credentials. The failures of the last ``resolve``
    call are kept in ``failures`` as ``(account_id, message)`` pairs.
    """

    def __init__(self, service: SSOService, picker: Picker):
        self.service = service
        self.picker = picker
        self.failures: list[tuple[str, str]] = []

    def resolve(
        self,
        access_token: str,
        account_id: Optional[str] = None,
        role_name: Optional[str] = None,
        all_accounts: bool = False,
    ) -> list[RoleCredential]:
        """Fetch role credentials.

        Args:
            access_token: SSO access token
            account_id: One or more space-separated account IDs; prompts when omitted
            role_name: Role to use in every account; prompts when omitted and ambiguous
            all_accounts: Use every account the token can see instead of prompting

        Returns:
            Credentials in account order; empty if every selection was cancelled

        Raises:
            AccountListingError: If the accounts cannot be listed with the token
            CredentialResolutionError: If nothing was produced and at least one
                account failed with a service error
        """
        self.failures = []
        if account_id:
            account_ids = account_id.split()
        else:
            account_ids = self._select_accounts(access_token, all_accounts)

        credentials = []
        for acct in account_ids:
            credential = self._resolve_account(access_token, acct, role_name)
            if credential is not None:
                credentials.append(credential)

        if not credentials and self.failures:
            failed = ", ".join(acct for acct, _ in self.failures)
            raise CredentialResolutionError(
                f"Could not get credentials for any requested account (failed: {failed}).",
                hint="Check the role name and that your SSO user is assigned to these accounts.",
            )
        return credentials

    def _select_accounts(self, access_token: str, all_accounts: bool) -> list[str]:
        try:
            accounts = self.service.list_accounts(access_token)
        except (BotoCoreError, ClientError) as e:
            raise AccountListingError(
                f"Could not list SSO accounts: {e}",
                hint="The cached access token may be stale. Run again with --refresh-access-token.",
            ) from e

        if all_accounts:
            return [account.account_id for account in accounts]

        chosen = self.picker.choose_one("Select an AWS account:", accounts, label=_account_label)
        if chosen is None:
            render_status("No account selected.", level="warning")
            return []
        return [chosen.account_id]

    def _resolve_account(self, access_token: str, account_id: str, role_name: Optional[str]) -> Optional[RoleCredential]:
        if not role_name:
            role_name = self._select_role(access_token, account_id)
            if role_name is None:
                return None

        try:
            return self.service.get_role_credentials(access_token, account_id, role_name)
        except (BotoCoreError, ClientError) as e:
            self.failures.append((account_id, str(e)))
            render_status(f"Could not get credentials for {role_name} in {account_id}: {e}", level="error")
            return None

    def _select_role(self, access_token: str, account_id: str) -> Optional[str]:
        try:
            roles = self.service.list_account_roles(access_token, account_id)
        except (BotoCoreError, ClientError) as e:
            self.failures.append((account_id, str(e)))
            render_status(f"Could not list roles in account {account_id}: {e}", level="error")
            return None

        if not roles:
            render_status(f"No roles available in account {account_id}.", level="warning")
            return None
        if len(roles) == 1:
            return roles[0]

        role = self.picker.choose_one(f"Select a role in {account_id}:", roles)
        if role is None:
            render_status(f"No role selected for account {account_id}.", level="warning")
        return role


def _account_label(account: AccountInfo) -> str:
    return account.label
