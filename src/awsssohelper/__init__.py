# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
awsssohelper - AWS SSO credential helper.

Gets temporary AWS credentials through AWS SSO (IAM Identity Center). The
OAuth device-flow access token is cached per client name so a browser login
is only needed when the cached token has expired or is rejected.
"""

from awsssohelper.api import get_sso_credentials
from awsssohelper.models import CachedToken, RoleCredential

__all__ = ["get_sso_credentials", "CachedToken", "RoleCredential"]
