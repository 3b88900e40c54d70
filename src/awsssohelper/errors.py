# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
Exceptions raised by awsssohelper.

Only conditions that leave the helper unable to produce any credential are
raised to callers. Cache misses, browser launch failures and cancelled
prompts are handled where they occur.
"""

from typing import Optional


class SSOHelperError(Exception):
    """Base class for errors surfaced to the caller."""

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.hint = hint


class ConfigurationError(SSOHelperError):
    """Raised when no usable region or start URL is configured."""
    pass


class AuthRegistrationError(SSOHelperError):
    """Raised when OIDC client registration or device authorization fails."""
    pass


class AuthTimeoutError(SSOHelperError):
    """Raised when no access token was obtained before the poll timeout."""
    pass


class AccountListingError(SSOHelperError):
    """Raised when the access token is rejected while listing accounts."""
    pass


class CredentialResolutionError(SSOHelperError):
    """Raised when no credential was produced because every account failed."""
    pass
