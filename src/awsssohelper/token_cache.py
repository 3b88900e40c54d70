# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
Local cache for the SSO access token.

One JSON file per OIDC client name lives in the cache directory. A cached
token is reused only while it is younger than its declared lifetime and the
SSO service still accepts it; otherwise a new device flow is run and the file
is overwritten.
"""

import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from awsssohelper.aws_utils import SSOService
from awsssohelper.device_flow import DeviceAuthFlow
from awsssohelper.models import CachedToken
from awsssohelper.ui import render_status


class TokenCacheManager:
    """Loads, checks and stores the access token for one client name.

    ``service`` is needed for the validity probe and ``flow`` and ``start_url``
    for ``get_token``; reading, writing and clearing the file work without them.
    """

    def __init__(
        self,
        cache_path: Path,
        client_name: str = "default",
        service: Optional[SSOService] = None,
        flow: Optional[DeviceAuthFlow] = None,
        start_url: Optional[str] = None,
    ):
        self.cache_path = Path(cache_path)
        self.client_name = client_name
        self.service = service
        self.flow = flow
        self.start_url = start_url

    @property
    def cache_file(self) -> Path:
        return self.cache_path / f"{self.client_name}.json"

    def load(self) -> Optional[CachedToken]:
        """Read the cached token.

        Returns:
            The token, or None if the file is missing, unreadable or malformed
        """
        try:
            raw = self.cache_file.read_text(encoding="utf-8")
            return CachedToken.model_validate(json.loads(raw))
        except FileNotFoundError:
            return None
        except (OSError, ValueError, ValidationError) as e:
            render_status(f"Ignoring unreadable token cache {self.cache_file}: {e}", level="warning")
            return None

    def save(self, token: CachedToken) -> Path:
        """Overwrite the cache file with ``token``, readable by the owner only."""
        self.cache_path.mkdir(parents=True, exist_ok=True)
        fd = os.open(self.cache_file, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        # O_CREAT's mode does not apply to a file that already exists
        os.chmod(self.cache_file, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(token.to_json())
        return self.cache_file

    def clear(self) -> bool:
        """Delete the cache file. Returns False if there was nothing to delete."""
        try:
            self.cache_file.unlink()
        except FileNotFoundError:
            return False
        return True

    def is_expired(self, token: CachedToken, now: Optional[datetime] = None) -> bool:
        """Check the token's age against its declared lifetime in seconds."""
        now = now or datetime.now(timezone.utc)
        elapsed = (now - token.logged_at).total_seconds()
        return elapsed >= token.expires_in

    def is_valid(self, token: CachedToken) -> bool:
        """Probe the SSO portal with the token; any failure means invalid."""
        try:
            self.service.list_accounts(token.access_token, max_results=1)
        except Exception:
            return False
        return True

    def get_token(self, force_refresh: bool = False) -> CachedToken:
        """Return a usable token, running the device flow when needed.

        Args:
            force_refresh: Ignore any cached token and log in again

        Returns:
            The cached token if it is neither expired nor rejected, else a new one
        """
        if not force_refresh:
            token = self.load()
            if token is not None:
                if token.start_url and token.start_url != self.start_url:
                    render_status(f"Cached SSO token belongs to {token.start_url}; starting a new login.")
                elif self.is_expired(token):
                    render_status("Cached SSO token has expired; starting a new login.")
                elif self.is_valid(token):
                    return token
                else:
                    render_status("Cached SSO token was rejected; starting a new login.", level="warning")

        token = self.flow.run(self.start_url)
        self.save(token)
        render_status(f"SSO login complete. Token cached in {self.cache_file}", level="success")
        return token
