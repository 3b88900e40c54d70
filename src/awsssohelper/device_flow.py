# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
OAuth device authorization flow against AWS SSO OIDC.

The flow registers a public OIDC client, starts a device authorization for
the portal start URL, sends the user to the verification page and then polls
for the access token at a fixed interval until it is issued or the timeout
runs out.
"""

import time
import webbrowser
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from botocore.exceptions import BotoCoreError, ClientError

from awsssohelper.aws_utils import SSOService
from awsssohelper.errors import AuthRegistrationError, AuthTimeoutError
from awsssohelper.models import CachedToken, DeviceAuthorization
from awsssohelper.ui import console, render_card, render_status


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DeviceAuthFlow:
    """Obtains a fresh access token through the device-code grant.

    Args:
        service: SSO service used for the OIDC calls
        client_name: Name the OIDC client is registered under
        client_type: OIDC client type
        timeout_seconds: Give up polling once this much time has elapsed
        poll_interval: Seconds to wait after each unsuccessful poll
        region: Region recorded on the resulting token
        clock: Monotonic clock used to measure the poll timeout
        sleep: Function used to wait between polls
        now: Wall clock used for the token's ``loggedAt``
        open_browser: Function that opens a URL, returning False on failure
    """

    def __init__(
        self,
        service: SSOService,
        client_name: str = "default",
        client_type: str = "public",
        timeout_seconds: int = 120,
        poll_interval: int = 5,
        region: Optional[str] = None,
        clock: Optional[Callable[[], float]] = None,
        sleep: Optional[Callable[[float], None]] = None,
        now: Optional[Callable[[], datetime]] = None,
        open_browser: Optional[Callable[[str], bool]] = None,
    ):
        self.service = service
        self.client_name = client_name
        self.client_type = client_type
        self.timeout_seconds = timeout_seconds
        self.poll_interval = poll_interval
        self.region = region
        self._clock = clock or time.monotonic
        self._sleep = sleep or time.sleep
        self._now = now or _utcnow
        self._open_browser = open_browser or webbrowser.open

    def run(self, start_url: str) -> CachedToken:
        """Run the whole flow and return the new token.

        Raises:
            AuthRegistrationError: If the client cannot be registered or the
                device authorization cannot be started
            AuthTimeoutError: If no token is issued within ``timeout_seconds``
        """
        authorization = self.authorize(start_url)
        self.present(authorization)
        response = self.poll(authorization)

        return CachedToken(
            access_token=response["accessToken"],
            logged_at=self._now(),
            expires_in=response["expiresIn"],
            start_url=start_url,
            region=self.region,
            client_name=self.client_name,
        )

    def authorize(self, start_url: str) -> DeviceAuthorization:
        """Register the OIDC client and start a device authorization."""
        try:
            registration = self.service.register_client(self.client_name, self.client_type)
            started = self.service.start_device_authorization(
                registration["clientId"],
                registration["clientSecret"],
                start_url,
            )
        except (BotoCoreError, ClientError) as e:
            raise AuthRegistrationError(
                f"Could not start SSO device authorization for {start_url}: {e}",
                hint="Check the start URL and that the region matches your IAM Identity Center instance.",
            ) from e

        return DeviceAuthorization(
            client_id=registration["clientId"],
            client_secret=registration["clientSecret"],
            verification_uri=started["verificationUri"],
            verification_uri_complete=started.get("verificationUriComplete"),
            user_code=started["userCode"],
            device_code=started["deviceCode"],
            expires_in=started.get("expiresIn"),
            interval=started.get("interval"),
        )

    def present(self, authorization: DeviceAuthorization) -> bool:
        """Send the user to the verification page.

        Returns:
            True if a browser was opened, False if the URL was printed instead
        """
        url = authorization.browser_url
        if self._launch_browser(url):
            render_status(
                f"Opened your browser for SSO login. Confirm the code {authorization.user_code}.",
                footer=f"If nothing opened, visit {url}",
            )
            return True

        render_card(
            "SSO login required",
            f"Open this URL in a browser:\n{url}\n\nUser code: {authorization.user_code}",
            footer=f"Waiting up to {self.timeout_seconds}s for the login to complete.",
        )
        return False

    def poll(self, authorization: DeviceAuthorization) -> dict[str, Any]:
        """Exchange the device code for a token, retrying until the timeout."""
        started = self._clock()
        attempts = 0

        with console.status("Waiting for SSO login in the browser..."):
            while True:
                attempts += 1
                try:
                    return self.service.create_token(
                        authorization.client_id,
                        authorization.client_secret,
                        authorization.device_code,
                    )
                except (BotoCoreError, ClientError) as e:
                    # Pending authorization and slow-down replies both land here
                    elapsed = self._clock() - started
                    if elapsed >= self.timeout_seconds:
                        raise AuthTimeoutError(
                            f"No access token obtained within {self.timeout_seconds} seconds "
                            f"({attempts} attempts).",
                            hint="Complete the browser login sooner or raise --timeout.",
                        ) from e
                self._sleep(self.poll_interval)

    def _launch_browser(self, url: str) -> bool:
        try:
            return bool(self._open_browser(url))
        except webbrowser.Error:
            return False
