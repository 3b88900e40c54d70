"""Unit tests for token_cache.py."""

import json
import os
import stat
from datetime import datetime, timedelta, timezone

import pytest

from awsssohelper.device_flow import DeviceAuthFlow
from awsssohelper.errors import AuthTimeoutError
from awsssohelper.models import CachedToken
from awsssohelper.token_cache import TokenCacheManager

from conftest import START_URL, FakeSSOService


def make_token(access_token="cached-token", age_seconds=60, expires_in=28800, start_url=START_URL):
    return CachedToken(
        access_token=access_token,
        logged_at=datetime.now(timezone.utc) - timedelta(seconds=age_seconds),
        expires_in=expires_in,
        start_url=start_url,
        region="us-east-1",
        client_name="default",
    )


@pytest.fixture
def service():
    return FakeSSOService(accounts=["111111111111"])


@pytest.fixture
def cache(tmp_path, service, fake_clock):
    flow = DeviceAuthFlow(
        service,
        clock=fake_clock,
        sleep=fake_clock.sleep,
        open_browser=lambda url: True,
    )
    return TokenCacheManager(
        tmp_path / "cache",
        client_name="default",
        service=service,
        flow=flow,
        start_url=START_URL,
    )


def test_cache_file_is_named_after_client(tmp_path):
    """Test each client name gets its own cache file."""
    cache = TokenCacheManager(tmp_path, client_name="work")

    assert cache.cache_file == tmp_path / "work.json"


def test_save_and_load_round_trip(cache):
    """Test a saved token loads back field for field."""
    token = make_token()

    cache.save(token)

    assert cache.load() == token


def test_save_writes_camel_case_json(cache):
    """Test the cache file uses the documented JSON keys."""
    cache.save(make_token())

    data = json.loads(cache.cache_file.read_text())

    assert {"accessToken", "loggedAt", "expiresIn"} <= set(data)
    assert data["accessToken"] == "cached-token"


def test_save_creates_directory_with_private_file(cache):
    """Test save creates the cache directory and restricts the file to its owner."""
    assert not cache.cache_path.exists()

    path = cache.save(make_token())

    assert path.exists()
    assert stat.S_IMODE(path.stat().st_mode) == 0o600


def test_save_overwrites_previous_token(cache):
    """Test a second save replaces the first token."""
    cache.save(make_token(access_token="first"))
    cache.save(make_token(access_token="second"))

    assert cache.load().access_token == "second"


def test_load_missing_file_returns_none(cache):
    """Test a missing cache file is a cache miss."""
    assert cache.load() is None


@pytest.mark.parametrize("content", ["not json", "", json.dumps({"accessToken": "x"}), json.dumps([1, 2])])
def test_load_malformed_file_returns_none(cache, content):
    """Test corrupt or incomplete cache files are a cache miss."""
    cache.cache_path.mkdir(parents=True)
    cache.cache_file.write_text(content)

    assert cache.load() is None


def test_is_expired():
    """Test expiry compares elapsed seconds to the declared lifetime."""
    cache = TokenCacheManager("unused")
    now = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
    token = CachedToken(access_token="t", logged_at=now - timedelta(seconds=3600), expires_in=3600)

    assert cache.is_expired(token, now=now) is True
    assert cache.is_expired(token, now=now - timedelta(seconds=1)) is False


def test_is_valid_probes_service(cache, service):
    """Test the validity probe lists at most one account."""
    assert cache.is_valid(make_token()) is True
    assert service.called("list_accounts") == [("list_accounts", "cached-token", 1)]


def test_is_valid_rejected_token(cache, service):
    """Test a token the service rejects is invalid."""
    service.rejected_tokens.add("cached-token")

    assert cache.is_valid(make_token()) is False


def test_get_token_reuses_valid_cache(cache, service):
    """Test a fresh, accepted token is returned without logging in."""
    cached = make_token()
    cache.save(cached)

    token = cache.get_token()

    assert token == cached
    assert service.called("register_client") == []


def test_get_token_runs_flow_when_cache_missing(cache, service):
    """Test a missing cache triggers a device flow and saves its token."""
    token = cache.get_token()

    assert token.access_token == "new-token"
    assert len(service.called("register_client")) == 1
    assert cache.load() == token


def test_get_token_runs_flow_when_cache_corrupt(cache, service):
    """Test a corrupt cache behaves exactly like a missing one."""
    cache.cache_path.mkdir(parents=True)
    cache.cache_file.write_text("{broken")

    token = cache.get_token()

    assert token.access_token == "new-token"
    assert cache.load().access_token == "new-token"


def test_get_token_runs_flow_when_expired(cache, service):
    """Test an expired token is replaced without probing the service."""
    cache.save(make_token(age_seconds=7200, expires_in=3600))

    token = cache.get_token()

    assert token.access_token == "new-token"
    assert service.called("list_accounts") == []


def test_get_token_runs_flow_when_rejected(cache, service):
    """Test a token rejected by the probe is replaced."""
    service.rejected_tokens.add("cached-token")
    cache.save(make_token())

    token = cache.get_token()

    assert token.access_token == "new-token"
    assert cache.load().access_token == "new-token"


def test_get_token_runs_flow_for_other_start_url(cache, service):
    """Test a token cached for another portal is not reused."""
    cache.save(make_token(start_url="https://other.awsapps.com/start"))

    token = cache.get_token()

    assert token.access_token == "new-token"
    assert token.start_url == START_URL


def test_get_token_force_refresh(cache, service):
    """Test force_refresh ignores a valid cached token."""
    cache.save(make_token())

    token = cache.get_token(force_refresh=True)

    assert token.access_token == "new-token"
    assert len(service.called("register_client")) == 1


def test_get_token_timeout_keeps_old_cache(cache, service):
    """Test a failed login propagates and leaves the cache untouched."""
    service.token_succeeds_on = None
    old = make_token(age_seconds=7200, expires_in=3600)
    cache.save(old)

    with pytest.raises(AuthTimeoutError):
        cache.get_token()

    assert cache.load() == old


def test_clear(cache):
    """Test clear removes the cache file once."""
    cache.save(make_token())

    assert cache.clear() is True
    assert cache.load() is None
    assert cache.clear() is False


@pytest.mark.parametrize("existing_mode", [None, 0o644])
def test_save_restricts_file_before_writing(cache, mocker, existing_mode):
    """Test the token is never written while the file is readable by others."""
    cache.cache_path.mkdir(parents=True)
    if existing_mode is not None:
        cache.cache_file.write_text("{}")
        os.chmod(cache.cache_file, existing_mode)

    real_fdopen = os.fdopen
    modes = []

    def checking_fdopen(fd, *args, **kwargs):
        modes.append(stat.S_IMODE(os.fstat(fd).st_mode))
        return real_fdopen(fd, *args, **kwargs)

    mocker.patch("awsssohelper.token_cache.os.fdopen", side_effect=checking_fdopen)
    old_umask = os.umask(0)
    try:
        cache.save(make_token())
    finally:
        os.umask(old_umask)

    assert modes == [0o600]
    assert cache.load().access_token == "cached-token"
