import datetime

import pytest
from freezegun import freeze_time

from easyauth import Authenticator, InvalidKey, TimeAuthenticator, UsedCodes, derive_code

RFC_SECRET = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"


def test_is_an_authenticator():
    assert isinstance(TimeAuthenticator(), Authenticator)


@pytest.mark.parametrize("kwargs", [{"interval": 0}, {"window": -1}])
def test_rejects_bad_settings(kwargs):
    with pytest.raises(ValueError):
        TimeAuthenticator(**kwargs)


# ---------------------------
# Time steps
# ---------------------------
def test_timecode_from_timestamp():
    totp = TimeAuthenticator()
    assert totp.timecode(0) == 0
    assert totp.timecode(59) == 1
    assert totp.timecode(59.9) == 1
    assert totp.timecode(1111111109) == 37037036


def test_timecode_from_datetime():
    totp = TimeAuthenticator()
    aware = datetime.datetime(2005, 3, 18, 1, 58, 29, tzinfo=datetime.timezone.utc)
    naive = datetime.datetime(2005, 3, 18, 1, 58, 29)
    assert totp.timecode(aware) == 37037036
    assert totp.timecode(naive) == 37037036


def test_timecode_custom_interval():
    totp = TimeAuthenticator(interval=60)
    assert totp.timecode(1111111109) == 18518518


# ---------------------------
# Code generation
# ---------------------------
@pytest.mark.parametrize(
    "timestamp,expected",
    [
        (59, "287082"),
        (1111111109, "081804"),
        (1111111111, "050471"),
        (1234567890, "005924"),
        (2000000000, "279037"),
    ],
)
def test_at(timestamp, expected):
    assert TimeAuthenticator().at(RFC_SECRET, timestamp) == expected


@freeze_time("2005-03-18 01:58:29")
def test_get_code_uses_current_time():
    totp = TimeAuthenticator()
    assert totp.get_code(RFC_SECRET) == "081804"
    assert totp.now(RFC_SECRET) == "081804"


@freeze_time("2009-02-13 23:31:30")
def test_get_code_keeps_leading_zeros():
    assert TimeAuthenticator().get_code(RFC_SECRET) == "005924"


# ---------------------------
# Verification
# ---------------------------
@freeze_time("2005-03-18 01:58:29")
def test_check_code_current_step():
    totp = TimeAuthenticator()
    assert totp.check_code(RFC_SECRET, "081804", "alice") is True


@freeze_time("2005-03-18 01:58:29")
def test_check_code_within_window():
    totp = TimeAuthenticator(window=1)
    previous = derive_code(RFC_SECRET, 37037035)
    following = derive_code(RFC_SECRET, 37037037)
    assert totp.check_code(RFC_SECRET, previous, "alice") is True
    assert totp.check_code(RFC_SECRET, following, "alice") is True


@freeze_time("2005-03-18 01:58:29")
def test_check_code_outside_window():
    totp = TimeAuthenticator(window=1)
    assert totp.check_code(RFC_SECRET, derive_code(RFC_SECRET, 37037034), "alice") is False
    assert totp.check_code(RFC_SECRET, derive_code(RFC_SECRET, 37037038), "alice") is False


@freeze_time("2005-03-18 01:58:29")
def test_check_code_zero_window():
    totp = TimeAuthenticator(window=0)
    assert totp.check_code(RFC_SECRET, derive_code(RFC_SECRET, 37037035), "alice") is False
    assert totp.check_code(RFC_SECRET, "081804", "alice") is True


@freeze_time("2005-03-18 01:58:29")
def test_check_code_wrong_code():
    assert TimeAuthenticator().check_code(RFC_SECRET, "000000", "alice") is False


@freeze_time("2005-03-18 01:58:29")
def test_check_code_rejects_replay():
    totp = TimeAuthenticator()
    assert totp.check_code(RFC_SECRET, "081804", "alice") is True
    assert totp.check_code(RFC_SECRET, "081804", "alice") is False
    # other users are tracked separately
    assert totp.check_code(RFC_SECRET, "081804", "bob") is True


def test_replay_rejected_across_steps_inside_window():
    totp = TimeAuthenticator(window=1)
    with freeze_time("2005-03-18 01:58:29"):
        assert totp.check_code(RFC_SECRET, "081804", "alice") is True
    with freeze_time("2005-03-18 01:58:59"):
        assert totp.check_code(RFC_SECRET, "081804", "alice") is False


def test_shared_registry_between_authenticators():
    used = UsedCodes()
    with freeze_time("2005-03-18 01:58:29"):
        assert TimeAuthenticator(used_codes=used).check_code(RFC_SECRET, "081804", "alice") is True
        assert TimeAuthenticator(used_codes=used).check_code(RFC_SECRET, "081804", "alice") is False


def test_old_entries_are_pruned():
    totp = TimeAuthenticator(window=1)
    with freeze_time("2005-03-18 01:58:29"):
        assert totp.check_code(RFC_SECRET, "081804", "alice") is True
    assert ("alice", 37037036) in totp.used_codes
    with freeze_time("2005-03-18 02:58:29"):
        assert totp.check_code(RFC_SECRET, "000000", "alice") is False
    assert len(totp.used_codes) == 0


@freeze_time("1970-01-01 00:00:10")
def test_check_code_near_epoch_skips_negative_steps():
    totp = TimeAuthenticator(window=1)
    assert totp.check_code(RFC_SECRET, "755224", "alice") is True
    assert totp.check_code(RFC_SECRET, "287082", "bob") is True


@freeze_time("2005-03-18 01:58:29")
def test_check_code_invalid_secret_raises():
    with pytest.raises(InvalidKey):
        TimeAuthenticator().check_code("JBSWY3DP!HPK3PXP", "081804", "alice")
