import calendar
import datetime
import logging
import time
from typing import Optional, Union

from . import otp, utils
from .authenticator import Authenticator
from .cache import UsedCodes

log = logging.getLogger(__name__)

DEFAULT_INTERVAL = 30
DEFAULT_WINDOW = 1


class TimeAuthenticator(Authenticator):
    """
    Authenticator for time-based OTP counters.
    """

    def __init__(
        self,
        interval: int = DEFAULT_INTERVAL,
        window: int = DEFAULT_WINDOW,
        used_codes: Optional[UsedCodes] = None,
    ) -> None:
        """
        :param interval: the time interval in seconds for OTP. This defaults to 30.
        :param window: number of intervals before and after the current one
            whose codes are still accepted, to absorb clock drift
        :param used_codes: registry of accepted codes, shared between
            authenticators that must not accept each other's codes twice
        """
        if interval < 1:
            raise ValueError("interval must be a positive integer")
        if window < 0:
            raise ValueError("window must be a non-negative integer")
        self.interval = interval
        self.window = window
        self.used_codes = used_codes if used_codes is not None else UsedCodes()

    def timecode(self, for_time: Union[int, float, datetime.datetime]) -> int:
        """
        Accepts either a Unix timestamp or a datetime object; naive
        datetimes are taken to be in UTC.
        """
        if isinstance(for_time, datetime.datetime):
            for_time = calendar.timegm(for_time.utctimetuple())
        return int(for_time // self.interval)

    def at(self, secret: str, for_time: Union[int, float, datetime.datetime]) -> str:
        """
        Generates the code for the given time.

        :param secret: Base32 secret
        :param for_time: the time to generate an OTP for
        :returns: code
        """
        return otp.derive_code(secret, self.timecode(for_time))

    def now(self, secret: str) -> str:
        """
        Generates the current time OTP

        :returns: code
        """
        return self.at(secret, time.time())

    def get_code(self, secret: str) -> str:
        return self.now(secret)

    def check_code(self, secret: str, code: str, user_identifier: str) -> bool:
        """
        Verifies the code against the current time step and ``window``
        steps on each side of it. A code accepted once for a user is
        rejected if presented again while it is still inside the window.
        """
        current = self.timecode(time.time())
        self.used_codes.prune(current - self.window)
        for step in range(max(current - self.window, 0), current + self.window + 1):
            if not utils.strings_equal(str(code), otp.derive_code(secret, step)):
                continue
            if not self.used_codes.add(user_identifier, step):
                log.debug("replayed code rejected for %r", user_identifier)
                return False
            log.debug("code accepted for %r at step offset %d", user_identifier, step - current)
            return True
        log.debug("code rejected for %r", user_identifier)
        return False
