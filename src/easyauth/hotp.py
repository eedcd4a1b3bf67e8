import logging
import threading
from typing import Dict, Optional

from . import otp, utils
from .authenticator import Authenticator

log = logging.getLogger(__name__)


class CounterAuthenticator(Authenticator):
    """
    Authenticator for HMAC-based OTP counters. Every user identifier moves
    along its own counter, starting at ``initial_count``.
    """

    def __init__(self, initial_count: int = 0, look_ahead: int = 0) -> None:
        """
        :param initial_count: starting HMAC counter value, defaults to 0
        :param look_ahead: how many counter values past the expected one are
            accepted, to resynchronise with a token that was used without
            being checked
        """
        if initial_count < 0:
            raise ValueError("initial_count must be a non-negative integer")
        if look_ahead < 0:
            raise ValueError("look_ahead must be a non-negative integer")
        self.initial_count = initial_count
        self.look_ahead = look_ahead
        self.counters: Dict[str, int] = {}
        self._lock = threading.Lock()

    def counter(self, user_identifier: Optional[str] = None) -> int:
        """
        :returns: the next counter value expected from the user, or
            ``initial_count`` for a user not seen yet
        """
        if user_identifier is None:
            return self.initial_count
        with self._lock:
            return self.counters.get(user_identifier, self.initial_count)

    def at(self, secret: str, count: int) -> str:
        """
        Generates the code for the given count.

        :param secret: Base32 secret
        :param count: the OTP HMAC counter
        :returns: code
        """
        return otp.derive_code(secret, count)

    def get_code(self, secret: str, user_identifier: Optional[str] = None) -> str:
        return self.at(secret, self.counter(user_identifier))

    def check_code(self, secret: str, code: str, user_identifier: str) -> bool:
        """
        Verifies the code against the user's expected counter and the next
        ``look_ahead`` ones. A match moves that user's counter past it, so
        the same code is never accepted twice for them.
        """
        with self._lock:
            expected = self.counters.get(user_identifier, self.initial_count)
            for count in range(expected, expected + self.look_ahead + 1):
                if utils.strings_equal(str(code), self.at(secret, count)):
                    log.debug("code accepted for %r at counter offset %d", user_identifier, count - expected)
                    self.counters[user_identifier] = count + 1
                    return True
        log.debug("code rejected for %r", user_identifier)
        return False
