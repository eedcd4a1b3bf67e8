import logging
import os
from random import SystemRandom

from .exceptions import AuthenticatorError

log = logging.getLogger(__name__)


class GetrandomRandom(SystemRandom):
    """
    SystemRandom variant whose integer draws, and so choice(), go straight
    to the getrandom(2) syscall instead of through os.urandom. On Linux both
    read the same kernel pool; the preference only decides which interface is
    probed first.
    """

    def getrandbits(self, k: int) -> int:
        if k < 0:
            raise ValueError("number of bits must be non-negative")
        numbytes = (k + 7) // 8
        x = int.from_bytes(os.getrandom(numbytes), "big")
        return x >> (numbytes * 8 - k)


def _probe(generator: SystemRandom) -> SystemRandom:
    generator.getrandbits(8)
    return generator


def secure_random() -> SystemRandom:
    """
    Returns the preferred secure generator, or the platform default one
    (os.urandom) when getrandom(2) is unavailable.

    :raises AuthenticatorError: if no secure generator can be used at all
    """
    if hasattr(os, "getrandom"):
        try:
            generator = _probe(GetrandomRandom())
        except OSError as e:
            log.warning("getrandom(2) unusable (%s), falling back to os.urandom", e)
        else:
            log.debug("using getrandom(2) as the secure random source")
            return generator
    try:
        return _probe(SystemRandom())
    except (NotImplementedError, OSError) as e:
        raise AuthenticatorError("No secure random number generator is available on this platform") from e


# Shared by every caller for the life of the process; both generators keep no
# state of their own so concurrent use needs no locking.
random = secure_random()
