import base64
import binascii
import hmac
from typing import Sequence

from .compat import random
from .exceptions import AuthenticatorError, InvalidKey

KEY_LENGTH = 16
KEY_CHARS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
DIGITS = 6
HMAC_ALGORITHM = "sha1"
KEY_BLOCK_SIZE = 64  # SHA-1 input block, in bytes
CHALLENGE_MAX = 2**64 - 1


def generate_key(length: int = KEY_LENGTH, chars: Sequence[str] = KEY_CHARS) -> str:
    """
    Generates a new secret key so a new user can be enrolled.

    :param length: number of characters in the key
    :param chars: alphabet to draw from, Base32 by default
    :returns: secret key
    """
    if length < 1:
        raise ValueError("length must be a positive integer")
    return "".join(random.choice(chars) for _ in range(length))


def int_to_bytestring(i: int, padding: int = 8) -> bytes:
    """
    Turns a challenge value into the OATH specified big-endian
    bytestring, which is fed to the HMAC along with the key
    """
    if not isinstance(i, int):
        raise TypeError("challenge must be an integer, got {}".format(type(i).__name__))
    if i < 0 or i > CHALLENGE_MAX:
        raise ValueError("challenge must be an integer between 0 and 2**64 - 1")
    return i.to_bytes(padding, "big")


def byte_secret(secret: str, block_size: int = 0) -> bytes:
    """
    Decodes a Base32 secret into key bytes, right-padding them with zeros
    up to ``block_size``.

    :raises InvalidKey: if the secret is not valid Base32
    """
    missing_padding = len(secret) % 8
    if missing_padding != 0:
        secret += "=" * (8 - missing_padding)
    try:
        key = base64.b32decode(secret, casefold=True)
    except (binascii.Error, ValueError) as e:
        # non-ASCII input raises a plain ValueError
        raise InvalidKey("Secret is not a valid Base32 string") from e
    return key.ljust(block_size, b"\0")


def hmac_digest(message: bytes, key: bytes, algorithm: str = HMAC_ALGORITHM) -> bytes:
    """
    :raises AuthenticatorError: if the runtime does not provide ``algorithm``
    """
    try:
        return hmac.new(key, message, algorithm).digest()
    except ValueError as e:
        raise AuthenticatorError("HMAC-{} algorithm is not available in this Python runtime".format(algorithm.upper())) from e


def dynamic_truncate(hmac_hash: bytes) -> int:
    # RFC 4226 section 5.3
    offset = hmac_hash[-1] & 0xF
    code = 0
    for b in hmac_hash[offset : offset + 4]:
        code = (code << 8) | (b & 0xFF)
    return code & 0x7FFFFFFF


def derive_code(secret: str, challenge: int) -> str:
    """
    Generates a verification code from a secret and a challenge value.

    :param secret: Base32 secret key
    :param challenge: counter value, or time step for time-based codes
    :returns: code of ``DIGITS`` decimal digits, zero-padded on the left
    :raises InvalidKey: if the secret has an invalid format
    :raises AuthenticatorError: if there is another problem computing the code
    """
    message = int_to_bytestring(challenge)
    key = byte_secret(secret, block_size=KEY_BLOCK_SIZE)
    code = dynamic_truncate(hmac_digest(message, key, HMAC_ALGORITHM))
    return str(code % 10**DIGITS).rjust(DIGITS, "0")
