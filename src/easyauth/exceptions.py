from enum import Enum


class ErrorKind(Enum):
    INVALID_KEY = "invalid_key"
    AUTHENTICATOR = "authenticator"


class EasyAuthError(Exception):
    """
    Base class for the faults raised while producing or checking a code.

    Catch this to handle both kinds in one place and branch on ``kind``.
    """

    kind: ErrorKind


class InvalidKey(EasyAuthError, ValueError):
    """The secret could not be decoded into key bytes."""

    kind = ErrorKind.INVALID_KEY


class AuthenticatorError(EasyAuthError):
    """The code could not be computed because the runtime lacks a capability."""

    kind = ErrorKind.AUTHENTICATOR
