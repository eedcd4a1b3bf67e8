from abc import ABC, abstractmethod


class Authenticator(ABC):
    """
    Interface shared by the counter-based and time-based authenticators.

    Implementations supply the challenge value and their own window policy,
    and call into :mod:`easyauth.otp` for the derivation itself.
    """

    @abstractmethod
    def get_code(self, secret: str) -> str:
        """
        Gets the currently valid code.

        :param secret: secret used for generating the code
        :returns: generated code
        :raises InvalidKey: if the secret has an invalid format
        :raises AuthenticatorError: if there is another problem computing the code
        """

    @abstractmethod
    def check_code(self, secret: str, code: str, user_identifier: str) -> bool:
        """
        Checks if the provided code is valid for given secret key and user identifier.

        :param secret: secret used for generating the code
        :param code: code presented by the user
        :param user_identifier: user the code is presented for
        :returns: True if the code is valid and should be accepted
        """
