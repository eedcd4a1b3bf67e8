from .authenticator import Authenticator as Authenticator
from .cache import UsedCodes as UsedCodes
from .exceptions import AuthenticatorError as AuthenticatorError
from .exceptions import EasyAuthError as EasyAuthError
from .exceptions import ErrorKind as ErrorKind
from .exceptions import InvalidKey as InvalidKey
from .hotp import CounterAuthenticator as CounterAuthenticator
from .otp import derive_code as derive_code
from .otp import generate_key as generate_key
from .totp import TimeAuthenticator as TimeAuthenticator
from .utils import strings_equal as strings_equal
