"""Exception hierarchy for androidutils.

I/O failures are never wrapped: copy, file and HTTP helpers let
:class:`OSError` (and ``requests.RequestException``, which derives from
it) reach the caller untouched.  The classes below cover the remaining
case, an environment that is misconfigured in a way no caller can
recover from at runtime.
"""


class AndroidUtilsError(Exception):
    """Base class for errors raised by androidutils itself."""


class ConfigurationError(AndroidUtilsError, RuntimeError):
    """Raised when settings are invalid or the environment is unusable."""


class TLSUnavailableError(ConfigurationError):
    """Raised when the interpreter has no usable TLS provider."""


__all__ = ["AndroidUtilsError", "ConfigurationError", "TLSUnavailableError"]
