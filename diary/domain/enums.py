"""Domain enumerations for the diary service."""

from enum import Enum


class AuthMethod(str, Enum):
    """How a request principal was authenticated.

    The value is carried as the `auth_method` claim; scope checks use it to
    tell PAT-authenticated calls apart from interactive OAuth calls.
    """

    PAT = "pat"
    OAUTH = "oauth"


class AuthOutcome(str, Enum):
    """Result kind of a single authentication scheme."""

    NO_RESULT = "no_result"
    SUCCESS = "success"
    FAIL = "fail"
