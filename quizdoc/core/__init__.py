"""
Core 모듈
설정, 상수, 예외 등 핵심 컴포넌트
"""
from quizdoc.core.settings import settings, get_settings
from quizdoc.core.constants import (
    QuizMarkers,
    ErrorCodes,
    ErrorMessages,
    HTTPHeaders,
)
from quizdoc.core.exceptions import (
    AppException,
    MalformedQuizError,
    OutOfRangeError,
    DocumentNotFoundError,
)

__all__ = [
    # Settings
    "settings",
    "get_settings",

    # Constants
    "QuizMarkers",
    "ErrorCodes",
    "ErrorMessages",
    "HTTPHeaders",

    # Exceptions
    "AppException",
    "MalformedQuizError",
    "OutOfRangeError",
    "DocumentNotFoundError",
]
