from enum import Enum
from typing import NamedTuple


class Color(str, Enum):
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    BLUE = "\033[34m"

    def __str__(self):
        return self.value


class Environment(str, Enum):
    DEV = "dev"
    PROD = "prod"


class ErrorInfo(NamedTuple):
    message: str
    http_status: int


class ErrorMessage(Enum):
    BATCH_TOO_LARGE = ErrorInfo("OCR batch has too many lines", 413)
    LINE_TOO_LONG = ErrorInfo("OCR line exceeds the maximum length", 413)
    TOO_MANY_CANDIDATES = ErrorInfo("Too many candidates to compare", 413)
    TOO_MANY_ISSUES = ErrorInfo("Too many issues to score", 413)
    INVALID_THRESHOLD = ErrorInfo("Threshold must be between 0 and 1", 422)
