from enum import Enum


class RowHighlight(str, Enum):
    CLINCHED = "CLINCHED"  # Qualification secured
    INELIGIBLE = "INELIGIBLE"  # Disqualified / not eligible for points
    NONE = "NONE"


class ErrorKind(str, Enum):
    TRANSPORT = "TRANSPORT"  # Fetching or decoding the page failed
    NOT_FOUND = "NOT_FOUND"  # Page parsed, but no record matched
