"""Errors raised by the domain drivers, outside the engine core."""

USAGE_ERROR_TWEETS = "USAGE: Enter Seed, Tweet Num, File url & Num of words to read (optional)."
USAGE_ERROR_SNAKES = "USAGE: Enter Seed & Num of wanted paths."
FILE_ERROR = "ERROR: problem with opening file."


class DriverError(Exception):
    """Base class for driver failures"""


class CorpusFileError(DriverError):
    """The corpus file could not be opened or read"""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        super().__init__(f"{FILE_ERROR} ({path}: {reason})" if reason else f"{FILE_ERROR} ({path})")
