"""Local precondition errors raised before any network call."""


class ImgbedError(Exception):
    """Base error for imgbed."""


class ConfigError(ImgbedError):
    """Required configuration is missing."""


class LocalFileNotFoundError(ImgbedError, FileNotFoundError):
    """The local file to upload does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"File not found: {path}")
