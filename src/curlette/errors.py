class CurletteError(Exception):
    pass


class BuildError(CurletteError):
    """The request could not be turned into something sendable."""


class UnsupportedMethodError(BuildError):
    def __init__(self, method: str):
        super().__init__(f"Unsupported HTTP method '{method}'.")
        self.method = method


class InvalidURLError(BuildError):
    def __init__(self, url: str, reason):
        super().__init__(f"Invalid URL '{url}': {reason}")
        self.url = url
        self.reason = reason


class LoggingConfigError(CurletteError):
    pass
