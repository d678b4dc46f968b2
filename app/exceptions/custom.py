class BatchInputError(Exception):
    def __init__(self, message: str = "URLs array is required"):
        self.message = message
        super().__init__(message)


class BatchFatalError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class SiteNavigationError(Exception):
    def __init__(self, message: str, url: str | None = None):
        self.message = message
        self.url = url
        super().__init__(message)


class ExtractionError(Exception):
    def __init__(self, message: str, url: str | None = None):
        self.message = message
        self.url = url
        super().__init__(message)
