import pathlib


class JCacheError(Exception):
    pass


class MissingResult(JCacheError):
    """Neither the cache nor the wrapped function produced a value."""

    def __init__(self, name: str):
        super().__init__(f"{name} returned None")
        self.name = name


class CacheIOError(JCacheError):
    def __init__(self, path: pathlib.Path, error: Exception):
        super().__init__(f"{path}: {error}")
        self.path = path
        self.error = error


class CacheWriteError(JCacheError):
    def __init__(self, name: str, path: pathlib.Path, error: Exception):
        super().__init__(f"Unable to write {name} to {path}: {error}")
        self.name = name
        self.path = path
        self.error = error
