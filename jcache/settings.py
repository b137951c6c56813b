import dataclasses
import os
import pathlib
import typing as T

READ_VARIABLE = "JCACHE_READ"
WRITE_VARIABLE = "JCACHE_WRITE"


@dataclasses.dataclass(frozen=True)
class Config:
    """
    Cache configuration, resolved once per call by the invoker.

    `production` is the kill switch: when set nothing is read from or
    written to the cache, whatever the mode, environment or overrides say.
    `base` defaults to the working directory at the time a path is resolved.
    """

    production: bool = False
    cache_folder: str = "cache"
    cache_file_extension: str = "json"
    base: T.Optional[pathlib.Path] = None
    # Take read/write from JCACHE_READ/JCACHE_WRITE instead of the mode.
    environment: bool = False
    # Infer `cacheable` from a trailing "cache" in the function name.
    name_convention: bool = False
    derive_subfolder: bool = True
    strict_writes: bool = False
    report: bool = True

    @property
    def root(self) -> pathlib.Path:
        base = pathlib.Path.cwd() if self.base is None else pathlib.Path(self.base)
        return base / self.cache_folder


def from_environment(**kw) -> Config:
    """
    The environment-gated setup: JCACHE_READ/JCACHE_WRITE decide, and only
    functions whose name ends with "cache" are read back.
    """
    kw.setdefault("environment", True)
    kw.setdefault("name_convention", True)
    return Config(**kw)


def enabled(
    variable: str,
    environ: T.Optional[T.Mapping[str, str]] = None,
) -> bool:
    environ = os.environ if environ is None else environ
    return environ.get(variable) == "true"


class Global:
    verbose = False
    config = Config()
