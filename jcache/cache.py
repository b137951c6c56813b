import functools
import inspect
import json
import time
import typing as T

from jcache import (
    exceptions,
    functions,
    paths,
    policy,
    settings,
    store,
    structures,
)


class Invoker:
    """
    Runs one cached call: resolve policy and location, try the cache, else
    await the wrapped function and optionally persist its result.

    Without an explicit `config` the process-wide `settings.Global.config`
    is consulted on every call, so it can be set after decoration.
    """

    def __init__(
        self,
        f: T.Callable[..., T.Awaitable[T.Any]],
        registration: structures.Registration,
        config: T.Optional[settings.Config] = None,
        backend: T.Optional[store.Store] = None,
        environ: T.Optional[T.Mapping[str, str]] = None,
    ):
        self.f = f
        self.registration = registration
        self._config = config
        self.store = store.Store() if backend is None else backend
        self.environ = environ

    @property
    def config(self) -> settings.Config:
        return settings.Global.config if self._config is None else self._config

    def location(
        self,
        *args,
        config: T.Optional[settings.Config] = None,
    ) -> structures.Location:
        return paths.resolve(
            self.config if config is None else config,
            self.registration.name,
            self.registration.subfolder,
            args,
        )

    async def _load(self, location: structures.Location) -> T.Any:

        if not await self.store.exists(location.path):
            return None

        try:
            return json.loads(await self.store.read(location.path))
        except (exceptions.CacheIOError, ValueError) as e:
            functions.warn(f"Ignoring unreadable cache entry {location.path}: {e}")
            return None

    async def _touch(self, location: structures.Location) -> None:
        try:
            await self.store.touch(location.path)
        except exceptions.CacheIOError as e:
            functions.warn(f"Unable to touch {location.path}: {e}")

    async def _persist(
        self,
        config: settings.Config,
        location: structures.Location,
        rv: T.Any,
    ) -> None:

        try:
            text = json.dumps(rv, indent=2)
            await self.store.write(location.directory, location.path, text)
        except (exceptions.CacheIOError, TypeError, ValueError) as e:
            if config.strict_writes:
                raise exceptions.CacheWriteError(
                    self.registration.name, location.path, e
                ) from e
            functions.warn(
                f"Unable to cache {self.registration.name} in {location.path}: {e}"
            )

    async def __call__(self, *args, **kw) -> T.Any:

        start = time.perf_counter()

        name = self.registration.name
        config = self.config
        resolved = policy.resolve(self.registration, config, self.environ)
        location = self.location(*args, config=config)

        functions.debug(f"{name} -> {resolved} -> {location.path}")

        rv = None
        hit = False

        if resolved.read:
            rv = await self._load(location)
            hit = rv is not None
            if hit:
                await self._touch(location)

        if not hit:
            try:
                rv = await self.f(*args, **kw)
            except Exception as e:
                functions.error(name, e)
                raise

            if resolved.write and rv is not None:
                await self._persist(config, location, rv)

        if config.report:
            functions.report(
                structures.Outcome(
                    subfolder=location.subfolder,
                    name=name,
                    elapsed=time.perf_counter() - start,
                    cacheable=policy.cacheable(self.registration, config),
                    hit=hit,
                )
            )

        if rv is None:
            raise exceptions.MissingResult(name)

        return rv


def wrap(
    f: T.Callable[..., T.Awaitable[T.Any]],
    registration: structures.Registration,
    config: T.Optional[settings.Config] = None,
    environ: T.Optional[T.Mapping[str, str]] = None,
):

    if not inspect.iscoroutinefunction(f):
        raise TypeError(f"{f!r} is not a coroutine function")

    if not registration.name or paths.sanitize(registration.name) != registration.name:
        raise ValueError(
            f"{registration.name!r} can not be used as a cache file name, pass name="
        )

    invoker = Invoker(f, registration, config=config, environ=environ)

    @functools.wraps(f)
    async def inner(*args, **kw):
        return await invoker(*args, **kw)

    inner.invoker = invoker
    return inner


def jcache(
    subfolder: T.Optional[str] = None,
    *,
    mode: structures.Mode = "read-write",
    cacheable: T.Optional[bool] = None,
    read: T.Optional[bool] = None,
    write: T.Optional[bool] = None,
    name: T.Optional[str] = None,
    config: T.Optional[settings.Config] = None,
    environ: T.Optional[T.Mapping[str, str]] = None,
):
    """
    Cache an async function's JSON result under
    `<root>/<subfolder>/<name>.<extension>`.

    Without an explicit subfolder the first positional argument picks it
    ("" -> "empty", other strings as is, anything else -> "global"). Only
    that argument is part of the key: `f("a", 1)` and `f("a", 2)` share an
    entry.
    """

    def outer(f):
        return wrap(
            f,
            structures.Registration(
                name=name or getattr(f, "__name__", ""),
                mode=mode,
                subfolder=subfolder,
                cacheable=cacheable,
                override=structures.Override(read=read, write=write),
            ),
            config=config,
            environ=environ,
        )

    return outer


def jcache_write_only(subfolder: T.Optional[str] = None, **kw):
    """Never reads; every call runs and overwrites the entry."""
    return jcache(subfolder, mode="write-only", **kw)
