import asyncio
import functools
import os
import pathlib
import tempfile
import typing as T

from jcache import (
    exceptions,
    structures,
)


def _write(directory: pathlib.Path, path: pathlib.Path, text: str) -> None:

    if not directory.exists():
        directory.mkdir(parents=True, exist_ok=True)

    fd, tmp = tempfile.mkstemp(dir=directory, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w") as fp:
            fp.write(text)
        os.replace(tmp, path)
    except BaseException:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise


def _read(path: pathlib.Path) -> str:
    with path.open("r") as fd:
        return fd.read()


class Store:
    """
    The only place touching the file system. Blocking calls run in the
    default executor of the running loop.
    """

    async def _run(self, path: pathlib.Path, f: T.Callable, *args):
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, functools.partial(f, *args))
        except OSError as e:
            raise exceptions.CacheIOError(path, e) from e

    async def exists(self, path: pathlib.Path) -> bool:
        try:
            return await self._run(path, path.is_file)
        except exceptions.CacheIOError:
            return False

    async def read(self, path: pathlib.Path) -> str:
        return await self._run(path, _read, path)

    async def touch(self, path: pathlib.Path) -> None:
        await self._run(path, os.utime, path, None)

    async def write(
        self,
        directory: pathlib.Path,
        path: pathlib.Path,
        text: str,
    ) -> None:
        await self._run(path, _write, directory, path, text)


def entries(
    root: pathlib.Path,
    extension: str,
    subfolder: T.Optional[str] = None,
) -> T.List[structures.Entry]:

    if not root.is_dir():
        return []

    if subfolder is None:
        files = list(root.glob(f"*.{extension}")) + list(root.glob(f"*/*.{extension}"))
    else:
        files = list((root / subfolder).glob(f"*.{extension}"))

    found = []
    for file in files:
        if file.name.startswith(".") or not file.is_file():
            continue
        stat = file.stat()
        found.append(
            structures.Entry(
                subfolder="" if file.parent == root else file.parent.name,
                name=file.stem,
                size=stat.st_size,
                modified=stat.st_mtime,
                path=file,
            )
        )

    return sorted(found, key=lambda e: e.modified)
