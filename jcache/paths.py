import re
import typing as T

from jcache import (
    settings,
    structures,
)

UNSAFE = re.compile(r'[/\\?%*:|"<>]')


def sanitize(segment: str) -> str:
    return UNSAFE.sub("_", segment)


def subfolder(args: T.Sequence[T.Any]) -> str:
    """
    Bucket a call by its first positional argument.

    Only the first argument takes part, so calls that differ in any later
    argument share one entry.
    """
    if not args:
        return "global"

    first = args[0]

    if isinstance(first, str):
        return first if first else "empty"

    return "global"


def resolve(
    config: settings.Config,
    name: str,
    explicit: T.Optional[str],
    args: T.Sequence[T.Any],
) -> structures.Location:

    if explicit is not None:
        folder = explicit
    elif config.derive_subfolder:
        folder = subfolder(args)
    else:
        folder = ""

    directory = config.root / sanitize(folder) if folder else config.root

    return structures.Location(
        subfolder=folder,
        directory=directory,
        path=directory / f"{name}.{config.cache_file_extension}",
    )
