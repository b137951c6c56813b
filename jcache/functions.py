import sys
import time
import typing as T

from tqdm import (
    tqdm,
)

from jcache import (
    settings,
    structures,
)


def elapsed(seconds: float) -> str:
    shown = f"{seconds:.1f}"
    return "-" if shown == "0.0" else f"{shown}s"


def status(outcome: structures.Outcome) -> str:
    if outcome.cacheable and outcome.hit:
        return " (cached)"
    return ""


def line(outcome: structures.Outcome) -> str:
    return (
        f"{outcome.subfolder:<30}/{outcome.name:<60}: "
        f"{elapsed(outcome.elapsed):<8}{status(outcome)}"
    )


def report(outcome: structures.Outcome) -> None:
    tqdm.write(line(outcome))


def error(name: str, e: BaseException) -> None:
    tqdm.write(f"Error in {name}: {e!r}", file=sys.stderr)


def warn(message: str) -> None:
    tqdm.write(message, file=sys.stderr)


def debug(message: str) -> None:
    if settings.Global.verbose:
        tqdm.write(message)


def age(modified: float, now: T.Optional[float] = None) -> str:
    seconds = (time.time() if now is None else now) - modified
    for unit, size in (("d", 86_400), ("h", 3_600), ("m", 60)):
        if seconds >= size:
            return f"{seconds / size:.1f}{unit}"
    return f"{max(seconds, 0):.0f}s"
