import dataclasses
import pathlib
import typing as T

Mode = T.Literal["read-write", "write-only"]


@dataclasses.dataclass(frozen=True, eq=True)
class Policy:
    read: bool
    write: bool

    @staticmethod
    def off() -> "Policy":
        return Policy(read=False, write=False)


@dataclasses.dataclass(frozen=True, eq=True)
class Override:
    read: T.Optional[bool] = None
    write: T.Optional[bool] = None

    def apply(self, policy: Policy) -> Policy:
        return Policy(
            read=policy.read if self.read is None else self.read,
            write=policy.write if self.write is None else self.write,
        )


@dataclasses.dataclass(frozen=True, eq=True)
class Registration:
    name: str
    mode: Mode = "read-write"
    subfolder: T.Optional[str] = None
    cacheable: T.Optional[bool] = None
    override: Override = Override()


@dataclasses.dataclass(frozen=True, eq=True)
class Location:
    subfolder: str
    directory: pathlib.Path
    path: pathlib.Path


@dataclasses.dataclass(frozen=True, eq=True)
class Outcome:
    subfolder: str
    name: str
    elapsed: float
    cacheable: bool
    hit: bool = False


@dataclasses.dataclass(frozen=True, eq=True)
class Entry:
    subfolder: str
    name: str
    size: int
    modified: float
    path: pathlib.Path = dataclasses.field(compare=False)
