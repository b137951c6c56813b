import argparse
import asyncio
import dataclasses
import json
import sys
import time
import typing as T

import pandas as pd
import requests
from tqdm import (
    tqdm,
)

from jcache import (
    exceptions,
    functions,
    gather,
    settings,
    paths,
    store,
    structures,
)


def argument_parser(argv: T.Optional[T.Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="jcache")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enables verbose mode.",
    )
    parser.add_argument(
        "-p",
        "--production",
        action="store_true",
        help="Disables every cache read and write.",
    )
    parser.add_argument(
        "-e",
        "--env",
        action="store_true",
        help="Take read/write from JCACHE_READ and JCACHE_WRITE.",
    )
    parser.add_argument(
        "--cache-folder",
        type=str,
        default="cache",
        help="Cache folder under the working directory, default is: cache.",
    )
    parser.add_argument(
        "--extension",
        type=str,
        default="json",
        help="Cache file extension, default is: json.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail the call when its result can not be written to the cache.",
    )

    sub_parsers = parser.add_subparsers(dest="mode", required=True)

    fetch_parser = sub_parsers.add_parser(
        "fetch",
    )
    fetch_parser.add_argument(
        "ids",
        type=str,
        nargs="+",
        help="Post id(s) to fetch, each id is its own subfolder.",
    )
    fetch_parser.add_argument(
        "-w",
        "--write-only",
        action="store_true",
        help="Always fetch and overwrite the cached posts.",
    )
    fetch_parser.add_argument(
        "-u",
        "--url",
        type=str,
        default=gather.URL,
        help="URL template, '{}' is replaced by the id.",
    )

    list_parser = sub_parsers.add_parser(
        "list",
    )
    list_parser.add_argument(
        "-s",
        "--subfolder",
        type=str,
        default=None,
        help="Only list entries in this subfolder.",
    )

    return parser.parse_args(argv)


def configure(parsed: argparse.Namespace) -> settings.Config:
    make = settings.from_environment if parsed.env else settings.Config
    return make(
        production=parsed.production,
        cache_folder=parsed.cache_folder,
        cache_file_extension=parsed.extension,
        strict_writes=parsed.strict,
    )


async def fetch(
    ids: T.Sequence[str],
    write_only: bool = False,
    url: str = gather.URL,
) -> T.List[T.Any]:

    f = gather.post_cache_write_only if write_only else gather.post_cache

    return [
        await f(post_id, url=url)
        for post_id in tqdm(ids, disable=len(ids) < 2, leave=False)
    ]


def table(
    entries: T.Sequence[structures.Entry],
    now: T.Optional[float] = None,
) -> pd.DataFrame:

    now = time.time() if now is None else now
    columns = ["subfolder", "name", "size", "modified", "age"]

    if not entries:
        return pd.DataFrame(columns=columns)

    frame = pd.DataFrame.from_records([dataclasses.asdict(e) for e in entries])
    frame["age"] = frame["modified"].apply(lambda m: functions.age(m, now))
    frame["modified"] = pd.to_datetime(frame["modified"], unit="s").dt.floor("s")
    return frame[columns]


def main(argv: T.Optional[T.Sequence[str]] = None) -> int:
    parsed = argument_parser(argv)

    settings.Global.verbose = parsed.verbose
    settings.Global.config = configure(parsed)

    if parsed.mode == "fetch":
        try:
            posts = asyncio.run(fetch(parsed.ids, parsed.write_only, parsed.url))
        except (requests.RequestException, exceptions.JCacheError) as e:
            print(f"jcache: {e}", file=sys.stderr)
            return 1
        for post in posts:
            print(json.dumps(post, indent=2))

    elif parsed.mode == "list":
        config = settings.Global.config
        subfolder = parsed.subfolder
        if subfolder is not None:
            subfolder = paths.sanitize(subfolder)
        entries = store.entries(
            config.root,
            config.cache_file_extension,
            subfolder=subfolder,
        )
        if not entries:
            print(f"No entries in {config.root}")
            return 0
        print(table(entries).to_string(index=False))

    return 0


if __name__ == "__main__":
    sys.exit(main())
