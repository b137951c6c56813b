import asyncio
import typing as T

import requests

from jcache import (
    cache,
    functions,
)

URL = "https://jsonplaceholder.typicode.com/posts/{}"


async def get(url: str, timeout: float = 30.0) -> T.Any:
    functions.debug(f"GET -> {url}")
    loop = asyncio.get_running_loop()
    response = await loop.run_in_executor(
        None, lambda: requests.get(url, timeout=timeout)
    )
    response.raise_for_status()
    return response.json()


@cache.jcache()
async def post_cache(post_id: str, url: str = URL) -> T.Dict[str, T.Any]:
    return await get(url.format(post_id))


@cache.jcache_write_only(name="post_cache")
async def post_cache_write_only(post_id: str, url: str = URL) -> T.Dict[str, T.Any]:
    return await get(url.format(post_id))
