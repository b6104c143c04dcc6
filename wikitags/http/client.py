# wikitags/http/client.py

import asyncio
from typing import Dict

import aiohttp

from wikitags.http.errors import MalformedResponseError, NetworkError
from wikitags.http.headers import build_headers
from wikitags.logging.logger import setup_logger

log = setup_logger(__name__)


async def fetch_text(
    session: aiohttp.ClientSession,
    url: str,
    headers: Dict[str, str] | None = None,
    *,
    timeout_s: int = 30,
    user_agent: str | None = None,
) -> str:
    """Single GET, no retries. Transport failures surface as NetworkError, undecodable bodies as MalformedResponseError."""
    timeout = aiohttp.ClientTimeout(total=timeout_s)

    try:
        async with session.get(
            url,
            headers=build_headers(headers, user_agent=user_agent),
            timeout=timeout,
        ) as resp:
            resp.raise_for_status()
            text = await resp.text()
    except asyncio.TimeoutError as e:
        log.warning("Timeout after %ds while fetching %s", timeout_s, url)
        raise NetworkError(f"Timed out after {timeout_s}s: {url}", url=url) from e
    except aiohttp.ClientResponseError as e:
        log.warning("HTTP error %s for %s", e.status, url)
        raise NetworkError(f"HTTP {e.status} {e.message} for {url}", url=url) from e
    except aiohttp.ClientError as e:
        log.warning("Request failed for %s: %r", url, e)
        raise NetworkError(f"Request failed for {url}: {e}", url=url) from e
    except UnicodeDecodeError as e:
        log.warning("Undecodable body from %s: %s", url, e)
        raise MalformedResponseError(f"Response body is not valid {e.encoding}: {url}", url=url) from e

    log.debug("Fetched %d characters from %s (status=%d)", len(text), url, resp.status)
    return text


def text_fetcher(
    session: aiohttp.ClientSession,
    *,
    timeout_s: int = 30,
    user_agent: str | None = None,
):
    """Bind a session and transport options into a `url -> text` coroutine function."""

    async def _fetch(url: str) -> str:
        return await fetch_text(
            session, url,
            timeout_s=timeout_s, user_agent=user_agent,
        )

    return _fetch
