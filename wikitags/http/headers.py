# wikitags/http/headers.py

from browserforge.headers import HeaderGenerator
from wikitags.logging.logger import setup_logger

log = setup_logger(__name__)

DEFAULT_USER_AGENT = "wikitags/0.1 (bank tags from wiki categories; aiohttp)"

_gen = HeaderGenerator()


def build_headers(
    extra: dict[str, str] | None = None,
    *,
    user_agent: str | None = None,
) -> dict[str, str]:
    """
    Browser-shaped base headers with an identifying User-Agent.

    The generated browser UA is always replaced: MediaWiki API etiquette
    requires a client-specific agent string.
    """
    headers = _gen.generate()

    headers["User-Agent"] = user_agent or DEFAULT_USER_AGENT
    headers["Accept"] = "application/json"
    headers["Accept-Encoding"] = "gzip, deflate"

    if extra:
        headers.update(extra)

    log.debug("Headers built: UA=%s", headers["User-Agent"])
    return headers
