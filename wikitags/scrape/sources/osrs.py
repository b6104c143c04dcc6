# wikitags/scrape/sources/osrs.py

from wikitags.config.settings import WikiTagsConfig
from wikitags.scrape.sources.base import WikiSource


def osrs_wiki(config: WikiTagsConfig | None = None) -> WikiSource:
    return WikiSource.from_config("Old School RuneScape Wiki", config or WikiTagsConfig())
