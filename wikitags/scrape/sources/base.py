# wikitags/scrape/sources/base.py

from dataclasses import dataclass

from wikitags.config.settings import WikiTagsConfig


@dataclass(frozen=True)
class WikiSource:
    name: str
    items_query_template: str
    category_query_template: str
    mapping_url: str
    all_items_category: str = "items"
    continue_key: str = "cmcontinue"

    @classmethod
    def from_config(cls, name: str, config: WikiTagsConfig) -> "WikiSource":
        return cls(
            name=name,
            items_query_template=config.items_query_template,
            category_query_template=config.category_query_template,
            mapping_url=config.mapping_url,
        )
