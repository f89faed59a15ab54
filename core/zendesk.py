# =============================================================================
# core/zendesk.py  -  Zendesk Help Center
# =============================================================================
#
# Backend HTTP surface (all requests carry the Basic credential built from
# "<email>/token:<api token>"):
#
#   GET /help_center/{locale}/categories.json
#   GET /help_center/{locale}/categories/{id}/sections.json
#   GET /help_center/{locale}/articles/{id}.json
#   GET /help_center/articles/search.json?query=...&locale=...
#
# BEST-EFFORT ENRICHMENT:
#   Listing categories also lists each category's sections, one request per
#   category, sequentially.  A failed section request leaves that category
#   with no sections; it never fails the listing.
# =============================================================================

import logging
from urllib.parse import quote, urlencode

from core.client import KnowledgeBaseClient
from core.config import Config
from core.errors import ArticleNotFoundError, BackendHTTPError, operation
from core.models import (
    CategoryListing,
    Section,
    extract_single,
    parse_article,
    parse_articles,
    parse_categories,
    parse_sections,
)
from core.sanitizer import strip_html, truncate_preview

logger = logging.getLogger(__name__)

DESCRIPTION_PREVIEW_CHARS = 200
SEARCH_PREVIEW_CHARS = 200


class ZendeskHelpCenter:
    """Tool operations against the Zendesk Help Center API."""

    list_tool = "list_categories"
    list_alias = "list_articles"
    id_param = "article_id"
    id_description = (
        "The numeric Zendesk article ID (e.g., '360001234567' - found in the "
        "article URL or in search results)"
    )

    def __init__(self, config: Config, client: KnowledgeBaseClient):
        self.config = config
        self.client = client

    @property
    def site_name(self) -> str:
        return self.config.site_name

    @property
    def locale(self) -> str:
        return self.config.locale

    def article_url(self, article) -> str:
        """Canonical article URL; built from the API base when html_url is absent."""
        if article.url:
            return article.url
        root = self.config.api_base.removesuffix("/api/v2")
        return f"{root}/hc/{self.locale}/articles/{article.id}"

    async def fetch_sections(self, category_id) -> list[Section]:
        """Sections of one category, or [] if they could not be fetched."""
        endpoint = f"/help_center/{self.locale}/categories/{category_id}/sections.json"
        try:
            return parse_sections(await self.client.get_json(endpoint))
        except Exception as e:
            logger.warning(f"Skipping sections for category {category_id}: {e}")
            return []

    # -------------------------------------------------------------------------
    # list
    # -------------------------------------------------------------------------
    @operation("Failed to list categories")
    async def list_content(self) -> str:
        payload = await self.client.get_json(f"/help_center/{self.locale}/categories.json")
        categories = parse_categories(payload)

        if not categories:
            return f"No categories found in the {self.site_name}."

        listings = []
        for category in categories:
            listings.append(CategoryListing(category, await self.fetch_sections(category.id)))

        noun = "category" if len(listings) == 1 else "categories"
        output = f"# {self.site_name} - Help Center Categories\n\n"
        output += f"Found {len(listings)} {noun}:\n\n"
        for listing in listings:
            category = listing.category
            output += f"## {category.name}\n"
            output += f"Category ID: {category.id}\n"
            if category.description:
                output += (
                    "Description: "
                    f"{truncate_preview(category.description, DESCRIPTION_PREVIEW_CHARS)}\n"
                )
            if category.url:
                output += f"URL: {category.url}\n"
            if listing.sections:
                output += "Sections:\n"
                for section in listing.sections:
                    output += f"  - {section.name} (ID: {section.id})\n"
            output += "\n"
        return output

    # -------------------------------------------------------------------------
    # fetch
    # -------------------------------------------------------------------------
    @operation("Failed to fetch article")
    async def fetch_article(self, article_id: str) -> str:
        endpoint = f"/help_center/{self.locale}/articles/{quote(article_id, safe='')}.json"
        try:
            payload = await self.client.get_json(endpoint)
        except BackendHTTPError as e:
            if e.status == 404:
                raise ArticleNotFoundError(article_id) from e
            raise

        record = extract_single(payload, "article", bare=False)
        if record is None:
            raise ArticleNotFoundError(article_id)
        article = parse_article(record)

        output = f"# {article.title}\n\n"
        output += f"Article ID: {article.id}\n"
        output += f"URL: {self.article_url(article)}\n"
        if article.section_id is not None:
            output += f"Section ID: {article.section_id}\n"
        output += f"\n{strip_html(article.body)}"
        return output

    # -------------------------------------------------------------------------
    # search
    # -------------------------------------------------------------------------
    @operation("Failed to search articles")
    async def search_content(self, query: str) -> str:
        params = urlencode({"query": query, "locale": self.locale}, quote_via=quote)
        payload = await self.client.get_json(f"/help_center/articles/search.json?{params}")
        results = parse_articles(payload, "results")

        if not results:
            return f'No articles found for "{query}" in {self.site_name}.'

        output = f'# Search Results for "{query}"\n\n'
        output += f"Found {len(results)} article(s) in {self.site_name}:\n\n"
        for article in results:
            output += f"## {article.title}\n"
            output += f"Article ID: {article.id}\n"
            output += f"URL: {self.article_url(article)}\n"
            if article.body:
                output += f"Preview: {truncate_preview(article.body, SEARCH_PREVIEW_CHARS)}\n"
            output += "\n"
        return output
