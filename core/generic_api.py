# =============================================================================
# core/generic_api.py  -  Generic REST knowledge base
# =============================================================================
#
# Backend HTTP surface:
#   GET /articles             -> {"data": [article, ...]}
#   GET /articles/{slug}      -> {"data": article | [article, ...]} or article
#   GET /articles?q={query}   -> {"data": [article, ...]}
#
# Each operation returns display text.  Empty results are informational text,
# not errors.  Any failure is re-raised as OperationError with the operation
# name as prefix (see core.errors.operation).
# =============================================================================

from urllib.parse import quote

from core.client import KnowledgeBaseClient
from core.config import Config
from core.errors import ArticleNotFoundError, BackendHTTPError, operation
from core.models import extract_single, parse_article, parse_articles
from core.sanitizer import strip_html, truncate_preview

LIST_PREVIEW_CHARS = 200
SEARCH_PREVIEW_CHARS = 300


class GenericKnowledgeBase:
    """Tool operations against the generic REST API."""

    list_tool = "list_articles"
    list_alias = "list_categories"
    id_param = "article_slug"
    id_description = (
        "The article slug (e.g., '9175641395215-Settings' - can be found in "
        "the article URL or from search results)"
    )

    def __init__(self, config: Config, client: KnowledgeBaseClient):
        self.config = config
        self.client = client

    @property
    def site_name(self) -> str:
        return self.config.site_name

    def article_url(self, slug: str) -> str:
        return f"{self.config.api_base}/articles/{slug}"

    # -------------------------------------------------------------------------
    # list
    # -------------------------------------------------------------------------
    @operation("Failed to list articles")
    async def list_content(self) -> str:
        articles = parse_articles(await self.client.get_json("/articles"), "data")

        if not articles:
            return f"No articles found in the {self.site_name}."

        output = f"# {self.site_name} - Available Articles\n\n"
        output += f"Found {len(articles)} article(s):\n\n"
        for article in articles:
            output += f"## {article.title}\n"
            output += f"Slug: {article.slug}\n"
            if article.summary:
                output += f"Summary: {truncate_preview(article.summary, LIST_PREVIEW_CHARS)}\n"
            output += "\n"
        return output

    # -------------------------------------------------------------------------
    # fetch
    # -------------------------------------------------------------------------
    @operation("Failed to fetch article")
    async def fetch_article(self, slug: str) -> str:
        try:
            payload = await self.client.get_json(f"/articles/{quote(slug, safe='')}")
        except BackendHTTPError as e:
            if e.status == 404:
                raise ArticleNotFoundError(slug) from e
            raise

        # A list response is not expected to hold more than one match; the
        # first element is the article.
        record = extract_single(payload, "data")
        if record is None:
            raise ArticleNotFoundError(slug)
        article = parse_article(record)

        return (
            f"# {article.title}\n\n"
            f"Article ID: {article.id}\n"
            f"Slug: {article.slug}\n"
            f"URL: {self.article_url(article.slug)}\n\n"
            f"{strip_html(article.body)}"
        )

    # -------------------------------------------------------------------------
    # search
    # -------------------------------------------------------------------------
    @operation("Failed to search articles")
    async def search_content(self, query: str) -> str:
        payload = await self.client.get_json(f"/articles?q={quote(query, safe='')}")
        results = parse_articles(payload, "data")

        if not results:
            return f'No articles found for "{query}" in {self.site_name}.'

        output = f'# Search Results for "{query}"\n\n'
        output += f"Found {len(results)} article(s) in {self.site_name}:\n\n"
        for article in results:
            output += f"## {article.title}\n"
            output += f"Slug: {article.slug}\n"
            output += f"URL: {self.article_url(article.slug)}\n"
            if article.summary:
                output += f"Preview: {truncate_preview(article.summary, SEARCH_PREVIEW_CHARS)}\n"
            output += "\n"
        return output
