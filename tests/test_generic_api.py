import httpx
import pytest

from core.client import KnowledgeBaseClient
from core.errors import OperationError
from core.generic_api import GenericKnowledgeBase
from tests.conftest import FakeBackend

ARTICLES = [
    {"id": 1, "title": "Getting Started", "slug": "1-getting-started", "summary": "<p>Welcome &amp; hello</p>", "body": "<p>Start</p>"},
    {"id": 2, "title": "Settings", "slug": "2-settings", "summary": "", "body": "<p>Gear icon</p>"},
    {"id": 3, "title": "Billing", "slug": "3-billing", "summary": "Invoices", "body": ""},
]


def make_kb(config, routes):
    backend = FakeBackend(routes)
    kb = GenericKnowledgeBase(config, KnowledgeBaseClient(config, transport=backend.transport))
    return kb, backend


# -----------------------------------------------------------------------------
# list
# -----------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_list_renders_one_heading_per_article(generic_config):
    kb, _ = make_kb(generic_config, {"/articles": (200, {"data": ARTICLES})})

    output = await kb.list_content()

    assert output.startswith("# Test Knowledge - Available Articles\n\nFound 3 article(s):\n\n")
    assert output.count("## ") == len(ARTICLES)
    assert "Slug: 2-settings\n" in output
    assert "Summary: Welcome & hello...\n" in output
    # no summary line for an empty summary
    assert "## Settings\nSlug: 2-settings\n\n" in output


@pytest.mark.asyncio
async def test_list_truncates_summary_to_200(generic_config):
    long = {"id": 9, "title": "Long", "slug": "9-long", "summary": "x" * 450}
    kb, _ = make_kb(generic_config, {"/articles": (200, {"data": [long]})})

    output = await kb.list_content()

    assert f"Summary: {'x' * 200}...\n" in output
    assert "x" * 201 not in output


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [{"data": []}, {"data": None}, {}])
async def test_list_empty_names_site(generic_config, payload):
    kb, _ = make_kb(generic_config, {"/articles": (200, payload)})
    assert await kb.list_content() == "No articles found in the Test Knowledge."


@pytest.mark.asyncio
async def test_list_wraps_backend_errors(generic_config):
    kb, _ = make_kb(generic_config, {"/articles": (500, {})})

    with pytest.raises(OperationError) as excinfo:
        await kb.list_content()
    assert str(excinfo.value) == "Failed to list articles: API error: 500 Internal Server Error"


# -----------------------------------------------------------------------------
# fetch
# -----------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_fetch_renders_full_article(generic_config):
    article = {"id": 2, "title": "Settings", "slug": "2-settings", "body": "<h2>Gear</h2>\n<p>Click&nbsp;it</p>"}
    kb, backend = make_kb(generic_config, {"/articles/2-settings": (200, {"data": article})})

    output = await kb.fetch_article("2-settings")

    assert output == (
        "# Settings\n\n"
        "Article ID: 2\n"
        "Slug: 2-settings\n"
        "URL: https://kb.example.com/articles/2-settings\n\n"
        "Gear Click it"
    )
    assert backend.paths == ["/articles/2-settings"]


@pytest.mark.asyncio
async def test_fetch_takes_first_element_of_list(generic_config):
    kb, _ = make_kb(generic_config, {"/articles/1-getting-started": (200, {"data": ARTICLES})})
    output = await kb.fetch_article("1-getting-started")
    assert output.startswith("# Getting Started\n")


@pytest.mark.asyncio
async def test_fetch_accepts_bare_article(generic_config):
    kb, _ = make_kb(generic_config, {"/articles/3-billing": (200, ARTICLES[2])})
    assert (await kb.fetch_article("3-billing")).startswith("# Billing\n")


@pytest.mark.asyncio
@pytest.mark.parametrize("route", [(200, {"data": []}), (404, {"error": "nope"})])
async def test_fetch_missing_article_is_not_found(generic_config, route):
    kb, _ = make_kb(generic_config, {"/articles/missing-id": route})

    with pytest.raises(OperationError) as excinfo:
        await kb.fetch_article("missing-id")
    assert str(excinfo.value) == "Failed to fetch article: Article not found: missing-id"


@pytest.mark.asyncio
async def test_fetch_record_without_title_is_shape_error(generic_config):
    kb, _ = make_kb(generic_config, {"/articles/x": (200, {"data": {"id": 1, "body": "b"}})})

    with pytest.raises(OperationError, match="Failed to fetch article: .*'title'"):
        await kb.fetch_article("x")


@pytest.mark.asyncio
async def test_fetch_network_failure_keeps_message(generic_config):
    def refuse(request):
        raise httpx.ConnectError("Connection refused", request=request)

    kb, _ = make_kb(generic_config, {"/articles/x": refuse})

    with pytest.raises(OperationError) as excinfo:
        await kb.fetch_article("x")
    assert str(excinfo.value) == "Failed to fetch article: Connection refused"
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


# -----------------------------------------------------------------------------
# search
# -----------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_search_url_encodes_query_and_renders_results(generic_config):
    kb, backend = make_kb(generic_config, {"/articles": (200, {"data": ARTICLES[:2]})})

    output = await kb.search_content("reset password & 2fa")

    assert backend.requests[0].url.params["q"] == "reset password & 2fa"
    assert "%26" in str(backend.requests[0].url)
    assert output.startswith(
        '# Search Results for "reset password & 2fa"\n\nFound 2 article(s) in Test Knowledge:\n\n'
    )
    assert "URL: https://kb.example.com/articles/1-getting-started\n" in output
    assert "Preview: Welcome & hello...\n" in output


@pytest.mark.asyncio
async def test_search_preview_truncates_to_300(generic_config):
    hit = {"id": 5, "title": "Huge", "slug": "5-huge", "summary": "y" * 1000}
    kb, _ = make_kb(generic_config, {"/articles": (200, {"data": [hit]})})

    output = await kb.search_content("huge")

    assert f"Preview: {'y' * 300}...\n" in output
    assert "y" * 301 not in output


@pytest.mark.asyncio
async def test_search_without_results_is_informational(generic_config):
    kb, _ = make_kb(generic_config, {"/articles": (200, {"data": []})})
    assert await kb.search_content("") == 'No articles found for "" in Test Knowledge.'
