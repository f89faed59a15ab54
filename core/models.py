# =============================================================================
# core/models.py  -  Data Models and the explicit parse step
# =============================================================================
#
# These dataclasses define the shape of every record that flows from the
# backend to the formatter.  They are request-scoped: built from one JSON
# response, formatted, discarded.
#
# PARSE STEP:
#   Backend JSON is untyped.  The parse_* functions below are the only place
#   that looks inside it; they return typed records or raise
#   ResponseShapeError naming what was wrong.  The formatters never touch raw
#   dicts.
#
# ENVELOPES:
#   generic API   {"data": [...]} for collections, {"data": [...] | {...}}
#                 or a bare object for single lookups
#   Zendesk       {"article": {...}}, {"categories": [...]},
#                 {"sections": [...]}, {"results": [...]}
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Optional

from core.errors import ResponseShapeError


@dataclass(frozen=True)
class Article:
    """A knowledge-base article.

    ``slug`` is the generic API's identifier; Zendesk articles are addressed
    by ``id`` and carry their canonical ``url`` (html_url).
    """

    id: Any
    title: str
    summary: str = ""
    body: str = ""
    slug: str = ""
    url: str = ""
    section_id: Optional[Any] = None


@dataclass(frozen=True)
class Category:
    id: Any
    name: str
    description: str = ""
    url: str = ""


@dataclass(frozen=True)
class Section:
    id: Any
    name: str
    description: str = ""
    url: str = ""
    category_id: Optional[Any] = None


@dataclass(frozen=True)
class CategoryListing:
    """A category plus its sections.

    ``sections`` is best-effort: it is empty when the nested fetch failed.
    """

    category: Category
    sections: list[Section] = field(default_factory=list)


# -----------------------------------------------------------------------------
# Field helpers
# -----------------------------------------------------------------------------
def _require_object(record: Any, kind: str) -> dict:
    if not isinstance(record, dict):
        raise ResponseShapeError(
            f"Expected {kind} object, got {type(record).__name__}"
        )
    return record


def _require_text(record: dict, key: str, kind: str) -> str:
    value = record.get(key)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ResponseShapeError(f"{kind} record is missing required field '{key}'")
    return str(value)


def _optional_text(record: dict, key: str) -> str:
    value = record.get(key)
    return "" if value is None else str(value)


# -----------------------------------------------------------------------------
# Record parsers
# -----------------------------------------------------------------------------
def parse_article(record: Any) -> Article:
    """Build an Article from one JSON object (generic or Zendesk)."""
    obj = _require_object(record, "article")
    return Article(
        id=obj.get("id"),
        title=_require_text(obj, "title", "Article"),
        summary=_optional_text(obj, "summary"),
        body=_optional_text(obj, "body"),
        slug=_optional_text(obj, "slug"),
        url=_optional_text(obj, "html_url"),
        section_id=obj.get("section_id"),
    )


def parse_category(record: Any) -> Category:
    obj = _require_object(record, "category")
    return Category(
        id=obj.get("id"),
        name=_require_text(obj, "name", "Category"),
        description=_optional_text(obj, "description"),
        url=_optional_text(obj, "html_url"),
    )


def parse_section(record: Any) -> Section:
    obj = _require_object(record, "section")
    return Section(
        id=obj.get("id"),
        name=_require_text(obj, "name", "Section"),
        description=_optional_text(obj, "description"),
        url=_optional_text(obj, "html_url"),
        category_id=obj.get("category_id"),
    )


# -----------------------------------------------------------------------------
# Envelope extractors
# -----------------------------------------------------------------------------
def extract_list(payload: Any, key: str) -> list:
    """Return ``payload[key]`` as a list.

    An absent or null key means "no records".  Anything other than a list
    is a shape error.
    """
    obj = _require_object(payload, "response")
    items = obj.get(key)
    if items is None:
        return []
    if not isinstance(items, list):
        raise ResponseShapeError(
            f"Expected '{key}' to be a list, got {type(items).__name__}"
        )
    return items


def extract_single(payload: Any, key: str = "data", bare: bool = True) -> Optional[Any]:
    """Pick the one record out of a single-lookup response.

    ``payload[key]`` may be a list (first element wins) or an object.  When
    the key is absent the payload itself is the record if ``bare`` is true,
    otherwise there is no record.  Returns None when there is nothing to pick.
    """
    if isinstance(payload, list):
        return payload[0] if payload else None
    obj = _require_object(payload, "response")
    if key not in obj:
        return (obj or None) if bare else None
    inner = obj[key]
    if isinstance(inner, list):
        return inner[0] if inner else None
    return inner or None


def parse_articles(payload: Any, key: str) -> list[Article]:
    return [parse_article(item) for item in extract_list(payload, key)]


def parse_categories(payload: Any) -> list[Category]:
    return [parse_category(item) for item in extract_list(payload, "categories")]


def parse_sections(payload: Any) -> list[Section]:
    return [parse_section(item) for item in extract_list(payload, "sections")]
