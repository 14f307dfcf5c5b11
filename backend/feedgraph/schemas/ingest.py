# backend/feedgraph/schemas/ingest.py
from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, Field


# Shapes handed over by the parsing / extraction collaborators.
class ExtractedLink(BaseModel):
    url: str
    text: str = ""  # anchor text


class ParsedItem(BaseModel):
    title: str = ""
    url: str = ""
    content: str = ""
    links: List[ExtractedLink] = Field(default_factory=list)
    # normalized person names, already de-duplicated for this item
    people: List[str] = Field(default_factory=list)


class ParsedFeed(BaseModel):
    title: str = ""
    url: str
    # site root used to skip internal links; falls back to url
    site_url: Optional[str] = None
    items: List[ParsedItem] = Field(default_factory=list)


class IngestStats(BaseModel):
    feeds: int = 0
    links: int = 0
    mentions: int = 0
    failures: int = 0

    def merge(self, other: "IngestStats") -> "IngestStats":
        return IngestStats(
            feeds=self.feeds + other.feeds,
            links=self.links + other.links,
            mentions=self.mentions + other.mentions,
            failures=self.failures + other.failures,
        )


# Subscriptions registered by URL (single add or bulk import).
class FeedCreate(BaseModel):
    url: str
    title: Optional[str] = None


class FeedsImported(BaseModel):
    requested: int
    registered: int
