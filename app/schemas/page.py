from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel


class Platform(StrEnum):
    facebook = "facebook"
    instagram = "instagram"
    linkedin = "linkedin"


class PageElement(BaseModel):
    text: str = ""  # rendered text, descendants included
    href: str = ""  # raw href attribute, unresolved


class PageSnapshot(BaseModel):
    """Read-only view of a rendered page: scannable elements plus resolved anchor targets."""

    elements: list[PageElement] = []
    links: list[str] = []  # absolute a[href] targets, document order


class PageExtraction(BaseModel):
    emails: list[str] = []
    phones: list[str] = []
    social: dict[Platform, str] = {}


class AggregatedSiteData(BaseModel):
    """Candidates collected across every page visited for one site."""

    emails: list[str] = []
    phones: list[str] = []
    social: dict[Platform, str] = {}

    def merged(self, page: PageExtraction) -> AggregatedSiteData:
        # Later pages overwrite earlier social links
        return AggregatedSiteData(
            emails=[*self.emails, *page.emails],
            phones=[*self.phones, *page.phones],
            social={**self.social, **page.social},
        )
