import re

from app.schemas.page import PageExtraction, PageSnapshot, Platform

_EMAIL_RE = re.compile(
    r"\b[A-Z0-9._%+\-]+@[A-Z0-9.\-]+\.[A-Z]{2,}\b",
    re.IGNORECASE | re.ASCII,
)

# 7+ chars: digit, then digits/whitespace/hyphens/parentheses, optional leading '+'.
# ASCII digits only; whitespace includes no-break spaces.
_PHONE_RE = re.compile(r"\+?[0-9][0-9\s\-()]{6,}")

_LINKEDIN_PROFILE_RE = re.compile(r"linkedin\.com/(?:company|in)/", re.IGNORECASE)

# Substrings that mark contact/careers/privacy-style pages
_INTERNAL_LINK_KEYWORDS = ("cont", "join", "care", "priv")


def _social_platforms(href: str) -> list[Platform]:
    """Every platform an anchor target qualifies for; checks are independent."""
    lower = href.lower()
    platforms: list[Platform] = []
    if "facebook.com" in lower and "sharer.php" not in lower and "?" not in href:
        platforms.append(Platform.facebook)
    if "instagram.com" in lower and "?" not in href:
        platforms.append(Platform.instagram)
    if (
        "linkedin.com" in lower
        and "sharearticle" not in lower
        and _LINKEDIN_PROFILE_RE.search(href)
    ):
        platforms.append(Platform.linkedin)
    return platforms


def extract_page(snapshot: PageSnapshot) -> PageExtraction:
    """Collect raw email, phone and social candidates from one page.

    Emails come from mailto: targets and the first email-shaped match in each
    element's text. Phones come from tel: targets, or else the first long digit
    run in the element's text. Social links are classified from resolved anchor
    targets; the last match per platform wins.
    """
    emails: list[str] = []
    phones: list[str] = []
    social: dict[Platform, str] = {}

    for element in snapshot.elements:
        href = element.href
        text = element.text

        if href.startswith("mailto:"):
            emails.append(href.removeprefix("mailto:").strip())
        if m := _EMAIL_RE.search(text):
            emails.append(m.group(0))

        if href.startswith("tel:"):
            phones.append(href.removeprefix("tel:").strip())
        elif m := _PHONE_RE.search(text):
            phones.append(m.group(0).strip())

    for href in snapshot.links:
        if not href:
            continue
        for platform in _social_platforms(href):
            social[platform] = href

    return PageExtraction(emails=emails, phones=phones, social=social)


def discover_internal_links(snapshot: PageSnapshot, limit: int | None = None) -> list[str]:
    """Return anchor targets that look like contact, careers or privacy pages.

    Matches are kept in document order without dedup; ``limit`` caps the list.
    """
    links = [
        href
        for href in snapshot.links
        if href
        and any(k in href.lower() for k in _INTERNAL_LINK_KEYWORDS)
        and "mailto:" not in href
    ]
    if limit is not None:
        links = links[:limit]
    return links
