import logging
import re

import phonenumbers
from phonenumbers import NumberParseException

from app.schemas.page import AggregatedSiteData, Platform
from app.schemas.scrape import NormalizedResult

logger = logging.getLogger(__name__)

# Checked in order; the first prefix with a match wins
_EMAIL_PRIORITY = ("info@", "contact@", "support@")

_IMAGE_SUFFIXES = (".png", ".jpg")

_LINKEDIN_CANONICAL_RE = re.compile(
    r"(https?://www\.linkedin\.com/company/[A-Za-z0-9_\-]+)",
    re.IGNORECASE,
)


def clean_emails(candidates: list[str]) -> list[str]:
    """Lower-case, strip query fragments, drop image names and dedupe (discovery order)."""
    cleaned: list[str] = []
    for raw in candidates:
        email = raw.lower().split("?")[0].strip()
        if not email or "@" not in email or email.endswith(_IMAGE_SUFFIXES):
            continue
        cleaned.append(email)
    return list(dict.fromkeys(cleaned))


def select_primary_email(candidates: list[str]) -> str | None:
    emails = clean_emails(candidates)
    for prefix in _EMAIL_PRIORITY:
        for email in emails:
            if email.startswith(prefix):
                return email
    return emails[0] if emails else None


def validate_phone(raw: str, default_region: str | None = None) -> str | None:
    """Return the international form of a valid number, or None."""
    try:
        parsed = phonenumbers.parse(raw, default_region)
    except NumberParseException:
        logger.debug("Unparsable phone candidate: %r", raw)
        return None
    if not phonenumbers.is_valid_number(parsed):
        logger.debug("Invalid phone candidate: %r", raw)
        return None
    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.INTERNATIONAL)


def select_phones(
    candidates: list[str],
    default_region: str | None = None,
    limit: int = 1,
) -> list[str]:
    valid = [
        formatted
        for raw in candidates
        if (formatted := validate_phone(raw, default_region))
    ]
    return list(dict.fromkeys(valid))[:limit]


def canonical_linkedin(url: str) -> str:
    """Trim a LinkedIn company URL down to its company path; other shapes pass through."""
    m = _LINKEDIN_CANONICAL_RE.search(url)
    return m.group(1) if m else url


def normalize(site: AggregatedSiteData, default_region: str | None = None) -> NormalizedResult:
    primary = select_primary_email(site.emails)

    social = dict(site.social)
    if linkedin := social.get(Platform.linkedin):
        social[Platform.linkedin] = canonical_linkedin(linkedin)

    return NormalizedResult(
        emails=[primary] if primary else [],
        phones=select_phones(site.phones, default_region),
        social=social,
    )
