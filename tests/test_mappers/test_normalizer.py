from app.mappers.normalizer import (
    canonical_linkedin,
    clean_emails,
    normalize,
    select_phones,
    select_primary_email,
    validate_phone,
)
from app.schemas.page import AggregatedSiteData, Platform

LONDON = "+44 20 8366 1177"


# --- Email selection ---


def test_priority_prefix_beats_discovery_order():
    emails = ["Sales@Acme.com", "support@acme.com", "contact@acme.com", "info@acme.com"]
    assert select_primary_email(emails) == "info@acme.com"


def test_priority_prefixes_checked_in_order():
    assert select_primary_email(["support@acme.com", "contact@acme.com"]) == "contact@acme.com"
    assert select_primary_email(["sales@acme.com", "support@acme.com"]) == "support@acme.com"


def test_falls_back_to_first_candidate():
    assert select_primary_email(["Sales@Acme.com", "hello@acme.com"]) == "sales@acme.com"


def test_query_fragment_stripped():
    assert select_primary_email(["info@acme.com?subject=Hi"]) == "info@acme.com"


def test_image_names_and_non_emails_dropped():
    assert select_primary_email(["logo@2x.png", "hero@3x.jpg", "not-an-email"]) is None
    assert select_primary_email(["logo@2x.png", "sales@acme.com"]) == "sales@acme.com"


def test_no_candidates():
    assert select_primary_email([]) is None


def test_clean_emails_dedupes_after_lowercasing():
    assert clean_emails(["A@acme.com", " a@acme.com ", "a@acme.com?x=1", "b@acme.com"]) == [
        "a@acme.com",
        "b@acme.com",
    ]


# --- Phone selection ---


def test_validate_phone_international_format():
    assert validate_phone("+442083661177") == LONDON
    assert validate_phone("+44 (20) 8366-1177") == LONDON


def test_validate_phone_needs_country_code_without_region():
    assert validate_phone("020 8366 1177") is None
    assert validate_phone("020 8366 1177", "GB") == LONDON


def test_invalid_phone_dropped():
    assert validate_phone("1234567") is None
    assert validate_phone("call us") is None


def test_select_phones_keeps_one():
    phones = select_phones(["not a phone", "+442083661177", LONDON, "+1 650-253-0000"])
    assert phones == [LONDON]


def test_select_phones_empty_when_nothing_valid():
    assert select_phones(["12345678", "(000) 000-0000"]) == []


# --- LinkedIn ---


def test_linkedin_company_url_trimmed():
    assert (
        canonical_linkedin("https://www.linkedin.com/company/example?trk=x")
        == "https://www.linkedin.com/company/example"
    )
    assert (
        canonical_linkedin("https://www.linkedin.com/company/acme_co-1/about/")
        == "https://www.linkedin.com/company/acme_co-1"
    )


def test_linkedin_other_shapes_unchanged():
    assert canonical_linkedin("https://www.linkedin.com/in/jane") == "https://www.linkedin.com/in/jane"
    assert canonical_linkedin("https://linkedin.com/company/acme") == "https://linkedin.com/company/acme"


# --- normalize ---


def test_normalize_full_site():
    site = AggregatedSiteData(
        emails=["hello@acme.com", "INFO@acme.com"],
        phones=["+44 (20) 8366-1177"],
        social={
            Platform.facebook: "https://www.facebook.com/acme",
            Platform.linkedin: "https://www.linkedin.com/company/acme?trk=x",
        },
    )
    result = normalize(site)
    assert result.emails == ["info@acme.com"]
    assert result.phones == [LONDON]
    assert result.social == {
        Platform.facebook: "https://www.facebook.com/acme",
        Platform.linkedin: "https://www.linkedin.com/company/acme",
    }


def test_normalize_empty():
    result = normalize(AggregatedSiteData())
    assert result.emails == []
    assert result.phones == []
    assert result.social == {}
    assert not result.has_data()


def test_normalize_is_idempotent():
    site = AggregatedSiteData(
        emails=["Contact@Acme.com?x", "sales@acme.com"],
        phones=["+442083661177"],
        social={Platform.linkedin: "https://www.linkedin.com/company/acme/jobs"},
    )
    first = normalize(site)
    again = normalize(
        AggregatedSiteData(emails=first.emails, phones=first.phones, social=first.social)
    )
    assert again == first
