"""
SiteSettings schema shared by the settings API and the settings client.

The wire format is camelCase (``seoTitle``, ``socialLinks`` ...). In the
database the record is stored as one ``site_settings`` row per key
(``seo_title``, ``linkedin_url`` ...); the helpers below convert between the
two shapes.
"""

from typing import Dict, Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class SiteSettings(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    seo_title: str = Field(..., alias="seoTitle")
    seo_description: str = Field(..., alias="seoDescription")
    seo_keywords: str = Field(..., alias="seoKeywords")
    og_image: str = Field(..., alias="ogImage")
    site_name: str = Field(..., alias="siteName")
    contact_email: str = Field(..., alias="contactEmail")
    social_links: Dict[str, Optional[str]] = Field(default_factory=dict, alias="socialLinks")

    def to_payload(self) -> Dict:
        payload = self.model_dump(by_alias=True)
        # A body that omitted socialLinks dumps back without it
        if "social_links" not in self.model_fields_set:
            payload.pop("socialLinks", None)
        return payload

    def keywords(self) -> List[str]:
        return [k.strip() for k in self.seo_keywords.split(",") if k.strip()]


# Fallback served by the settings client whenever the backend can't be read.
DEFAULT_SITE_SETTINGS = SiteSettings(
    seoTitle="Chidi Ogara - Senior Fullstack Developer",
    seoDescription=(
        "Professional fullstack web developer specializing in React, Node.js, "
        "and modern web technologies. Building scalable solutions for businesses."
    ),
    seoKeywords=(
        "fullstack developer, web development, React, Node.js, TypeScript, "
        "JavaScript, web applications"
    ),
    ogImage="",
    siteName="Chidi Ogara Portfolio",
    contactEmail="chidi@example.com",
    socialLinks={"linkedin": "", "github": "", "twitter": ""},
)


def default_site_settings() -> SiteSettings:
    """Fresh copy of the fallback record, safe for callers to mutate."""
    return DEFAULT_SITE_SETTINGS.model_copy(deep=True)


# field name -> (row key, category, description)
SETTING_KEYS: Dict[str, Tuple[str, str, str]] = {
    "seo_title": ("seo_title", "seo", "Main site title for SEO"),
    "seo_description": ("seo_description", "seo", "Meta description for SEO"),
    "seo_keywords": ("seo_keywords", "seo", "Keywords for SEO"),
    "og_image": ("og_image", "seo", "Open Graph image URL"),
    "site_name": ("site_name", "general", "Site name"),
    "contact_email": ("contact_email", "contact", "Main contact email"),
}

SOCIAL_CATEGORY = "social"
SOCIAL_KEY_SUFFIX = "_url"

# Rows written to a fresh database on startup.
DEFAULT_SETTING_ROWS: List[Dict[str, str]] = [
    {"key": "seo_title", "value": DEFAULT_SITE_SETTINGS.seo_title, "category": "seo", "description": "Main site title for SEO"},
    {"key": "seo_description", "value": DEFAULT_SITE_SETTINGS.seo_description, "category": "seo", "description": "Meta description for SEO"},
    {"key": "seo_keywords", "value": DEFAULT_SITE_SETTINGS.seo_keywords, "category": "seo", "description": "Keywords for SEO"},
    {"key": "og_image", "value": "/og-image.jpg", "category": "seo", "description": "Open Graph image URL"},
    {"key": "site_name", "value": DEFAULT_SITE_SETTINGS.site_name, "category": "general", "description": "Site name"},
    {"key": "contact_email", "value": DEFAULT_SITE_SETTINGS.contact_email, "category": "contact", "description": "Main contact email"},
    {"key": "linkedin_url", "value": "https://linkedin.com/in/chidiogara", "category": "social", "description": "LinkedIn profile URL"},
    {"key": "github_url", "value": "https://github.com/chidiogara", "category": "social", "description": "GitHub profile URL"},
    {"key": "twitter_url", "value": "https://twitter.com/chidiogara", "category": "social", "description": "Twitter profile URL"},
]


def _social_key(provider: str) -> str:
    return f"{provider}{SOCIAL_KEY_SUFFIX}"


def settings_from_rows(rows: Iterable[Tuple[str, Optional[str], Optional[str]]]) -> SiteSettings:
    """
    Assemble a SiteSettings record from (key, value, category) rows.

    Keys missing from ``rows`` take the seeded default value; a NULL value is
    read as an empty string.
    """
    values: Dict[str, str] = {}
    social: Dict[str, str] = {}

    for row in DEFAULT_SETTING_ROWS:
        if row["category"] == SOCIAL_CATEGORY:
            social[row["key"][: -len(SOCIAL_KEY_SUFFIX)]] = row["value"]
        else:
            values[row["key"]] = row["value"]

    for key, value, category in rows:
        value = value or ""
        if category == SOCIAL_CATEGORY and key.endswith(SOCIAL_KEY_SUFFIX):
            social[key[: -len(SOCIAL_KEY_SUFFIX)]] = value
        else:
            values[key] = value

    fields = {field: values.get(row_key, "") for field, (row_key, _, _) in SETTING_KEYS.items()}
    return SiteSettings(social_links=social, **fields)


def settings_to_rows(settings: SiteSettings) -> List[Dict[str, str]]:
    """
    Flatten a SiteSettings record into upsertable rows (key, value, category, description).
    """
    rows = []
    for field, (row_key, category, description) in SETTING_KEYS.items():
        rows.append(
            {
                "key": row_key,
                "value": getattr(settings, field),
                "category": category,
                "description": description,
            }
        )
    for provider, url in settings.social_links.items():
        rows.append(
            {
                "key": _social_key(provider),
                "value": url,
                "category": SOCIAL_CATEGORY,
                "description": f"{provider.capitalize()} profile URL",
            }
        )
    return rows

