from bleach.css_sanitizer import CSSSanitizer
import bleach

from team_roster.core.config import settings

css_sanitizer = CSSSanitizer(allowed_css_properties=settings.ALLOWED_CSS_PROPERTIES)


def sanitize_html_content(html: str) -> str:
    """Sanitize a member bio, keeping whitelisted tags and CSS properties"""
    return bleach.clean(
        html,
        tags=settings.ALLOWED_TAGS,
        attributes=settings.ALLOWED_ATTRIBUTES,
        css_sanitizer=css_sanitizer,
        strip=True,
        strip_comments=True
    )
