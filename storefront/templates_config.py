from jinja2 import Environment, PackageLoader, select_autoescape

from storefront.config import get_settings

settings = get_settings()

# Shared templates instance for outbound messages
templates = Environment(
    loader=PackageLoader("storefront", "templates"),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def format_money(cents: int) -> str:
    """Format integer cents for display."""
    return f"${cents / 100:.2f}"


templates.filters["money"] = format_money
templates.globals["site_name"] = settings.site_name
