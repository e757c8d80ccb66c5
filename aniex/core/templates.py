from datetime import datetime
from pathlib import Path
from urllib.parse import urlencode

from fastapi.templating import Jinja2Templates

from aniex.config import settings

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATE_DIR))


def page_url(request, **params) -> str:
    """
    Jinja helper: current URL with some query params replaced.
    Usage: {{ page_url(request, page=2) }}
    Params set to None or "" are dropped.
    """
    query = dict(request.query_params)
    for key, value in params.items():
        if value is None or value == "":
            query.pop(key, None)
        else:
            query[key] = value
    encoded = urlencode(query)
    return f"{request.url.path}?{encoded}" if encoded else request.url.path


templates.env.globals["app_version"] = settings.version
templates.env.globals["app_name"] = settings.app_name
templates.env.globals["page_url"] = page_url


# --- Filters ---
def format_date(value, fmt="%B %d, %Y"):
    return value.strftime(fmt) if isinstance(value, datetime) else value


def truncate(value: str, length: int = 50) -> str:
    """Truncate text to a certain length with ellipsis."""
    if not value:
        return ""
    return value[:length] + "…" if len(value) > length else value


def pluralize(count: int, singular: str, plural: str = None) -> str:
    if count == 1:
        return singular
    return plural if plural else singular + "s"


def humanize_number(value: int) -> str:
    return f"{value:,}"  # adds commas


def storage_percent(server) -> int:
    total = server.total_storage or 0
    if total <= 0:
        return 0
    return min(100, round((server.storage_used or 0) * 100 / total))


# Register filters
templates.env.filters["format_date"] = format_date
templates.env.filters["truncate_text"] = truncate
templates.env.filters["pluralize"] = pluralize
templates.env.filters["humanize_number"] = humanize_number
templates.env.filters["storage_percent"] = storage_percent
