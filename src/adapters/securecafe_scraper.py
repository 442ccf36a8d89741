"""SecureCafe availability page scraper.

Fetches the "available units" page and turns each table row into a raw
record. Records are not validated here: a row with a missing cell comes back
with None for that field and the core rejects it as malformed.
"""

from __future__ import annotations

import logging
import urllib.error
import urllib.request
from typing import Optional

from bs4 import BeautifulSoup

from core.errors import FetchError

LOGGER = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/123.0.0.0 Safari/537.36"
)
TABLE_SELECTOR = "table.availableUnits"
ROW_SELECTOR = f"{TABLE_SELECTOR} tbody > tr"

# field -> (current data-label, legacy data-selenium-id)
CELL_SELECTORS = {
    "name": ("td[data-label='Apartment']", "td[data-selenium-id='Apt1']"),
    "size": ("td[data-label='Sq.Ft.']", "td[data-selenium-id='SqFt1']"),
    "price": ("td[data-label='Rent']", "td[data-selenium-id='Rent1']"),
}


def _cell_text(row, selectors: tuple[str, ...]) -> Optional[str]:
    for selector in selectors:
        cell = row.select_one(selector)
        if cell is not None:
            return cell.get_text(" ", strip=True)
    return None


def parse_listings(page_html: str) -> list[dict]:
    """Extract name/size/price records from the availability table.

    A page without the table at all (challenge page, layout change) is a
    parse failure; only a present table with no rows means nothing is listed.
    """

    soup = BeautifulSoup(page_html, "html.parser")
    if soup.select_one(TABLE_SELECTOR) is None:
        raise FetchError("Availability table not found")
    records = []
    for row in soup.select(ROW_SELECTOR):
        records.append({field: _cell_text(row, selectors) for field, selectors in CELL_SELECTORS.items()})
    return records


def fetch_html(url: str, timeout: float) -> str:
    request = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
    with urllib.request.urlopen(request, timeout=timeout) as response:
        charset = response.headers.get_content_charset() or "utf-8"
        return response.read().decode(charset, errors="replace")


class SecureCafeScraper:
    """ScraperPort implementation for a SecureCafe property page."""

    def __init__(self, url: str, timeout: float = 30) -> None:
        self._url = url
        self._timeout = timeout

    async def fetch(self) -> list[dict]:
        """Download and parse the availability page."""

        try:
            page_html = fetch_html(self._url, self._timeout)
        except urllib.error.HTTPError as e:
            raise FetchError(f"HTTP {e.code} from listing page") from e
        except (urllib.error.URLError, OSError) as e:
            raise FetchError(f"Failed to fetch listing page: {e}") from e

        records = parse_listings(page_html)
        LOGGER.debug("Parsed %s rows from %s", len(records), self._url)
        return records
