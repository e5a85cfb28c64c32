# ABOUTME: Extraction of character detail links and attribute tables for the metadata pipeline
# ABOUTME: Pure functions over page HTML; missing attribute tables raise MissingTableError

from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from sprite_composer.core.models import CharacterRecord
from sprite_composer.extraction.base import MissingTableError

ATTRIBUTE_TABLE_MARKER = "名称"


def extract_character_urls(html: str, base_url: str, path_prefix: str = "/xytx/") -> list[str]:
    """Collect absolute character page URLs from the listing, de-duplicated in first-seen order."""
    soup = BeautifulSoup(html, "html.parser")

    urls: list[str] = []
    seen: set[str] = set()
    for link in soup.select(".divsort a[href]"):
        href = link.get("href") or ""
        if not href.startswith(path_prefix):
            continue
        url = urljoin(base_url.rstrip("/") + "/", href)
        if url not in seen:
            seen.add(url)
            urls.append(url)

    return urls


def find_attribute_table(soup: BeautifulSoup) -> Tag | None:
    """First ``table.wikitable`` whose first row starts with the marker header cell."""
    for table in soup.select("table.wikitable"):
        first_row = table.find("tr")
        if first_row is None:
            continue
        first_th = first_row.find("th")
        if first_th is not None and first_th.get_text(strip=True) == ATTRIBUTE_TABLE_MARKER:
            return table
    return None


def parse_attribute_table(table: Tag) -> dict[str, str]:
    """Map each row's header text to its data text, skipping rows without a header."""
    info: dict[str, str] = {}
    for row in table.find_all("tr"):
        key = "".join(th.get_text() for th in row.find_all("th")).strip()
        if not key:
            continue
        info[key] = "".join(td.get_text() for td in row.find_all("td")).strip()
    return info


def parse_character_detail(html: str, url: str) -> CharacterRecord:
    """Parse a character detail page into a CharacterRecord.

    Raises:
        MissingTableError: If the page has no attribute table with the marker header
    """
    soup = BeautifulSoup(html, "html.parser")

    heading = soup.find("h1")
    name = heading.get_text().strip() if heading else ""

    table = find_attribute_table(soup)
    if table is None:
        raise MissingTableError(f"No attribute table headed '{ATTRIBUTE_TABLE_MARKER}' on {url}")

    return CharacterRecord(name=name, url=url, info=parse_attribute_table(table))
