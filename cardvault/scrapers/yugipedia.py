"""
Yugipedia set card list fetcher.

Fetches a "Set_Card_Lists" page and returns the markup of its card table
body, ready for the card table parser.

Only HTTPS URLs on allow-listed hosts are fetched. Redirects are followed
by hand so every redirect target is checked against the same allow-list.
"""

import logging
from urllib.parse import urlsplit

import httpx
from bs4 import BeautifulSoup, Tag

from cardvault.config import settings
from cardvault.models.failure import (
    DisallowedHostError,
    FetchTimeoutError,
    InvalidSourceUrlError,
    TableNotFoundError,
    TooManyRedirectsError,
    UpstreamStatusError,
)

logger = logging.getLogger(__name__)


def is_allowed_host(host: str, allowed_hosts: list[str] | None = None) -> bool:
    """True if host is an allowed host or one of its subdomains."""
    allowed = settings.allowed_hosts if allowed_hosts is None else allowed_hosts
    host = host.lower().rstrip(".")
    return any(host == a.lower() or host.endswith("." + a.lower()) for a in allowed)


def validate_source_url(url: str) -> str:
    """
    Check that a URL may be fetched.

    Args:
        url: Candidate source URL

    Returns:
        The trimmed URL

    Raises:
        InvalidSourceUrlError: If the URL is malformed or not HTTPS
        DisallowedHostError: If the host is not allow-listed
    """
    candidate = (url or "").strip()
    if not candidate:
        raise InvalidSourceUrlError(candidate, "Missing URL")

    try:
        parts = urlsplit(candidate)
        host = parts.hostname
    except ValueError as e:
        raise InvalidSourceUrlError(candidate, "Malformed URL") from e

    if parts.scheme.lower() != "https":
        raise InvalidSourceUrlError(candidate, "Only https URLs are accepted")
    if not host:
        raise InvalidSourceUrlError(candidate, "URL has no host")
    if not is_allowed_host(host):
        raise DisallowedHostError(candidate, host)

    return candidate


async def fetch_page(url: str, client: httpx.AsyncClient | None = None) -> str:
    """
    Fetch a page, re-validating every redirect target.

    Args:
        url: Validated source URL
        client: Optional httpx client for connection reuse

    Returns:
        Raw HTML content

    Raises:
        DisallowedHostError / InvalidSourceUrlError: If a redirect leaves the allow-list
        TooManyRedirectsError: If more than settings.max_redirects redirects occur
        UpstreamStatusError: On a non-2xx final response
        FetchTimeoutError: If the server does not answer in time
        httpx.HTTPError: On other transport failures
    """
    if client is None:
        async with httpx.AsyncClient() as own_client:
            return await fetch_page(url, own_client)

    current = url
    for _ in range(settings.max_redirects + 1):
        try:
            response = await client.get(
                current,
                headers={"User-Agent": settings.user_agent},
                follow_redirects=False,
                timeout=settings.fetch_timeout_seconds,
            )
        except httpx.TimeoutException as e:
            raise FetchTimeoutError(current, settings.fetch_timeout_seconds) from e

        if response.is_redirect:
            location = response.headers.get("location", "")
            target = validate_source_url(str(response.url.join(location)))
            logger.debug("Redirected from %s to %s", current, target)
            current = target
            continue

        if not response.is_success:
            raise UpstreamStatusError(current, response.status_code)

        return response.text

    raise TooManyRedirectsError(url, settings.max_redirects)


def extract_table_body(html: str) -> str | None:
    """
    Extract the first card table body as "<tbody>...</tbody>" markup.

    Falls back to the rows of the first table if it has no explicit <tbody>.
    Returns None if the page has no table.
    """
    soup = BeautifulSoup(html, "html.parser")

    body = soup.select_one("table tbody")
    if isinstance(body, Tag):
        return f"<tbody>{body.decode_contents()}</tbody>"

    table = soup.find("table")
    if isinstance(table, Tag):
        rows = "".join(str(tr) for tr in table.find_all("tr"))
        if rows:
            return f"<tbody>{rows}</tbody>"

    return None


async def fetch_card_table(url: str, client: httpx.AsyncClient | None = None) -> str:
    """
    Fetch a set card list page and return its card table body.

    Raises:
        InvalidSourceUrlError, DisallowedHostError: For URLs that may not be fetched
        UpstreamStatusError, FetchTimeoutError, TooManyRedirectsError: On fetch failures
        TableNotFoundError: If the page has no table
    """
    source_url = validate_source_url(url)
    logger.info("Fetching card table from %s", source_url)

    html = await fetch_page(source_url, client)
    table_body = extract_table_body(html)
    if table_body is None:
        raise TableNotFoundError(source_url)

    return table_body
