# fetcher.py
import os
import time
from datetime import datetime, timezone

import requests
from dotenv import load_dotenv

load_dotenv()

# -----------------------------
# Config
# -----------------------------
SCRAPINGANT_API_KEY = os.getenv("SCRAPINGANT_API_KEY")
SCRAPINGANT_URL = os.getenv("SCRAPINGANT_URL", "https://api.scrapingant.com/v1/general")
FETCH_TIMEOUT = float(os.getenv("FETCH_TIMEOUT", "20"))
FETCH_RETRIES = int(os.getenv("FETCH_RETRIES", "3"))
FETCH_RETRY_SLEEP = float(os.getenv("FETCH_RETRY_SLEEP", "2"))

HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/116.0 Safari/537.36",
    "Accept-Language": "en-US,en;q=0.9",
}


class FetchError(RuntimeError):
    pass


class BrowserFetchError(FetchError):
    """The headless browser service refused or failed the request."""


def _now():
    return datetime.now(timezone.utc).isoformat()


# -----------------------------
# Plain HTTP
# -----------------------------
def fetch_url(url, max_retries=None, sleep=None):
    """
    Fetch a URL with a browser-like user agent.
    Returns dict with {raw_text, fetched_at} and an `error` key on failure.
    """
    max_retries = FETCH_RETRIES if max_retries is None else max_retries
    sleep = FETCH_RETRY_SLEEP if sleep is None else sleep

    last_error = None
    for attempt in range(max_retries):
        try:
            r = requests.get(url, timeout=FETCH_TIMEOUT, headers=HEADERS)
            r.raise_for_status()
            return {
                "raw_text": r.text,
                "fetched_at": _now(),
            }
        except requests.RequestException as e:
            last_error = e
            print(f"[WARN] Fetch attempt {attempt+1} failed for {url}: {e}")
            if attempt + 1 < max_retries:
                time.sleep(sleep)

    return {
        "raw_text": None,
        "fetched_at": _now(),
        "error": f"Failed after {max_retries} attempts: {last_error}",
    }


# -----------------------------
# Headless browser service
# -----------------------------
def fetch_with_browser(url, api_key=None):
    """
    Render the page through the ScrapingAnt API and return its HTML.
    """
    api_key = api_key or SCRAPINGANT_API_KEY
    if not api_key:
        raise BrowserFetchError("No SCRAPINGANT_API_KEY set")

    r = requests.get(
        SCRAPINGANT_URL,
        params={"url": url},
        headers={"x-api-key": api_key},
        timeout=FETCH_TIMEOUT,
    )
    data = r.json()

    # The service reports failures in `detail`.
    if data.get("detail"):
        raise BrowserFetchError(data["detail"])
    return data.get("content")


def fetch_html(url, browser=False):
    """
    Get the raw HTML for `url`. The browser service is only used when asked
    for and an API key is configured; otherwise a plain GET is made.
    """
    if browser and SCRAPINGANT_API_KEY:
        html = fetch_with_browser(url)
        if html is None:
            raise BrowserFetchError(f"Browser service returned no content for {url}")
        return html

    fetched = fetch_url(url)
    if fetched.get("raw_text") is None:
        raise FetchError(fetched.get("error") or f"Could not fetch {url}")
    return fetched["raw_text"]
