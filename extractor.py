# extractor.py
import re
from collections import namedtuple
from functools import reduce
from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup

from metadata_rules import METADATA_RULE_SETS, validate_catalog

# Per-call state handed to defaults and processors.
Context = namedtuple("Context", ["url"])


class MalformedHTMLError(ValueError):
    """Raised when the raw document cannot be turned into a parse tree."""


# -----------------------------
# Helpers
# -----------------------------
def make_url_absolute(base, relative):
    return urljoin(base, relative)


def parse_host(url):
    """
    Host part of a URL, without credentials or port.
    """
    host = urlsplit(url).hostname
    if not host:
        raise ValueError(f"No host in URL: {url!r}")
    return host


def get_provider(host: str) -> str:
    """
    Turn a host into a readable site name:
    www.example.co.uk -> example, news.bbc.com -> news bbc
    """
    host = re.sub(r"^www[a-zA-Z0-9]*\.", "", host, count=1)
    host = host.replace(".co.", ".", 1)
    return " ".join(host.split(".")[:-1])


def _first_number(value):
    match = re.search(r"\d+", value)
    return int(match.group()) if match else None


# -----------------------------
# Extractors: element -> raw value
# -----------------------------
def _attribute(name):
    def read(element):
        return element.get(name)
    return read


EXTRACTORS = {
    "content": _attribute("content"),
    "href": _attribute("href"),
    "lang": _attribute("lang"),
    "text": lambda element: element.get_text(),
}


# -----------------------------
# Scorers: (element, score) -> override or None
# -----------------------------
def _score_icon_size(element, score):
    """
    Prefer the largest declared icon, e.g. sizes="32x32" scores 32.
    """
    sizes = element.get("sizes")
    if sizes:
        return _first_number(sizes)
    return None


SCORERS = {
    "icon_size": _score_icon_size,
}


# -----------------------------
# Defaults: context -> value
# -----------------------------
DEFAULTS = {
    "source_url": lambda context: context.url,
    "favicon": lambda context: "favicon.ico",
    "host_provider": lambda context: get_provider(parse_host(context.url)),
}


# -----------------------------
# Processors: (value, context) -> value
# -----------------------------
def _collapse_snippet(text, context):
    return re.sub(r"[\n ]+", " ", text or "")[:500]


PROCESSORS = {
    "absolute_url": lambda url, context: make_url_absolute(context.url, url),
    "keyword_list": lambda keywords, context: [k.strip() for k in keywords.split(",")],
    "primary_language": lambda language, context: language.split("-")[0],
    "snippet_text": _collapse_snippet,
}

validate_catalog(METADATA_RULE_SETS, EXTRACTORS, SCORERS, DEFAULTS, PROCESSORS)


# -----------------------------
# Rule-set evaluation
# -----------------------------
def score_candidates(rule_set, doc):
    """
    Yield (score, element, rule) for every element matched by every rule,
    in priority order. Earlier rules get higher base scores; a scorer that
    returns a truthy value replaces the score, and the last one to do so wins.
    """
    rule_count = len(rule_set.rules)
    for index, rule in enumerate(rule_set.rules):
        for element in doc.select(rule.selector):
            score = rule_count - index
            for tag in rule_set.scorers:
                override = SCORERS[tag](element, score)
                if override:
                    score = override
            yield score, element, rule


def _keep_best(best, candidate):
    best_score, _ = best
    score, element, rule = candidate
    # Strict comparison: the first candidate to reach a score keeps it.
    if score > best_score:
        return score, EXTRACTORS[rule.extractor](element)
    return best


def select_best(rule_set, doc):
    """
    Returns (score, raw_value) of the winning candidate, or (0, None).
    The raw value may itself be empty if the winning element had nothing.
    """
    return reduce(_keep_best, score_candidates(rule_set, doc), (0, None))


def evaluate_rule_set(rule_set, doc, context):
    """
    Run one rule-set against a parsed document.
    Returns the final field value, or None if nothing was found and
    there is no default.
    """
    _, value = select_best(rule_set, doc)

    if not value and rule_set.default:
        value = DEFAULTS[rule_set.default](context)

    if not value:
        return None

    for tag in rule_set.processors:
        value = PROCESSORS[tag](value, context)

    if isinstance(value, str):
        value = value.strip()

    return value or None


# -----------------------------
# Main function
# -----------------------------
def parse(url, html, rule_sets=None):
    """
    Extract link-preview metadata (title, description, image, icon, ...)
    from an HTML document fetched from `url`.
    Fields with no value are left out of the result.
    """
    if not isinstance(html, (str, bytes)):
        raise MalformedHTMLError(f"Expected HTML text, got {type(html).__name__}")
    try:
        doc = BeautifulSoup(html, "html.parser")
    except Exception as e:
        raise MalformedHTMLError(f"Could not parse HTML from {url}: {e}") from e

    context = Context(url=url)
    rule_sets = METADATA_RULE_SETS if rule_sets is None else rule_sets

    metadata = {}
    for field, rule_set in rule_sets.items():
        try:
            value = evaluate_rule_set(rule_set, doc, context)
        except Exception as e:
            print(f"[WARN] Rule-set '{field}' failed for {url}: {e}")
            continue
        if value is not None:
            metadata[field] = value
    return metadata
