# metadata_rules.py
from collections import namedtuple

# -----------------------------
# Rule data model
# -----------------------------
# A rule pairs a CSS selector with the tag of the extractor that reads a raw
# value from each matched element. Scorers, defaults and processors are also
# referenced by tag so the catalog stays plain data.
Rule = namedtuple("Rule", ["selector", "extractor"])
RuleSet = namedtuple("RuleSet", ["rules", "scorers", "default", "processors"],
                     defaults=((), None, ()))


def _meta_property(prop):
    return Rule(f'meta[property="{prop}"]', "content")


def _meta_name(name, ignore_case=False):
    flag = " i" if ignore_case else ""
    return Rule(f'meta[name="{name}"{flag}]', "content")


def _link_rel(rel, ignore_case=False):
    flag = " i" if ignore_case else ""
    return Rule(f'link[rel="{rel}"{flag}]', "href")


# -----------------------------
# Catalog
# -----------------------------
METADATA_RULE_SETS = {
    "description": RuleSet(
        rules=(
            _meta_property("og:description"),
            _meta_name("description", ignore_case=True),
        ),
    ),

    "icon": RuleSet(
        rules=(
            _link_rel("apple-touch-icon"),
            _link_rel("apple-touch-icon-precomposed"),
            _link_rel("icon", ignore_case=True),
            _link_rel("fluid-icon"),
            _link_rel("shortcut icon"),
            _link_rel("Shortcut Icon"),
            _link_rel("mask-icon"),
        ),
        # <link rel="icon" href="small.png" sizes="16x16">
        # <link rel="icon" href="large.png" sizes="32x32">
        scorers=("icon_size",),
        default="favicon",
        processors=("absolute_url",),
    ),

    "image": RuleSet(
        rules=(
            _meta_property("og:image:secure_url"),
            _meta_property("og:image:url"),
            _meta_property("og:image"),
            _meta_name("twitter:image"),
            _meta_property("twitter:image"),
            _meta_name("thumbnail"),
        ),
        processors=("absolute_url",),
    ),

    "keywords": RuleSet(
        rules=(_meta_name("keywords", ignore_case=True),),
        processors=("keyword_list",),
    ),

    "title": RuleSet(
        rules=(
            _meta_property("og:title"),
            _meta_name("twitter:title"),
            _meta_property("twitter:title"),
            _meta_name("hdl"),
            Rule("title", "text"),
        ),
    ),

    "language": RuleSet(
        rules=(
            Rule("html[lang]", "lang"),
            _meta_name("language", ignore_case=True),
        ),
        processors=("primary_language",),
    ),

    "type": RuleSet(
        rules=(_meta_property("og:type"),),
    ),

    "url": RuleSet(
        rules=(
            Rule("a.amp-canurl", "href"),
            _link_rel("canonical"),
            _meta_property("og:url"),
        ),
        default="source_url",
        processors=("absolute_url",),
    ),

    "provider": RuleSet(
        rules=(_meta_property("og:site_name"),),
        default="host_provider",
    ),

    "snippet": RuleSet(
        rules=tuple(Rule(selector, "text") for selector in (
            "article p",
            "main p",
            "#main p",
            "p",
            "main",
            ".post__content",
            ".post .content",
            "#pagebody .storycontent",
        )),
        processors=("snippet_text",),
    ),
}


# -----------------------------
# Validation
# -----------------------------
def validate_catalog(rule_sets, extractors, scorers, defaults, processors):
    """
    Check that every rule-set has rules and that every tag it references
    resolves in the given dispatch tables. Raises ValueError otherwise.
    """
    for field, rule_set in rule_sets.items():
        if not rule_set.rules:
            raise ValueError(f"Rule-set '{field}' has no rules")
        for rule in rule_set.rules:
            if not rule.selector:
                raise ValueError(f"Rule-set '{field}' has an empty selector")
            if rule.extractor not in extractors:
                raise ValueError(f"Rule-set '{field}': unknown extractor '{rule.extractor}'")
        for tag in rule_set.scorers:
            if tag not in scorers:
                raise ValueError(f"Rule-set '{field}': unknown scorer '{tag}'")
        if rule_set.default is not None and rule_set.default not in defaults:
            raise ValueError(f"Rule-set '{field}': unknown default '{rule_set.default}'")
        for tag in rule_set.processors:
            if tag not in processors:
                raise ValueError(f"Rule-set '{field}': unknown processor '{tag}'")
