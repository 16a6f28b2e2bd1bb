"""
Shared HTML fixtures for the preview extraction tests.
"""

import pytest

PAGE_URL = "https://www.example.com/blog/post?id=7"

ARTICLE_HTML = """
<!DOCTYPE html>
<html lang="en-US">
<head>
    <meta charset="UTF-8">
    <title>Fallback title | Example</title>
    <meta property="og:title" content="  Open Graph Title  ">
    <meta name="twitter:title" content="Twitter Title">
    <meta property="og:description" content="Open Graph description">
    <meta name="description" content="Plain description">
    <meta property="og:image" content="/images/cover.jpg">
    <meta name="twitter:image" content="https://cdn.example.com/twitter.jpg">
    <meta property="og:type" content="article">
    <meta property="og:site_name" content="Example Blog">
    <meta name="Keywords" content="python, html ,metadata">
    <link rel="canonical" href="/blog/post">
    <link rel="apple-touch-icon" href="/apple.png">
    <link rel="icon" href="/favicon-16.png" sizes="16x16">
    <link rel="icon" href="/favicon-32.png" sizes="32x32">
</head>
<body>
    <nav><p>Navigation text</p></nav>
    <main>
        <article>
            <h1>Heading</h1>
            <p>First paragraph
               of the   article.</p>
            <p>Second paragraph.</p>
        </article>
    </main>
</body>
</html>
"""

BARE_HTML = "<html><head></head><body><div>Nothing to see</div></body></html>"


@pytest.fixture
def page_url():
    return PAGE_URL


@pytest.fixture
def article_html():
    return ARTICLE_HTML


@pytest.fixture
def bare_html():
    return BARE_HTML
