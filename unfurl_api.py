#!/usr/bin/env python3
"""
Link preview API
================

GET /?url=<page>[&browser=1][&snippet=<text>]
returns the page's preview metadata as JSON.
"""

import json
import os

from dotenv import load_dotenv
from flask import Flask, Response, request
from flask_cors import CORS

from extractor import parse
from fetcher import fetch_html

load_dotenv()

# -----------------------------
# Config
# -----------------------------
HOST = os.getenv("UNFURL_HOST", "127.0.0.1")
PORT = int(os.getenv("UNFURL_PORT", "8000"))

app = Flask(__name__)
CORS(app, methods=["GET", "OPTIONS"])


def error(status, text):
    return Response(text, status=status, content_type="text/plain")


def json_response(data):
    return Response(
        json.dumps(data, indent=4, ensure_ascii=False),
        status=200,
        content_type="application/json; charset=UTF-8",
    )


@app.route("/", methods=["GET"])
def unfurl():
    """Fetch a page and return its preview metadata"""
    url = request.args.get("url")
    browser = request.args.get("browser")
    snippet = request.args.get("snippet")

    if not url:
        return error(400, "Missing 'url' parameter")

    try:
        html = fetch_html(url, browser=bool(browser))
        metadata = parse(url, html)
        if snippet:
            metadata["snippet"] = snippet
        return json_response(metadata)
    except Exception as e:
        print(f"[WARN] Unfurl failed for {url}: {e}")
        return error(500, str(e))


if __name__ == "__main__":
    print(f"[INFO] Serving link previews on http://{HOST}:{PORT}/")
    app.run(host=HOST, port=PORT)
