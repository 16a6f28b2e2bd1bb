import hashlib
import json
import os
import sys
from datetime import datetime, timezone

import pandas as pd

from extractor import parse
from fetcher import fetch_html


def _safe_name(url):
    # Hash suffix keeps URLs that sanitize alike in separate files
    url_hash = hashlib.sha256(url.encode()).hexdigest()[:8]
    keep = (".", "_", "-")
    s = "".join(c if c.isalnum() or c in keep else "_" for c in url.split("://", 1)[-1])
    return f"{s.strip('_')[:170] or 'page'}_{url_hash}"


# -----------------------------
# Runner
# -----------------------------
def build_previews(urls_csv, output_folder="previews", browser=False):
    """
    Reads page URLs from a CSV with a `url` column,
    extracts preview metadata for each one,
    and saves per-page JSON files plus a summary.csv.
    """
    df = pd.read_csv(urls_csv)
    os.makedirs(output_folder, exist_ok=True)
    results = []
    summary = []

    for _, row in df.iterrows():
        url = row.get("url")
        if pd.isna(url) or not str(url).strip():
            continue
        url = str(url).strip()

        print(f"\n[INFO] Processing {url}...")

        metadata = {}
        err = None
        try:
            html = fetch_html(url, browser=browser)
            metadata = parse(url, html)
        except Exception as e:
            print(f"[WARN] Preview failed for {url}: {e}")
            err = str(e)

        record = {
            "source_url": url,
            "fetched": datetime.now(timezone.utc).isoformat(),
            "metadata": metadata,
        }
        if err:
            record["error"] = err

        out_path = os.path.join(output_folder, f"{_safe_name(url)}_preview.json")
        with open(out_path, "w", encoding="utf-8") as f:
            json.dump(record, f, indent=2, ensure_ascii=False)
        print(f"[INFO] Saved preview → {out_path}")

        summary.append({
            "url": url,
            "status": "failed" if err else "ok",
            "title": metadata.get("title"),
            "provider": metadata.get("provider"),
            "error": err,
        })
        results.append(record)

    pd.DataFrame(summary, columns=["url", "status", "title", "provider", "error"]).to_csv(
        os.path.join(output_folder, "summary.csv"), index=False
    )
    return results


if __name__ == "__main__":
    urls_csv = sys.argv[1] if len(sys.argv) > 1 else "urls.csv"
    previews = build_previews(urls_csv)
    print(f"\n✅ Finished building previews for {len(previews)} pages.")
