#!/usr/bin/env python3
"""
Wikia Data Dump

Snapshots a single wiki through the public API: wiki variables, navigation,
the list of top articles and the simplified JSON of each of those articles.
Output goes to <data_dir>/<selector>/ as plain JSON files.

Usage:
    python scripts/dump_wiki.py            # Use settings from config.json
    python scripts/dump_wiki.py --limit 5  # Only dump the top 5 articles
"""

import json
import os
import sys
from datetime import datetime, timezone
from pathlib import Path

import requests

# Add project root to path for the wikia package
SCRIPT_DIR = Path(__file__).parent
PROJECT_ROOT = SCRIPT_DIR.parent
sys.path.insert(0, str(PROJECT_ROOT))

from wikia.client import Wikia
from wikia.filename_utils import title_to_filename
from wikia.logging_config import setup_logging

CONFIG_PATH = PROJECT_ROOT / "config.json"
LOG_DIR = Path(os.environ.get("LOG_DIR", PROJECT_ROOT / "logs"))


def load_config(path: Path = CONFIG_PATH) -> dict:
    """Load the dump configuration."""
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def write_json(path: Path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def dump_wiki(api: Wikia, out_dir: Path, limit: int, logger) -> dict:
    """
    Dump wiki-level data and the top articles of a wiki.

    Args:
        api: Client scoped to the wiki to dump
        out_dir: Directory to write JSON files into
        limit: Number of top articles to dump
        logger: Logger for progress output

    Returns:
        Manifest dict, also written to out_dir/manifest.json
    """
    dump_timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M")
    manifest = {"wiki": api.wiki, "dumped": dump_timestamp, "articles": {}, "failed": []}

    write_json(out_dir / "wiki.json", api.get_wiki_data())
    write_json(out_dir / "navigation.json", api.get_navigation())

    top = api.get_top_articles(limit=limit)
    articles = top.get("items", [])
    write_json(out_dir / "top_articles.json", top)

    total = len(articles)
    for i, article in enumerate(articles):
        title = article["title"]
        logger.info(f"[{i+1}/{total}] Dumping: {title}")

        try:
            sections = api.get_simplified_article(article["id"])
        except (requests.RequestException, KeyError) as e:
            logger.error(f"FAILED to dump {title}: {e}")
            manifest["failed"].append(title)
            continue

        filename = title_to_filename(title)
        write_json(out_dir / "articles" / filename, sections)
        manifest["articles"][title] = {"id": article["id"], "filename": filename}

    write_json(out_dir / "manifest.json", manifest)
    logger.info(
        f"=== DUMP COMPLETE === Dumped: {len(manifest['articles'])}, Failed: {len(manifest['failed'])}"
    )
    return manifest


def main(argv=None):
    """Main entry point."""
    argv = sys.argv[1:] if argv is None else argv

    config = load_config()
    selector = config["wiki"]["selector"]
    limit = config["dump"]["article_limit"]

    if argv:
        if argv[0] in ("--help", "-h"):
            print("Usage: dump_wiki.py [--limit N]")
            print("  --limit N  Number of top articles to dump (default from config.json)")
            sys.exit(0)
        if argv[0] == "--limit" and len(argv) > 1:
            limit = int(argv[1])

    # Client request/failure records share this file via the "wikia" logger tree
    logger = setup_logging(name="dump", wiki=selector, log_dir=LOG_DIR)
    logger.info(f"{config['wiki']['name']} Data Dump")
    logger.info("=" * 50)

    api = Wikia(
        wiki=selector,
        user_agent=config["client"]["user_agent"],
        timeout=config["client"]["timeout_seconds"],
    )
    out_dir = PROJECT_ROOT / config["output"]["data_dir"] / selector
    with api:
        dump_wiki(api, out_dir, limit, logger)


if __name__ == "__main__":
    main()
