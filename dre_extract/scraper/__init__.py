"""Scraper module for retrieving the DRE sheet export over HTTP."""

from dre_extract.scraper.downloader import fetch_text, fetch_text_sync

__all__ = ["fetch_text", "fetch_text_sync"]
