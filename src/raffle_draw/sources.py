from __future__ import annotations

import httpx


class TextSourceClient:
    """Fetches a raw participant list published at a URL (gist, paste, share link)."""

    def __init__(self, timeout_s: float = 30.0) -> None:
        self.client = httpx.Client(timeout=timeout_s, follow_redirects=True)

    def close(self) -> None:
        self.client.close()

    def fetch_text(self, url: str) -> str:
        try:
            resp = self.client.get(url)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise RuntimeError(f"Could not fetch participant list from {url}: {e}")
        return _normalize_newlines(resp.text)


def read_text_file(path: str) -> str:
    """
    Read an uploaded .txt/.csv participant list.
    A UTF-8 BOM and Windows line endings are tolerated.
    """
    try:
        with open(path, "r", encoding="utf-8-sig") as f:
            raw = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise RuntimeError(f"Could not read participant file {path}: {e}")
    return _normalize_newlines(raw)


def _normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")
