"""Download the canonical Node.js ``.gitignore`` template."""

from __future__ import annotations

import urllib.error
import urllib.request

from .services.errors import IoFailedError

NODE_GITIGNORE_URL = "https://raw.githubusercontent.com/github/gitignore/main/Node.gitignore"


def fetch_text(url: str) -> str:
    """Fetch ``url`` and return its body decoded as UTF-8."""
    request = urllib.request.Request(url, headers={"User-Agent": "node-bootstrap"})
    try:
        with urllib.request.urlopen(request) as response:
            return response.read().decode("utf-8")
    except urllib.error.HTTPError as exc:
        raise IoFailedError(
            f"failed to download {url} ({exc.code} {exc.reason})",
            recovery_hint="check network access to raw.githubusercontent.com",
        ) from exc
    except urllib.error.URLError as exc:
        reason = getattr(exc, "reason", exc)
        raise IoFailedError(
            f"failed to download {url}: {reason}",
            recovery_hint="check network access to raw.githubusercontent.com",
        ) from exc


def fetch_node_gitignore() -> str:
    return fetch_text(NODE_GITIGNORE_URL)
