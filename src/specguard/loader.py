"""Load an API description from a local file or an http(s) URL."""

import json
import logging
from pathlib import Path

import requests
import yaml

from specguard.errors import DocumentLoadError

logger = logging.getLogger(__name__)

LOAD_TIMEOUT = 30.0
ACCEPT = "application/json, application/yaml, text/yaml, */*"


def load_document(source: str, timeout: float = LOAD_TIMEOUT) -> dict:
    """Read ``source`` and deserialize it, trying JSON first and YAML second."""
    text = _read(source, timeout)
    return parse_content(text, source)


def parse_content(text: str, source: str = "<string>") -> dict:
    try:
        doc = json.loads(text)
    except (json.JSONDecodeError, ValueError):
        try:
            doc = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise DocumentLoadError(source, f"content is neither JSON nor YAML ({e})") from e

    if not isinstance(doc, dict):
        raise DocumentLoadError(source, "document root is not a mapping")
    return doc


def _read(source: str, timeout: float) -> str:
    if source.startswith(("http://", "https://")):
        logger.debug("Fetching %s", source)
        try:
            resp = requests.get(source, headers={"Accept": ACCEPT}, timeout=timeout)
        except requests.RequestException as e:
            raise DocumentLoadError(source, str(e)) from e
        if not resp.ok:
            raise DocumentLoadError(source, f"HTTP {resp.status_code}")
        return resp.text

    try:
        return Path(source).read_text(encoding="utf-8")
    except OSError as e:
        raise DocumentLoadError(source, e.strerror or str(e)) from e
