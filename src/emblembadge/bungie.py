"""Bungie.net client for fetching emblem artwork."""

import contextlib
import json
import logging
import os
import time
from pathlib import Path

import requests

logger = logging.getLogger(__name__)


class EmblemFetcher:
    """Downloads Destiny 2 emblem banners via the Bungie manifest."""

    BASE_URL = "https://www.bungie.net"
    MANIFEST_API = BASE_URL + "/Platform/Destiny2/Manifest/"
    USER_AGENT = "emblembadge/0.3"
    MANIFEST_MAX_AGE = 24 * 60 * 60

    def __init__(
        self,
        api_key: str | None = None,
        manifest_cache: str | Path = "data/manifest.json",
        session: requests.Session | None = None,
    ):
        self.api_key = api_key or os.environ.get("BUNGIE_API_KEY")
        if not self.api_key:
            raise ValueError("Bungie API key required. Set BUNGIE_API_KEY environment variable.")
        self.manifest_cache = Path(manifest_cache)
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = self.USER_AGENT

    def fetch_emblem(self, emblem_hash: str, output_path: str | Path) -> Path:
        """
        Download an emblem's banner artwork.

        Args:
            emblem_hash: emblem item hash, e.g. "1409726931"
            output_path: where to write the raw image bytes

        Returns:
            The output path
        """
        manifest_url = self.get_manifest_url()
        self.download_manifest(manifest_url)
        icon_path = self.lookup_icon(emblem_hash)

        response = self.session.get(self.BASE_URL + icon_path, timeout=60)
        response.raise_for_status()

        # Saved as downloaded; re-encoding the JPEG would add artifacts
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(response.content)
        logger.info("Emblem %s saved to %s", emblem_hash, output_path)
        return output_path

    def get_manifest_url(self) -> str:
        """URL of the English item-definition manifest."""
        response = self.session.get(
            self.MANIFEST_API,
            headers={"X-API-Key": self.api_key},
            timeout=30,
        )

        remaining = response.headers.get("X-RateLimit-Remaining")
        if remaining:
            logger.info("Bungie rate limit remaining: %s", remaining)

        response.raise_for_status()
        data = response.json()

        if data.get("ErrorCode") != 1:
            raise RuntimeError(f"Bungie API error {data.get('ErrorCode')}: {data.get('ErrorStatus')}")

        paths = data.get("Response", {}).get("jsonWorldComponentContentPaths", {})
        url = paths.get("en", {}).get("DestinyInventoryItemDefinition")
        if not url:
            raise RuntimeError("Manifest URL not found in response")

        return self.BASE_URL + url

    def download_manifest(self, url: str) -> None:
        """Download the item-definition manifest unless a fresh copy is cached."""
        if self.manifest_cache.exists():
            age = time.time() - self.manifest_cache.stat().st_mtime
            if age < self.MANIFEST_MAX_AGE:
                logger.debug("Using cached manifest (%d minutes old)", age // 60)
                return
            logger.info("Manifest cache expired, re-downloading")

        logger.info("Downloading manifest database (~100MB)...")
        response = self.session.get(url, timeout=300, stream=True)
        response.raise_for_status()

        # Stream to a sibling and swap it in only once complete
        self.manifest_cache.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.manifest_cache.with_name(f".{self.manifest_cache.name}.tmp")
        try:
            with open(tmp_path, "wb") as f:
                for chunk in response.iter_content(chunk_size=1 << 20):
                    f.write(chunk)
            os.replace(tmp_path, self.manifest_cache)
        except BaseException:
            with contextlib.suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            raise

    def lookup_icon(self, emblem_hash: str) -> str:
        """
        Path of the best banner image for an emblem.

        Prefers the high-res secondarySpecial artwork so the badge is
        downscaled rather than upscaled, then the 474x96 secondaryIcon,
        then the square inventory icon.
        """
        with open(self.manifest_cache, "r") as f:
            manifest = json.load(f)

        emblem = manifest.get(emblem_hash)
        if emblem is None:
            raise KeyError(f"emblem hash {emblem_hash} not found in manifest")

        for key in ("secondarySpecial", "secondaryIcon"):
            if emblem.get(key):
                return emblem[key]

        icon = emblem.get("displayProperties", {}).get("icon")
        if not icon:
            raise KeyError(f"icon path not found for emblem {emblem_hash}")
        return icon
