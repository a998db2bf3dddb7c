import json
import os
import time
from unittest.mock import MagicMock

import pytest
import requests

from emblembadge.bungie import EmblemFetcher

MANIFEST_RESPONSE = {
    "ErrorCode": 1,
    "ErrorStatus": "Success",
    "Response": {
        "jsonWorldComponentContentPaths": {
            "en": {"DestinyInventoryItemDefinition": "/common/destiny2_content/json/en/items.json"}
        }
    },
}

ITEMS = {
    "1409726931": {"secondaryIcon": "/icons/banner.jpg", "secondarySpecial": "/icons/special.jpg"},
    "2962058744": {"secondaryIcon": "/icons/banner2.jpg"},
    "4077939641": {"displayProperties": {"icon": "/icons/square.jpg"}},
    "1000000000": {"displayProperties": {}},
}


def response(payload=None, content=b"", chunks=()):
    resp = MagicMock()
    resp.json.return_value = payload
    resp.headers = {}
    resp.content = content
    resp.iter_content.return_value = iter(chunks)
    return resp


@pytest.fixture
def manifest_cache(tmp_path):
    path = tmp_path / "manifest.json"
    path.write_text(json.dumps(ITEMS))
    return path


def test_lookup_prefers_high_res_artwork(manifest_cache):
    fetcher = EmblemFetcher(api_key="key", manifest_cache=manifest_cache, session=MagicMock())
    assert fetcher.lookup_icon("1409726931") == "/icons/special.jpg"
    assert fetcher.lookup_icon("2962058744") == "/icons/banner2.jpg"
    assert fetcher.lookup_icon("4077939641") == "/icons/square.jpg"


def test_lookup_unknown_emblem(manifest_cache):
    fetcher = EmblemFetcher(api_key="key", manifest_cache=manifest_cache, session=MagicMock())
    with pytest.raises(KeyError):
        fetcher.lookup_icon("123")
    with pytest.raises(KeyError):
        fetcher.lookup_icon("1000000000")


def test_manifest_url():
    session = MagicMock()
    session.get.return_value = response(MANIFEST_RESPONSE)
    fetcher = EmblemFetcher(api_key="key", session=session)

    assert fetcher.get_manifest_url() == "https://www.bungie.net/common/destiny2_content/json/en/items.json"
    _, kwargs = session.get.call_args
    assert kwargs["headers"] == {"X-API-Key": "key"}


def test_manifest_api_error():
    session = MagicMock()
    session.get.return_value = response({"ErrorCode": 5, "ErrorStatus": "SystemDisabled"})
    with pytest.raises(RuntimeError, match="SystemDisabled"):
        EmblemFetcher(api_key="key", session=session).get_manifest_url()


def test_fresh_manifest_cache_is_reused(manifest_cache):
    session = MagicMock()
    EmblemFetcher(api_key="key", manifest_cache=manifest_cache, session=session).download_manifest("https://x")
    session.get.assert_not_called()


def test_stale_manifest_cache_is_refreshed(manifest_cache):
    old = time.time() - 2 * EmblemFetcher.MANIFEST_MAX_AGE
    os.utime(manifest_cache, (old, old))
    session = MagicMock()
    session.get.return_value = response(chunks=[b'{"1": ', b"{}}"])

    EmblemFetcher(api_key="key", manifest_cache=manifest_cache, session=session).download_manifest("https://x")

    assert json.loads(manifest_cache.read_text()) == {"1": {}}


def test_fetch_emblem_writes_image_bytes(tmp_path, manifest_cache):
    session = MagicMock()
    session.get.side_effect = [response(MANIFEST_RESPONSE), response(content=b"\xff\xd8jpeg")]
    fetcher = EmblemFetcher(api_key="key", manifest_cache=manifest_cache, session=session)

    output = fetcher.fetch_emblem("2962058744", tmp_path / "data" / "emblem.jpg")

    assert output.read_bytes() == b"\xff\xd8jpeg"
    args, _ = session.get.call_args
    assert args[0] == "https://www.bungie.net/icons/banner2.jpg"


def test_api_key_required(monkeypatch):
    monkeypatch.delenv("BUNGIE_API_KEY", raising=False)
    with pytest.raises(ValueError, match="BUNGIE_API_KEY"):
        EmblemFetcher()


def broken_stream():
    yield b'{"1409726931": {"secondaryIcon": "/a.jpg"'
    raise requests.exceptions.ChunkedEncodingError("connection reset")


def test_interrupted_download_keeps_previous_cache(manifest_cache):
    old = time.time() - 2 * EmblemFetcher.MANIFEST_MAX_AGE
    os.utime(manifest_cache, (old, old))
    session = MagicMock()
    session.get.return_value = response(chunks=broken_stream())
    fetcher = EmblemFetcher(api_key="key", manifest_cache=manifest_cache, session=session)

    with pytest.raises(requests.exceptions.ChunkedEncodingError):
        fetcher.download_manifest("https://x")

    assert json.loads(manifest_cache.read_text()) == ITEMS
    assert manifest_cache.stat().st_mtime == pytest.approx(old)
    assert not list(manifest_cache.parent.glob(".*.tmp"))


def test_interrupted_first_download_leaves_no_cache(tmp_path):
    cache = tmp_path / "data" / "manifest.json"
    session = MagicMock()
    session.get.return_value = response(chunks=broken_stream())
    fetcher = EmblemFetcher(api_key="key", manifest_cache=cache, session=session)

    with pytest.raises(requests.exceptions.ChunkedEncodingError):
        fetcher.download_manifest("https://x")

    assert not cache.exists()
    assert not list(cache.parent.glob(".*.tmp"))
