"""Shared fixtures for tagfix tests."""

import logging
import os
from pathlib import Path
from typing import Dict, Optional

import pytest
from mutagen.easyid3 import EasyID3

import tagfix.app.tags  # noqa: F401  registers the "comment" key
from tagfix.app.utils import config

# MPEG-1 Layer III, 128 kbit/s, 44.1 kHz: 4 byte header + 413 bytes of silence
SILENT_FRAME = b"\xff\xfb\x90\x64" + b"\x00" * 413


def write_mp3(path: Path, tags: Optional[Dict[str, str]] = None) -> Path:
    path.write_bytes(SILENT_FRAME * 20)
    if tags:
        id3 = EasyID3()
        for key, value in tags.items():
            id3[key] = value
        id3.save(path)
    return path


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch, tmp_path):
    """Keep config from leaking between tests or from the developer's shell."""
    for name in list(os.environ):
        if name.startswith("TAGFIX_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    config.reset_config()
    yield
    config.reset_config()
    logging.getLogger("tagfix").handlers.clear()


@pytest.fixture
def mojibake_mp3(tmp_path) -> Path:
    return write_mp3(tmp_path / "song.mp3", {
        "title": "ÀÁê",
        "artist": "Foo",
        "album": "SomÀÁêe",
        "comment": "ê",
    })


@pytest.fixture
def clean_mp3(tmp_path) -> Path:
    return write_mp3(tmp_path / "clean.mp3", {"title": "Foo", "artist": "Кино"})
