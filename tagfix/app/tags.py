"""
MP3 tag access on top of mutagen's EasyID3 interface.

The set of processed fields is fixed here rather than discovered from the
file, so every file is checked against the same keys.
"""

from pathlib import Path
from typing import Optional

from mutagen import MutagenError
from mutagen.easyid3 import EasyID3
from mutagen.id3 import COMM
from mutagen.mp3 import MP3

from .exceptions import FieldWriteError, TagReadError, TagWriteError


def _plain_comments(id3):
    # "COMM:" matches frames with an empty description in any language;
    # iTunNORM and other described comments are never touched
    return id3.getall("COMM:")


def _comment_get(id3, key):
    frames = _plain_comments(id3)
    if not frames:
        raise KeyError(key)
    return list(frames[0].text)


def _comment_set(id3, key, value):
    frames = _plain_comments(id3)
    lang = "eng"
    if frames:
        lang = frames[0].lang
        del id3[frames[0].HashKey]
    id3.add(COMM(encoding=3, lang=lang, desc="", text=value))


def _comment_delete(id3, key):
    id3.delall("COMM:")


EasyID3.RegisterKey("comment", _comment_get, _comment_set, _comment_delete)


# Free-text EasyID3 keys; numeric and date keys never carry legacy text
FIELD_KEYS = (
    "title",
    "artist",
    "album",
    "albumartist",
    "comment",
    "composer",
    "conductor",
    "arranger",
    "lyricist",
    "author",
    "genre",
    "grouping",
    "mood",
    "media",
    "version",
    "discsubtitle",
    "organization",
    "copyright",
    "encodedby",
    "language",
    "titlesort",
    "artistsort",
    "albumsort",
    "albumartistsort",
    "composersort",
)


def read_mp3(path: Path) -> MP3:
    try:
        mp3 = MP3(path, ID3=EasyID3)
    except (MutagenError, OSError) as e:
        raise TagReadError(f"Unable to read mp3 file [{path}]: {e}") from e

    if mp3.tags is None:
        mp3.add_tags()
    return mp3


def get_first(tags, key: str) -> Optional[str]:
    values = tags.get(key)
    if not values:
        return None
    return values[0]


def set_field(tags, key: str, value: str) -> None:
    try:
        tags[key] = value
    except (KeyError, ValueError, TypeError) as e:
        raise FieldWriteError(key, value) from e


def save_mp3(mp3: MP3) -> None:
    try:
        mp3.save()
    except (MutagenError, OSError) as e:
        raise TagWriteError(f"Unable to save mp3 file [{mp3.filename}]: {e}") from e
