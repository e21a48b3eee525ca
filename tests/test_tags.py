"""Tests for mutagen-backed tag access."""

import pytest
from mutagen.easyid3 import EasyID3
from mutagen.id3 import COMM, ID3

from conftest import write_mp3
from tagfix.app.exceptions import FieldWriteError, TagReadError, TagWriteError
from tagfix.app.tags import FIELD_KEYS, get_first, read_mp3, save_mp3, set_field


class TestFieldKeys:
    def test_common_fields_are_covered(self):
        for key in ("title", "artist", "album", "albumartist", "comment", "genre"):
            assert key in FIELD_KEYS

    def test_keys_are_unique(self):
        assert len(set(FIELD_KEYS)) == len(FIELD_KEYS)

    @pytest.mark.parametrize("key", FIELD_KEYS)
    def test_every_key_is_writable(self, key):
        tags = EasyID3()
        set_field(tags, key, "value")
        assert get_first(tags, key) == "value"


class TestComment:
    def test_roundtrip(self):
        tags = EasyID3()
        tags["comment"] = "Foê"
        assert tags["comment"] == ["Foê"]

    def test_missing(self):
        assert get_first(EasyID3(), "comment") is None

    @pytest.fixture
    def commented(self, tmp_path):
        path = write_mp3(tmp_path / "commented.mp3")
        id3 = ID3()
        id3.add(COMM(encoding=3, lang="eng", desc="iTunNORM", text=" 00000A2B"))
        id3.add(COMM(encoding=3, lang="rus", desc="", text="ÊÈÍÎ"))
        id3.add(COMM(encoding=3, lang="rus", desc="note", text="Кино"))
        id3.save(path)
        return path

    def test_reads_only_the_plain_comment(self, commented):
        assert get_first(EasyID3(commented), "comment") == "ÊÈÍÎ"

    def test_replace_keeps_language_and_described_comments(self, commented):
        tags = EasyID3(commented)
        set_field(tags, "comment", "КИНО")
        tags.save()

        frames = sorted((f.desc, f.lang, list(f.text)) for f in ID3(commented).getall("COMM"))
        assert frames == [
            ("", "rus", ["КИНО"]),
            ("iTunNORM", "eng", [" 00000A2B"]),
            ("note", "rus", ["Кино"]),
        ]

    def test_replace_and_delete(self):
        tags = EasyID3()
        tags["comment"] = "one"
        tags["comment"] = "two"
        assert tags["comment"] == ["two"]
        del tags["comment"]
        assert "comment" not in tags


class TestAccess:
    def test_get_first_missing_key(self):
        assert get_first(EasyID3(), "title") is None

    def test_get_first_returns_first_value(self):
        tags = EasyID3()
        tags["artist"] = ["first", "second"]
        assert get_first(tags, "artist") == "first"

    def test_set_field_rejects_unknown_key(self):
        with pytest.raises(FieldWriteError) as excinfo:
            set_field(EasyID3(), "no-such-field", "x")
        assert excinfo.value.key == "no-such-field"


class TestReadWrite:
    def test_read_tagged_file(self, mojibake_mp3):
        mp3 = read_mp3(mojibake_mp3)
        assert get_first(mp3.tags, "title") == "ÀÁê"
        assert get_first(mp3.tags, "comment") == "ê"

    def test_read_untagged_file_gets_empty_tags(self, tmp_path):
        mp3 = read_mp3(write_mp3(tmp_path / "bare.mp3"))
        assert mp3.tags is not None
        assert get_first(mp3.tags, "title") is None

    def test_read_garbage(self, tmp_path):
        path = tmp_path / "broken.mp3"
        path.write_bytes(b"")
        with pytest.raises(TagReadError):
            read_mp3(path)

    def test_read_missing(self, tmp_path):
        with pytest.raises(TagReadError):
            read_mp3(tmp_path / "missing.mp3")

    def test_save(self, mojibake_mp3):
        mp3 = read_mp3(mojibake_mp3)
        set_field(mp3.tags, "title", "АБк")
        save_mp3(mp3)
        assert EasyID3(mojibake_mp3)["title"] == ["АБк"]

    def test_save_failure(self, mojibake_mp3):
        mp3 = read_mp3(mojibake_mp3)
        mojibake_mp3.unlink()
        mojibake_mp3.mkdir()
        with pytest.raises(TagWriteError):
            save_mp3(mp3)
