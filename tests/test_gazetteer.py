"""
Tests for treener.gazetteer: normalization on load, apostrophe fallback,
and loading a gazetteer directory.
"""

import logging

import pytest

from treener.gazetteer import (
    Gazetteer,
    GazetteerLoadError,
    Gazetteers,
    load_gazetteer,
    load_gazetteers,
)
from treener.models import NamedEntityType


class TestGazetteer:

    def test_entries_are_lowercased_with_locale(self):
        gazetteer = Gazetteer("LOCATION", ["İzmir", "ISPARTA"])
        assert gazetteer.contains("izmir")
        assert gazetteer.contains("ısparta")
        assert not gazetteer.contains("isparta")

    def test_apostrophe_fallback(self):
        gazetteer = Gazetteer("LOCATION", ["Ankara"])
        assert gazetteer.contains("ankara'dan")
        assert gazetteer.contains("ankara’ya")
        assert not gazetteer.contains("ankaralı")

    def test_leading_apostrophe_does_not_match_empty_stem(self):
        gazetteer = Gazetteer("LOCATION", ["Ankara"])
        assert not gazetteer.contains("'dan")

    def test_blank_lines_ignored(self):
        gazetteer = Gazetteer("PERSON", ["Ahmet", "", "   ", "Ayşe "])
        assert len(gazetteer) == 2
        assert gazetteer.contains("ayşe")


class TestGazetteers:

    def test_contains_by_category(self, gazetteers):
        assert gazetteers.contains(NamedEntityType.LOCATION, "istanbul")
        assert not gazetteers.contains(NamedEntityType.PERSON, "istanbul")

    def test_missing_category_never_matches(self):
        assert not Gazetteers().contains(NamedEntityType.LOCATION, "ankara")

    def test_get(self, gazetteers):
        assert gazetteers.get(NamedEntityType.ORGANIZATION).name == "ORGANIZATION"
        assert gazetteers.get(NamedEntityType.MONEY) is None


class TestLoading:

    def test_load_gazetteer(self, tmp_path):
        path = tmp_path / "gazetteer-location.txt"
        path.write_text("İstanbul\nAnkara\n", encoding="utf-8")
        gazetteer = load_gazetteer(path, NamedEntityType.LOCATION)
        assert gazetteer.name == "LOCATION"
        assert gazetteer.contains("istanbul")

    def test_load_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_gazetteer(tmp_path / "nope.txt", NamedEntityType.PERSON)

    def test_load_non_utf8_raises(self, tmp_path):
        path = tmp_path / "gazetteer-person.txt"
        path.write_bytes(b"\xff\xfe\xfa")
        with pytest.raises(GazetteerLoadError, match="UTF-8"):
            load_gazetteer(path, NamedEntityType.PERSON)

    def test_load_directory(self, gazetteer_dir):
        gazetteers = load_gazetteers(gazetteer_dir)
        assert gazetteers.contains(NamedEntityType.PERSON, "atatürk")
        assert gazetteers.contains(NamedEntityType.LOCATION, "izmir")
        assert gazetteers.contains(NamedEntityType.ORGANIZATION, "imkb")

    def test_missing_files_give_empty_gazetteers(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING, logger="treener.gazetteer"):
            gazetteers = load_gazetteers(tmp_path)
        assert len(gazetteers.get(NamedEntityType.PERSON)) == 0
        assert "No PERSON gazetteer" in caplog.text

    def test_no_directory(self):
        gazetteers = load_gazetteers(None)
        assert not gazetteers.contains(NamedEntityType.LOCATION, "ankara")
