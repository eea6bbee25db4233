"""Tests for the command-line photo loading."""

import base64

import pytest

from growdash.exceptions import ParseError
from main import build_parser, load_photo

PHOTO = b"\xff\xd8\xff\xe0fake-jpeg"


def test_load_photo_reads_image_bytes(tmp_path):
    path = tmp_path / "plant.jpg"
    path.write_bytes(PHOTO)

    assert load_photo(path) == PHOTO


def test_load_photo_decodes_data_url(tmp_path):
    path = tmp_path / "plant.txt"
    path.write_text("data:image/jpeg;base64," + base64.b64encode(PHOTO).decode() + "\n")

    assert load_photo(path) == PHOTO


def test_load_photo_rejects_bad_data_url(tmp_path):
    path = tmp_path / "plant.txt"
    path.write_text("data:image/jpeg;base64,@@not-base64@@")

    with pytest.raises(ParseError):
        load_photo(path)


def test_parser_analyze_command():
    args = build_parser().parse_args(["analyze", "plant.jpg", "--json"])

    assert args.command == "analyze"
    assert args.json is True
