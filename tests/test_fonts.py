"""Tests for font lookup."""

import pytest

from conftest import default_font_loader
from watermarker.render import FontResolutionError, FontResolver


def failing_loader(source, size):
    raise OSError("cannot open resource")


def test_family_candidates():
    resolver = FontResolver(family="DejaVu Sans")

    candidates = resolver.candidates()

    assert candidates[:2] == ["DejaVu Sans.ttf", "DejaVu Sans.ttc"]
    assert "dejavusans.ttf" in candidates
    assert len(candidates) == len(set(candidates))


def test_explicit_path_wins(tmp_path):
    font_file = tmp_path / "banner.ttf"
    resolver = FontResolver(family="Arial", font_path=str(font_file))

    assert resolver.candidates() == [str(font_file)]


def test_first_loadable_candidate_is_used():
    tried = []

    def loader(source, size):
        tried.append(source)
        if source != "arial.ttf":
            raise OSError("cannot open resource")
        return default_font_loader(source, size)

    resolver = FontResolver(family="Arial", loader=loader)

    assert resolver.resolve() == "arial.ttf"
    assert tried == ["Arial.ttf", "Arial.ttc", "arial.ttf"]
    # The result is cached
    assert resolver.resolve() == "arial.ttf"
    assert len(tried) == 3


def test_unresolvable_font_raises():
    resolver = FontResolver(family="No Such Font", loader=failing_loader)

    with pytest.raises(FontResolutionError, match="No Such Font"):
        resolver.resolve()


def test_font_at_size(font_resolver):
    font = font_resolver.font(16)
    assert font.size == 16
