"""
Tests for the feature catalog builder.

Validates:
  - canonical ordering (head, face, facialHair) regardless of request order
  - default feature subset
  - extension filtering and stable choice order
  - CatalogError for missing themes, missing or empty feature dirs
"""

from pathlib import Path

import pytest
from PIL import Image

from peepgen.catalog import (
    DEFAULT_FEATURES,
    FilesystemAssetProvider,
    available_themes,
    build_catalog,
    resolve_slots,
)
from peepgen.errors import CatalogError


def make_png(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGBA", (8, 8), (0, 0, 0, 255)).save(path, format="PNG")


class TestOrdering:

    def test_canonical_order_not_request_order(self, provider):
        catalog = build_catalog("open-peeps", ["facialHair", "head"], provider)
        assert [f.name for f in catalog] == ["head", "facialHair"]
        assert [f.z_index for f in catalog] == [0, 1]

    def test_default_features(self, provider):
        for requested in (None, [], [""]):
            catalog = build_catalog("open-peeps", requested, provider)
            assert [f.name for f in catalog] == ["head", "face"]
        assert DEFAULT_FEATURES == ("head", "face")

    def test_unknown_features_ignored(self, provider):
        catalog = build_catalog("open-peeps", ["ears", "face"], provider)
        assert [f.name for f in catalog] == ["face"]
        assert catalog[0].z_index == 0

    def test_only_unknown_features_yield_empty_catalog(self):
        assert resolve_slots(["ears", "tail"]) == []

    def test_offsets(self, provider):
        head, face, hair = build_catalog("open-peeps", ["head", "face", "facialHair"], provider)
        assert (head.top, head.left) == (None, None)
        assert (face.top, face.left) == (375, 400)
        assert (hair.top, hair.left) == (515, 360)

    def test_facial_hair_reads_hyphenated_dir(self, provider):
        build_catalog("open-peeps", ["facialHair"], provider)
        assert provider.calls == [("open-peeps", "facial-hair")]


class TestChoices:

    def test_choices_sorted_and_filtered(self, assets_root: Path):
        face_dir = assets_root / "open-peeps" / "face"
        (face_dir / "notes.txt").write_text("not an image")
        (face_dir / "nested.png").mkdir()
        make_png(face_dir / "D.PNG")
        (face_dir / "vector.svg").write_text("<svg xmlns='http://www.w3.org/2000/svg'/>")

        catalog = build_catalog("open-peeps", ["face"], FilesystemAssetProvider(assets_root))
        names = [Path(p).name for p in catalog[0].choices]
        assert names == ["D.PNG", "a.png", "b.png", "c.png", "vector.svg"]

    def test_choice_order_is_stable(self, provider):
        first = build_catalog("open-peeps", None, provider)
        second = build_catalog("open-peeps", None, provider)
        assert first == second


class TestFailures:

    def test_missing_theme(self, provider):
        with pytest.raises(CatalogError, match="Unknown theme"):
            build_catalog("no-such-theme", None, provider)

    def test_empty_feature_dir(self, assets_root: Path):
        face_dir = assets_root / "open-peeps" / "face"
        for p in list(face_dir.iterdir()):
            p.unlink()
        (face_dir / "readme.md").write_text("nothing here")

        with pytest.raises(CatalogError, match="face"):
            build_catalog("open-peeps", ["face"], FilesystemAssetProvider(assets_root))

    def test_missing_feature_dir(self, tmp_path: Path):
        make_png(tmp_path / "minimal" / "head" / "a.png")
        provider = FilesystemAssetProvider(tmp_path)

        assert len(build_catalog("minimal", ["head"], provider)) == 1
        with pytest.raises(CatalogError, match="not found"):
            build_catalog("minimal", ["head", "face"], provider)


def test_available_themes(assets_root: Path, tmp_path: Path):
    (assets_root / "second-theme").mkdir()
    assert available_themes(FilesystemAssetProvider(assets_root)) == ["open-peeps", "second-theme"]
    assert available_themes(FilesystemAssetProvider(tmp_path / "missing")) == []


def test_bundled_theme_is_complete():
    # The repository ships a small open-peeps theme so the CLI works out of the box.
    root = Path(__file__).resolve().parent.parent / "assets"
    catalog = build_catalog("open-peeps", ["head", "face", "facialHair"], FilesystemAssetProvider(root))
    assert all(len(f.choices) == 3 for f in catalog)
