# peepgen/tests/conftest.py
import functools
from pathlib import Path

import pytest
from PIL import Image

from peepgen.catalog import FilesystemAssetProvider
from peepgen.compositor import Compositor

# Three solid swatches per feature; names sort as a, b, c.
SWATCHES = {
    "a.png": (200, 30, 30, 255),
    "b.png": (30, 200, 30, 255),
    "c.png": (30, 30, 200, 255),
}


def make_png(path: Path, size=(40, 40), color=(0, 0, 0, 255)) -> Path:
    """Write a real RGBA PNG."""
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGBA", size, color).save(path, format="PNG")
    return path


class CountingProvider(FilesystemAssetProvider):
    """Filesystem provider that records every directory listing."""

    def __init__(self, root):
        super().__init__(root)
        self.calls = []

    def list_choices(self, theme, dir_name):
        self.calls.append((theme, dir_name))
        return super().list_choices(theme, dir_name)


@pytest.fixture()
def assets_root(tmp_path: Path) -> Path:
    """An ``open-peeps`` theme with three PNG choices per feature."""
    root = tmp_path / "assets"
    for dir_name in ("head", "face", "facial-hair"):
        for name, color in SWATCHES.items():
            make_png(root / "open-peeps" / dir_name / name, color=color)
    return root


@pytest.fixture()
def provider(assets_root: Path) -> CountingProvider:
    return CountingProvider(assets_root)


@pytest.fixture()
def output_dir(tmp_path: Path) -> Path:
    return tmp_path / "out"


@pytest.fixture()
def compositor(output_dir: Path) -> Compositor:
    return Compositor(output_dir=output_dir, canvas_size=1000)


@pytest.fixture()
def client(monkeypatch, provider, compositor):
    """TestClient whose renders read the fixture theme and write under tmp_path."""
    from fastapi.testclient import TestClient

    from peepgen import router as router_module
    from peepgen.main import app
    from peepgen.service import generate_avatar

    monkeypatch.setattr(
        router_module,
        "generate_avatar",
        functools.partial(generate_avatar, provider=provider, compositor=compositor),
    )
    return TestClient(app)
