import io
import pytest
import sys
from datetime import date
from pathlib import Path
from PIL import Image

# Add src to sys.path so we can import photo_report
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from photo_report.core.models import PhotoRecord  # noqa: E402


def make_jpeg(width: int = 120, height: int = 90, color: str = "gray") -> bytes:
    """Encode a solid-colour JPEG in memory."""
    buf = io.BytesIO()
    Image.new("RGB", (width, height), color=color).save(buf, format="JPEG", quality=80)
    return buf.getvalue()


# Common test fixtures
@pytest.fixture
def jpeg_bytes() -> bytes:
    """Small valid JPEG."""
    return make_jpeg()


@pytest.fixture
def jpeg_factory():
    """Factory returning JPEG bytes of a given size and colour."""
    return make_jpeg


@pytest.fixture
def sample_image(tmp_path: Path):
    """Create a simple test image on disk."""
    img = Image.new("RGB", (200, 100), color="white")
    img_path = tmp_path / "sample.png"
    img.save(img_path)
    return img_path


@pytest.fixture
def record_factory(jpeg_bytes):
    """
    Factory for PhotoRecords sharing one section key by default.

    Keyword arguments override any field; ``images=False`` leaves both
    image slots empty.
    """
    counter = {"next": 1}

    def _create(images: bool = True, **overrides) -> PhotoRecord:
        record_id = overrides.pop("id", f"r{counter['next']}")
        counter["next"] += 1
        fields = dict(
            id=record_id,
            report_id=4,
            site_name="Résidence Les Tilleuls",
            city="Lyon",
            building="B",
            task="Peinture",
            company="Bouygues",
            start_date=date(2024, 4, 1),
            end_date=date(2024, 4, 5),
            before_image=jpeg_bytes if images else None,
            after_image=jpeg_bytes if images else None,
        )
        fields.update(overrides)
        return PhotoRecord(**fields)

    return _create
