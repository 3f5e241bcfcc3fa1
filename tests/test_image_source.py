import io
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from PIL import Image

from thumb_studio.src.image_source import (
    decode_image,
    load_image_payload,
    payload_from_data_url,
    payload_to_data_url,
)


def _jpeg_bytes() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (300, 100), (20, 40, 60)).save(buf, format="JPEG")
    return buf.getvalue()


class PayloadTests(unittest.TestCase):
    def test_data_url_carries_the_same_bytes(self) -> None:
        raw = _jpeg_bytes()
        url = payload_to_data_url(raw, "image/jpeg")
        self.assertTrue(url.startswith("data:image/jpeg;base64,"))
        self.assertEqual(payload_from_data_url(url), raw)

    def test_non_base64_data_url_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            payload_from_data_url("data:text/plain,hola")
        with self.assertRaises(ValueError):
            payload_from_data_url("https://example.com/a.png")
        with self.assertRaises(ValueError):
            payload_from_data_url("data:image/png;base64,@@@")

    def test_missing_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_image_payload(Path("/nonexistent/photo.png"))

    def test_load_reads_bytes(self) -> None:
        with tempfile.TemporaryDirectory(prefix="img_test_") as tmp:
            path = Path(tmp) / "bg.jpg"
            path.write_bytes(_jpeg_bytes())
            self.assertEqual(load_image_payload(path), path.read_bytes())


class DecodeTests(unittest.IsolatedAsyncioTestCase):
    async def test_decode_keeps_original_dimensions(self) -> None:
        image = await decode_image(_jpeg_bytes())
        self.assertEqual(image.mode, "RGBA")
        self.assertEqual(image.size, (300, 100))

    async def test_decode_failure_raises_oserror(self) -> None:
        with self.assertRaises(OSError):
            await decode_image(b"definitely not an image")

    async def test_image_over_pixel_limit_raises_valueerror(self) -> None:
        with mock.patch.object(Image, "MAX_IMAGE_PIXELS", 1000):
            with self.assertRaises(ValueError):
                await decode_image(_jpeg_bytes())


if __name__ == "__main__":
    unittest.main()
