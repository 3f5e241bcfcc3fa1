import io
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

from PIL import Image

from thumb_studio.src.main import run


class MainCliTests(unittest.TestCase):
    def test_writes_preview_png(self) -> None:
        with tempfile.TemporaryDirectory(prefix="cli_test_") as tmp:
            out = Path(tmp) / "thumb.png"
            stdout = io.StringIO()
            with redirect_stdout(stdout):
                code = run(["--topic", "insectos venenosos", "--no-suggestions", "--output", str(out)])
            self.assertEqual(code, 0)
            with Image.open(out) as img:
                self.assertEqual(img.size, (1280, 720))
            self.assertIn("Increíble — Los insectos venenosos que no conocías", stdout.getvalue())

    def test_broken_background_still_exports_gradient(self) -> None:
        with tempfile.TemporaryDirectory(prefix="cli_test_") as tmp:
            bad = Path(tmp) / "broken.png"
            bad.write_bytes(b"nope")
            out = Path(tmp) / "thumb.png"
            with redirect_stdout(io.StringIO()):
                code = run(["--topic", "ranas", "--no-suggestions", "--image", str(bad), "--output", str(out)])
            self.assertEqual(code, 0)
            self.assertTrue(out.exists())

    def test_blank_topic_fails(self) -> None:
        with redirect_stderr(io.StringIO()) as stderr:
            code = run(["--topic", "   ", "--no-suggestions"])
        self.assertEqual(code, 1)
        self.assertIn("Escribe primero una idea o tema.", stderr.getvalue())


if __name__ == "__main__":
    unittest.main()
