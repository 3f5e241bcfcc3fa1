import unittest
from dataclasses import fields

from thumb_studio.src.config import AppPaths, timestamp_slug


class AppPathsTests(unittest.TestCase):
    def test_only_output_and_log_folders_are_managed(self) -> None:
        paths = AppPaths.discover()
        self.assertEqual([f.name for f in fields(paths)], ["root", "output", "logs"])
        self.assertEqual(paths.output.parent, paths.root)
        self.assertEqual(paths.root.name, "thumb_studio")

    def test_timestamp_slug_shape(self) -> None:
        slug = timestamp_slug()
        self.assertRegex(slug, r"^\d{8}_\d{6}$")


if __name__ == "__main__":
    unittest.main()
