from __future__ import annotations

from pathlib import Path
import unittest


class PackagingMetadataTests(unittest.TestCase):
    def test_long_description_is_not_the_design_notes(self) -> None:
        text = (Path(__file__).resolve().parents[1] / "pyproject.toml").read_text(encoding="utf-8")
        self.assertIn('name = "graphview"', text)
        self.assertNotIn("DESIGN.md", text)


if __name__ == "__main__":
    unittest.main()
