import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from main import main, to_definitions
from wordgrid.core.models import WordDefinition
from wordgrid.engine.crossword_builder import CrosswordBuilder, CrosswordConfig
from wordgrid.utils.pretty import format_clues, format_grid


class PrettyTests(unittest.TestCase):
    def test_format_grid_marks_black_cells(self) -> None:
        layout = CrosswordBuilder(CrosswordConfig(size=5)).build([WordDefinition(id=1, word="SOGI")])
        rendered = format_grid(layout.grid)
        self.assertIn(" S  O  G  I", rendered)
        self.assertIn("#", rendered)
        self.assertIn("1. ->", format_clues(layout))


class CliTests(unittest.TestCase):
    def test_words_with_clues_are_split(self) -> None:
        parsed = to_definitions(["CHAGI:Kick", "MAKGI"])
        self.assertEqual(parsed[0], WordDefinition(id=1, word="CHAGI", clue="Kick"))
        self.assertEqual(parsed[1].clue, "")

    def test_crossword_output_written(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            output = Path(tmpdir) / "out.json"
            with redirect_stdout(io.StringIO()):
                main(["--words", "CHAGI:Kick", "MAKGI:Block", "--size", "10", "--output", str(output), "--log-level", "WARNING"])
            payload = json.loads(output.read_text(encoding="utf-8"))
            self.assertEqual([w["word"] for w in payload["words"]], ["CHAGI", "MAKGI"])
            self.assertEqual(payload["dropped"], [])
            self.assertEqual(payload["validation"], [])

    def test_wordsearch_output_written(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            output = Path(tmpdir) / "out.json"
            with redirect_stdout(io.StringIO()):
                main(["--game", "wordsearch", "--words", "KICK", "--size", "8", "--seed", "4", "--output", str(output)])
            payload = json.loads(output.read_text(encoding="utf-8"))
            self.assertEqual(len(payload["grid"]), 8)
            self.assertEqual(payload["words"][0]["word"], "KICK")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
