import unittest

from wordgrid.core.constants import Direction
from wordgrid.core.models import PlacedWord, WordDefinition
from wordgrid.data.normalization import clean_word
from wordgrid.engine.crossword_builder import CrosswordBuilder, CrosswordConfig, can_place
from wordgrid.engine.grid import LetterGrid
from wordgrid.engine.validator import GridValidator


def definitions(*words: str):
    return [WordDefinition(id=index, word=word, clue=f"clue {word}") for index, word in enumerate(words, start=1)]


def build(size: int, *words: str):
    return CrosswordBuilder(CrosswordConfig(size=size)).build(definitions(*words))


class NormalizationTests(unittest.TestCase):
    def test_clean_word_uppercases_and_strips_separators(self) -> None:
        self.assertEqual(clean_word("Ap Chagi"), "APCHAGI")
        self.assertEqual(clean_word("dwi-chagi"), "DWICHAGI")

    def test_clean_word_folds_accents(self) -> None:
        self.assertEqual(clean_word("Dŏbok"), "DOBOK")
        self.assertEqual(clean_word(""), "")


class CrosswordPlacementTests(unittest.TestCase):
    def test_first_word_is_centered_across(self) -> None:
        layout = build(10, "SOGI", "TAEKWONDO")
        first = layout.words[0]
        self.assertEqual(first.word, "TAEKWONDO")
        self.assertEqual(first.number, 1)
        self.assertEqual(first.direction, Direction.ACROSS)
        self.assertEqual((first.anchor_row, first.anchor_col), (5, 0))
        self.assertEqual(layout.grid.cell(5, 0).number, 1)

    def test_equal_lengths_keep_input_order(self) -> None:
        layout = build(10, "CHAGI", "MAKGI")
        self.assertEqual([placed.id for placed in layout.words], [1, 2])

    def test_chagi_and_makgi_cross_on_shared_letter(self) -> None:
        layout = build(10, "CHAGI", "MAKGI")
        chagi, makgi = layout.words
        self.assertEqual(chagi.direction, Direction.ACROSS)
        self.assertEqual(makgi.direction, Direction.DOWN)
        shared = set(chagi.cells) & set(makgi.cells)
        self.assertEqual(len(shared), 1)
        row, col = shared.pop()
        letter = layout.grid.letter_at(row, col)
        self.assertIn(letter, "CHAGI")
        self.assertIn(letter, "MAKGI")
        # letters are scanned in word order, so the A of MAKGI is tried before its G
        self.assertEqual(letter, "A")
        self.assertEqual(layout.grid.cell(row, col).across_word_id, 1)
        self.assertEqual(layout.grid.cell(row, col).down_word_id, 2)

    def test_words_sharing_only_g_cross_on_g(self) -> None:
        layout = build(10, "CHAGI", "GEUP")
        chagi, geup = layout.words
        self.assertEqual(geup.direction, Direction.DOWN)
        self.assertEqual((geup.anchor_row, geup.anchor_col), (5, 5))
        self.assertEqual(layout.grid.letter_at(5, 5), "G")
        self.assertIn((5, 5), chagi.cells)

    def test_unconnected_word_uses_first_free_spot(self) -> None:
        layout = build(5, "ABC", "XYZ")
        xyz = layout.words[1]
        self.assertEqual(xyz.word, "XYZ")
        self.assertEqual((xyz.anchor_row, xyz.anchor_col), (0, 0))
        self.assertEqual(xyz.direction, Direction.ACROSS)
        self.assertEqual(xyz.number, 2)

    def test_unplaceable_word_is_dropped(self) -> None:
        layout = build(3, "ABC", "XYZ")
        self.assertEqual([placed.word for placed in layout.words], ["ABC"])
        self.assertEqual([d.word for d in layout.dropped], ["XYZ"])

    def test_word_longer_than_grid_is_dropped(self) -> None:
        layout = build(5, "TAEKWONDO", "SOGI")
        self.assertEqual([placed.word for placed in layout.words], ["SOGI"])
        self.assertEqual(layout.dropped[0].word, "TAEKWONDO")

    def test_first_number_written_to_a_cell_wins(self) -> None:
        layout = build(5, "CAT", "COW")
        cat, cow = layout.words
        self.assertEqual((cow.anchor_row, cow.anchor_col), (cat.anchor_row, cat.anchor_col))
        self.assertEqual(cow.number, 2)
        self.assertEqual(layout.grid.cell(cat.anchor_row, cat.anchor_col).number, 1)

    def test_no_orphan_cells_and_no_conflicts(self) -> None:
        layout = build(15, "DOLLYO", "CHAGI", "MAKGI", "JIREUGI", "SOGI", "TAEKWONDO", "DOJANG", "KIHAP")
        covered = set()
        for placed in layout.words:
            covered.update(placed.cells)
            self.assertEqual(layout.grid.read(placed.cells), placed.word)
        for row, col in layout.grid.coords():
            if layout.grid.cell(row, col).filled:
                self.assertIn((row, col), covered)
        result = GridValidator().validate_crossword(layout)
        self.assertTrue(result.ok, result.messages)

    def test_build_is_deterministic(self) -> None:
        words = ("DOLLYO", "CHAGI", "MAKGI", "JIREUGI", "SOGI")
        first = build(12, *words)
        second = build(12, *words)
        self.assertEqual(first.grid.rows_as_text(), second.grid.rows_as_text())
        self.assertEqual(
            [(p.id, p.anchor_row, p.anchor_col, p.direction) for p in first.words],
            [(p.id, p.anchor_row, p.anchor_col, p.direction) for p in second.words],
        )

    def test_empty_input_builds_empty_grid(self) -> None:
        layout = build(5)
        self.assertEqual(layout.words, [])
        self.assertEqual(layout.grid.filled_count(), 0)

    def test_invalid_size_rejected(self) -> None:
        with self.assertRaises(ValueError):
            CrosswordConfig(size=1)


class CanPlaceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.grid = LetterGrid(6)
        self.grid.write([(2, 1), (2, 2), (2, 3)], "KIM", word_id=1, direction=Direction.ACROSS)

    def test_rejects_parallel_neighbour(self) -> None:
        self.assertFalse(can_place(self.grid, "SON", 3, 1, Direction.ACROSS))

    def test_rejects_touching_end(self) -> None:
        self.assertFalse(can_place(self.grid, "AB", 2, 4, Direction.ACROSS))

    def test_rejects_letter_conflict(self) -> None:
        self.assertFalse(can_place(self.grid, "SAN", 1, 2, Direction.DOWN))

    def test_accepts_crossing_with_matching_letter(self) -> None:
        self.assertTrue(can_place(self.grid, "SIN", 1, 2, Direction.DOWN))

    def test_rejects_overlap_in_same_direction(self) -> None:
        self.assertFalse(can_place(self.grid, "KI", 2, 1, Direction.ACROSS))

    def test_rejects_out_of_bounds(self) -> None:
        self.assertFalse(can_place(self.grid, "LONGER", 0, 3, Direction.ACROSS))
        self.assertFalse(can_place(self.grid, "AB", -1, 0, Direction.DOWN))


class PlacedWordTests(unittest.TestCase):
    def test_cells_follow_anchor_and_direction(self) -> None:
        placed = PlacedWord(id=1, number=1, word="SOGI", clue="", direction=Direction.DOWN, anchor_row=2, anchor_col=3)
        self.assertEqual(placed.cells, [(2, 3), (3, 3), (4, 3), (5, 3)])

    def test_cell_cache_is_not_a_constructor_argument(self) -> None:
        with self.assertRaises(TypeError):
            PlacedWord(
                id=1, number=1, word="SOGI", clue="", direction=Direction.ACROSS,
                anchor_row=0, anchor_col=0, _cells=[(9, 9)],
            )


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
