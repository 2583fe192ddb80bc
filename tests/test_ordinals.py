import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from career_copilot.normalize import (  # noqa: E402
    clamp_score,
    normalize_ordinal,
    normalize_skill_level,
    normalize_string_list,
    sort_by_importance,
)


class OrdinalNormalizationTests(unittest.TestCase):
    def test_exact_values_pass_through(self):
        for value in ("Low", "Medium", "High"):
            self.assertEqual(normalize_ordinal(value), value)

    def test_very_variants_collapse_to_scale_ends(self):
        self.assertEqual(normalize_ordinal("Very High"), "High")
        self.assertEqual(normalize_ordinal("  very   LOW "), "Low")

    def test_other_values_are_left_for_validation(self):
        self.assertEqual(normalize_ordinal("Extreme"), "Extreme")
        self.assertEqual(normalize_ordinal("high"), "high")
        self.assertEqual(normalize_ordinal(5), 5)
        self.assertIsNone(normalize_ordinal(None))

    def test_skill_level_is_stripped_when_in_vocabulary(self):
        self.assertEqual(normalize_skill_level(" Advanced "), "Advanced")
        self.assertEqual(normalize_skill_level("None"), "None")
        self.assertEqual(normalize_skill_level("Guru"), "Guru")


class ScoreAndListTests(unittest.TestCase):
    def test_clamp_score(self):
        self.assertEqual(clamp_score(120), 100)
        self.assertEqual(clamp_score(-5), 0)
        self.assertEqual(clamp_score(72.5), 72.5)
        self.assertEqual(clamp_score("87"), 87)
        self.assertEqual(clamp_score("55.5%"), 55.5)

    def test_clamp_score_rejects_non_numbers(self):
        for value in (True, float("nan"), "n/a", None, [90]):
            self.assertIsNone(clamp_score(value))

    def test_normalize_string_list(self):
        self.assertEqual(normalize_string_list([" React ", "", None, 3, "AWS"]), ["React", "3", "AWS"])
        self.assertEqual(normalize_string_list("Kubernetes"), ["Kubernetes"])
        self.assertEqual(normalize_string_list({"a": 1}), [])
        self.assertEqual(normalize_string_list(["a", "b", "c"], limit=2), ["a", "b"])

    def test_sort_by_importance_is_stable(self):
        gaps = [
            {"skillName": "a", "importance": "Low"},
            {"skillName": "b", "importance": "High"},
            {"skillName": "c", "importance": "Unknown"},
            {"skillName": "d", "importance": "Medium"},
            {"skillName": "e", "importance": "High"},
        ]
        ordered = [gap["skillName"] for gap in sort_by_importance(gaps)]
        self.assertEqual(ordered, ["b", "e", "d", "a", "c"])


if __name__ == "__main__":
    unittest.main()
