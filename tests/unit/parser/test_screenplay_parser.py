"""Unit tests for ScreenplayParser."""

from scenepartner.config import ScenePartnerSettings
from scenepartner.parser import ScreenplayParser
from scenepartner.parser.models import Confidence, DurationEstimate, ElementType


class TestParseLines:
    """Test parsing of normalized line lists."""

    def test_kitchen_scenario(self, parser, kitchen_lines):
        """Test the complete two-speaker kitchen scene."""
        script = parser.parse_lines(kitchen_lines, page_count=1)

        assert script.scene_count == 1
        assert script.speaking_characters == ("JOHN", "MARY")
        assert script.non_speaking_characters == ()
        assert script.total_dialogue_lines == 2
        assert script.confidence is Confidence.HIGH
        assert script.title == "INT. KITCHEN - DAY"

        mary_cue = script.elements[3]
        assert mary_cue.element_type is ElementType.CHARACTER_CUE
        assert mary_cue.character_name == "MARY"
        assert mary_cue.dialogue == "I'm fine thanks."
        assert script.elements[4].dialogue == "I'm fine thanks."

    def test_single_speaker_is_medium(self, parser):
        """Test confidence with one speaking character."""
        script = parser.parse_lines(["INT. A - DAY", "JOHN", "Hello."], 1)
        assert script.confidence is Confidence.MEDIUM

    def test_empty_input_never_fails(self, parser):
        """Test the worst case result."""
        script = parser.parse_lines([], page_count=0)

        assert script.elements == ()
        assert script.scene_count == 0
        assert script.confidence is Confidence.LOW
        assert script.title == "Untitled Script"
        assert script.estimated_duration == DurationEstimate(1, 0)

    def test_deterministic(self, parser, kitchen_lines):
        """Test that parsing twice yields identical results."""
        first = parser.parse_lines(kitchen_lines, 3)
        second = parser.parse_lines(list(kitchen_lines), 3)
        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_settings_drive_classifier(self, kitchen_lines):
        """Test that cue limits come from settings."""
        settings = ScenePartnerSettings(character_cue_max_length=3)
        script = ScreenplayParser(settings=settings).parse_lines(kitchen_lines, 1)
        assert script.characters == ()
        assert script.confidence is Confidence.MEDIUM


class TestParseText:
    """Test parsing from raw text."""

    def test_blank_lines_and_indentation_removed(self, parser):
        """Test text normalization before parsing."""
        text = "\n\n   INT. KITCHEN - DAY   \n\n        JOHN\n     Hello.\n\n"
        script = parser.parse_text(text, page_count=1)

        assert script.elements[0].content == "INT. KITCHEN - DAY"
        assert script.elements[1].character_name == "JOHN"
        assert script.elements[2].dialogue == "Hello."


class TestParseFile:
    """Test parsing the sample screenplay fixture."""

    def test_structure(self, sample_script):
        """Test scenes, characters and grading of the sample."""
        assert sample_script.title == "THE COFFEE SHOP"
        assert sample_script.scene_count == 2
        assert sample_script.characters == ("SARAH", "TOM", "WAITER", "BARISTA")
        assert sample_script.speaking_characters == ("SARAH", "TOM", "BARISTA")
        assert sample_script.non_speaking_characters == ("WAITER",)
        assert sample_script.total_dialogue_lines == 4
        assert sample_script.confidence is Confidence.HIGH
        assert str(sample_script.estimated_duration) == "1-1 min"

    def test_element_types(self, sample_script):
        """Test the full element sequence of the sample."""
        types = [e.element_type.value for e in sample_script.elements]
        assert types == [
            "transition",
            "scene_heading",
            "action",
            "character_cue",
            "dialogue",
            "character_cue",
            "dialogue",
            "action",
            "character_cue",
            "dialogue",
            "transition",
            "scene_heading",
            "action",
            "character_cue",
            "dialogue",
            "transition",
        ]

    def test_dialogue_and_parentheticals(self, sample_script):
        """Test joined dialogue and captured parentheticals."""
        sarah = sample_script.elements[3]
        assert sarah.parenthetical == "nervously"
        assert sarah.dialogue == "Are you open? I've been knocking for ages."

        tom = sample_script.elements[5]
        assert tom.parenthetical is None
        assert tom.dialogue == "We're always open. For you, anyway."

        last_tom = sample_script.elements[13]
        assert last_tom.parenthetical == "to himself"
        assert last_tom.scene_number == 2

    def test_scene_runs(self, sample_script):
        """Test that scene numbers partition the sequence."""
        assert [e.scene_number for e in sample_script.elements] == (
            [0] + [1] * 10 + [2] * 5
        )
        assert len(sample_script.scene(2)) == 5

    def test_to_dict(self, sample_script):
        """Test the persistence mapping."""
        data = sample_script.to_dict()

        assert data["title"] == "THE COFFEE SHOP"
        assert data["confidence"] == "high"
        assert data["estimated_duration"] == "1-1 min"
        assert data["elements"][0] == {
            "line_id": "scene_0_trans_0",
            "scene_number": 0,
            "element_index": 0,
            "element_type": "transition",
            "content": "FADE IN:",
        }
        assert data["elements"][3]["parenthetical"] == "nervously"
        assert "parenthetical" not in data["elements"][4]
