"""Unit tests for next speaker resolution."""

from scenepartner.rehearsal.turns import NextSpeaker, SpeakerType, resolve_next_speaker


class TestResolveNextSpeaker:
    """Test resolve_next_speaker."""

    def test_user_line_ahead(self, dialogue_elements):
        """Test scanning forward past non-dialogue elements."""
        speaker = resolve_next_speaker(dialogue_elements, 0, "JOHN", {"MARY"})

        assert speaker == NextSpeaker("JOHN", SpeakerType.USER, element_index=3)

    def test_ai_line_ahead(self, dialogue_elements):
        """Test an AI voiced character."""
        speaker = resolve_next_speaker(dialogue_elements, 4, "JOHN", {"MARY"})

        assert speaker.character == "MARY"
        assert speaker.type is SpeakerType.AI

    def test_cursor_on_dialogue_counts(self, dialogue_elements):
        """Test that the element at the cursor itself is considered."""
        speaker = resolve_next_speaker(dialogue_elements, 5, "JOHN", {"MARY"})
        assert speaker.element_index == 5

    def test_character_outside_session(self, dialogue_elements):
        """Test a speaker in neither role."""
        speaker = resolve_next_speaker(dialogue_elements, 6, "JOHN", {"MARY"})

        assert speaker.character == "PETE"
        assert speaker.type is SpeakerType.UNKNOWN

    def test_no_dialogue_left(self, dialogue_elements):
        """Test the end of the script."""
        speaker = resolve_next_speaker(dialogue_elements, 9, "JOHN", {"MARY"})

        assert speaker == NextSpeaker("unknown", SpeakerType.UNKNOWN)
        assert speaker.to_dict() == {"character": "unknown", "type": "unknown"}

    def test_empty_sequence(self):
        """Test resolving over no elements."""
        speaker = resolve_next_speaker((), 0, "JOHN", set())
        assert speaker.type is SpeakerType.UNKNOWN
