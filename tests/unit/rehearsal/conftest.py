"""Shared fixtures for rehearsal tests."""

import pytest

from scenepartner.parser.models import Element, ElementType


def _element(index, element_type, content, scene=1, character=None):
    return Element(
        line_id=f"scene_{scene}_{element_type.value}_{index}",
        scene_number=scene,
        element_index=index,
        element_type=element_type,
        content=content,
        character_name=character,
        dialogue=content if element_type is ElementType.DIALOGUE else None,
    )


@pytest.fixture
def dialogue_elements():
    """Ten elements: a heading, action and alternating JOHN/MARY dialogue."""
    return (
        _element(0, ElementType.SCENE_HEADING, "INT. KITCHEN - DAY"),
        _element(1, ElementType.ACTION, "John pours coffee."),
        _element(2, ElementType.CHARACTER_CUE, "JOHN", character="JOHN"),
        _element(3, ElementType.DIALOGUE, "Morning.", character="JOHN"),
        _element(4, ElementType.CHARACTER_CUE, "MARY", character="MARY"),
        _element(5, ElementType.DIALOGUE, "Is it?", character="MARY"),
        _element(6, ElementType.ACTION, "A dog barks outside."),
        _element(7, ElementType.CHARACTER_CUE, "PETE", character="PETE"),
        _element(8, ElementType.DIALOGUE, "Keep it down!", character="PETE"),
        _element(9, ElementType.TRANSITION, "CUT TO:"),
    )
