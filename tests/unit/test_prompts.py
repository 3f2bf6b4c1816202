"""Tests for lens prompt building."""

import pytest

from whatif_simulator.models import Complexity, KeyElements, ProcessedScenario, ScenarioType
from whatif_simulator.prompts import (
    FUN_COMPLEX_TWIST,
    SERIOUS_COMPLEX_NOTE,
    format_fun_prompt,
    format_serious_prompt,
    get_fun_plot_twist,
    get_serious_context_note,
)


def make_scenario(scenario_type=ScenarioType.HYPOTHETICAL, complexity=Complexity.SIMPLE, **elements):
    return ProcessedScenario(
        original_text="What if cats could talk?",
        scenario_type=scenario_type,
        complexity=complexity,
        key_elements=KeyElements(**elements),
    )


class TestLensKeywords:
    """Each prompt carries its lens keywords for downstream routing."""

    @pytest.mark.parametrize("scenario_type", list(ScenarioType))
    @pytest.mark.parametrize("complexity", list(Complexity))
    def test_serious_prompt_keywords(self, scenario_type, complexity):
        prompt = format_serious_prompt(make_scenario(scenario_type, complexity))

        assert "serious" in prompt
        assert "realistic" in prompt

    @pytest.mark.parametrize("scenario_type", list(ScenarioType))
    @pytest.mark.parametrize("complexity", list(Complexity))
    def test_fun_prompt_keywords(self, scenario_type, complexity):
        prompt = format_fun_prompt(make_scenario(scenario_type, complexity))

        assert "fun" in prompt
        assert "creative" in prompt
        assert "serious" not in prompt


class TestPromptContent:
    """Tests for scenario details in prompts."""

    def test_scenario_text_and_type(self):
        prompt = format_serious_prompt(make_scenario(ScenarioType.HISTORICAL))

        assert 'Scenario: "What if cats could talk?"' in prompt
        assert "Scenario type: historical" in prompt
        assert "time period" in prompt

    def test_key_elements_listed(self):
        scenario = make_scenario(actors=["cats", "people"], actions=["could talk"])

        serious = format_serious_prompt(scenario)
        fun = format_fun_prompt(scenario)

        assert "Key actors involved: cats, people" in serious
        assert "Key actions/changes: could talk" in serious
        assert "Transform these characters: cats, people" in fun

    def test_empty_key_elements_are_omitted(self):
        prompt = format_serious_prompt(make_scenario())

        assert "Key actors involved" not in prompt

    def test_complexity_guidance(self):
        prompt = format_fun_prompt(make_scenario(complexity=Complexity.COMPLEX))

        assert "escalating absurdity" in prompt


class TestShortResponseNotes:
    """Tests for notes appended to brief responses."""

    def test_context_note(self):
        note = get_serious_context_note(make_scenario(ScenarioType.PERSONAL))

        assert note.startswith("**Additional Considerations:**")
        assert "emotional factors" in note
        assert SERIOUS_COMPLEX_NOTE not in note

    def test_context_note_complex(self):
        note = get_serious_context_note(make_scenario(complexity=Complexity.COMPLEX))

        assert note.endswith(SERIOUS_COMPLEX_NOTE)

    def test_plot_twist(self):
        twist = get_fun_plot_twist(make_scenario(ScenarioType.PROFESSIONAL, Complexity.COMPLEX))

        assert twist.startswith("**Plot Twist:**")
        assert "break room" in twist
        assert twist.endswith(FUN_COMPLEX_TWIST)
