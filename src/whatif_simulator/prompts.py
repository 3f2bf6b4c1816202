"""LLM prompts for the What If Simulator.

This module consolidates the prompts used to generate the two lenses of a
scenario:

1. Serious - realistic cause-and-effect analysis
2. Fun - creative, humorous interpretation

Every serious prompt contains the words "serious" and "realistic"; every fun
prompt contains "fun" and "creative". Generation backends may branch on those
tokens, so they are part of the prompt contract.

All prompts use clear template variable naming with curly braces: {variable_name}
"""

from whatif_simulator.models import ProcessedScenario

# =============================================================================
# SYSTEM PROMPTS
# =============================================================================

GENERATION_SYSTEM_PROMPT = """You answer "What if...?" questions for the What If Simulator.

Each request asks for one lens: a serious, realistic analysis or a fun,
creative interpretation. Follow the lens the request asks for. Keep it
family-friendly, use plain prose with short sections, and skip any preamble
about being an AI."""

# =============================================================================
# SERIOUS ANALYSIS
# =============================================================================

SERIOUS_PROMPT_TEMPLATE = """You are a realistic analyst providing a serious, logical cause-and-effect analysis. {type_guidance} {complexity_guidance}

Scenario type: {scenario_type}
Scenario: "{scenario}"
{key_elements}
Provide a realistic analysis that:
1. Considers practical constraints and real-world factors
2. Follows logical cause-and-effect reasoning
3. Addresses potential challenges and obstacles
4. Discusses likely outcomes and their probability
5. Maintains an objective, analytical tone

Structure your response with clear sections and avoid speculation beyond reasonable logical inference. Focus on actionable insights and realistic consequences."""

SERIOUS_TYPE_GUIDANCE = {
    "personal": "Analyze this personal scenario with consideration for individual psychology, relationships, and personal circumstances.",
    "professional": "Analyze this professional scenario considering business dynamics, economic factors, and workplace relationships.",
    "historical": "Analyze this historical scenario considering the social, political, and cultural context of the time period.",
    "hypothetical": "Analyze this hypothetical scenario using logical reasoning and real-world principles.",
}

SERIOUS_COMPLEXITY_GUIDANCE = {
    "simple": "Provide a clear, direct analysis focusing on the most likely immediate consequences.",
    "moderate": "Provide a structured analysis covering both immediate and secondary effects.",
    "complex": "Provide a comprehensive analysis examining multiple interconnected consequences and long-term implications.",
}

# =============================================================================
# FUN INTERPRETATION
# =============================================================================

FUN_PROMPT_TEMPLATE = """You are a creative storyteller with a humorous and imaginative perspective. Create a fun, entertaining, exaggerated, or surreal interpretation that stays appropriate. {type_guidance} {complexity_guidance}

Scenario type: {scenario_type}
Scenario: "{scenario}"
{key_elements}
Create a fun interpretation that:
1. Uses humor, exaggeration, or surreal elements
2. Maintains creativity while staying appropriate and family-friendly
3. Includes unexpected but delightful consequences
4. Uses vivid, entertaining language and imagery
5. Brings joy and laughter to the reader

Avoid offensive content, inappropriate themes, or harmful stereotypes. Focus on clever wordplay, absurd situations, and positive humor that entertains without offending."""

FUN_TYPE_GUIDANCE = {
    "personal": "Transform this personal scenario into a whimsical adventure with unexpected twists and delightful consequences.",
    "professional": "Reimagine this professional scenario with absurd office dynamics, quirky characters, and hilarious workplace situations.",
    "historical": "Retell this historical scenario with anachronistic elements, time-traveling mishaps, or alternate history comedy.",
    "hypothetical": "Explore this hypothetical scenario with magical realism, cartoon physics, or wonderfully impossible outcomes.",
}

FUN_COMPLEXITY_GUIDANCE = {
    "simple": "Keep it playful and straightforward with one main comedic twist or exaggeration.",
    "moderate": "Develop multiple layers of humor with interconnected funny consequences and character reactions.",
    "complex": "Create an elaborate comedic narrative with multiple plot threads, recurring gags, and escalating absurdity.",
}

# =============================================================================
# SHORT-RESPONSE NOTES
# =============================================================================

SERIOUS_CONTEXT_NOTES = {
    "personal": "Personal scenarios often involve emotional factors and individual circumstances that can significantly influence outcomes.",
    "professional": "Professional scenarios typically involve multiple stakeholders and organizational dynamics that create complex interdependencies.",
    "historical": "Historical scenarios must be understood within their specific time period and cultural context.",
    "hypothetical": "Hypothetical scenarios require careful consideration of realistic constraints and logical progression.",
}
SERIOUS_COMPLEX_NOTE = "The complexity of this scenario suggests multiple interconnected effects that may unfold over time."

FUN_PLOT_TWISTS = {
    "personal": "Personal adventures often lead to discovering hidden superpowers or meeting talking animals who become unlikely advisors!",
    "professional": "Office scenarios frequently involve secret underground lairs beneath the break room or coworkers who are actually time-traveling consultants!",
    "historical": "Historical events get much more interesting when you add dinosaurs, alien visitors, or interdimensional pizza delivery!",
    "hypothetical": "Hypothetical situations are perfect for introducing magical elements, cartoon physics, or universes where everything is made of cheese!",
}
FUN_COMPLEX_TWIST = "The complexity opens up possibilities for multiple parallel dimensions where each choice creates increasingly hilarious alternatives!"


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================


def _format_key_elements(scenario: ProcessedScenario, actor_label: str, action_label: str) -> str:
    lines = []
    if scenario.key_elements.actors:
        lines.append(f"{actor_label}: {', '.join(scenario.key_elements.actors)}")
    if scenario.key_elements.actions:
        lines.append(f"{action_label}: {', '.join(scenario.key_elements.actions)}")
    return "".join(f"{line}\n" for line in lines)


def format_serious_prompt(scenario: ProcessedScenario) -> str:
    """Format the serious analysis prompt for a processed scenario.

    Args:
        scenario: The processed scenario to analyze

    Returns:
        Formatted prompt string ready for LLM
    """
    scenario_type = scenario.scenario_type.value
    return SERIOUS_PROMPT_TEMPLATE.format(
        type_guidance=SERIOUS_TYPE_GUIDANCE[scenario_type],
        complexity_guidance=SERIOUS_COMPLEXITY_GUIDANCE[scenario.complexity.value],
        scenario_type=scenario_type,
        scenario=scenario.original_text,
        key_elements=_format_key_elements(scenario, "Key actors involved", "Key actions/changes"),
    )


def format_fun_prompt(scenario: ProcessedScenario) -> str:
    """Format the fun interpretation prompt for a processed scenario.

    Args:
        scenario: The processed scenario to reimagine

    Returns:
        Formatted prompt string ready for LLM
    """
    scenario_type = scenario.scenario_type.value
    return FUN_PROMPT_TEMPLATE.format(
        type_guidance=FUN_TYPE_GUIDANCE[scenario_type],
        complexity_guidance=FUN_COMPLEXITY_GUIDANCE[scenario.complexity.value],
        scenario_type=scenario_type,
        scenario=scenario.original_text,
        key_elements=_format_key_elements(
            scenario, "Transform these characters", "Make these actions hilariously unexpected"
        ),
    )


def get_serious_context_note(scenario: ProcessedScenario) -> str:
    """Note appended to serious analyses that came back too brief."""
    note = f"**Additional Considerations:** {SERIOUS_CONTEXT_NOTES[scenario.scenario_type.value]}"
    if scenario.complexity.value == "complex":
        note += f" {SERIOUS_COMPLEX_NOTE}"
    return note


def get_fun_plot_twist(scenario: ProcessedScenario) -> str:
    """Note appended to fun interpretations that came back too brief."""
    note = f"**Plot Twist:** {FUN_PLOT_TWISTS[scenario.scenario_type.value]}"
    if scenario.complexity.value == "complex":
        note += f" {FUN_COMPLEX_TWIST}"
    return note
