"""Scenario classification and key-element extraction.

Classification is an ordered table of (pattern, ScenarioType) pairs evaluated
first-match-wins: historical, then professional, then personal, with
hypothetical as the default bucket. The one exception is a first-person
lottery win, which is personal ahead of the past-tense-plus-date rules.

Complexity is an additive score, so longer text or more extracted elements
never lowers the tier:
- Words: >25 adds 3, >15 adds 2, >8 adds 1
- Actors and actions: >3 adds 2, >1 adds 1 (each)
- Complex keywords add 3 each, moderate keywords add 2 each
- Conditional connectives add 1 each, capped at 2
Score >= 10 is complex, >= 4 is moderate, otherwise simple.
"""

import logging
import re

from whatif_simulator.models import Complexity, KeyElements, ProcessedScenario, ScenarioType

logger = logging.getLogger(__name__)

MAX_ACTORS = 5
MAX_ACTIONS = 5

# A bare number is an amount, not a date: years need a temporal preposition or a decade "s"
_YEAR = r"((in|during|by|since|before|after|around)\s+\d{3,4}s?|\d{3,4}s)"
_ERA = rf"({_YEAR}|century|centuries|era|age|decade|years\s+ago|back\s+then)"
_PAST = r"(had\s+(been|won|lost|never)|never\s+happened)"


def _words(*words: str) -> re.Pattern:
    return re.compile(r"\b(" + "|".join(words) + r")\b", re.IGNORECASE)


CLASSIFICATION_RULES: list[tuple[re.Pattern, ScenarioType]] = [
    (
        _words(
            "napoleon", "caesar", "cleopatra", "lincoln", "churchill", "pharaohs?",
            "emperors?", "kings?", "queens?", "dynasty", "empires?", "ancient",
            "medieval", "renaissance", "world war", "civil war", "revolution",
            "romans?", "rome", "egypt", "egyptians?", "civilization", "dinosaurs?",
            "extinct", "battle of", "history", "historical",
        ),
        ScenarioType.HISTORICAL,
    ),
    # First-person windfalls stay personal even when a year is mentioned
    (re.compile(r"\b(i|my)\b.*\bwon\b.*\blottery\b", re.IGNORECASE), ScenarioType.PERSONAL),
    (re.compile(rf"\b{_PAST}\b.*\b{_ERA}\b", re.IGNORECASE), ScenarioType.HISTORICAL),
    (re.compile(rf"\b{_ERA}\b.*\b{_PAST}\b", re.IGNORECASE), ScenarioType.HISTORICAL),
    (
        _words(
            "company", "companies", "business", "businesses", "office", "workplace",
            "startups?", "corporations?", "industry", "market", "economy", "meetings?",
            "projects?", "team", "managers?", "boss", "employees?", "salary",
            "promotion", "interview", "clients?", "customers?", "deadlines?", "budget",
            "career", "jobs?", "work week", "coworkers?", "ceo",
        ),
        ScenarioType.PROFESSIONAL,
    ),
    (
        _words(
            "i", "me", "my", "myself", "mine", "family", "friends?", "relationship",
            "marriage", "wedding", "dating", "child", "parents?", "siblings?", "pets?",
            "hobby", "health", "school", "college", "university", "home", "house",
            "won the lottery",
        ),
        ScenarioType.PERSONAL,
    ),
]

FIRST_PERSON = re.compile(r"\b(i|me|myself)\b", re.IGNORECASE)

ACTOR_PATTERNS = [
    _words("people", "person", "everyone", "someone", "anyone"),
    _words("government", "politicians?", "president", "leader", "authority"),
    _words("company", "companies", "business", "corporation"),
    _words("family", "friends?", "parents?", "children", "kids"),
    _words("humans?", "humanity", "mankind", "society"),
    _words("animals?", "pets?", "dogs?", "cats?"),
    _words("scientists?", "researchers?", "experts?"),
    _words("teachers?", "students?", "doctors?", "lawyers?"),
]

ACTION_PATTERNS = [
    re.compile(r"\b(could|would|might|should|can|will)\s+(\w+)", re.IGNORECASE),
    _words("stop", "start", "begin", "end", "change", "become", "turn", "make", "do", "go",
           "come", "leave", "stay"),
    _words("discover", "invent", "create", "destroy", "build", "break", "fix", "solve",
           "find", "lose"),
    _words("decide", "choose", "pick", "select", "vote", "elect", "appoint"),
    _words("buy", "sell", "trade", "invest", "spend", "save", "earn", "pay"),
    _words("move", "travel", "visit", "explore", "migrate", "relocate"),
    _words("learn", "study", "teach", "educate", "train", "practice"),
    _words("meet", "marry", "divorce", "date", "befriend", "fight", "argue"),
]

COMPLEX_KEYWORDS = [
    "economy", "society", "global", "worldwide", "international", "system",
    "environment", "climate", "politics", "multiple", "various", "different",
    "several", "many", "consequences", "implications", "effects", "impact",
    "influence", "restructure", "collaborate", "regulate", "organizations",
]

MODERATE_KEYWORDS = [
    "therapist", "professional", "career", "job", "work", "business", "electric",
    "technology", "industry", "underwater", "building", "minds", "read minds",
    "superpowers", "abilities", "collapsed", "cities",
]

CONDITIONAL_WORDS = _words("and", "or", "but", "however", "while", "although", "because", "since")

COMPLEX_THRESHOLD = 10
MODERATE_THRESHOLD = 4


class ScenarioProcessor:
    """Turns sanitized scenario text into a ProcessedScenario."""

    def process_scenario(self, scenario: str) -> ProcessedScenario:
        """Classify and extract key elements.

        Never raises; unexpected failures return a minimal hypothetical,
        simple scenario with the original text as context.
        """
        try:
            text = scenario.strip() if isinstance(scenario, str) else ""
            if not text:
                logger.warning("Empty scenario passed to processor, using fallback")
                return self.create_fallback_scenario(scenario)

            scenario_type = self.identify_scenario_type(text)
            key_elements = self.extract_key_elements(text)
            complexity = self.assess_complexity(text, key_elements)
            return ProcessedScenario(
                original_text=text,
                scenario_type=scenario_type,
                key_elements=key_elements,
                complexity=complexity,
            )
        except Exception as e:
            logger.error(f"Scenario processing failed, using fallback: {e}")
            return self.create_fallback_scenario(scenario)

    def create_fallback_scenario(self, scenario: str) -> ProcessedScenario:
        text = scenario if isinstance(scenario, str) else ""
        return ProcessedScenario(
            original_text=text,
            scenario_type=ScenarioType.HYPOTHETICAL,
            key_elements=KeyElements(actors=[], actions=[], context=text),
            complexity=Complexity.SIMPLE,
        )

    def identify_scenario_type(self, text: str) -> ScenarioType:
        for pattern, scenario_type in CLASSIFICATION_RULES:
            if pattern.search(text):
                return scenario_type
        return ScenarioType.HYPOTHETICAL

    def extract_key_elements(self, text: str) -> KeyElements:
        return KeyElements(
            actors=self.extract_actors(text),
            actions=self.extract_actions(text),
            context=self.extract_context(text),
        )

    def extract_actors(self, text: str) -> list[str]:
        actors: list[str] = []
        if FIRST_PERSON.search(text):
            actors.append("I")

        lowered = text.lower()
        for pattern in ACTOR_PATTERNS:
            for match in pattern.finditer(lowered):
                actor = match.group(0)
                if actor not in actors:
                    actors.append(actor)

        if not actors:
            actors.append("people")
        return actors[:MAX_ACTORS]

    def extract_actions(self, text: str) -> list[str]:
        actions: list[str] = []
        lowered = text.lower()
        for pattern in ACTION_PATTERNS:
            for match in pattern.finditer(lowered):
                action = match.group(0).strip()
                if action and action not in actions:
                    actions.append(action)
        return actions[:MAX_ACTIONS]

    def extract_context(self, text: str) -> str:
        """Short restatement of the premise without the "What if" opener."""
        context = re.sub(r"^what\s+if\s+", "", text, flags=re.IGNORECASE).strip()
        if context:
            context = context[0].upper() + context[1:]
            if not re.search(r"[.!?]$", context):
                context += "?"
        return context or text

    def assess_complexity(self, text: str, key_elements: KeyElements) -> Complexity:
        return self._tier(self.complexity_score(text, key_elements))

    def complexity_score(self, text: str, key_elements: KeyElements) -> int:
        score = 0

        word_count = len(text.split())
        if word_count > 25:
            score += 3
        elif word_count > 15:
            score += 2
        elif word_count > 8:
            score += 1

        for count in (len(key_elements.actors), len(key_elements.actions)):
            if count > 3:
                score += 2
            elif count > 1:
                score += 1

        lowered = text.lower()
        score += 3 * sum(1 for keyword in COMPLEX_KEYWORDS if keyword in lowered)
        score += 2 * sum(1 for keyword in MODERATE_KEYWORDS if keyword in lowered)

        conditionals = {m.group(0).lower() for m in CONDITIONAL_WORDS.finditer(lowered)}
        score += min(len(conditionals), 2)
        return score

    @staticmethod
    def _tier(score: int) -> Complexity:
        if score >= COMPLEX_THRESHOLD:
            return Complexity.COMPLEX
        if score >= MODERATE_THRESHOLD:
            return Complexity.MODERATE
        return Complexity.SIMPLE
