"""
Instrument Catalog.

Each clinical questionnaire is described by a declarative
InstrumentDefinition: item count, per-item range, severity band table
and question content. Band tables are validated once when this module
is imported, so a malformed table aborts startup with a
ConfigurationError instead of surfacing during scoring.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from .errors import ConfigurationError, InvalidInput
from .models import SeverityBand, SeverityLevel

logger = logging.getLogger(__name__)

# Chart colors by severity level
SEVERITY_COLORS = {
    SeverityLevel.MINIMAL: "#4CAF50",
    SeverityLevel.MILD: "#FFEB3B",
    SeverityLevel.MODERATE: "#FF9800",
    SeverityLevel.MODERATELY_SEVERE: "#F44336",
    SeverityLevel.SEVERE: "#B71C1C",
}

FREQUENCY_OPTIONS = (
    "Not at all",
    "Several days",
    "More than half the days",
    "Nearly every day",
)

CESD_OPTIONS = (
    "Rarely or none of the time (less than 1 day)",
    "Some or a little of the time (1-2 days)",
    "Occasionally or a moderate amount of time (3-4 days)",
    "Most or all of the time (5-7 days)",
)


@dataclass(frozen=True)
class InstrumentQuestion:
    """One questionnaire item and its answer labels (index == item score)."""

    number: int
    text: str
    options: Tuple[str, ...]

    def to_dict(self) -> dict:
        return {"number": self.number, "text": self.text, "options": list(self.options)}


@dataclass(frozen=True)
class InstrumentDefinition:
    """Static definition of a questionnaire and its scoring rule."""

    code: str
    name: str
    description: str
    item_min: int
    item_max: int
    bands: Tuple[SeverityBand, ...]
    questions: Tuple[InstrumentQuestion, ...]

    @property
    def item_count(self) -> int:
        return len(self.questions)

    @property
    def min_score(self) -> int:
        return self.item_min * self.item_count

    @property
    def max_score(self) -> int:
        return self.item_max * self.item_count

    def to_dict(self, include_questions: bool = False) -> dict:
        """Convert to dictionary for serialization."""
        data = {
            "code": self.code,
            "name": self.name,
            "description": self.description,
            "item_count": self.item_count,
            "item_min": self.item_min,
            "item_max": self.item_max,
            "min_score": self.min_score,
            "max_score": self.max_score,
            "bands": [band.to_dict() for band in self.bands],
        }
        if include_questions:
            data["questions"] = [q.to_dict() for q in self.questions]
        return data


def _bands(*ranges: Tuple[int, int, SeverityLevel]) -> Tuple[SeverityBand, ...]:
    return tuple(
        SeverityBand(low=low, high=high, level=level, color=SEVERITY_COLORS[level])
        for low, high, level in ranges
    )


def _questions(texts: List[str], options) -> Tuple[InstrumentQuestion, ...]:
    # A list gives per-item options; a tuple is shared by every item
    per_item = options if isinstance(options, list) else [options] * len(texts)
    return tuple(
        InstrumentQuestion(number=i, text=text, options=tuple(opts))
        for i, (text, opts) in enumerate(zip(texts, per_item), start=1)
    )


PHQ9 = InstrumentDefinition(
    code="PHQ9",
    name="Patient Health Questionnaire-9",
    description="Depression screening tool",
    item_min=0,
    item_max=3,
    bands=_bands(
        (0, 4, SeverityLevel.MINIMAL),
        (5, 9, SeverityLevel.MILD),
        (10, 14, SeverityLevel.MODERATE),
        (15, 19, SeverityLevel.MODERATELY_SEVERE),
        (20, 27, SeverityLevel.SEVERE),
    ),
    questions=_questions(
        [
            "Little interest or pleasure in doing things",
            "Feeling down, depressed, or hopeless",
            "Trouble falling or staying asleep, or sleeping too much",
            "Feeling tired or having little energy",
            "Poor appetite or overeating",
            "Feeling bad about yourself - or that you are a failure or have let "
            "yourself or your family down",
            "Trouble concentrating on things, such as reading the newspaper or "
            "watching television",
            "Moving or speaking so slowly that other people could have noticed. "
            "Or the opposite - being so fidgety or restless that you have been "
            "moving around a lot more than usual",
            "Thoughts that you would be better off dead, or of hurting yourself "
            "in some way",
        ],
        FREQUENCY_OPTIONS,
    ),
)

GAD7 = InstrumentDefinition(
    code="GAD7",
    name="Generalized Anxiety Disorder-7",
    description="Anxiety screening tool",
    item_min=0,
    item_max=3,
    bands=_bands(
        (0, 4, SeverityLevel.MINIMAL),
        (5, 9, SeverityLevel.MILD),
        (10, 14, SeverityLevel.MODERATE),
        (15, 21, SeverityLevel.SEVERE),
    ),
    questions=_questions(
        [
            "Feeling nervous, anxious, or on edge",
            "Not being able to stop or control worrying",
            "Worrying too much about different things",
            "Trouble relaxing",
            "Being so restless that it is hard to sit still",
            "Becoming easily annoyed or irritable",
            "Feeling afraid, as if something awful might happen",
        ],
        FREQUENCY_OPTIONS,
    ),
)

CESD = InstrumentDefinition(
    code="CESD",
    name="Center for Epidemiologic Studies Depression Scale",
    description="Depression assessment",
    item_min=0,
    item_max=3,
    bands=_bands(
        (0, 15, SeverityLevel.MINIMAL),
        (16, 21, SeverityLevel.MILD),
        (22, 36, SeverityLevel.MODERATE),
        (37, 60, SeverityLevel.SEVERE),
    ),
    questions=_questions(
        [
            "I was bothered by things that usually don't bother me",
            "I did not feel like eating; my appetite was poor",
            "I felt that I could not shake off the blues even with help from my "
            "family or friends",
            "I felt I was just as good as other people",
            "I had trouble keeping my mind on what I was doing",
            "I felt depressed",
            "I felt that everything I did was an effort",
            "I felt hopeful about the future",
            "I thought my life had been a failure",
            "I felt fearful",
            "My sleep was restless",
            "I was happy",
            "I talked less than usual",
            "I felt lonely",
            "People were unfriendly",
            "I enjoyed life",
            "I had crying spells",
            "I felt sad",
            "I felt that people dislike me",
            "I could not get going",
        ],
        CESD_OPTIONS,
    ),
)

OASIS = InstrumentDefinition(
    code="OASIS",
    name="Overall Anxiety Severity and Impairment Scale",
    description="Anxiety assessment",
    item_min=0,
    item_max=4,
    bands=_bands(
        (0, 7, SeverityLevel.MINIMAL),
        (8, 14, SeverityLevel.MODERATE),
        (15, 20, SeverityLevel.SEVERE),
    ),
    questions=_questions(
        [
            "In the past week, how often have you felt anxious?",
            "In the past week, when you have felt anxious, how intense or severe "
            "was your anxiety?",
            "In the past week, how often did you avoid situations, places, "
            "objects, or activities because of anxiety or fear?",
            "In the past week, how much did your anxiety interfere with your "
            "ability to do the things you needed to do at work, at school, or at home?",
            "In the past week, how much has anxiety interfered with your social "
            "life and relationships?",
        ],
        [
            (
                "No anxiety in the past week",
                "Infrequent anxiety. Felt anxious a few times",
                "Frequent anxiety. Felt anxious most of the time",
                "Constant anxiety. Felt anxious all of the time",
                "Extreme anxiety. Felt anxious every moment",
            ),
            (
                "No anxiety",
                "Mild anxiety. Minimally distressing",
                "Moderate anxiety. Distressing, but manageable",
                "Severe anxiety. Difficult to tolerate",
                "Extreme anxiety. Barely tolerable, overwhelming",
            ),
            (
                "Never avoided",
                "Infrequently avoided. Avoided a few times",
                "Occasionally avoided. Avoided about half the time",
                "Frequently avoided. Avoided most of the time",
                "All the time. Constantly avoided situations",
            ),
            (
                "No interference",
                "Mild interference. Slightly interfered",
                "Moderate interference. Definitely interfered but still manageable",
                "Severe interference. Substantially interfered",
                "Extreme interference. Completely interfered. Unable to do tasks",
            ),
            (
                "No interference",
                "Mild interference. Slightly interfered",
                "Moderate interference. Definitely interfered but still manageable",
                "Severe interference. Substantially interfered",
                "Extreme interference. Completely interfered. Unable to maintain "
                "relationships",
            ),
        ],
    ),
)

DEFAULT_INSTRUMENTS = (PHQ9, GAD7, CESD, OASIS)


def normalize_code(code: str) -> str:
    """Canonical instrument code: 'phq-9' -> 'PHQ9', 'CES-D' -> 'CESD'."""
    return code.strip().upper().replace("-", "").replace("_", "")


def validate_instrument(definition: InstrumentDefinition) -> None:
    """
    Check that an instrument's bands partition its full score range.

    Bands must be ordered, non-empty, and contiguous from min_score to
    max_score with no gap or overlap.

    Raises:
        ConfigurationError: If the definition is malformed
    """
    code = definition.code
    if definition.item_count == 0:
        raise ConfigurationError(f"{code}: instrument has no questions")
    if definition.item_min > definition.item_max:
        raise ConfigurationError(
            f"{code}: item range [{definition.item_min}, {definition.item_max}] is empty"
        )
    if not definition.bands:
        raise ConfigurationError(f"{code}: severity band table is empty")

    expected_low = definition.min_score
    for band in definition.bands:
        if band.low > band.high:
            raise ConfigurationError(
                f"{code}: band {band.label} has low {band.low} > high {band.high}"
            )
        if band.low < expected_low:
            raise ConfigurationError(
                f"{code}: band {band.label} overlaps previous band at {band.low}"
            )
        if band.low > expected_low:
            raise ConfigurationError(
                f"{code}: gap in severity bands between {expected_low} and {band.low - 1}"
            )
        expected_low = band.high + 1

    if expected_low - 1 != definition.max_score:
        raise ConfigurationError(
            f"{code}: severity bands end at {expected_low - 1} "
            f"but max score is {definition.max_score}"
        )

    for question in definition.questions:
        if len(question.options) != definition.item_max - definition.item_min + 1:
            raise ConfigurationError(
                f"{code}: question {question.number} has {len(question.options)} options"
            )


def validate_instruments(
    definitions: Iterable[InstrumentDefinition],
) -> Dict[str, InstrumentDefinition]:
    """
    Validate a set of instrument definitions and index them by code.

    Returns:
        Mapping of canonical code to definition

    Raises:
        ConfigurationError: On a malformed definition or duplicate code
    """
    catalog: Dict[str, InstrumentDefinition] = {}
    for definition in definitions:
        code = normalize_code(definition.code)
        if code in catalog:
            raise ConfigurationError(f"Duplicate instrument code: {code}")
        validate_instrument(definition)
        catalog[code] = definition

    logger.info(f"[SCORER] Validated {len(catalog)} instruments: {list(catalog.keys())}")
    return catalog


# Validated at import
INSTRUMENTS: Dict[str, InstrumentDefinition] = validate_instruments(DEFAULT_INSTRUMENTS)


def lookup_instrument(
    catalog: Dict[str, InstrumentDefinition], code: str
) -> InstrumentDefinition:
    """
    Look up an instrument by code in a validated catalog.

    Raises:
        InvalidInput: If the code is not in the catalog
    """
    definition = catalog.get(normalize_code(code)) if isinstance(code, str) else None
    if definition is None:
        raise InvalidInput(
            f"Invalid assessment code: '{code}'. Must be one of: "
            f"{', '.join(catalog.keys())}",
            field="instrument",
        )
    return definition


def get_instrument(code: str) -> InstrumentDefinition:
    """Look up an instrument in the built-in catalog."""
    return lookup_instrument(INSTRUMENTS, code)


def list_instruments() -> List[InstrumentDefinition]:
    """All known instruments in catalog order."""
    return list(INSTRUMENTS.values())
