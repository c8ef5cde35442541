"""Static vocabulary used to bridge informal wording and FDA device nomenclature."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

# Keys must be lowercase. Multi-word keys never match a single query token but are
# kept so callers tokenizing on phrases can reuse the table.
DEFAULT_SYNONYMS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "ecg": ("electrocardiograph",),
        "ekg": ("electrocardiograph",),
        "robot": ("computer controlled instrument",),
        "robotic": ("computer controlled instrument",),
        "bp": ("blood pressure",),
        "cgm": ("continuous glucose monitor",),
        "ai": ("artificial intelligence",),
        "mri": ("magnetic resonance imaging",),
        "ct": ("computed tomography",),
        "xray": ("x-ray",),
        "x-ray": ("radiographic",),
        "ultrasound": ("ultrasonic",),
        "cpap": ("continuous positive airway pressure",),
        "tens": ("transcutaneous electrical nerve stimulation",),
        "iud": ("intrauterine",),
        "stent": ("endoprosthesis",),
        "pacemaker": ("pulse generator",),
        "defibrillator": ("defibrillator",),
        "ventilator": ("ventilator",),
        "catheter": ("catheter",),
        "laser": ("laser",),
        "pump": ("infusion pump",),
        "thermometer": ("thermometer",),
        "oximeter": ("oximeter",),
        "hearing": ("hearing aid",),
        "insulin": ("insulin",),
        "dialysis": ("hemodialysis",),
        "prosthetic": ("prosthesis",),
        "implant": ("implant",),
        "endoscope": ("endoscope",),
        "monitor": ("monitor",),
        "wearable": ("wearable",),
        "patch": ("ambulatory",),
        "portable": ("portable",),
        "wireless": ("wireless",),
        "bluetooth": ("wireless",),
        "home": ("home use",),
        "otc": ("over-the-counter",),
        "samd": ("software",),
        "software device": ("software",),
        "app": ("software", "mobile"),
        "cad": ("computer aided detection",),
        "cad-x": ("computer aided diagnosis",),
        "triage": ("triage",),
        "diagnostic": ("diagnostic",),
        "screening": ("screening",),
        "imaging": ("image processing",),
        "ehr": ("electronic health record",),
        "clinical": ("clinical decision support",),
        "cds": ("clinical decision support",),
        "ml": ("machine learning",),
        "deep learning": ("machine learning",),
        "algorithm": ("algorithm",),
        "waveform": ("electrocardiograph",),
        "heart monitor": ("electrocardiograph",),
        "heart rate": ("heart rate",),
        "blood sugar": ("glucose",),
        "glucometer": ("glucose meter",),
        "spo2": ("oximeter",),
        "sleep apnea": ("sleep apnea",),
        "mammography": ("mammograph",),
        "mammogram": ("mammograph",),
        "polyp": ("lesion",),
        "colonoscopy": ("endoscope gastrointestinal",),
        "endoscopy": ("endoscope",),
        "dental": ("dental",),
        "dermatology": ("dermatoscope",),
        "retinal": ("retinal",),
        "fundus": ("fundus",),
        "stroke": ("stroke",),
        "aneurysm": ("aneurysm",),
        "fracture": ("fracture",),
        "tumor": ("lesion",),
        "cancer": ("cancer",),
        "detection": ("detection",),
        "diagnosis": ("diagnosis",),
    }
)

# Noise words in classification searches.
FILLER_WORDS: frozenset[str] = frozenset(
    {
        "a", "an", "the", "for", "of", "in", "on", "to", "and", "or", "is", "it",
        "what", "how", "which", "my", "with", "from", "that", "this",
        "fda", "class", "device", "medical", "need", "does",
    }
)

# Too broad to search alone against premarket device names.
GENERIC_BRIDGE_TERMS: frozenset[str] = frozenset(
    {
        "artificial", "intelligence", "machine", "learning", "software", "device",
        "system", "detection", "screening", "diagnosis", "diagnostic", "analysis",
        "monitor", "automated", "computer", "digital", "algorithm", "image",
        "processing", "aided", "based", "clinical", "decision", "support",
    }
)

# Query terms with a high miss rate against formal classification names.
AI_SOFTWARE_TERMS: frozenset[str] = frozenset(
    {
        "ai", "ml", "algorithm", "machine learning", "deep learning",
        "artificial intelligence", "samd", "software",
    }
)

# Generic product codes that most AI/ML-enabled devices are cleared under.
AI_SOFTWARE_CODES: Mapping[str, str] = MappingProxyType(
    {
        "QIH": "Automated Radiological Image Processing Software",
        "QDQ": "Radiological Computer Assisted Detection/Diagnosis Software",
        "MYN": "Analyzer, Medical Image",
        "QBS": "Radiological CAD Software For Fracture",
        "QNP": "Gastrointestinal Lesion Software Detection System",
        "QJU": "Image Acquisition/Optimization Guided By AI",
    }
)


class SynonymTable(Mapping[str, tuple[str, ...]]):
    """Read-only mapping from a lowercase informal term to formal replacement phrases."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, Iterable[str]] | None = None) -> None:
        source = DEFAULT_SYNONYMS if entries is None else entries
        normalized: dict[str, tuple[str, ...]] = {}
        for key, phrases in source.items():
            if key != key.lower() or not key.strip():
                raise ValueError(f"Synonym keys must be non-empty lowercase strings, got {key!r}")
            if isinstance(phrases, str):
                phrases = (phrases,)
            normalized[key] = tuple(phrase for phrase in phrases if phrase and phrase.strip())
        self._entries: Mapping[str, tuple[str, ...]] = MappingProxyType(normalized)

    def __getitem__(self, key: str) -> tuple[str, ...]:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def phrases(self, term: str) -> tuple[str, ...]:
        """Return the replacement phrases for ``term`` (empty when absent)."""
        return self._entries.get(term.lower(), ())

    def expansion_words(self, term: str) -> tuple[str, ...]:
        """Return the whitespace-split words of every replacement phrase for ``term``."""
        words: list[str] = []
        for phrase in self.phrases(term):
            words.extend(phrase.split())
        return tuple(words)


@dataclass(slots=True, frozen=True)
class Vocabulary:
    """Immutable bundle of the lookup tables injected into the resolver components."""

    synonyms: SynonymTable = field(default_factory=SynonymTable)
    filler_words: frozenset[str] = FILLER_WORDS
    generic_bridge_terms: frozenset[str] = GENERIC_BRIDGE_TERMS
    ai_software_terms: frozenset[str] = AI_SOFTWARE_TERMS
    ai_software_codes: Mapping[str, str] = field(default_factory=lambda: AI_SOFTWARE_CODES)


DEFAULT_VOCABULARY = Vocabulary()
