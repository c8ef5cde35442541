from __future__ import annotations

import pytest

from fda_device_lookup.vocabulary import DEFAULT_SYNONYMS, SynonymExpander, SynonymTable
from fda_device_lookup.vocabulary.tables import DEFAULT_VOCABULARY, Vocabulary


def test_absent_term_passes_through_unchanged(vocabulary):
    expander = SynonymExpander(vocabulary.synonyms)

    assert expander.expand(["oximeter"]) == ("oximeter",)
    assert expander.expand(["Stethoscope"]) == ("Stethoscope",)


def test_multi_word_expansion_is_split_into_terms(vocabulary):
    expander = SynonymExpander(vocabulary.synonyms)

    assert expander.expand(["bp", "cuff"]) == ("blood", "pressure", "cuff")


def test_lookup_is_case_insensitive(vocabulary):
    expander = SynonymExpander(vocabulary.synonyms)

    assert expander.expand(["ECG", "Patch"]) == ("electrocardiograph", "ambulatory")


def test_duplicates_are_dropped_case_insensitively_keeping_first_seen(vocabulary):
    expander = SynonymExpander(vocabulary.synonyms)

    assert expander.expand(["ecg", "Electrocardiograph", "monitor"]) == ("electrocardiograph", "monitor")
    assert expander.expand(["Oximeter", "oximeter"]) == ("Oximeter",)


def test_expansion_is_a_single_hop():
    expander = SynonymExpander()

    assert expander.expand(["xray"]) == ("x-ray",)
    assert expander.expand(["x-ray"]) == ("radiographic",)


def test_app_expands_to_every_phrase_in_order():
    expander = SynonymExpander(SynonymTable(DEFAULT_SYNONYMS))

    assert expander.expand(["app"]) == ("software", "mobile")


def test_table_rejects_non_lowercase_keys():
    with pytest.raises(ValueError):
        SynonymTable({"ECG": ("electrocardiograph",)})


def test_table_is_read_only(vocabulary):
    with pytest.raises(TypeError):
        vocabulary.synonyms["new"] = ("value",)  # type: ignore[index]


def test_expansion_words(vocabulary):
    table = vocabulary.synonyms

    assert table.expansion_words("PACEMAKER") == ("pulse", "generator")
    assert table.expansion_words("unknown") == ()
    assert "ecg" in table
    assert len(table) == 5


def test_default_vocabulary_carries_the_builtin_tables():
    vocabulary = Vocabulary()

    assert vocabulary.synonyms.phrases("ecg")
    assert "QIH" in vocabulary.ai_software_codes
    assert vocabulary.ai_software_codes is DEFAULT_VOCABULARY.ai_software_codes
    assert "device" in vocabulary.filler_words
