"""
Tests for dailybrief.anonymize module.
"""

import pytest

from dailybrief.anonymize import (
    ExactPlaceholder,
    TolerantPlaceholder,
    anonymize,
    deanonymize,
    placeholder_matcher,
)
from dailybrief.models import AssignmentRecord


def make_record(tasks):
    return AssignmentRecord(date="2025-06-25", day_of_week="środa", tasks_by_person=tasks)


class TestAnonymize:
    """Tests for anonymize function."""

    def test_assigns_placeholders_in_order(self):
        """Should number names from 1 in header order and scrub task text."""
        result = anonymize(make_record({"Ann": "Ann helps Bob", "Bob": "Bob naps"}))

        assert result.placeholder_to_original == {"pracownik_1": "Ann", "pracownik_2": "Bob"}
        assert result.anonymized_record.tasks_by_person == {
            "pracownik_1": "pracownik_1 helps pracownik_2",
            "pracownik_2": "pracownik_2 naps",
        }

    def test_keeps_date_fields(self):
        result = anonymize(make_record({"Ann": "Bake"}))
        assert result.anonymized_record.date == "2025-06-25"
        assert result.anonymized_record.day_of_week == "środa"

    def test_does_not_modify_input(self):
        record = make_record({"Ann": "Ann bakes"})
        anonymize(record)
        assert record.tasks_by_person == {"Ann": "Ann bakes"}

    def test_case_insensitive(self):
        result = anonymize(make_record({"Ann": "ANN and ann"}))
        assert result.anonymized_record.tasks_by_person["pracownik_1"] == "pracownik_1 and pracownik_1"

    def test_word_boundaries(self):
        """A name inside a longer word should not be replaced."""
        result = anonymize(make_record({"Ann": "Annual review with Ann"}))
        assert result.anonymized_record.tasks_by_person["pracownik_1"] == "Annual review with pracownik_1"

    def test_unknown_names_left_alone(self):
        """Names that are not column headers have no placeholder."""
        result = anonymize(make_record({"Ann": "Call Zenon"}))
        assert result.anonymized_record.tasks_by_person["pracownik_1"] == "Call Zenon"

    def test_polish_letters(self):
        result = anonymize(make_record({"Łucja": "łucja sprząta z Łucją"}))
        assert result.anonymized_record.tasks_by_person["pracownik_1"] == "pracownik_1 sprząta z Łucją"

    def test_name_with_regex_characters(self):
        """Names are matched literally."""
        result = anonymize(make_record({"A.B": "Call AxB and A.B"}))
        assert result.anonymized_record.tasks_by_person["pracownik_1"] == "Call AxB and pracownik_1"

    @pytest.mark.parametrize("name", ["Kasia K.", "Ann (kier.)", "-Ola"])
    def test_names_with_punctuation_at_the_edges(self, name):
        result = anonymize(make_record({name: "Sprząta", "Bob": f"Pomaga {name}, potem śpi"}))

        assert result.anonymized_record.tasks_by_person["pracownik_2"] == "Pomaga pracownik_1, potem śpi"

    def test_punctuated_name_not_matched_inside_word(self):
        result = anonymize(make_record({"Kasia K.": "Sprząta", "Bob": "Pomaga XKasia K."}))
        assert result.anonymized_record.tasks_by_person["pracownik_2"] == "Pomaga XKasia K."

    def test_empty_record(self):
        result = anonymize(AssignmentRecord())
        assert result.placeholder_to_original == {}
        assert result.anonymized_record.tasks_by_person == {}


class TestPlaceholderMatcher:
    """Tests for the placeholder matching strategies."""

    def test_two_part_placeholder_is_tolerant(self):
        assert placeholder_matcher("pracownik_1") == TolerantPlaceholder(base="pracownik", number="1")

    @pytest.mark.parametrize("placeholder", ["osoba", "a_b_c", "_1", "x_"])
    def test_other_shapes_are_exact(self, placeholder):
        assert placeholder_matcher(placeholder) == ExactPlaceholder(token=placeholder)

    @pytest.mark.parametrize("text", ["pracownik_1", "Pracownik_1", "pracownik 1", "Pracownik 1", "PRACOWNIK_1"])
    def test_tolerant_pattern_accepts_drift(self, text):
        assert TolerantPlaceholder("pracownik", "1").pattern().fullmatch(text)

    @pytest.mark.parametrize("text", ["pracownik-1", "pracownik1", "pracownik  1"])
    def test_tolerant_pattern_rejects_other_separators(self, text):
        assert not TolerantPlaceholder("pracownik", "1").pattern().fullmatch(text)

    def test_tolerant_pattern_respects_word_boundary(self):
        assert not TolerantPlaceholder("pracownik", "1").pattern().search("pracownik_10")

    def test_exact_pattern(self):
        pattern = ExactPlaceholder("osoba").pattern()
        assert pattern.search("Osoba idzie")
        assert not pattern.search("osobowy")


class TestDeanonymize:
    """Tests for deanonymize function."""

    def test_restores_names(self):
        mapping = {"pracownik_1": "Ann", "pracownik_2": "Bob"}
        assert deanonymize("pracownik_1 piecze, pracownik_2 śpi.", mapping) == "Ann piecze, Bob śpi."

    def test_restores_reformatted_placeholders(self):
        mapping = {"pracownik_1": "Ann", "pracownik_2": "Bob"}
        text = "Pracownik 1 piecze, PRACOWNIK_2 śpi."
        assert deanonymize(text, mapping) == "Ann piecze, Bob śpi."

    def test_does_not_touch_longer_numbers(self):
        assert deanonymize("pracownik_10 sprząta", {"pracownik_1": "Ann"}) == "pracownik_10 sprząta"

    def test_exact_fallback(self):
        assert deanonymize("Osoba idzie", {"osoba": "Ewa"}) == "Ewa idzie"

    def test_names_inserted_literally(self):
        """Backslashes in names should not be treated as group references."""
        assert deanonymize("pracownik_1 pisze", {"pracownik_1": r"A\1"}) == r"A\1 pisze"

    def test_single_pass_in_mapping_order(self):
        """A replacement is only rescanned by placeholders processed later."""
        mapping = {"pracownik_2": "Bob", "pracownik_1": "pracownik_2"}
        assert deanonymize("pracownik_1 i pracownik_2", mapping) == "pracownik_2 i Bob"

    def test_empty_mapping(self):
        assert deanonymize("bez zmian", {}) == "bez zmian"


class TestRoundTrip:
    """Anonymizing and then restoring should give back every name."""

    @pytest.mark.parametrize("drift", [
        lambda text: text,
        lambda text: text.replace("pracownik_", "Pracownik_"),
        lambda text: text.replace("pracownik_", "pracownik "),
        lambda text: text.replace("pracownik_", "Pracownik "),
    ])
    def test_round_trip(self, drift):
        tasks = {
            "Ann": "Ann helps Bob",
            "Bob": "Bob naps after Łucja",
            "Łucja": "Łucja cooks with Ann and Bob",
        }
        result = anonymize(make_record(tasks))

        model_output = drift(" | ".join(result.anonymized_record.tasks_by_person.values()))
        restored = deanonymize(model_output, result.placeholder_to_original)

        assert restored == " | ".join(tasks.values())
