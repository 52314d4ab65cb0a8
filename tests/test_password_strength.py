"""Tests for password strength validation."""
from __future__ import annotations

import pytest
from hypothesis import given, strategies as st

from akwaaba_passwords.errors import WeakPasswordError
from akwaaba_passwords.password_strength import (
    IdentityHint,
    calculate_score,
    evaluate_password,
    is_acceptable,
    strength_color,
    strength_label,
    validate_password,
)
from akwaaba_passwords.patterns import DEFAULT_PATTERNS, PatternSet
from akwaaba_passwords.policy import PasswordPolicy


@given(st.text(max_size=64))
def test_score_always_in_range(password: str) -> None:
    assert evaluate_password(password).score in {0, 1, 2, 3, 4}


@given(st.text(max_size=40), st.integers(min_value=0, max_value=20), st.integers(min_value=0, max_value=4))
def test_is_acceptable_matches_evaluate(password: str, min_length: int, min_score: int) -> None:
    policy = PasswordPolicy(min_length=min_length, min_score=min_score, require_special_chars=False)
    assert is_acceptable(password, policy) == evaluate_password(password, policy).meets_requirements


def test_empty_password_fails_everything() -> None:
    result = evaluate_password("")
    assert result.score == 0
    assert not result.meets_requirements
    reqs = result.requirements
    assert not reqs.min_length
    assert not (reqs.has_uppercase or reqs.has_lowercase or reqs.has_numbers or reqs.has_special_chars)
    assert reqs.no_personal_info


def test_common_password_scored_low() -> None:
    result = evaluate_password("password")
    assert result.score <= 1
    assert not result.requirements.no_common_patterns
    assert any("commonly used" in f for f in result.feedback)
    assert any("unique word or phrase" in s for s in result.suggestions)


def test_common_password_case_insensitive() -> None:
    result = evaluate_password("PASSWORD")
    assert not result.requirements.no_common_patterns
    assert result.score <= 1


def test_worked_example_tr0ub4dor() -> None:
    # length 11 (+1), four classes (+2), 10 distinct of 11 (+1), no penalties
    result = evaluate_password("Tr0ub4dor&3")
    assert result.score == 4
    assert not result.requirements.min_length
    assert not result.meets_requirements
    assert result.feedback == ("Consider using at least 12 characters for better security.",)


def test_strong_password_meets_default_policy() -> None:
    result = evaluate_password("Sunny-Accra-2031!")
    assert result.score == 4
    assert result.meets_requirements
    assert result.feedback == ()
    assert result.suggestions == ()


@pytest.mark.parametrize("short, long", [(7, 8), (11, 12), (15, 16)])
def test_longer_password_never_scores_lower(short: int, long: int) -> None:
    body = "Ab1!" * 5
    assert calculate_score(body[:long]) >= calculate_score(body[:short])


def test_length_tiers_are_cumulative() -> None:
    assert calculate_score("Ab1!Ab1") == 2
    assert calculate_score("Ab1!Ab1!") == 3
    assert calculate_score("Ab1!Ab1!Ab1!") == 4


def test_penalties() -> None:
    # 8 chars (+1), lowercase+digits (0), distinct 8/8 (+1), "123" (-1)
    assert calculate_score("zyx123pq") == 1
    # "qwe" and the "qwerty" walk each cost a point, so does a triple "v"
    assert calculate_score("Mqwertyk9!") == 2
    assert calculate_score("Mvvvn7k9!T") == 3


def test_sequential_and_repeat_feedback() -> None:
    result = evaluate_password("abcdefgh")
    assert any("sequential" in f for f in result.feedback)

    result = evaluate_password("aaaaaaaaaaa")
    assert any("repeating" in f for f in result.feedback)


def test_missing_class_feedback() -> None:
    result = evaluate_password("lowercase only words")
    assert "Add uppercase letters to increase strength." in result.feedback
    assert "Include numbers to make the password stronger." in result.feedback
    assert "Add special characters for enhanced security." in result.feedback
    assert "Add lowercase letters to increase strength." not in result.feedback


def test_low_score_feedback_levels() -> None:
    assert evaluate_password("abc").feedback[0] == "This password is very weak and easily guessable."
    # 9 chars (+1), two classes, all distinct (+1)
    assert evaluate_password("xkcdwhy9z").feedback[0] == "This password could be stronger."
    assert evaluate_password("Tr0ub4dor&3").feedback[0].startswith("Consider using at least 12")


def test_weak_score_suggestions() -> None:
    result = evaluate_password("abc")
    assert "Consider using a passphrase instead of a single word." in result.suggestions
    assert "Make your password longer by adding more characters." in result.suggestions
    assert any("similar-looking symbols" in s for s in result.suggestions)


def test_common_pattern_prefix_detected() -> None:
    result = evaluate_password("Admin-Kumasi-77!")
    assert not result.requirements.no_common_patterns
    assert not result.meets_requirements


def test_custom_pattern_set() -> None:
    patterns = DEFAULT_PATTERNS.extend(passwords=["AkwaabaHomes"], patterns=[r"^akwaaba"])
    assert evaluate_password("akwaabahomes", patterns=patterns).requirements.no_common_patterns is False
    assert evaluate_password("Akwaaba-Sun-81!", patterns=patterns).requirements.no_common_patterns
    assert not evaluate_password("akwaaba-Sun-81!", patterns=patterns).requirements.no_common_patterns

    empty = PatternSet.from_iterables()
    assert evaluate_password("password", patterns=empty).requirements.no_common_patterns


def test_email_local_part_is_personal_info() -> None:
    identity = IdentityHint(email="Jane.Doe@example.com")
    result = evaluate_password("My-jane.doe-Home!", identity=identity)
    assert not result.requirements.no_personal_info
    assert not result.meets_requirements

    # only the literal local part counts
    assert evaluate_password("janedoe99", identity=identity).requirements.no_personal_info


def test_name_tokens_are_personal_info() -> None:
    result = evaluate_password("Osu-Castle-Doe-42!", identity={"name": "Jane Doe"})
    assert not result.requirements.no_personal_info

    # tokens of two characters or fewer are ignored
    assert evaluate_password("Accra-Ox-Road-42!", identity={"name": "Ox Li"}).requirements.no_personal_info


def test_empty_email_local_part_is_ignored() -> None:
    assert evaluate_password("Sunny-Accra-2031!", identity={"email": "@example.com"}).requirements.no_personal_info


def test_partial_policy_merges_over_defaults() -> None:
    result = evaluate_password("sunny-accra-2031", {"require_uppercase": False})
    assert not result.requirements.has_uppercase
    assert result.meets_requirements

    assert not evaluate_password("sunny-accra-2031").meets_requirements


def test_min_score_gates_acceptance() -> None:
    # all requirements hold but the score is only 2
    policy = PasswordPolicy(min_length=4, require_special_chars=False, min_score=3)
    assert not is_acceptable("Ab1x", policy)
    assert is_acceptable("Ab1x", PasswordPolicy(min_length=4, require_special_chars=False, min_score=0))


@pytest.mark.parametrize("password", ["   ", "пароль🔐", "\u0000\u0001", "🙂" * 40])
def test_unusual_input_never_raises(password: str) -> None:
    result = evaluate_password(password)
    assert 0 <= result.score <= 4


def test_validate_password_raises_with_feedback() -> None:
    with pytest.raises(WeakPasswordError) as excinfo:
        validate_password("password")
    assert excinfo.value.result.score <= 1
    assert excinfo.value.feedback


def test_validate_password_returns_result() -> None:
    result = validate_password("Sunny-Accra-2031!")
    assert result.meets_requirements


def test_strength_labels_and_colors() -> None:
    labels = [strength_label(score) for score in range(5)]
    assert labels == ["Very Weak", "Weak", "Fair", "Strong", "Very Strong"]
    assert strength_label(99) == "Unknown"
    assert strength_label(-1) == "Unknown"

    colors = {strength_color(score) for score in range(5)}
    assert len(colors) == 5
    assert strength_color(99) == "text-gray-600"


def test_result_label_property() -> None:
    assert evaluate_password("Tr0ub4dor&3").label == "Very Strong"
