# tests/services/test_spam.py
"""Tests for the spam heuristics."""

from portfolio_backend.services.spam import count_links, is_spam


def test_keyword_in_message_is_spam() -> None:
    assert is_spam("Cheap viagra for sale", "buyer@example.com") is True


def test_keyword_match_is_case_insensitive() -> None:
    assert is_spam("Win the LOTTERY today", "buyer@example.com") is True


def test_keyword_in_email_is_spam() -> None:
    assert is_spam("Hello there, nice site!", "crypto-king@example.com") is True


def test_three_links_is_spam() -> None:
    message = "See http://a.example http://b.example and http://c.example"
    assert count_links(message) == 3
    assert is_spam(message, "visitor@example.com") is True


def test_two_links_is_not_spam() -> None:
    message = "My work: https://one.example and https://two.example"
    assert is_spam(message, "visitor@example.com") is False


def test_clean_message_with_one_link_is_not_spam() -> None:
    message = "Loved your project, here is mine: https://github.com/example"
    assert is_spam(message, "visitor@example.com") is False


def test_custom_keywords() -> None:
    assert is_spam("Buy followers now", "a@example.com", keywords=["followers"]) is True
    assert is_spam("Cheap viagra", "a@example.com", keywords=["followers"]) is False
