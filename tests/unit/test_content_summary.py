"""Tests for deterministic content summaries and content-type analysis."""

from kb_assistant.chunking.summary import create_content_summary
from kb_assistant.scoring.content_analysis import analyze_content_type


def test_summary_counts_words_and_sections():
    summary = create_content_summary("one two three four", 2)
    assert summary == "Document contains 4 words across 2 sections."


def test_summary_lists_contacts_and_dates():
    text = "Contact a@b.com or call 555-123-4567 by 12/31/2024."
    summary = create_content_summary(text, 1)
    assert "Contains 1 email address(es): a@b.com." in summary
    assert "Contains 1 phone number(s)." in summary
    assert "Contains 1 date reference(s)." in summary


def test_summary_shows_at_most_three_emails():
    text = " ".join(f"user{i}@example.com" for i in range(5))
    summary = create_content_summary(text, 1)
    assert "Contains 5 email address(es)" in summary
    assert "user3@example.com" not in summary


def test_content_profiles():
    assert analyze_content_type("Follow these steps to mount the panel.").content_type == "procedural"
    assert analyze_content_type("Email ops@example.com").content_type == "contact"
    assert analyze_content_type("Follow the guide or email ops@example.com").content_type == "mixed"
    assert analyze_content_type("The company was founded in a garage.").content_type == "informational"


def test_profile_flags():
    profile = analyze_content_type("Call 555-123-4567 before 01/02/2025.")
    assert profile.has_phone and profile.has_date
    assert not profile.has_email
