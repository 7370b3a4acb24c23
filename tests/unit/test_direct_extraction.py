"""Tests for pattern-based answer extraction from documents."""

import pytest

from kb_assistant.synthesis.direct_extraction import DirectAnswerExtractor


@pytest.fixture
def extractor():
    return DirectAnswerExtractor()


def test_wiring_safety_sentence(extractor):
    texts = [
        "Welcome to the installer guide.",
        "If wiring is required, turn off power at the fusebox first.",
    ]
    answer = extractor.extract("Do I need to turn off power before wiring?", texts)
    assert answer == "If wiring is required, turn off power at the fusebox first."


def test_inline_package_list(extractor):
    texts = ["The standard package includes: control panel, two door sensors, and a siren."]
    answer = extractor.extract("What equipment is in the standard package?", texts)
    assert answer == "The standard package includes: control panel, two door sensors, and a siren."


def test_package_heading_with_bullets(extractor):
    texts = ["Premium package includes:\n- Control panel\n- Camera\n- Siren\n\nOther notes."]
    answer = extractor.extract("What does the premium package include?", texts)
    assert answer == "Premium package includes: Control panel, Camera, Siren."


def test_contact_email(extractor):
    answer = extractor.extract(
        "What is the support email?", ["Email support@example.com for help."]
    )
    assert answer == "Contact email: support@example.com."


def test_contact_phone_taken_from_subject_sentence(extractor):
    texts = ["For billing questions call 555-987-6543.", "Support is on 555-123-4567."]
    answer = extractor.extract("What number should I call to reach support?", texts)
    assert answer == "Contact phone: 555-123-4567."


def test_contact_for_other_subject_is_not_extracted(extractor):
    texts = ["Support contacts\nFor billing questions call 555-987-6543."]
    assert extractor.extract("What number should I call to reach support?", texts) is None


def test_customer_call_timing(extractor):
    texts = ["Always call the customer 1 day before installation. Bring spare batteries."]
    answer = extractor.extract("When do we call the customer?", texts)
    assert answer == "Always call the customer 1 day before installation."


def test_installation_placement(extractor):
    texts = ["Mount the control panel at 1.5 meters height near the main entrance."]
    answer = extractor.extract("Where should I mount the control panel?", texts)
    assert "1.5 meters" in answer


def test_empty_handler_falls_through_to_next_rule(extractor):
    # The contact rule matches the question but finds nothing; the deadline rule answers
    texts = ["Reports are due within 24 hours of the visit."]
    answer = extractor.extract("When should I contact the office?", texts)
    assert answer == "Reports are due within 24 hours of the visit."


def test_no_rule_matches(extractor):
    assert extractor.extract("Tell me about the company history", ["Founded in 1999."]) is None


def test_blank_texts(extractor):
    assert extractor.extract("What is the support email?", ["", "   "]) is None
