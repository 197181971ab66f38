"""
Tests for vibe / time / location extraction.
"""

from spontaneity.utils.context_parser import (
    RequestContext,
    extract_location,
    extract_request_context,
    extract_time,
    extract_vibe,
)


def test_structured_widget_input():
    context = extract_request_context("Vibe: Relaxed, Time: 2 hours, Location: Denver")

    assert context == RequestContext(location="Denver", time="2 hours", vibe="Relaxed")
    assert context.is_complete is True


def test_free_text_input():
    context = extract_request_context("something relaxing for 3 hours in Boulder")

    assert context.location == "Boulder"
    assert context.time == "3 hours"
    assert context.vibe == "Relaxed"


def test_multi_word_location():
    assert extract_location("Cheap eats near San Francisco tonight") == "San Francisco"


def test_lowercase_words_are_not_locations():
    assert extract_location("Looking for something to do in the evening") is None


def test_sentence_starters_are_not_locations():
    assert extract_location("What should I do in Something") is None


def test_time_needs_a_marker_or_duration():
    assert extract_time("Spend some time at the park") is None
    assert extract_time("Got 45 minutes to kill") == "45 minutes"


def test_vibe_keywords():
    assert extract_vibe("Grab drinks at a bar") == "Nightlife"
    assert extract_vibe("Visit a museum") == "Cultural"
    assert extract_vibe("Anything at all") is None


def test_incomplete_context():
    context = extract_request_context("Vibe: Social, Location: Austin")

    assert context.location == "Austin"
    assert context.time is None
    assert context.is_complete is False
