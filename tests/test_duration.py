import math

from newscast.models import Story
from newscast.services.duration import count_words, estimate_duration


def _story(words: int) -> Story:
    return Story(title="Story", content=" ".join(["word"] * words))


def test_count_words_handles_whitespace():
    assert count_words("") == 0
    assert count_words("  one\ttwo\nthree  ") == 3


def test_empty_script_is_zero():
    assert estimate_duration("", [], "") == 0.0


def test_formula():
    # 150 words -> 60 s of speech, 2 stories + outro -> 3 stings of 1.5 s
    intro = " ".join(["hi"] * 50)
    outro = " ".join(["bye"] * 20)
    stories = [_story(40), _story(40)]

    assert estimate_duration(intro, stories, outro) == 60 + 3 * 1.5


def test_speech_seconds_round_up():
    # 1 word -> 0.4 s -> 1 s
    assert estimate_duration("Hello", [], "") == 1.0


def test_adding_a_story_strictly_increases_duration():
    base_stories = [_story(120)]
    before = estimate_duration("Welcome in.", base_stories, "See you.")
    after = estimate_duration("Welcome in.", base_stories + [_story(1)], "See you.")
    assert after > before


def test_every_story_counts_a_separator():
    # 1 word -> 1 s, plus one sting for the story even though it has no content
    assert estimate_duration("Hello", [Story(title="Empty", content="")], "") == 2.5


def test_matches_reference_formula():
    intro = "Good morning and welcome to your daily briefing."
    stories = [_story(217), _story(181)]
    outro = "That's all for today."
    words = count_words(intro) + 217 + 181 + count_words(outro)
    expected = math.ceil(words / 150 * 60) + 3 * 1.5
    assert estimate_duration(intro, stories, outro) == expected
