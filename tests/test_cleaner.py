import pytest

from tweetthread.cleaner import (
    CLEAN_RULES,
    STRIP_BOLD,
    STRIP_FRONT_MATTER,
    STRIP_HEADINGS,
    STRIP_INLINE_CODE,
    STRIP_ITALIC,
    STRIP_STRIKETHROUGH,
    UNWRAP_LINKS,
    clean,
    find_rule,
)


def test_front_matter_removed_at_start():
    assert STRIP_FRONT_MATTER.apply("---\ntitle: x\n---\n\nBody text") == "Body text"


def test_front_matter_ignored_later_in_note():
    text = "Intro\n---\na: 1\n---\nrest"
    assert STRIP_FRONT_MATTER.apply(text) == text


def test_headings_stripped_on_every_line():
    assert STRIP_HEADINGS.apply("# Title\n## Sub\ntext #tag") == "Title\nSub\ntext #tag"


@pytest.mark.parametrize(
    ("rule", "raw", "expected"),
    [
        (STRIP_BOLD, "**bold** and __also__", "bold and also"),
        (STRIP_ITALIC, "*it* and _me_", "it and me"),
        (STRIP_INLINE_CODE, "run `x = 1` now", "run x = 1 now"),
        (STRIP_STRIKETHROUGH, "~~gone~~ here", "gone here"),
        (UNWRAP_LINKS, "see [site](https://example.com/a) now", "see site now"),
    ],
)
def test_inline_rules(rule, raw, expected):
    assert rule.apply(raw) == expected


def test_rules_run_in_order():
    assert [rule.name for rule in CLEAN_RULES] == [
        "front_matter",
        "headings",
        "bold",
        "italic",
        "inline_code",
        "strikethrough",
        "links",
    ]


def test_clean_full_note():
    raw = (
        "---\ntags: [a]\n---\n"
        "# Hello\n"
        "This is **bold**, *italic* and a [link](http://example.com)."
    )
    assert clean(raw) == "Hello\nThis is bold, italic and a link."


def test_clean_plain_text_unchanged():
    text = "Nothing to strip here. Really!"
    assert clean(text) == text
    assert clean(clean(text)) == text


def test_clean_with_subset_of_rules():
    assert clean("# **Title**", rules=(STRIP_HEADINGS,)) == "**Title**"


def test_find_rule():
    assert find_rule("bold") is STRIP_BOLD
    with pytest.raises(KeyError):
        find_rule("tables")
