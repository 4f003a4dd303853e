from promptline.repl import COMMANDS, ReplHelper


def test_complete_prefix():
    assert ReplHelper().complete("/he") == (0, ["/help"])


def test_complete_slash_lists_all_commands():
    start, matches = ReplHelper().complete("/")
    assert start == 0
    assert matches == list(COMMANDS)


def test_complete_ignores_plain_text():
    assert ReplHelper().complete("hello") == (0, [])


def test_complete_matches_are_prefixed():
    _, matches = ReplHelper().complete("/s")
    assert matches
    assert all(cmd.startswith("/s") for cmd in matches)


def test_hint_for_slash():
    assert ReplHelper().hint("/", []) == " (Tab for: help, settings, clear...)"


def test_hint_from_history():
    hint = ReplHelper().hint("git", ["git status"])
    assert "git" + hint == "git status"


def test_hint_prefers_newest_entry():
    hint = ReplHelper().hint("abc", ["abc1", "abc2"])
    assert "abc" + hint == "abc2"


def test_no_hint_for_exact_or_missing():
    helper = ReplHelper()
    assert helper.hint("same", ["same"]) is None
    assert helper.hint("zzz", ["git status"]) is None
    assert helper.hint("", ["git status"]) is None