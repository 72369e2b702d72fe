import itertools
import re

import pytest

from tabgen import InvalidArgumentError, _strings


def test_wordify() -> None:
    assert _strings.wordify("picocli.AutoComplete") == "picocli_AutoComplete"
    assert _strings.wordify("sub-command") == "sub_command"
    assert _strings.wordify("under_score") == "under_score"
    assert _strings.wordify("a b:c") == "a_b_c"


def test_sanitize() -> None:
    assert _strings.sanitize(("demo",)) == "4_demo"
    assert _strings.sanitize(["demo", "sub1"]) == "4_demo_4_sub1"
    assert _strings.sanitize(("my.tool", "run")) == "7_my_tool_x2_2e_3_run"


def test_sanitize_shared_prefixes() -> None:
    assert _strings.sanitize(("ab", "c")) != _strings.sanitize(("a", "bc"))
    assert _strings.sanitize(("a", "b", "c")) != _strings.sanitize(("a", "bc"))
    assert _strings.sanitize(("a_1", "b")) != _strings.sanitize(("a", "1_b"))


def test_sanitize_is_injective_over_segment_splits() -> None:
    # Every way of splitting the same characters into path segments, and every way of
    # spelling a name with replaced characters, should give a different identifier.
    alphabet = ["a", "b", "_", "1", "ab", "a_1", "1_a", "_1"]
    alphabet += [".", "a.b", "a_b", "a-b", "_x1_2e"]
    identifiers = {}
    for length in range(1, 4):
        for path in itertools.product(alphabet, repeat=length):
            identifier = _strings.sanitize(path)
            assert identifiers.setdefault(identifier, path) == path
    assert len(identifiers) == sum(len(alphabet) ** n for n in range(1, 4))


def test_sanitize_distinguishes_replaced_characters() -> None:
    assert _strings.sanitize(("v1.0",)) == "4_v1_0_x2_2e"
    assert _strings.sanitize(("v1_0",)) == "4_v1_0"
    assert _strings.sanitize(("v1-0",)) == "4_v1_0_x2_2d"
    assert _strings.sanitize(("a._",)) != _strings.sanitize(("a_.",))


def test_sanitize_never_leaks_dots() -> None:
    identifier = _strings.sanitize(("picocli.AutoComplete", "a.b.c", "..."))
    assert "." not in identifier
    assert re.match(r"^[A-Za-z0-9_]+$", identifier)


def test_sanitize_rejects_empty_path() -> None:
    with pytest.raises(InvalidArgumentError):
        _strings.sanitize(())
    with pytest.raises(InvalidArgumentError):
        _strings.sanitize("demo")


def test_escape_compgen_word() -> None:
    assert _strings.escape_compgen_word("--num") == "--num"
    assert _strings.escape_compgen_word("$HOME") == "\\$HOME"
    assert _strings.escape_compgen_word("a*b") == "a\\*b"
    assert _strings.escape_compgen_word("`x`") == "\\`x\\`"


def test_compgen_wordlist() -> None:
    assert _strings.compgen_wordlist([]) == "''"
    assert _strings.compgen_wordlist(["sub1"]) == "sub1"
    assert _strings.compgen_wordlist(["-h", "--help"]) == "'-h --help'"
    assert _strings.compgen_wordlist(["it's"]) == "'it\\'\"'\"'s'"


def test_case_pattern() -> None:
    assert _strings.case_pattern(["-u", "--timeUnit"]) == "-u|--timeUnit"
    assert _strings.case_pattern(["-?"]) == "'-?'"


def test_comment_text() -> None:
    assert _strings.comment_text("two\nlines") == "two lines"
    assert _strings.comment_text("  padded  ") == "padded"


def test_hyphen_separated_from_camel_case() -> None:
    assert _strings.hyphen_separated_from_camel_case("Sub2Child1") == "sub2-child1"
    assert _strings.hyphen_separated_from_camel_case("TopLevel") == "top-level"
    assert _strings.hyphen_separated_from_camel_case("HTTPServer") == "http-server"
