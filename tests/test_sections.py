import pytest

from sbundle.core.sections import selected_sections, should_run


def test_empty_section_list_runs_nothing():
    assert should_run("x", []) is False
    assert should_run("post", []) is False


def test_exact_match_runs():
    assert should_run("prep", ["prep", "post"]) is True
    assert should_run("post", ["prep", "post"]) is True


def test_unlisted_section_does_not_run():
    assert should_run("build", ["prep", "post"]) is False


@pytest.mark.parametrize("name", ["x", "setup", "post", "test", ""])
def test_all_runs_everything(name):
    assert should_run(name, ["all"]) is True


def test_none_runs_nothing():
    assert should_run("post", ["none"]) is False


def test_first_sentinel_wins():
    assert should_run("x", ["none", "all"]) is False
    assert should_run("x", ["all", "none"]) is True


def test_match_before_none_runs():
    assert should_run("post", ["post", "none"]) is True
    assert should_run("post", ["none", "post"]) is False


def test_unrelated_entries_are_skipped_until_a_decision():
    assert should_run("test", ["setup", "files", "all"]) is True
    assert should_run("test", ["setup", "files", "none", "test"]) is False


def test_match_is_textual():
    assert should_run("Post", ["post"]) is False
    assert should_run("post", ["post "]) is False


def test_accepts_any_iterable():
    assert should_run("post", iter(["setup", "post"])) is True
    assert should_run("post", ("all",)) is True


def test_selected_sections_keeps_candidate_order():
    candidates = ["setup", "files", "post", "test"]
    assert selected_sections(candidates, ["test", "setup"]) == ["setup", "test"]
    assert selected_sections(candidates, ["all"]) == candidates
    assert selected_sections(candidates, ["none", "all"]) == []
