from conftest import make_entries
from spread.core.models import Entry
from spread.pipeline.fingerprint import compute_fingerprint


def test_empty():
    assert compute_fingerprint([]) == ""


def test_three_entries():
    assert compute_fingerprint(make_entries(["a.md", "b.md", "c.md"])) == "3|a.md|b.md|c.md"


def test_missing_entry_contributes_empty_path():
    entries = [None] + make_entries(["b.md"])
    assert compute_fingerprint(entries) == "2||b.md|b.md"


def test_entry_without_file():
    assert compute_fingerprint([Entry(file=None)]) == "1|||"


def test_samples_first_middle_last():
    entries = make_entries([f"{i}.md" for i in range(100)])
    assert compute_fingerprint(entries) == "100|0.md|50.md|99.md"


def test_insertion_changes_fingerprint():
    before = make_entries(["a.md", "b.md", "c.md"])
    after = make_entries(["a.md", "b.md", "c.md", "d.md"])
    assert compute_fingerprint(before) != compute_fingerprint(after)


def test_interior_swap_not_detected():
    before = make_entries(["a.md", "b.md", "c.md", "d.md", "e.md"])
    after = make_entries(["a.md", "d.md", "c.md", "b.md", "e.md"])
    assert compute_fingerprint(before) == compute_fingerprint(after)
