import pytest

from fileconvertzz.services.file_queue import FileQueue, renumber_selection
from fileconvertzz.types_job_types import SelectableFile


def make_queue(n: int) -> FileQueue:
    q = FileQueue()
    q.add(SelectableFile(f"f{i}.pdf", "application/pdf") for i in range(n))
    return q


def test_first_file_is_selected_when_queue_was_empty():
    q = make_queue(3)
    assert q.selection == {0}


def test_adding_to_a_non_empty_queue_keeps_selection():
    q = make_queue(2)
    q.toggle(1)
    q.add([SelectableFile("more.png", "image/png")])
    assert q.selection == {0, 1}
    assert len(q) == 3


def test_duplicates_by_name_are_kept_in_order():
    q = FileQueue()
    q.add([SelectableFile("a.png"), SelectableFile("b.png"), SelectableFile("a.png")])
    assert [f.name for f in q.files] == ["a.png", "b.png", "a.png"]


def test_toggle_adds_and_removes():
    q = make_queue(3)
    q.toggle(2)
    assert q.selection == {0, 2}
    q.toggle(0)
    assert q.selection == {2}


def test_select_only_replaces_selection():
    q = make_queue(3)
    q.toggle(1)
    q.select_only(2)
    assert q.selection == {2}


def test_remove_drops_and_renumbers_selection():
    q = make_queue(5)
    q.toggle(0)
    for i in (1, 2, 3):
        q.toggle(i)
    assert q.selection == {1, 2, 3}

    removed = q.remove(2)

    assert removed.name == "f2.pdf"
    assert q.selection == {1, 2}
    assert [f.name for f in q.files] == ["f0.pdf", "f1.pdf", "f3.pdf", "f4.pdf"]
    assert max(q.selection) <= len(q) - 1


def test_selection_always_points_at_the_same_files():
    q = make_queue(6)
    q.select_all()
    q.set_selected(4, False)
    chosen = {q.files[i].name for i in q.selection}
    for index in (5, 0, 2):
        q.remove(index)
        assert all(0 <= i < len(q) for i in q.selection)
    assert {q.files[i].name for i in q.selection} == chosen - {"f5.pdf", "f0.pdf", "f3.pdf"}


def test_remove_last_selected_file_empties_selection():
    q = make_queue(1)
    q.remove(0)
    assert q.selection == frozenset()
    assert len(q) == 0


def test_clear():
    q = make_queue(4)
    q.select_all()
    q.clear()
    assert q.files == ()
    assert q.selection == frozenset()


def test_bad_index_raises():
    q = make_queue(2)
    with pytest.raises(IndexError):
        q.remove(2)
    with pytest.raises(IndexError):
        q.toggle(-1)


def test_renumber_selection_is_pure():
    selection = frozenset({0, 3, 4})
    assert renumber_selection(selection, 3) == {0, 3}
    assert renumber_selection(selection, 1) == {0, 2, 3}
    assert selection == {0, 3, 4}


def test_snapshots_do_not_follow_later_changes():
    q = make_queue(3)
    files, selection = q.files, q.selection
    q.remove(0)
    assert len(files) == 3
    assert selection == {0}
