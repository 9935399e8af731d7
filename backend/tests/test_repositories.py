import pytest

from student_api.models import Student
from student_api.repositories import DuplicateEmailError, StudentRepository


def test_list_filters_by_name_case_insensitively(session, seed):
    seed("Alice", "Bob", "John", "Johnny")
    repo = StudentRepository(session)
    names = [s.name for s in repo.list("john")]
    assert names == ["John", "Johnny"]


def test_list_ignores_blank_filter_and_orders_by_name(session, seed):
    seed("Zoe", "Alice", "Bob")
    repo = StudentRepository(session)
    assert [s.name for s in repo.list("   ")] == ["Alice", "Bob", "Zoe"]
    assert [s.name for s in repo.list(None)] == ["Alice", "Bob", "Zoe"]


def test_list_pages(session, seed):
    seed("Zoe", "Johnny", "Alice", "John", "Bob")
    repo = StudentRepository(session)
    assert [s.name for s in repo.list(page=2, page_size=2)] == ["John", "Johnny"]
    assert [s.name for s in repo.list(page=3, page_size=2)] == ["Zoe"]
    assert repo.list(page=4, page_size=2) == []


def test_list_without_complete_paging_returns_everything(session, seed):
    seed("Alice", "Bob", "John")
    repo = StudentRepository(session)
    assert len(repo.list(page=2)) == 3
    assert len(repo.list(page_size=1)) == 3
    assert len(repo.list(page=0, page_size=1)) == 3
    assert len(repo.list(page=1, page_size=0)) == 3


def test_filter_treats_like_wildcards_literally(session, seed):
    seed("Alice", "Bob")
    repo = StudentRepository(session)
    assert repo.list("%") == []
    assert repo.count("_") == 0


def test_count_uses_filter_and_ignores_paging(session, seed):
    seed("Alice", "Bob", "John", "Johnny")
    repo = StudentRepository(session)
    assert repo.count() == 4
    assert repo.count("JOHN") == 2
    assert repo.count("nobody") == 0


def test_get_and_exists_by_id(session, seed):
    alice, = seed("Alice")
    repo = StudentRepository(session)
    assert repo.get(alice.id).name == "Alice"
    assert repo.get(alice.id + 100) is None
    assert repo.exists_by_id(alice.id) is True
    assert repo.exists_by_id(alice.id + 100) is False


def test_exists_by_email_trims_and_ignores_case(session, seed):
    seed("John")
    repo = StudentRepository(session)
    assert repo.exists_by_email("  JOHN@example.com ") is True
    assert repo.exists_by_email("jane@example.com") is False


def test_exists_by_email_excludes_given_id(session, seed):
    john, bob = seed("John", "Bob")
    repo = StudentRepository(session)
    assert repo.exists_by_email("john@example.com", exclude_id=john.id) is False
    assert repo.exists_by_email("john@example.com", exclude_id=bob.id) is True


def test_add_assigns_id(session):
    repo = StudentRepository(session)
    created = repo.add(Student(name="Alice", email="alice@example.com", gender="Female"))
    assert created.id is not None
    assert repo.get(created.id).email == "alice@example.com"


def test_add_rejects_email_differing_only_in_case(session, seed):
    seed("Alice")
    repo = StudentRepository(session)
    with pytest.raises(DuplicateEmailError):
        repo.add(Student(name="Other", email="ALICE@example.com", gender="Female"))
    # the session is usable again after the rollback
    assert repo.count() == 1


def test_update_replaces_all_fields(session, seed):
    alice, = seed("Alice", gender="Female")
    repo = StudentRepository(session)
    repo.update(Student(id=alice.id, name="Alicia", email="alicia@example.com", gender="Other"))
    stored = repo.get(alice.id)
    assert (stored.name, stored.email, stored.gender) == ("Alicia", "alicia@example.com", "Other")


def test_update_missing_row_is_noop(session, seed):
    seed("Alice")
    repo = StudentRepository(session)
    repo.update(Student(id=999, name="Ghost", email="ghost@example.com", gender="Male"))
    assert repo.count() == 1
    assert repo.get(999) is None


def test_update_to_taken_email_raises(session, seed):
    alice, bob = seed("Alice", "Bob")
    repo = StudentRepository(session)
    with pytest.raises(DuplicateEmailError):
        repo.update(Student(id=bob.id, name="Bob", email="Alice@Example.com", gender="Male"))
    assert repo.get(bob.id).email == "bob@example.com"


def test_delete(session, seed):
    alice, = seed("Alice")
    repo = StudentRepository(session)
    assert repo.delete(alice.id) is True
    assert repo.delete(alice.id) is False
    assert repo.count() == 0


def test_delete_all_returns_removed_count(session, seed):
    seed("Alice", "Bob", "John")
    repo = StudentRepository(session)
    assert repo.delete_all() == 3
    assert repo.count() == 0
    assert repo.delete_all() == 0


def test_case_folding_covers_non_ascii_letters(session):
    repo = StudentRepository(session)
    repo.add(Student(name="Élodie", email="Élodie@x.com", gender="Female"))
    assert [s.name for s in repo.list("élodie")] == ["Élodie"]
    assert repo.exists_by_email("élodie@x.com") is True
    with pytest.raises(DuplicateEmailError):
        repo.add(Student(name="Elodie", email="élodie@x.com", gender="Female"))
