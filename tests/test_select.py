import pytest

from data import user_tuples


class TestSelect:
    def test_select_users(self, SeededSessionFactory):
        with SeededSessionFactory() as session:
            users = session.select_users()

        assert user_tuples(users) == [(1, "Alice"), (2, "Bob"), (3, "Charlie")]

    def test_select_users_empty_table(self, SessionFactory):
        with SessionFactory() as session:
            assert session.select_users() == []

    @pytest.mark.parametrize(
        "ids, expected",
        [
            ({1, 2}, [(1, "Alice"), (2, "Bob")]),
            ([2, 1], [(1, "Alice"), (2, "Bob")]),  # ordered by id
            ([3, 3, 3], [(3, "Charlie")]),  # duplicates
            ((i for i in (1, 3)), [(1, "Alice"), (3, "Charlie")]),  # any iterable
            ([4, 5], []),  # no match
            ([1, 99], [(1, "Alice")]),  # partial match
        ]
    )
    def test_select_users_by_ids(self, SeededSessionFactory, ids, expected):
        with SeededSessionFactory() as session:
            users = session.select_users_by_ids(ids)

        assert user_tuples(users) == expected

    @pytest.mark.parametrize("ids", [set(), [], ()])
    def test_select_users_by_empty_ids(self, SeededSessionFactory, ids):
        with SeededSessionFactory() as session:
            assert session.select_users_by_ids(ids) == []

            # nothing was executed, so no transaction was started
            assert not session.in_transaction()

    def test_select_users_by_ids_is_bound(self, SeededSessionFactory):
        # values that would break a concatenated IN clause are just not found
        with SeededSessionFactory() as session:
            assert session.select_users_by_ids(["1) OR (1=1"]) == []
