import pytest
from sqlalchemy import literal, null, select, text
from sqlalchemy.sql.selectable import SelectLabelStyle

from sqlalchemy_rowmap import ColumnMap, MappingError, Post, User, UserPost, UserPostRow, Null


class TestColumnMap:
    def test_paths(self):
        cmap = ColumnMap(user=User, post=Post)

        assert cmap.paths() == ["user.id", "user.name", "post.id", "post.user_id", "post.content"]
        assert cmap.column("post.id") is Post.__table__.c.id
        assert [c.name for c in cmap.columns()] == cmap.paths()

    def test_unknown_path(self):
        with pytest.raises(MappingError):
            ColumnMap(user=User).column("user.email")

    @pytest.mark.parametrize("entities", [
        {},
        {"user.x": User},
    ])
    def test_invalid_entities(self, entities):
        with pytest.raises(MappingError):
            ColumnMap(**entities)

    def test_labels_are_quoted(self, engine):
        cmap = ColumnMap(user=User, post=Post)
        stmt = select(*cmap.columns()).join_from(User, Post, User.id == Post.user_id)
        sql = str(stmt.compile(engine))

        assert 'users.id AS "user.id"' in sql
        assert 'posts.id AS "post.id"' in sql

    @pytest.mark.parametrize("statement", [
        text('SELECT 1 AS "user.id", 2 AS "user.id", \'a\' AS "user.name"'),
        select(
            literal(1).label("user.id"),
            literal(2).label("user.id"),
            literal("a").label("user.name"),
        ).set_label_style(SelectLabelStyle.LABEL_STYLE_NONE),
    ])
    def test_ambiguous_column(self, SessionFactory, statement):
        cmap = ColumnMap(user=User)
        with SessionFactory() as session:
            row = session.execute(statement).one()

        with pytest.raises(MappingError, match="Ambiguous column for field path 'user.id'"):
            cmap.load(row)

    def test_missing_column(self, SeededSessionFactory):
        cmap = ColumnMap(user=User)
        with SeededSessionFactory() as session:
            row = session.execute(select(User.id.label("user.id"))).first()

        with pytest.raises(MappingError, match="user.name"):
            cmap.load(row)

    def test_load(self, SeededSessionFactory):
        cmap = ColumnMap(user=User)
        with SeededSessionFactory() as session:
            row = session.execute(select(*cmap.columns()).where(User.id == 2)).one()

        user = cmap.load(row)["user"]
        assert isinstance(user, User)
        assert (user.id, user.name) == (2, "Bob")


class TestJoin:
    def test_inner_join(self, SeededSessionFactory):
        with SeededSessionFactory() as session:
            pairs = session.select_user_posts()

        assert len(pairs) == 3
        assert all(isinstance(p, UserPost) for p in pairs)
        assert [(p.user.id, p.user.name, p.post.id, p.post.user_id, p.post.content) for p in pairs] == [
            (1, "Alice", 1, 1, "Hello, Alice"),
            (1, "Alice", 2, 1, "Nice to meet you"),
            (2, "Bob", 3, 2, "Hello, Bob"),
        ]

        # Charlie has no posts
        assert "Charlie" not in {p.user.name for p in pairs}

    def test_inner_join_no_posts(self, SessionFactory):
        with SessionFactory() as session:
            session.bulk_insert([User(name="Alice")], [])

        with SessionFactory() as session:
            assert session.select_user_posts() == []

    def test_left_join_requires_optional_fields(self, SeededSessionFactory):
        with SeededSessionFactory() as session:
            with pytest.raises(MappingError, match="post.id"):
                session.select_user_posts_outer()

    def test_left_join_when_every_user_has_posts(self, SessionFactory):
        with SessionFactory() as session:
            session.bulk_insert([User(name="Alice")], [dict(user_id=1, content="only")])

        with SessionFactory() as session:
            pairs = session.select_user_posts_outer()

        assert [(p.user.name, p.post.content) for p in pairs] == [("Alice", "only")]


class TestFlatRows:
    def test_select_flat_user_posts(self, SeededSessionFactory):
        with SeededSessionFactory() as session:
            rows = session.select_flat_user_posts()

        assert rows == [
            UserPostRow(1, Null.of(1), Null.of("Hello, Alice")),
            UserPostRow(1, Null.of(2), Null.of("Nice to meet you")),
            UserPostRow(2, Null.of(3), Null.of("Hello, Bob")),
            UserPostRow(3, Null(), Null()),
        ]

    def test_to_post(self):
        post = UserPostRow(1, Null.of(2), Null.of("hi")).to_post()

        assert isinstance(post, Post)
        assert (post.id, post.user_id, post.content) == (2, 1, "hi")

        assert UserPostRow(3, Null(), Null()).to_post() is None

    def test_to_post_null_content(self):
        with pytest.raises(MappingError):
            UserPostRow(1, Null.of(2), Null()).to_post()

    def test_from_row_null_user(self, SessionFactory):
        with SessionFactory() as session:
            row = session.execute(
                select(
                    null().label("user_id"),
                    literal(1).label("post_id"),
                    literal("hi").label("content"),
                )
            ).one()

        with pytest.raises(MappingError, match="user_id"):
            UserPostRow.from_row(row)

    def test_from_row_missing_column(self, SeededSessionFactory):
        with SeededSessionFactory() as session:
            row = session.execute(select(User.id.label("user_id"))).first()

        with pytest.raises(MappingError):
            UserPostRow.from_row(row)


class TestNull:
    @pytest.mark.parametrize("value", [0, "", False, 1, "x"])
    def test_present(self, value):
        wrapped = Null.of(value)
        assert wrapped.valid is True
        assert wrapped.get() == value

    def test_absent(self):
        wrapped = Null.of(None)
        assert wrapped == Null()
        assert wrapped.valid is False

        with pytest.raises(MappingError):
            wrapped.get()

    def test_repr(self):
        assert repr(Null.of(1)) == "Null(1)"
        assert repr(Null()) == "Null()"
