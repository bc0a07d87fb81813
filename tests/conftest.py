import pytest

from sqlalchemy_rowmap import Config, connect, init_schema, session_factory

from data import make_users, make_posts


@pytest.fixture
def config(tmp_path):
    return Config(url=f"sqlite:///{tmp_path / 'test.db'}")

@pytest.fixture
def engine(config):
    engine = connect(config)
    init_schema(engine)

    yield engine

    engine.dispose()

@pytest.fixture
def SessionFactory(engine, config):
    yield session_factory(engine, config)

@pytest.fixture
def SeededSessionFactory(SessionFactory):
    with SessionFactory() as session:
        session.bulk_insert(make_users(), make_posts())

    yield SessionFactory
