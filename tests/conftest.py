import pytest
from mongomock import MongoClient as MockClient

@pytest.fixture
def avatars():
    return [
        {
            'name': 'alice',
            'email': 'alice@example.com',
            'level': 3,
            'timeonline': 7200,
            'tscoretotal': 12.5,
            'coord': {'x': 0, 'y': 0, 'z': 0}
        },
        {
            'name': 'bob',
            'email': 'bob@example.com',
            'level': 3,
            'timeonline': 60,
            'tscoretotal': 0.0,
            'coord': {'x': 10, 'y': -4, 'z': 2}
        }
    ]

@pytest.fixture
def chunks():
    return [
        {'x': 0, 'y': 0, 'z': 0, 'avatarID': 1},
        {'x': 1, 'y': 0, 'z': 0, 'avatarID': 2}
    ]

@pytest.fixture
def db() -> MockClient:
    from ephdb import DB, Config
    from ephdb.schema import Schema

    # Connects to and resets the database
    DB.connect('mongomock://localhost')

    for name in Config.collections():
        DB.handle[name].drop()

    Schema.provision()

    return DB.client

@pytest.fixture
def shared_client(db, monkeypatch):
    # scripts reconnect on every run. keep them on the same mock store
    monkeypatch.setattr('ephdb.db.MockClient', lambda: db)

    return db
