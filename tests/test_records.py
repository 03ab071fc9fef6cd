"""
Tests for ephdb.records
"""

import pytest

def test_avatar_create(db, avatars):
    from ephdb.counter import Counter
    from ephdb.records import Avatar

    assert Avatar.create(avatars[0]) == 1
    assert Avatar.create(avatars[1]) == 2
    assert Avatar.from_id(1)['name'] == 'alice'
    assert Avatar.from_name('bob')['_id'] == 2
    assert Avatar.from_id(3) is None
    assert Counter.current('avatarId') == 3

    # the caller's document is not modified
    assert '_id' not in avatars[0]

def test_avatar_duplicate_name(db, avatars):
    from ephdb.counter import Counter
    from ephdb.records import Avatar
    from ephdb.schema import ConstraintViolationError

    Avatar.create(avatars[0])

    with pytest.raises(ConstraintViolationError):
        Avatar.create(dict(avatars[1], name='alice'))

    # the failed insert used up ID 2. it is never handed out again
    assert Avatar.create(avatars[1]) == 3
    assert Counter.current('avatarId') == 4

def test_news_create(db):
    from ephdb.records import News

    assert News.create({'text': 'Server restart at 20:00'}) == 0
    assert News.create({'text': 'New monsters'}) == 1
    assert News.from_id(1)['text'] == 'New monsters'

def test_chunk_create(db, chunks):
    from ephdb.records import Chunk
    from ephdb.schema import ConstraintViolationError

    for chunk in chunks:
        Chunk.create(chunk)

    assert Chunk.from_coords(1, 0, 0)['avatarID'] == 2

    with pytest.raises(ConstraintViolationError):
        Chunk.create({'x': 1, 'y': 0, 'z': 0, 'avatarID': 3})

def test_user_create(db):
    from ephdb.records import User
    from ephdb.schema import ConstraintViolationError

    assert User.create({'email': 'alice@example.com', 'license': 'abc'}) == 'alice@example.com'
    assert User.from_id('alice@example.com')['license'] == 'abc'

    with pytest.raises(ConstraintViolationError):
        User.create({'email': 'alice@example.com'})

    with pytest.raises(ValueError):
        User.create({'license': 'abc'})
