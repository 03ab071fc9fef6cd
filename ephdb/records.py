"""ephdb.records

Record helpers for the serving side. Records with a counter get their
`_id` from the counter on creation.
"""

from ephdb.db import DB
from ephdb.counter import Counter, Decorators
from ephdb.schema import Schema

class Record(object):
    collection = None
    counter = None

    @classmethod
    @Decorators.check_connected
    def create(cls, document):
        """Inserts a new record and returns its `_id`.

        If the insert fails the allocated ID is discarded, never reused.
        """

        document = dict(document)

        if cls.counter:
            document['_id'] = Counter.allocate(cls.counter)

        return Schema.insert(cls.collection, document)

    @classmethod
    @Decorators.check_connected
    def from_id(cls, _id):
        return DB.handle[cls.collection].find_one({'_id': _id})

class Avatar(Record):
    collection = 'avatars'
    counter = 'avatarId'

    @classmethod
    @Decorators.check_connected
    def from_name(cls, name):
        return DB.avatars.find_one({'name': name})

class News(Record):
    collection = 'news'
    counter = 'newsId'

class Chunk(Record):
    collection = 'chunkdata'

    @classmethod
    @Decorators.check_connected
    def from_coords(cls, x, y, z):
        return DB.chunkdata.find_one({'x': x, 'y': y, 'z': z})

class User(Record):
    '''Users are keyed by email'''

    collection = 'users'

    @classmethod
    def create(cls, document):
        if 'email' not in document and '_id' not in document:
            raise ValueError('User requires an email')

        document = dict(document)
        document.setdefault('_id', document.get('email'))

        return super().create(document)
