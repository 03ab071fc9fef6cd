"""ephdb.counter

Sequential integer IDs for entity kinds, backed by one document per kind
in the counters collection. The stored field holds the next ID to issue.
"""

import logging
import jsonschema
from pymongo import ReturnDocument, DESCENDING
from pymongo.errors import PyMongoError
from ephdb.config import Config
from ephdb.db import DB

LOGGER = logging.getLogger(__name__)

### Exceptions

class CounterException(Exception):
    pass

class NotFoundError(CounterException):
    def __init__(self, kind):
        self.kind = kind
        super().__init__(f'No counter registered for entity kind "{kind}"')

class PersistenceError(CounterException):
    def __init__(self, message, kind=None):
        self.kind = kind
        super().__init__(message)

### Decorators

class Decorators():
    def check_connected(method):
        def wrapper(*args, **kwargs):
            if not DB.connected:
                raise Exception('Must be connected to DB before exececuting this function')

            return method(*args, **kwargs)

        return wrapper

###

class Counter(object):
    '''Allocates IDs from the per-kind counter documents.

    Every mutation is a single atomic update of one counter document. There
    is no read-then-write path, so concurrent callers in any number of
    processes can never be handed the same ID.
    '''

    field = Config.counter_field

    @classmethod
    def _check_kind(cls, kind):
        if not Config.is_counter(kind):
            raise NotFoundError(kind)

    # "integer" in draft 7 also accepts floats like 1.0
    validator = jsonschema.validators.extend(
        jsonschema.Draft7Validator,
        type_checker=jsonschema.Draft7Validator.TYPE_CHECKER.redefine(
            'integer',
            lambda checker, instance: isinstance(instance, int) and not isinstance(instance, bool)
        )
    )(Config.counter_schema)

    @classmethod
    def validate(cls, document):
        try:
            cls.validator.validate(document)
        except jsonschema.exceptions.ValidationError as e:
            msg = '{} in {} : {}'.format(e.message, str(list(e.path)), document)
            raise jsonschema.exceptions.ValidationError(msg)

    @classmethod
    @Decorators.check_connected
    def allocate(cls, kind):
        """Returns the next ID for `kind` and increments the stored counter.

        Raises
        ------
        NotFoundError
            The kind is not registered or has not been provisioned. No
            counter is created or modified.
        PersistenceError
            The store failed the increment. No ID was issued.
        """

        cls._check_kind(kind)

        try:
            previous = DB.counters.find_one_and_update(
                {'_id': kind},
                {'$inc': {cls.field: 1}},
                return_document=ReturnDocument.BEFORE
            )
        except PyMongoError as err:
            raise PersistenceError(f'Failed to increment counter "{kind}": {err}', kind) from err

        if previous is None:
            # the update does not upsert
            raise NotFoundError(kind)

        LOGGER.debug(f'allocated {kind} {previous[cls.field]}')

        return previous[cls.field]

    @classmethod
    @Decorators.check_connected
    def provision(cls, kind, start, *, destructive=False):
        """Creates the counter for `kind` starting at `start`.

        If the counter already exists it is left untouched, unless
        `destructive` is set, in which case it is reset to `start`.

        Returns
        -------
        int
            The stored value after provisioning.
        """

        cls._check_kind(kind)

        if isinstance(start, bool) or not isinstance(start, int):
            raise ValueError(f'Counter start value must be an int: {start!r}')

        cls.validate({'_id': kind, cls.field: start})

        try:
            if destructive:
                DB.counters.replace_one({'_id': kind}, {cls.field: start}, upsert=True)
                LOGGER.info(f'reset counter "{kind}" to {start}')

                return start

            result = DB.counters.update_one(
                {'_id': kind},
                {'$setOnInsert': {cls.field: start}},
                upsert=True
            )
            cls._to_int(kind)
        except PyMongoError as err:
            raise PersistenceError(f'Failed to provision counter "{kind}": {err}', kind) from err

        if result.upserted_id is not None:
            LOGGER.info(f'created counter "{kind}" starting at {start}')
        else:
            LOGGER.info(f'counter "{kind}" already exists')

        return cls.current(kind)

    @classmethod
    def _to_int(cls, kind):
        """Converts a counter stored as a double, as the mongo shell writes
        numbers, to an int. Matching on the old value makes the write a
        compare-and-swap, so an allocation in between is never lost."""

        while True:
            document = DB.counters.find_one({'_id': kind}) or {}
            value = document.get(cls.field)

            if not isinstance(value, float) or not value.is_integer():
                return

            result = DB.counters.update_one({'_id': kind, cls.field: value}, {'$set': {cls.field: int(value)}})

            if result.matched_count:
                LOGGER.info(f'converted counter "{kind}" to an int')

                return

    @classmethod
    @Decorators.check_connected
    def current(cls, kind):
        '''Returns the next ID that will be issued for `kind` without allocating it'''

        cls._check_kind(kind)

        try:
            document = DB.counters.find_one({'_id': kind})
        except PyMongoError as err:
            raise PersistenceError(f'Failed to read counter "{kind}": {err}', kind) from err

        if document is None:
            raise NotFoundError(kind)

        cls.validate(document)

        return document[cls.field]

    @classmethod
    @Decorators.check_connected
    def repair(cls, kind):
        """Raises the counter above the highest ID already used in the kind's
        collection. Run this after copying data between databases.

        The counter is never lowered.

        Returns
        -------
        int
            The next ID that will be issued.
        """

        cls._check_kind(kind)
        col = DB.handle[Config.counter_collections[kind]]
        floor = Config.counter_start(kind)

        try:
            for document in col.find({}, projection={'_id': 1}, sort=[('_id', DESCENDING)]):
                if isinstance(document['_id'], int) and not isinstance(document['_id'], bool):
                    floor = max(floor, document['_id'] + 1)
                    break

            result = DB.counters.find_one_and_update(
                {'_id': kind},
                {'$max': {cls.field: floor}},
                return_document=ReturnDocument.AFTER
            )
        except PyMongoError as err:
            raise PersistenceError(f'Failed to repair counter "{kind}": {err}', kind) from err

        if result is None:
            raise NotFoundError(kind)

        LOGGER.info(f'counter "{kind}" next value is {result[cls.field]}')

        return result[cls.field]
