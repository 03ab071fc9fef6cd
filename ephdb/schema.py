"""ephdb.schema

Declared indexes of the managed collections and the provisioning routine
that applies them and seeds the counters.
"""

import logging
import jsonschema
from pymongo import ASCENDING as ASC
from pymongo.errors import DuplicateKeyError, PyMongoError
from ephdb.config import Config
from ephdb.db import DB
from ephdb.counter import Counter, CounterException, PersistenceError, Decorators

LOGGER = logging.getLogger(__name__)

### Exceptions

class ConstraintViolationError(Exception):
    def __init__(self, collection, document_id, detail=None):
        self.collection = collection
        self.document_id = document_id
        message = f'Document {document_id} violates a unique index on "{collection}"'
        super().__init__(f'{message}: {detail}' if detail else message)

class ProvisioningError(Exception):
    def __init__(self, step, cause):
        self.step = step
        self.cause = cause
        super().__init__(f'Provisioning step "{step}" failed: {cause}')

###

class Index(object):
    '''A required index on one collection'''

    def __init__(self, collection, keys, unique=False):
        self.collection = collection
        self.keys = list(keys)
        self.unique = unique

    def __eq__(self, other):
        return (self.collection, self.keys, self.unique) == (other.collection, other.keys, other.unique)

    def __repr__(self):
        return f'Index({self.collection!r}, {self.keys!r}, unique={self.unique})'

    @property
    def name(self):
        # same as the name pymongo generates
        return '_'.join(f'{key}_{ASC}' for key in self.keys)

    def to_key(self):
        return [(key, ASC) for key in self.keys]

    def create(self):
        col = DB.handle[self.collection]
        existing = col.index_information().get(self.name)

        if existing and ([tuple(x) for x in existing['key']] != self.to_key() or bool(existing.get('unique')) != self.unique):
            # the server refuses to change options of an existing index
            LOGGER.info(f'replacing index {self.collection}.{self.name} with different options')
            col.drop_index(self.name)

        return col.create_index(self.to_key(), name=self.name, unique=self.unique)

class Step(object):
    '''One provisioning step. Each step is safe to re-run'''

    def __init__(self, name, action, destructive=False):
        self.name = name
        self.action = action
        self.destructive = destructive

    def __repr__(self):
        return f'Step({self.name!r})'

    def apply(self):
        return self.action()

class Schema(object):
    @staticmethod
    def indexes(collection=None):
        indexes = []

        for name, declarations in Config.indexes.items():
            if collection and name != collection:
                continue

            for keys, unique in declarations:
                indexes.append(Index(name, keys, unique))

        return indexes

    @classmethod
    def steps(cls, *, destructive=False):
        """Returns the ordered provisioning steps.

        Drops come first and only in destructive mode, then the indexes, then
        the counter seeds.
        """

        steps = []

        if destructive:
            for name in Config.collections():
                steps.append(Step(f'drop {name}', lambda name=name: DB.handle[name].drop(), destructive=True))

        for index in cls.indexes():
            steps.append(Step(f'index {index.collection}.{index.name}', index.create))

        for kind, start in Config.counters.items():
            steps.append(
                Step(
                    f'seed {Config.counter_collection}.{kind}',
                    lambda kind=kind, start=start: Counter.provision(kind, start, destructive=destructive),
                    destructive=destructive
                )
            )

        return steps

    @classmethod
    @Decorators.check_connected
    def ensure_indexes(cls, collection=None):
        '''Creates the declared indexes. Returns the index names'''

        names = []

        for index in cls.indexes(collection):
            try:
                names.append(index.create())
            except PyMongoError as err:
                raise ProvisioningError(f'index {index.collection}.{index.name}', err) from err

        return names

    @classmethod
    @Decorators.check_connected
    def provision(cls, *, destructive=False):
        """Applies all provisioning steps in order.

        Raises
        ------
        ProvisioningError
            On the first step that fails. In destructive mode the
            collections dropped so far have lost their data.

        Returns
        -------
        list(str)
            The names of the applied steps.
        """

        applied = []

        for step in cls.steps(destructive=destructive):
            LOGGER.info(f'applying {step.name}')

            try:
                step.apply()
            except (PyMongoError, CounterException, jsonschema.exceptions.ValidationError) as err:
                if destructive and applied:
                    LOGGER.error(f'destructive provisioning stopped at "{step.name}" after {len(applied)} steps; data may be partially lost')

                raise ProvisioningError(step.name, err) from err

            applied.append(step.name)

        LOGGER.info(f'applied {len(applied)} provisioning steps')

        return applied

    @staticmethod
    @Decorators.check_connected
    def insert(collection, document):
        """Inserts a document into a managed collection.

        Raises
        ------
        ConstraintViolationError
            The document duplicates a value under a unique index.
        PersistenceError
            Any other store failure.
        """

        try:
            result = DB.handle[collection].insert_one(document)
        except DuplicateKeyError as err:
            raise ConstraintViolationError(collection, document.get('_id'), err) from err
        except PyMongoError as err:
            raise PersistenceError(f'Failed to insert into "{collection}": {err}') from err

        return result.inserted_id
