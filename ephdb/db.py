"""
Provides the DB class for connecting to and accessing the database.
"""

import re, logging, certifi
from pymongo import MongoClient
from mongomock import MongoClient as MockClient
from ephdb.config import Config

LOGGER = logging.getLogger(__name__)

class DB():
    """Provides a global database connection.

    Class attributes
    -----------
        All class attributes are set automatically by DB.connect()

    client : pymongo.MongoClient
    connected : bool
    handle : pymongo.database.Database
    avatars : pymongo.collection.Collection
    chunkdata : pymongo.collection.Collection
    counters : pymongo.collection.Collection
    news : pymongo.collection.Collection
    users : pymongo.collection.Collection
    config : dict
    is_atlas : bool
    """

    client = None
    connected = False
    database_name = None
    handle = None
    avatars = None
    chunkdata = None
    counters = None
    news = None
    users = None
    config = {}
    is_atlas = False

    ## class

    @classmethod
    def connect(cls, connection_string, *, database=None, mock=False):
        """Connects to the database and stores database and collection handles
        as class attributes.

        Parameters
        ----------
        param1 : str
            MongoDB connection string.

        *database : str
            The name of the database to use. If not specified, the name will be
            attempted to be parsed from the connection string.

        Returns
        -------
        pymongo.database.Database
            The database handle automatically gets stored as class attribute 'handle'.

        Raises
        ------
        pymongo.errors.ServerSelectionTimeoutError
            If the server is not found.
        pymongo.errors.AuthenticationFailure
            If the supplied credentials are invalid.
        """

        if mock or connection_string == 'mongomock://localhost':
            # testing environment
            client = MockClient()
            mock = True
        else:
            kwargs = {'serverSelectionTimeoutMS': 5000}

            if re.match(r'mongodb\+srv', connection_string):
                # https://pypi.org/project/certifi/
                kwargs['tlsCAFile'] = certifi.where()

            if re.match(r'mongodb\+srv://.*mongodb.net/', connection_string):
                # appears to be an Atlas instance
                DB.is_atlas = True
            else:
                DB.is_atlas = False

            client = MongoClient(connection_string, **kwargs)

        if database:
            DB.database_name = database
        else:
            match = re.search(r'\?authSource=([\w]+)', connection_string)

            if match:
                DB.database_name = match.group(1)
            elif mock:
                DB.database_name = 'testing'
            else:
                raise Exception('No database name was provided and could not parse database name from connection string')

        DB.connected = True
        DB.config['connection_string'] = connection_string
        LOGGER.info(f'connected to database "{DB.database_name}"')

        DB.client = client
        DB.handle = client[DB.database_name]
        DB.avatars = DB.handle['avatars']
        DB.chunkdata = DB.handle['chunkdata']
        DB.counters = DB.handle[Config.counter_collection]
        DB.news = DB.handle['news']
        DB.users = DB.handle['users']

        return DB.handle

    @classmethod
    def connect_ini(cls, path, *, database=None, section=None):
        """Connects using the [db] section of an ini file. See Config.read_ini"""

        connection_string, ini_database = Config.read_ini(path, section=section)

        return cls.connect(connection_string, database=database or ini_database)

    @classmethod
    def collection(cls, name):
        if not DB.connected:
            raise Exception('Must be connected to DB before exececuting this function')

        return DB.handle[name]

    @classmethod
    def disconnect(cls):
        if DB.connected:
            DB.client.close()
            DB.connected = False
