"""
Configurations
"""

import os
import json
from configparser import ConfigParser
from urllib.parse import quote_plus

class Config():

    # schemas
    schema_dir = os.path.dirname(__file__) + '/schemas/'

    with open(schema_dir + 'counter.schema.json') as cs:
        counter_schema = json.loads(cs.read())

    # the counters collection holds one document per entity kind
    counter_collection = 'counters'
    counter_field = 'c'

    # entity kind: start value. 0 is reserved for avatars
    counters = {
        'avatarId': 1,
        'newsId': 0
    }

    # the collection whose `_id` values are minted by each counter
    counter_collections = {
        'avatarId': 'avatars',
        'newsId': 'news'
    }

    # collection: [(keys, unique)]
    indexes = {
        'avatars': [
            (['name'], True),
            (['email'], True), # only one avatar per owner
            (['level'], False), # sorting
            (['timeonline'], False),
            (['tscoretotal'], False)
        ],
        'chunkdata': [
            (['x', 'y', 'z'], True),
            (['avatarID'], True)
        ],
        'counters': [],
        'news': [],
        'users': []
    }

    # the ini file section read by the database tools
    ini_section = 'db'

    @staticmethod
    def collections():
        return list(Config.indexes.keys())

    @staticmethod
    def is_counter(kind):
        return kind in Config.counters

    @staticmethod
    def counter_start(kind):
        return Config.counters.get(kind)

    @staticmethod
    def counter_kind(collection):
        for kind, name in Config.counter_collections.items():
            if name == collection:
                return kind

        return

    @staticmethod
    def read_ini(path, section=None):
        """Builds a MongoDB connection string from an ini file.

        The section (default "db") must contain the keys DatabaseLogin,
        DatabasePassword, DatabaseServer and DatabaseName.

        Returns
        -------
        tuple(str, str)
            The connection string and the database name.
        """

        section = section or Config.ini_section
        parser = ConfigParser()
        # keys are case sensitive in the server config
        parser.optionxform = str

        if not parser.read(path):
            raise Exception(f'Config file "{path}" not found')

        if not parser.has_section(section):
            raise Exception(f'Config file "{path}" has no section "{section}"')

        values = parser[section]

        for key in ('DatabaseLogin', 'DatabasePassword', 'DatabaseServer', 'DatabaseName'):
            if key not in values:
                raise Exception(f'Config file "{path}" is missing key "{key}" in section "{section}"')

        login = quote_plus(values['DatabaseLogin'])
        password = quote_plus(values['DatabasePassword'])
        database = values['DatabaseName']

        if login:
            string = f'mongodb://{login}:{password}@{values["DatabaseServer"]}/{database}?authSource={database}'
        else:
            string = f'mongodb://{values["DatabaseServer"]}/{database}'

        return string, database
