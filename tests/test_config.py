"""
Tests for ephdb.Config
"""

import pytest
from ephdb import Config

def test_counters():
    assert Config.counters == {'avatarId': 1, 'newsId': 0}
    assert Config.is_counter('avatarId')
    assert not Config.is_counter('chunkId')
    assert Config.counter_start('newsId') == 0
    assert Config.counter_kind('avatars') == 'avatarId'
    assert Config.counter_kind('chunkdata') is None

def test_collections():
    assert sorted(Config.collections()) == ['avatars', 'chunkdata', 'counters', 'news', 'users']

def test_counter_schema():
    assert Config.counter_schema['properties']['_id']['enum'] == list(Config.counters.keys())

def test_read_ini(tmp_path):
    ini = tmp_path / 'config.ini'
    ini.write_text('[db]\nDatabaseLogin =\nDatabasePassword =\nDatabaseServer = db.local\nDatabaseName = world\n')

    assert Config.read_ini(str(ini)) == ('mongodb://db.local/world', 'world')

def test_read_ini_errors(tmp_path):
    with pytest.raises(Exception, match='not found'):
        Config.read_ini(str(tmp_path / 'missing.ini'))

    ini = tmp_path / 'config.ini'
    ini.write_text('[server]\nport = 57862\n')

    with pytest.raises(Exception, match='no section "db"'):
        Config.read_ini(str(ini))

    ini.write_text('[db]\nDatabaseServer = localhost\n')

    with pytest.raises(Exception, match='DatabaseLogin'):
        Config.read_ini(str(ini))
