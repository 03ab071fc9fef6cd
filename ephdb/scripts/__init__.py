"""Helpers shared by the operator scripts"""

import sys, logging
from ephdb import DB

def add_connection_args(parser):
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument('--connect', help='MongoDB connection string')
    group.add_argument('--configfile', help='ini file with a [db] section (DatabaseLogin, DatabasePassword, DatabaseServer, DatabaseName)')
    parser.add_argument('--database', help='The database to use, if it differs from the one in the connection string')
    parser.add_argument('--log', help='Log file name. Logs to stdout if not set')

def setup_logging(args):
    kwargs = {'filename': args.log} if args.log else {'stream': sys.stdout}
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
        **kwargs
    )
    # pymongo is verbose at INFO
    logging.getLogger('pymongo').setLevel(logging.WARNING)

def connect(args):
    if args.configfile:
        return DB.connect_ini(args.configfile, database=args.database)

    return DB.connect(args.connect, database=args.database)
