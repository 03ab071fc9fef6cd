"""Creates all indexes based on configurations in ephdb.Config. Never
drops or changes data."""

from argparse import ArgumentParser
from ephdb import DB, Config
from ephdb.schema import Schema
from ephdb.scripts import add_connection_args, setup_logging, connect

parser = ArgumentParser(prog='init-indexes')
add_connection_args(parser)
parser.add_argument('--verbose', action='store_true')

def run():
    args = parser.parse_args()
    setup_logging(args)
    connect(args)

    indexes = []

    for name in Config.collections():
        print(f'creating {name} indexes...')
        indexes += Schema.ensure_indexes(name)

    print(f'{len(indexes)} indexes in DB')

    if args.verbose:
        for name in Config.collections():
            col = DB.handle[name]
            print(
                *list(map(lambda x: f'{col.name}: {x}', sorted(col.index_information().keys()))),
                sep='\n'
            )

###

if __name__ == '__main__':
    run()
