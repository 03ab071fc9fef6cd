from ephdb.config import Config
from ephdb.db import DB
