from chunkcopy.adapter import chunk_finder, chunk_insert, config, connection, fs
from chunkcopy.adapter.printer import *
from chunkcopy.adapter.sql_retry import *
from chunkcopy.adapter.throttler import *
