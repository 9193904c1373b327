from chunkcopy.data import error
from chunkcopy.data.api import *
from chunkcopy.data.chunk import *
from chunkcopy.data.chunk_finder import *
from chunkcopy.data.chunk_insert import *
from chunkcopy.data.chunk_strategy import *
from chunkcopy.data.config import *
from chunkcopy.data.connection import *
from chunkcopy.data.copy_result import *
from chunkcopy.data.db_config import *
from chunkcopy.data.error import *
from chunkcopy.data.filter import *
from chunkcopy.data.migration import *
from chunkcopy.data.printer import *
from chunkcopy.data.retry_config import *
from chunkcopy.data.retry_policy import *
from chunkcopy.data.throttler import *
