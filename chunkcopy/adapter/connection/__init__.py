from chunkcopy.adapter.connection.odbc import *
from chunkcopy.adapter.connection.pymysql import *
from chunkcopy.adapter.connection.shared import DbApiConnection
from chunkcopy.adapter.connection.strategy import *
