from chunkcopy.adapter.chunk_insert.id_set import *
from chunkcopy.adapter.chunk_insert.range import *
