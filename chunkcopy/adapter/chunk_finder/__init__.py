from chunkcopy.adapter.chunk_finder.id_set import *
from chunkcopy.adapter.chunk_finder.range import *
from chunkcopy.adapter.chunk_finder.strategy import *
