from chunkcopy.service.chunker import *
from chunkcopy.service.copy import *
