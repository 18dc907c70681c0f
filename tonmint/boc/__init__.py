from .cell import Cell, CellError, CellRangeError, CellUnderflowError, CellTypes
from .slice import Slice
from .builder import Builder, begin_cell
from .boc import Boc, BocError
from .address import Address, AddressError
