from enum import Enum, auto

from .exceptions import InvalidArgument


class Vartype(Enum):
    BINARY = auto()     # {0, 1}
    SPIN = auto()       # {-1, +1}
    INTEGER = auto()    # not supported by binary quadratic models

    @staticmethod
    def from_str(s: str) -> "Vartype":
        s = s.strip().upper()
        if s in ("BINARY", "B"):
            return Vartype.BINARY
        elif s in ("SPIN", "S"):
            return Vartype.SPIN
        elif s in ("INTEGER", "I"):
            return Vartype.INTEGER
        else:
            raise InvalidArgument(f"invalid vartype string '{s}'")

    def __str__(self):
        if self == Vartype.SPIN:
            return 'spin'
        elif self == Vartype.BINARY:
            return 'binary'
        else:
            return 'unknown'
