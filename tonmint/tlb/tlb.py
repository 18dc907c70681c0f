from abc import ABC, abstractmethod


class TlbError(BaseException):
    pass


class TlbScheme(ABC):
    """
    Base class for objects described by a TL-B scheme: serialize() builds a cell, deserialize() reads a slice.
    """
    @abstractmethod
    def serialize(self, *args): ...

    @classmethod
    @abstractmethod
    def deserialize(cls, *args): ...

    def __repr__(self):
        return f'<{self.__class__.__name__} {self.__dict__}>'
