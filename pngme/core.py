"""
Core module for the abstraction of a file format

"""
import logging
from typing import Tuple, List, Dict

from .fields import Field
from .meta import MetaChunk
from .streams import Stream
from .exceptions import PngmeException


logger = logging.getLogger(__name__)


class Chunk(Field, metaclass=MetaChunk):
    """
    Together with Field is the main class that defines a format: a Chunk is
    a sequence of fields, declared as class attributes, laid out one after
    the other in the order of declaration.

    A Chunk can contain sub-chunks.

    If a source is passed (raw bytes or a path) the chunk is unpacked from it,
    otherwise it's built from the keyword arguments, one for each field to
    set, and the fields derived from others (lengths, checksums) are updated.
    """

    def __init__(self, source=None, name=None, father=None, **kwargs):
        super().__init__(name=name, father=father)

        if source is not None:
            if kwargs:
                raise ValueError('you cannot pass field values when unpacking from a source')

            with Stream(source) as stream:
                logger.debug('unpacking \'%s\' from %s' % (self.__class__.__name__, stream))
                self.unpack(stream)
        else:
            for field_name, value in kwargs.items():
                if field_name not in self.get_ordered_fields_name():
                    raise AttributeError(f"'{self.__class__.__name__}' has no field named '{field_name}'")

                setattr(self, field_name, value)

            self.update()

    def get_ordered_fields_name(self) -> List[str]:
        return self._meta.fields

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def __str__(self):
        msg = ''
        for field_name, field in self.get_fields():
            msg += '%s: %s\n' % (field_name, repr(field))
        return msg

    def __eq__(self, other):
        if other.__class__ is not self.__class__:
            return NotImplemented

        return self.raw == other.raw

    __hash__ = None

    def init(self):
        for _, field in self.get_fields():
            field.init()

    @property
    def layout(self) -> Dict[str, Tuple[int, int]]:
        '''Offset and size of each field (the offset is known only after unpacking).'''
        return {name: (field.offset, field.size) for name, field in self.get_fields()}

    def _get_size(self):
        '''the size MUST be derived from the subchunks'''
        return sum(field.size for _, field in self.get_fields())

    def _get_raw(self):
        return b''.join(field.raw for _, field in self.get_fields())

    def _update_value(self):
        for field_name, field in self.get_fields():
            logger.debug('updating %s.%s' % (self.__class__.__name__, field_name))
            field._update_value()

    def update(self):
        '''Recalculate the fields that depend on other fields (lengths, checksums).'''
        self._update_value()

    def unpack(self, stream):
        '''This is one of the main APIs to take care of: its aim is to take a binary
        data and transform in the representation given by the class this method
        is implemented.

        The fields are read in order; if one of them fails the name of the field
        is appended to the chain of the exception so that the caller knows where
        the data went wrong. After all the fields are read the validate() hook is called.
        '''
        for field_name, field in self.get_fields():
            offset = stream.tell()
            logger.debug('unpacking %s.%s at offset %d' % (self.__class__.__name__, field_name, offset))

            try:
                field.unpack(stream)
            except PngmeException as e:
                e.chain.append(field_name)
                raise

            field.offset = offset

        self.validate()

    def validate(self):
        '''Override to check the consistency of the unpacked data, raising
        a PngmeException when something is wrong.'''
        pass
