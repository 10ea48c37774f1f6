"""
A Field is "fundamental" datatype from the format point of view, something directly
packable/unpackable without need of knowing what is around it.
"""
import logging
import struct

from .meta import FieldBase, Endianess
from .properties import Dependency
from .exceptions import PngmeException, UnpackException, MagicException


logger = logging.getLogger(__name__)


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, name=None, father=None, default=None,
                 endianess=Endianess.LITTLE_ENDIAN, is_magic=False):
        super().__init__()
        self.name = name
        self.father = father
        self.default = default
        self.offset = None
        self.endianess = endianess
        self.is_magic = is_magic

        self.init()

    def init(self):
        self._value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def __str__(self):
        return str(self.value)

    value = property(
        fget=lambda self: self._get_value(),
        fset=lambda self, value: self._set_value(value))

    def _get_value(self):
        return self._value

    def _set_value(self, value) -> None:
        self._value = value

    def _get_size(self) -> int:
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    def _get_raw(self) -> bytes:
        raise NotImplementedError(f"method {self.__class__.__name__}._get_raw() not implemented")

    raw = property(
        fget=lambda self: self._get_raw(),
    )

    def _update_value(self):
        '''This is used to update the value of fields derived from others before packing'''
        pass

    def _check_magic(self, value):
        if self.is_magic and value != self.default:
            logger.warning("the magic for field '%s' doesn't correspond", self.name)
            raise MagicException(self.default, value)

    def unpack(self, stream):
        raise NotImplementedError(f"method {self.__class__.__name__}.unpack() not implemented")


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module packing/unpacking
    integers to/from bytes.
    """

    def __init__(self, format, default=0, **kw):
        self.format = format
        super().__init__(default=default, **kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, hex(self.value))

    def get_format(self):
        prefix = {
            Endianess.LITTLE_ENDIAN: '<',
            Endianess.BIG_ENDIAN: '>',
        }[self.endianess]

        return '%s%s' % (prefix, self.format)

    def _get_size(self):
        return struct.calcsize(self.get_format())

    def _get_raw(self) -> bytes:
        return struct.pack(self.get_format(), self.value)

    def unpack(self, stream):
        raw = stream.read(self.size)

        try:
            value = struct.unpack(self.get_format(), raw)[0]
        except struct.error as e:
            logger.debug(e)
            raise UnpackException(f'needed {self.size} bytes, found {len(raw)}')

        self._check_magic(value)

        self.value = value


class StringField(Field):
    """Represent a contiguous chunk of bytes.

    The length can be fixed (an integer) or a Dependency on another field.
    """

    def __init__(self, n=None, **kw):
        if n is None and kw.get('default') is None:
            raise ValueError("StringField must have 'n' or 'default' indicated!")

        self._length = n if n is not None else len(kw['default'])

        super().__init__(**kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, repr(self.value))

    def __len__(self):
        return self.length

    @property
    def length(self) -> int:
        if isinstance(self._length, Dependency):
            if self.father is None:
                return len(self._value)

            return self._length.resolve(self)

        return self._length

    def value_from_default(self):
        if self.default is not None:
            return self.default

        return b'' if isinstance(self._length, Dependency) else b'\x00' * self._length

    def _get_size(self):
        return len(self.value)

    def _set_value(self, value) -> None:
        """The StringField has the size as a parameter and we must follow that indication
        unless it's a Dependency, in that case the length is written back by _update_value()."""
        value = bytes(value)

        if not isinstance(self._length, Dependency) and len(value) != self._length:
            raise ValueError(f'you are trying to set a value with the wrong size (that is {self._length} bytes)')

        self._value = value

    def _get_raw(self):
        return self.value

    def _update_value(self):
        if isinstance(self._length, Dependency) and self.father is not None:
            self._length.resolve_field(self).value = len(self._value)

    def unpack(self, stream):
        n = self.length
        raw = stream.read(n)

        self._check_magic(raw)

        if len(raw) != n:
            # only a dependent length lets the record decide if a short read is fatal
            if not isinstance(self._length, Dependency):
                raise UnpackException(f'needed {n} bytes, found {len(raw)}')

            logger.debug("short read for field '%s': wanted %d bytes, got %d", self.name, n, len(raw))

        self._value = raw


class ArrayField(Field):
    '''Un/Pack an array of Chunks.

    The elements are created from the template passed as "field_cls" and
    the unpacking goes on until the stream is exhausted.

    This class must behave like a list in python, obviously cannot implement all the methods
    since, for example, slicing what should mean?
    '''

    def __init__(self, field_cls, **kw):
        self.field_cls = field_cls
        super().__init__(**kw)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.value!r})>'

    def __getitem__(self, item):
        return self.value[item]

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def value_from_default(self):
        return list(self.default) if self.default else []

    def _get_size(self):
        return sum(element.size for element in self.value)

    def _get_raw(self):
        return b''.join(element.raw for element in self.value)

    def _update_value(self):
        for element in self.value:
            element._update_value()

    def instance_element(self):
        return self.field_cls.create(father=self)  # pass the father so that we don't lose the hierarchy

    def unpack(self, stream):
        self._value = []

        while not stream.is_exhausted():
            element = self.instance_element()
            offset = stream.tell()

            logger.debug("unpacking element %d of '%s' at offset %d", len(self._value), self.name, offset)

            try:
                element.unpack(stream)
            except PngmeException as e:
                e.chain.append(str(len(self._value)))
                raise

            element.offset = offset
            self._value.append(element)

    def append(self, element):
        element.father = self
        self.value.append(element)

    def pop(self, index):
        element = self.value.pop(index)
        element.father = None

        return element
