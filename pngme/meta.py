import copy
import logging
from enum import Enum, auto


logger = logging.getLogger(__name__)


class Endianess(Enum):
    LITTLE_ENDIAN = auto()
    BIG_ENDIAN    = auto()


class FieldDescriptor(object):
    """Wrapper around field access of a Field related class."""

    def __init__(self, field_instance: "Field", field_name: str):
        self.field = field_instance
        self.field.name = field_name

    def __get__(self, instance, type=None):
        # accessing from the class returns the template
        if instance is None:
            return self.field

        data = instance.__dict__

        if self.field.name not in data:
            logger.debug("create new field for field named '%s'", self.field.name)
            data[self.field.name] = self.field.create(father=instance)

        return data[self.field.name]

    def __set__(self, instance, value):
        logger.debug("__set__ from %s for field named '%s'", instance.__class__.__name__, self.field.name)

        # if the value is the same type then set as it is
        if isinstance(value, self.field.__class__):
            value.father = instance
            value.name = self.field.name
            instance.__dict__[self.field.name] = value
        # otherwise delegate to the field
        else:
            self.__get__(instance).value = value


class FieldBase(object):

    def contribute_to_chunk(self, cls, name):
        if name in cls.__dict__:
            raise AttributeError(f'field {name} is already present in class {cls.__name__}')

        setattr(cls, name, FieldDescriptor(self, name))

    def create(self, father):
        instance = copy.deepcopy(self)
        instance.father = father
        return instance


class Meta(object):
    """Class containing metadata about the abstraction"""

    def __init__(self):
        self.fields = []


class MetaChunk(type):

    def __new__(cls, name, bases, attrs):
        '''The fields are removed from the class body and replaced by descriptors,
        remembering the order of declaration (that is the order of the data).'''
        fields = {k: v for k, v in attrs.items() if isinstance(v, FieldBase)}
        plain_attrs = {k: v for k, v in attrs.items() if k not in fields}

        new_cls = super(MetaChunk, cls).__new__(cls, name, bases, plain_attrs)

        new_cls._meta = Meta()

        # handle inheritance
        for parent in bases:
            if isinstance(parent, MetaChunk):
                new_cls._meta.fields.extend(parent._meta.fields)

        for field_name, field in fields.items():
            new_cls.add_to_class(field_name, field)

        return new_cls

    def add_to_class(cls, name, value):
        logger.debug("contribute_to_chunk() for field '%s'", name)
        cls._meta.fields.append(name)
        value.contribute_to_chunk(cls, name)
