import logging


logger = logging.getLogger(__name__)


class Dependency:
    '''This makes the relation between fields possible.

    In practice this class allows to write something like

        class Simple(Chunk):
            length = fields.StructField('I')
            data = fields.StringField(n=Dependency('.length'))

    and have the (internal) length of the string contained in the field named 'data'
    strictly connected to the field named 'length': when unpacking the value of
    'length' tells how many bytes to read, when building a new record the
    size of 'data' is written back into 'length'.

    The expression must start with '.', meaning a field at the same level;
    further components walk into nested chunks (e.g. '.header.size').
    '''
    def __init__(self, expression: str):
        if not expression.startswith('.'):
            raise ValueError(f"dependency '{expression}' must be relative (i.e. start with '.')")

        self.expression = expression

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.expression})>'

    def resolve_field(self, instance):
        '''Return the field the expression points to, starting from the father of "instance".'''
        logger.debug("trying to resolve '%s' for field '%s'", self.expression, instance.name)

        if instance.father is None:
            raise AttributeError(f"field '{instance.name}' has no father to resolve '{self.expression}' against")

        field = instance.father
        # '.length'.split('.') -> ['', 'length']
        for name in self.expression.split('.')[1:]:
            field = getattr(field, name)

        return field

    def resolve(self, instance):
        return self.resolve_field(instance).value
