"""
URL path converters.
"""
from django.urls import register_converter

# Primary keys are signed 64-bit integers.
MAX_PRIMARY_KEY = 2 ** 63 - 1


class PrimaryKeyConverter:
    """
    Like the builtin ``int`` converter, but ids no database row can carry
    do not match, so the route answers 404 instead of overflowing the query.
    """
    regex = '[0-9]{1,19}'

    def to_python(self, value):
        parsed = int(value)
        if parsed > MAX_PRIMARY_KEY:
            raise ValueError('id out of range')
        return parsed

    def to_url(self, value):
        return str(value)


register_converter(PrimaryKeyConverter, 'id')
