## Serialization settings for REST controllers.
#
#  A configuration maps media types to handler identifiers registered in
#  cprest.modules.content_filter. It is built once per controller and never
#  modified afterwards.
from collections import namedtuple
from types import MappingProxyType


class HandlerSpec(namedtuple('HandlerSpec', ('handler_id', 'arg'))):
    '''A handler identifier with an optional handler argument.

    The argument is passed through to the handler, e.g. to select a
    sub-format of a handler that can produce several ones.
    '''

    __slots__ = ()

    def __new__(cls, handler_id, arg=None):
        return super().__new__(cls, handler_id, arg)


    @classmethod
    def coerce(cls, value):
        '''Build a HandlerSpec from a map value.

        @param value (string|tuple|list|HandlerSpec) Either a handler
            identifier or a (handler identifier, argument) pair.

        @return HandlerSpec
        '''

        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls(value)
        if isinstance(value, (tuple, list)) and len(value) == 2:
            return cls(*value)
        raise ValueError('Invalid handler specification: {!r}'.format(value))



class SerializeConfig(namedtuple('SerializeConfig', ('map', 'default', 'stash_key'))):
    '''Immutable serialization configuration.

    @param map (dict) Media type to handler specification mapping.
    @param default (string, optional) Media type used when the preferred
        one is not in the map.
    @param stash_key (string) Stash slot holding the entity to serialize.
    '''

    __slots__ = ()

    def __new__(cls, map, default=None, stash_key='rest'):
        frozen = MappingProxyType({
            k: HandlerSpec.coerce(v) for k, v in map.items()})

        return super().__new__(cls, frozen, default or None, stash_key)


    def replace(self, **kwargs):
        '''Return a copy with the given fields replaced.'''

        fields = self._asdict()
        fields.update(kwargs)
        fields['map'] = dict(fields['map'])

        return SerializeConfig(**fields)



DEFAULT_MAP = {
    'text/html' : 'YAMLHTML',
    'text/xml' : 'XML',
    'application/xml' : 'XML',
    'text/x-yaml' : 'YAML',
    'application/x-yaml' : 'YAML',
    'text/x-json' : 'JSON',
    'application/json' : 'JSON',
    'text/plain' : ('Text', 'pprint'),
    'text/x-data-dumper' : ('Text', 'repr'),
}

DEFAULT_CONFIG = SerializeConfig(DEFAULT_MAP)


def from_host(host, map=DEFAULT_MAP):
    '''Build a configuration from host settings.

    @param host (dict) Host settings as returned by cprest.config.host.load().
    @param map (dict, optional) Media type map. Defaults to DEFAULT_MAP.

    @return SerializeConfig
    '''

    return SerializeConfig(
        map,
        default=host.get('serialize_default'),
        stash_key=host.get('stash_key', 'rest'),
    )
