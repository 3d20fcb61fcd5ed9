import logging

from collections import namedtuple

import cherrypy

from cprest.modules import content_filter
from cprest.modules.errors import HandlerLoadError, UnsupportedMediaType
from cprest.modules.negotiable import negotiation


SERIALIZE = 'Serialize'
DESERIALIZE = 'Deserialize'

registries = {
    SERIALIZE: content_filter.serializers,
    DESERIALIZE: content_filter.deserializers,
}


ResolvedHandler = namedtuple(
        'ResolvedHandler', ('handler', 'arg', 'content_type', 'handler_id'))


def resolve_handler(content_type, config, registry):
    '''Find the handler for a content type.

    If the content type is not in the configured map, the configured
    default content type is used instead, if any.

    @param content_type (string) Preferred content type. May be empty.
    @param config (cprest.config.serialize.SerializeConfig) Configuration.
    @param registry (cprest.modules.content_filter.HandlerRegistry) Handlers
        for the requested direction.

    @return ResolvedHandler

    @throw UnsupportedMediaType if no handler is configured or loadable.
    '''

    if not content_type or content_type not in config.map:
        if config.default:
            cherrypy.log('{}: no handler for {}, using default {}.'.format(
                    registry.name, content_type, config.default),
                    severity=logging.DEBUG)
            content_type = config.default
        else:
            raise UnsupportedMediaType(content_type)

    try:
        spec = config.map[content_type]
    except KeyError:
        raise UnsupportedMediaType(content_type)

    if not registry.is_registered(spec.handler_id):
        cherrypy.log('{}: no handler registered as {} for {}.'.format(
                registry.name, spec.handler_id, content_type),
                severity=logging.DEBUG)
        raise UnsupportedMediaType(content_type)

    try:
        handler = registry.load(spec.handler_id)
    except HandlerLoadError as e:
        cherrypy.log('Error loading {} for {}: {}'.format(
                spec.handler_id, content_type, e.cause),
                severity=logging.ERROR)
        raise UnsupportedMediaType(content_type)

    return ResolvedHandler(handler, spec.arg, content_type, spec.handler_id)



def resolve_serializer(direction, config, neg=None):
    '''Resolve the handler for the current request.

    In the Serialize direction, a successful resolution also sets the Vary
    and Content-Type response headers.

    @param direction (string) SERIALIZE or DESERIALIZE.
    @param config (cprest.config.serialize.SerializeConfig) Configuration.
    @param neg (cprest.modules.negotiable.RequestNegotiation, optional)
        Defaults to the negotiation of the current request.

    @return ResolvedHandler

    @throw UnsupportedMediaType
    '''

    if neg is None:
        neg = negotiation()

    resolved = resolve_handler(
            neg.preferred_content_type, config, registries[direction])

    if direction == SERIALIZE:
        headers = cherrypy.serving.response.headers
        headers['Vary'] = 'Accept' if neg.accept_only else 'Content-Type'
        headers['Content-Type'] = resolved.content_type

    cherrypy.log('{}: {} for {}'.format(direction, resolved.handler_id,
            resolved.content_type), severity=logging.DEBUG)

    return resolved
