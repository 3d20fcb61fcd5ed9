import functools

import cherrypy

from cprest.config.serialize import DEFAULT_CONFIG
from cprest.modules.errors import BadRequest
from cprest.modules.negotiable import QUERY_PARAM, negotiation
from cprest.modules.serialize_base import SERIALIZE, DESERIALIZE, \
        resolve_serializer


def stash():
    '''Per-request storage shared by page handlers and the REST tools.

    @return dict
    '''

    request = cherrypy.serving.request
    try:
        return request.stash
    except AttributeError:
        request.stash = {}

    return request.stash



def _has_body(request):
    headers = request.headers
    if 'Transfer-Encoding' in headers:
        return True

    return headers.get('Content-Length', '').strip() not in ('', '0')



def _status_code(response):
    try:
        return int(str(response.status or 200).split()[0])
    except ValueError:
        return 200



def _deserialize(entity, resolved):
    '''Body processor: decode the request entity into request.data.'''

    body = entity.fp.read()
    try:
        cherrypy.serving.request.data = resolved.handler.deserialize(
                body, resolved.arg)
    except Exception as e:
        cherrypy.log('Cannot deserialize {} body: {}'.format(
                resolved.content_type, e), 'TOOLS.REST_IN')
        raise BadRequest(resolved.content_type, e)



def rest_in(config=DEFAULT_CONFIG, debug=False):
    '''Decode the request body with the handler negotiated for it.

    The decoded data is available as cherrypy.request.data.

    @param config (cprest.config.serialize.SerializeConfig) Configuration.
    @param debug (boolean) Log the decisions taken.

    @return None
    '''

    request = cherrypy.serving.request
    neg = negotiation()
    request.params.pop(QUERY_PARAM, None)

    if not request.process_request_body:
        return
    if not _has_body(request):
        # A body-less POST would otherwise be answered with 411.
        request.process_request_body = False
        return

    resolved = resolve_serializer(DESERIALIZE, config, neg)
    if debug:
        cherrypy.log('Deserializing {} with {}'.format(
                resolved.content_type, resolved.handler_id), 'TOOLS.REST_IN')

    request.body.processors.clear()
    request.body.default_proc = functools.partial(
            _deserialize, request.body, resolved)



def _serialize_handler(*args, **kwargs):
    request = cherrypy.serving.request
    config = request._rest_config

    value = request._rest_inner_handler(*args, **kwargs)
    data = stash()
    if value is not None:
        data[config.stash_key] = value

    if config.stash_key not in data:
        return value
    code = _status_code(cherrypy.serving.response)
    if code == 204 or 300 <= code < 400:
        return None

    resolved = resolve_serializer(SERIALIZE, config)

    return resolved.handler.serialize(data[config.stash_key], resolved.arg)



def rest_out(config=DEFAULT_CONFIG, debug=False):
    '''Encode the handler output with the handler negotiated for the response.

    The entity is the page handler's return value, or, if that is None,
    the stash slot named by config.stash_key.

    @param config (cprest.config.serialize.SerializeConfig) Configuration.
    @param debug (boolean) Log the decisions taken.

    @return None
    '''

    request = cherrypy.serving.request
    if request.handler is None:
        return
    if debug:
        cherrypy.log('Replacing {} with REST serializer'.format(
                request.handler), 'TOOLS.REST_OUT')

    request._rest_inner_handler = request.handler
    request._rest_config = config
    request.handler = _serialize_handler



cherrypy.tools.rest_in = cherrypy.Tool('before_request_body', rest_in, priority=30)
cherrypy.tools.rest_out = cherrypy.Tool('before_handler', rest_out, priority=30)
