import logging
import math

from abc import ABCMeta

import cherrypy

from cherrypy.lib import httputil


QUERY_PARAM = 'content-type'

## Request stages preceding query string parsing.
UNPARSED_STAGES = (
    'run',
    'respond',
    'process_headers',
    'get_resource',
    'on_start_resource',
    'process_query_string',
)


def _header(headers, name):
    '''Case-insensitive header lookup.

    @param headers (dict) Any mapping of header names to values.
    @param name (string) Header name.

    @return string or None
    '''

    try:
        value = headers.get(name)
    except AttributeError:
        return None
    if value is not None:
        return value

    name = name.lower()
    for k, v in headers.items():
        if k.lower() == name:
            return v

    return None



def _media_type(value):
    '''Strip parameters and whitespace from a Content-Type value.

    @return string or None if the value is empty.
    '''

    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        value = value[0] if value else ''

    value = str(value).split(';', 1)[0].strip().lower()

    return value or None



def _quality(value):
    try:
        q = float(value)
    except (TypeError, ValueError):
        return 1.0
    if math.isnan(q):
        return 1.0

    return min(max(q, 0.0), 1.0)



def parse_accept(header):
    '''Parse an Accept header into media types ordered by preference.

    Entries with equal quality keep the order in which they appear in the
    header. Wildcards are kept verbatim.

    @param header (string) Raw Accept header value.

    @return list
    '''

    if not header:
        return []

    pairs = []
    for segment in header.split(','):
        el = httputil.AcceptElement.from_str(segment)
        if not el.value:
            continue

        q = el.params.get('q', 1.0)
        if isinstance(q, httputil.HeaderElement):
            q = q.value
        pairs.append((el.value, _quality(q)))

    # AcceptElement ordering breaks ties by value; sorted() keeps header order.
    return [p[0] for p in sorted(pairs, key=lambda p: p[1], reverse=True)]



class RequestNegotiation:
    '''@package cprest.modules

    Content types acceptable for a single request.

    The list is built on first access from, in order of priority:
        - the Content-Type request header;
        - the content-type query parameter (GET requests only);
        - the Accept header, best-ranked first.
    Duplicates are dropped, keeping the first occurrence.
    '''

    def __init__(self, method='GET', headers=None, params=None):
        '''Class constructor.

        @param method (string) HTTP method.
        @param headers (dict, optional) Request headers.
        @param params (dict, optional) Query parameters.

        @return None
        '''

        self.method = (method or '').upper()
        headers = headers or {}
        params = params or {}

        self.content_type = _media_type(_header(headers, 'Content-Type'))
        self.accept = _header(headers, 'Accept')
        self.query_type = _media_type(params.get(QUERY_PARAM)) \
                if self.method == 'GET' else None

        self._accepted = None


    @classmethod
    def from_request(cls, request):
        '''Build from a CherryPy request.

        @param request (cherrypy._cprequest.Request)

        @return RequestNegotiation
        '''

        return cls(request.method, request.headers, request.params)


    @property
    def accepted_content_types(self):
        '''Acceptable media types, most preferred first.

        @return tuple
        '''

        if self._accepted is None:
            types = []
            if self.content_type:
                types.append(self.content_type)
            if self.query_type:
                types.append(self.query_type)
            types.extend(parse_accept(self.accept))

            seen = set()
            accepted = []
            for t in types:
                if t not in seen:
                    seen.add(t)
                    accepted.append(t)
            self._accepted = tuple(accepted)

            cherrypy.log(
                'Accepted content types: {}'.format(', '.join(self._accepted)),
                severity=logging.DEBUG
            )

        return self._accepted


    @property
    def preferred_content_type(self):
        '''Most preferred media type, or None.'''

        types = self.accepted_content_types

        return types[0] if types else None


    @property
    def accept_only(self):
        '''Whether the Accept header was the only source of preferences.'''

        return self.accept is not None \
                and not self.content_type and not self.query_type


    def accepts(self, candidate):
        '''Whether the given media type is in the list.

        Matching is literal: '*/*' in the list only accepts '*/*'.

        @param candidate (string) Media type.

        @return boolean
        '''

        return candidate in self.accepted_content_types



def negotiation():
    '''Negotiation of the current CherryPy request.

    It is built once per request and cached on the request object. Until
    the query string has been parsed (e.g. while the dispatcher walks the
    controller tree) the result is not cached.

    @return RequestNegotiation
    '''

    request = cherrypy.serving.request
    try:
        return request.negotiation
    except AttributeError:
        pass

    neg = RequestNegotiation.from_request(request)
    if request.stage not in UNPARSED_STAGES:
        request.negotiation = neg

    return neg



class Negotiable(metaclass=ABCMeta):
    '''@package cprest.modules

    Negotiable mixin.
    Exposes the content negotiation of the current request to controllers.
    '''

    @property
    def accepted_content_types(self):
        return negotiation().accepted_content_types


    @property
    def preferred_content_type(self):
        return negotiation().preferred_content_type


    @property
    def accept_only(self):
        return negotiation().accept_only


    def accepts(self, candidate):
        return negotiation().accepts(candidate)
