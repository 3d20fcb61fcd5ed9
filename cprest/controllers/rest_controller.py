import logging
import re

import cherrypy

from cprest.config.serialize import DEFAULT_CONFIG
from cprest.modules.negotiable import Negotiable
from cprest.modules.tools import stash


def rest_config(config=DEFAULT_CONFIG):
    '''CherryPy configuration turning on REST (de)serialization.

    @param config (cprest.config.serialize.SerializeConfig) Serialization
        settings for the controller.

    @return dict To be used as a controller's _cp_config.
    '''

    return {
        'tools.rest_in.on': True,
        'tools.rest_in.config': config,
        'tools.rest_out.on': True,
        'tools.rest_out.config': config,
    }



class RestController(Negotiable):
    '''Base REST controller.

    HTTP methods are implemented as methods named after them (GET, PUT...).
    Data returned by a method, or set with one of the status helpers, is
    serialized according to the negotiated content type. Request bodies are
    deserialized into cherrypy.request.data.

    To change the serialization settings of a controller:

        class ThingCtrl(RestController):
            serialize = SerializeConfig({...}, default='application/json')
            _cp_config = rest_config(serialize)

    Status helpers store entities under the stash key of the rest_out
    configuration in effect; `serialize` is used outside of it.

    @package cprest.controllers
    '''

    exposed = True

    serialize = DEFAULT_CONFIG

    _cp_config = rest_config(DEFAULT_CONFIG)


    @property
    def http_methods(self):
        '''HTTP methods implemented by this controller.

        @return list
        '''

        return sorted(m for m in dir(self) \
                if re.match('^[A-Z]+$', m) \
                and callable(getattr(self, m)))



    def OPTIONS(self):
        '''OPTIONS method.

        Display the HTTP methods available and their documentation.

        @return dict
        '''

        methods = self.http_methods
        allow = methods + ['HEAD'] if 'GET' in methods else methods
        cherrypy.serving.response.headers['Allow'] = ', '.join(sorted(allow))

        self.status_ok(entity={
            'methods' : [{'method' : m, 'doc' : getattr(self, m).__doc__} \
                    for m in methods],
        })



    ## STATUS HELPERS ##

    def _set_entity(self, entity):
        if entity is not None:
            config = getattr(cherrypy.serving.request, '_rest_config', None) \
                    or self.serialize
            stash()[config.stash_key] = entity



    def status_ok(self, entity):
        '''Set a "200 OK" response.

        @param entity Data to serialize.

        @return None
        '''

        cherrypy.serving.response.status = 200
        self._set_entity(entity)



    def status_created(self, location, entity=None):
        '''Set a "201 Created" response.

        @param location (string) URI of the created resource.
        @param entity (optional) Data to serialize.

        @return None
        '''

        if not isinstance(location, str):
            location = str(location)

        response = cherrypy.serving.response
        response.status = 201
        response.headers['Location'] = location
        self._set_entity(entity)



    def status_accepted(self, entity):
        '''Set a "202 Accepted" response.

        @param entity Data to serialize.

        @return None
        '''

        cherrypy.serving.response.status = 202
        self._set_entity(entity)



    def status_bad_request(self, message):
        '''Set a "400 Bad Request" response.

        The message is serialized as {'error': message}.

        @param message (string) Error message.

        @return None
        '''

        cherrypy.serving.response.status = 400
        cherrypy.log('Status Bad Request: {}'.format(message),
                severity=logging.DEBUG)
        self._set_entity({'error': message})



    def status_not_found(self, message):
        '''Set a "404 Not Found" response.

        The message is serialized as {'error': message}.

        @param message (string) Error message.

        @return None
        '''

        cherrypy.serving.response.status = 404
        cherrypy.log('Status Not Found: {}'.format(message),
                severity=logging.DEBUG)
        self._set_entity({'error': message})
