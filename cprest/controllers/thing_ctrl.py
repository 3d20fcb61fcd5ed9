import threading
import uuid

import cherrypy

from cprest.controllers.rest_controller import RestController


class ThingCtrl(RestController):
    '''Thing Controller class.

    Sample resource keeping arbitrary documents in memory.

    @package cprest.controllers
    '''

    exposed = True


    def __init__(self):
        self.things = {}
        self._lock = threading.Lock()



    def GET(self, uid=None):
        '''GET method.

        @param uid (string, optional) Thing ID. If omitted, all IDs are listed.

        @return (dict|list) The stored document or the list of IDs.
        '''

        if uid is None:
            return sorted(self.things)

        if uid not in self.things:
            return self.status_not_found('Thing {} does not exist.'.format(uid))

        return self.things[uid]



    def POST(self):
        '''POST method.

        Store the request body as a new thing.

        @return None; the new location is in the Location header.
        '''

        uid = uuid.uuid4().hex
        with self._lock:
            self.things[uid] = getattr(cherrypy.request, 'data', None)

        self.status_created(
            location=cherrypy.url('{}/{}'.format(
                    cherrypy.request.path_info.rstrip('/'), uid)),
            entity={'uid' : uid},
        )



    def PUT(self, uid):
        '''PUT method.

        Create or replace a thing.

        @param uid (string) Thing ID.
        '''

        data = getattr(cherrypy.request, 'data', None)
        if data is None:
            return self.status_bad_request('A request body is required.')

        with self._lock:
            self.things[uid] = data
        self.status_ok(entity=data)



    def DELETE(self, uid):
        '''DELETE method.

        @param uid (string) Thing ID.
        '''

        with self._lock:
            if self.things.pop(uid, None) is None:
                return self.status_not_found(
                        'Thing {} does not exist.'.format(uid))

        cherrypy.serving.response.status = 204
