import argparse

import cherrypy

from cherrypy.process.plugins import Daemonizer, PIDFile

from cprest.config import app, host, server
from cprest.config.serialize import from_host
from cprest.controllers.rest_controller import RestController, rest_config
from cprest.controllers.thing_ctrl import ThingCtrl


class Webapp(RestController):
    '''Main Web app class.

    Contains the RESTful API and all its top-level locations.
    '''

    exposed = True

    routes = {
        'thing' : ThingCtrl,
    }


    def GET(self):
        '''Homepage - list the available endpoints.'''

        return {
            'endpoints' : [{
                'path' : '/' + r,
                'info' : self.routes[r].__doc__,
            } for r in self.routes],
        }



def mount(settings):
    '''Mount the application with the given host settings.

    @param settings (dict) Host settings as returned by cprest.config.host.load().

    @return cherrypy.Application
    '''

    serialize = from_host(settings)
    Webapp.serialize = serialize
    Webapp._cp_config = rest_config(serialize)

    # Set routes as class members as expected by Cherrypy
    for r in Webapp.routes:
        ctrl = Webapp.routes[r]
        ctrl.serialize = serialize
        ctrl._cp_config = rest_config(serialize)
        setattr(Webapp, r, ctrl())

    return cherrypy.tree.mount(Webapp(), '/', app.rest_conf)



if __name__ == '__main__':
    parser = argparse.ArgumentParser(description = 'cprest - REST content negotiation demo server')
    parser.add_argument('-c', '--config', default='/etc/cprest.conf', help='Configuration file path.')
    parser.add_argument('-d', '--daemonize', action='store_true', help='Run in the background.')
    args = parser.parse_args()

    settings = host.load(args.config)
    cherrypy.config.update(server.conf(settings))

    if args.daemonize:
        Daemonizer(cherrypy.engine).subscribe()
    PIDFile(cherrypy.engine, settings['pidfile']).subscribe()

    mount(settings)
    cherrypy.engine.start()
    cherrypy.engine.block()
