import cherrypy

## CherryPy application configuration for REST controllers.
#
#  The page handlers are looked up by HTTP method name. Serialization and
#  deserialization are switched on by the controllers themselves.
rest_conf = {
    '/': {
        'request.dispatch': cherrypy.dispatch.MethodDispatcher(),
        'request.methods_with_bodies': ('POST', 'PUT', 'PATCH'),
    },
}
