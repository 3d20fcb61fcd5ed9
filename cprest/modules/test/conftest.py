import cherrypy
import pytest

from cherrypy._cprequest import Request, Response
from cherrypy.lib import httputil


@pytest.fixture
def serving():
    '''Load a blank request and response as the current CherryPy ones.'''

    request = Request(httputil.Host('127.0.0.1', 8080, ''),
            httputil.Host('127.0.0.1', 50000, ''))
    request.method = 'GET'
    request.headers = httputil.HeaderMap()
    request.params = {}
    response = Response()
    cherrypy.serving.load(request, response)

    yield request, response

    cherrypy.serving.clear()
