import cherrypy


class HandlerLoadError(Exception):
    '''Raised when a registered handler cannot be instantiated.

    This never reaches the client: the resolver logs it and answers with
    UnsupportedMediaType instead.
    '''

    def __init__(self, handler_id, cause=None):
        self.handler_id = handler_id
        self.cause = cause
        super().__init__('Error loading handler {}: {}'.format(handler_id, cause))



class PlainTextHTTPError(cherrypy.HTTPError):
    '''@package cprest.modules

    HTTP error rendered as a plain text body instead of the CherryPy
    HTML error page.
    '''

    def __init__(self, status, text):
        self.text = text
        super().__init__(status, text)


    def set_response(self):
        super().set_response()

        response = cherrypy.serving.response
        # The HTML error page may have been padded to a fixed length.
        response.headers.pop('Content-Length', None)
        response.headers['Content-Type'] = 'text/plain'
        response.body = self.text.encode('utf8')



class UnsupportedMediaType(PlainTextHTTPError):
    '''No handler can produce or read the requested content type.

    @param content_type (string, optional) The offending content type.
    '''

    def __init__(self, content_type=None):
        self.content_type = content_type or None
        if self.content_type:
            text = 'Content-Type {} is not supported.\r\n'.format(content_type)
        else:
            text = 'Cannot find a Content-Type supported by your client.\r\n'
        super().__init__(415, text)



class BadRequest(PlainTextHTTPError):
    '''A deserializer rejected the request body.

    @param content_type (string) Content type of the request body.
    @param detail (string) Error reported by the deserializer.
    '''

    def __init__(self, content_type, detail):
        self.content_type = content_type
        self.detail = detail
        super().__init__(
            400,
            'Content-Type {} had a problem with your request.\r\n'
            '***ERROR***\r\n{}'.format(content_type, detail)
        )
