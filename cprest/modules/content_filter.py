import html
import json
import logging
import pprint
import re
import threading
import xml.etree.ElementTree as ET

from xml.dom.minidom import parseString

import cherrypy
import dicttoxml
import yaml

from cprest.modules.errors import HandlerLoadError


class HandlerRegistry:
    '''@package cprest.modules

    Table of content handlers, keyed by handler identifier.

    Handlers are registered as factories and instantiated on first use.
    Each identifier is loaded at most once; successfully loaded handlers
    are kept for the lifetime of the process.
    '''

    def __init__(self, name):
        self.name = name
        self._factories = {}
        self._loaded = {}
        self._lock = threading.Lock()


    @property
    def loaded(self):
        '''Identifiers of the handlers loaded so far.

        @return frozenset
        '''

        return frozenset(self._loaded)


    def register(self, handler_id, factory):
        '''Register a handler factory.

        @param handler_id (string) Identifier referenced by media type maps.
        @param factory (callable) Returns a handler instance.

        @return callable The factory, so this can be used as a decorator.
        '''

        with self._lock:
            self._factories[handler_id] = factory

        return factory


    def is_registered(self, handler_id):
        return handler_id in self._factories


    def load(self, handler_id):
        '''Return the handler instance for an identifier.

        @param handler_id (string) Handler identifier.

        @return object

        @throw KeyError if the identifier is not registered.
        @throw HandlerLoadError if the factory fails.
        '''

        try:
            return self._loaded[handler_id]
        except KeyError:
            pass

        with self._lock:
            if handler_id not in self._loaded:
                factory = self._factories[handler_id]
                try:
                    self._loaded[handler_id] = factory()
                except Exception as e:
                    raise HandlerLoadError(handler_id, e) from e
                cherrypy.log('{}: loaded handler {}.'.format(self.name, handler_id),
                        severity=logging.DEBUG)

            return self._loaded[handler_id]



serializers = HandlerRegistry('Serialize')
deserializers = HandlerRegistry('Deserialize')


class JsonHandler:
    '''JSON encoding.'''

    def serialize(self, data, arg=None):
        return json.dumps(data, indent=4).encode('utf8')


    def deserialize(self, body, arg=None):
        return json.loads(body.decode('utf8'))



class XmlHandler:
    '''XML encoding.

    Serialization goes through dicttoxml. Data that is not a dict is
    wrapped as {'data': data}. Deserialization turns elements into dicts,
    repeated children into lists and leaf elements into their text.
    '''

    root = 'response'

    def serialize(self, data, arg=None):
        if not isinstance(data, dict):
            data = {'data': data}
        ret = dicttoxml.dicttoxml(data, custom_root=arg or self.root)
        dom = parseString(ret)

        return dom.toprettyxml().encode('utf8')


    def deserialize(self, body, arg=None):
        root = ET.fromstring(body)

        return self._to_python(root)


    def _to_python(self, el):
        children = list(el)
        if not children:
            return el.text

        ret = {}
        for child in children:
            value = self._to_python(child)
            if child.tag in ret:
                if not isinstance(ret[child.tag], list):
                    ret[child.tag] = [ret[child.tag]]
                ret[child.tag].append(value)
            else:
                ret[child.tag] = value

        return ret



class YamlHandler:
    '''YAML encoding. Only plain data types are dumped and loaded.'''

    def serialize(self, data, arg=None):
        return yaml.safe_dump(data, default_flow_style=False,
                allow_unicode=True).encode('utf8')


    def deserialize(self, body, arg=None):
        return yaml.safe_load(body)



class YamlHtmlHandler(YamlHandler):
    '''YAML inside an HTML page, with URLs turned into links.'''

    url_re = re.compile(r'(https?://[^\s<>"\']+)')

    def serialize(self, data, arg=None):
        text = html.escape(super().serialize(data).decode('utf8'), quote=False)
        text = self.url_re.sub(r'<a href="\1">\1</a>', text)

        return ('<html><head><title>{}</title></head>'
                '<body><pre>{}</pre></body></html>').format(
                    html.escape(cherrypy.serving.request.path_info), text
                ).encode('utf8')



class TextHandler:
    '''Python representation of the data.

    The handler argument selects the format: 'repr' (default) or 'pprint'.
    '''

    def serialize(self, data, arg=None):
        if arg == 'pprint':
            return pprint.pformat(data).encode('utf8')

        return data.__repr__().encode('utf8')



serializers.register('JSON', JsonHandler)
serializers.register('XML', XmlHandler)
serializers.register('YAML', YamlHandler)
serializers.register('YAMLHTML', YamlHtmlHandler)
serializers.register('Text', TextHandler)

deserializers.register('JSON', JsonHandler)
deserializers.register('XML', XmlHandler)
deserializers.register('YAML', YamlHandler)
