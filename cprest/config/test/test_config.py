#! /usr/bin/env py.test

import pytest

from cprest.config import host, server
from cprest.config.serialize import DEFAULT_CONFIG, HandlerSpec, \
        SerializeConfig, from_host


class TestHost:

    def test_defaults(self):
        settings = host.load()

        assert settings['app_env'] == 'dev'
        assert settings['listen_port'] == 8080
        assert settings['serialize_default'] is None
        assert settings['stash_key'] == 'rest'


    def test_file(self, tmp_path):
        conf = tmp_path / 'cprest.conf'
        conf.write_text(
            '[host]\n'
            'app_env = prod\n'
            'listen_port = 9090\n'
            '[serialize]\n'
            'default = application/json\n'
        )

        settings = host.load(str(conf))

        assert settings['app_env'] == 'prod'
        assert settings['listen_port'] == 9090
        assert settings['listen_addr'] == '127.0.0.1'
        assert settings['serialize_default'] == 'application/json'


    def test_missing_file(self, tmp_path):
        assert host.load(str(tmp_path / 'none.conf'))['app_env'] == 'dev'


    def test_server_conf(self):
        settings = host.load()
        settings['app_env'] = 'prod'

        conf = server.conf(settings)['global']

        assert conf['log.error_file'] == '/var/log/cprest/error.log'
        assert conf['server.socket_port'] == 8080



class TestSerializeConfig:

    def test_coerce(self):
        config = SerializeConfig({
            'text/x-json': 'JSON',
            'text/plain': ('Text', 'pprint'),
            'text/x-data-dumper': ['Text', 'repr'],
        })

        assert config.map['text/x-json'] == HandlerSpec('JSON')
        assert config.map['text/plain'] == HandlerSpec('Text', 'pprint')
        assert config.map['text/x-data-dumper'].arg == 'repr'
        assert config.stash_key == 'rest'
        assert config.default is None


    def test_invalid_spec(self):
        with pytest.raises(ValueError):
            SerializeConfig({'text/x-json': ('JSON', 'a', 'b')})


    def test_immutable(self):
        source = {'text/x-json': 'JSON'}
        config = SerializeConfig(source)
        source['text/x-yaml'] = 'YAML'

        assert 'text/x-yaml' not in config.map
        with pytest.raises(TypeError):
            config.map['text/x-yaml'] = HandlerSpec('YAML')
        with pytest.raises(AttributeError):
            config.default = 'text/x-json'


    def test_replace(self):
        config = DEFAULT_CONFIG.replace(default='application/json')

        assert config.default == 'application/json'
        assert DEFAULT_CONFIG.default is None
        assert config.map == DEFAULT_CONFIG.map


    def test_from_host(self):
        config = from_host({'serialize_default': 'text/x-yaml',
                'stash_key': 'entity'})

        assert config.default == 'text/x-yaml'
        assert config.stash_key == 'entity'
        assert config.map['text/html'].handler_id == 'YAMLHTML'
