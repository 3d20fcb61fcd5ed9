## Host-specific settings are read from an INI file and parsed here.
#
#  Example file:
#
#      [host]
#      app_env = dev
#      pidfile = /var/run/cprest.pid
#      listen_addr = 127.0.0.1
#      listen_port = 8080
#      max_req_size = 104857600
#
#      [serialize]
#      default = application/json
#      stash_key = rest
import configparser


defaults = {
    'host': {
        'app_env': 'dev',
        'pidfile': '/var/run/cprest.pid',
        'listen_addr': '127.0.0.1',
        'listen_port': '8080',
        'max_req_size': '104857600',
    },
    'serialize': {
        'default': '',
        'stash_key': 'rest',
    },
}


def read(config_file=None):
    '''Read the host configuration file on top of the built-in defaults.

    A missing file is not an error: the defaults are used instead.

    @param config_file (string, optional) Configuration file path.

    @return configparser.ConfigParser
    '''

    config = configparser.ConfigParser()
    config.read_dict(defaults)
    if config_file:
        config.read(config_file)

    return config



def load(config_file=None):
    '''Parse host settings.

    @param config_file (string, optional) Configuration file path.

    @return dict
    '''

    config = read(config_file)

    return {
        'app_env' : config['host']['app_env'],
        'pidfile' : config['host']['pidfile'],
        'listen_addr' : config['host']['listen_addr'],
        'listen_port' : config['host'].getint('listen_port'),
        'max_req_size' : config['host'].getint('max_req_size'),
        'serialize_default' : config['serialize']['default'] or None,
        'stash_key' : config['serialize']['stash_key'],
    }
