import cherrypy


def logdir(app_env):
    '''Log directory for the given application environment.

    @param app_env (string) One of 'prod', 'stag', 'test', 'dev'.

    @return string
    '''

    if app_env == 'prod':
        return '/var/log/cprest/'
    elif app_env == 'stag':
        return '/var/log/cprest-staging/'
    elif app_env == 'test':
        return '/var/log/cprest-test/'
    else:
        return '/var/log/cprest-dev/'



def conf(host):
    '''CherryPy server configuration.

    @param host (dict) Host settings as returned by cprest.config.host.load().

    @return dict
    '''

    d = logdir(host['app_env'])

    return {
        'global': {
            'log.access_file': d + 'access.log',
            'log.error_file': d + 'error.log',
            'server.max_request_body_size': host['max_req_size'],
            'server.socket_host': host['listen_addr'],
            'server.socket_port': host['listen_port'],
        }
    }
