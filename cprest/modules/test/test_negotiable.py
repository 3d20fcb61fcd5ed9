#! /usr/bin/env py.test

import pytest

from cprest.modules.negotiable import Negotiable, RequestNegotiation, \
        negotiation, parse_accept


BROWSER_ACCEPT = 'text/xml,application/xml,application/xhtml+xml,' \
        'text/html;q=0.9,text/plain;q=0.8,image/png,*/*;q=0.5'

BROWSER_ORDER = [
    'text/xml',
    'application/xml',
    'application/xhtml+xml',
    'image/png',
    'text/html',
    'text/plain',
    '*/*',
]


class TestParseAccept:

    def test_empty(self):
        assert parse_accept(None) == []
        assert parse_accept('') == []
        assert parse_accept(' , ,') == []


    def test_order(self):
        assert parse_accept(BROWSER_ACCEPT) == BROWSER_ORDER


    def test_ties_keep_header_order(self):
        assert parse_accept('b/b;q=0.5, a/a;q=0.5, c/c') == ['c/c', 'b/b', 'a/a']


    def test_q_parameter(self):
        assert parse_accept('a/a;Q=0.1, b/b; level=1; q=0.2') == ['b/b', 'a/a']


    def test_bad_q_defaults_to_one(self):
        assert parse_accept('a/a;q=0.5, b/b;q=high, c/c;q=nan') \
                == ['b/b', 'c/c', 'a/a']


    def test_media_range_parameters(self):
        assert parse_accept('text/html;level=1;q=0.4, text/plain ; q=0.6,  */* ') \
                == ['*/*', 'text/plain', 'text/html']


    def test_q_out_of_range(self):
        assert parse_accept('a/a;q=-3, b/b;q=7, c/c;q=0.9') == ['b/b', 'c/c', 'a/a']



class TestRequestNegotiation:

    def test_content_type_only(self):
        neg = RequestNegotiation('GET', {'Content-Type': 'text/foobar'})

        assert neg.accepted_content_types == ('text/foobar',)
        assert neg.preferred_content_type == 'text/foobar'
        assert neg.accept_only is False
        assert neg.accepts('text/foobar')


    def test_content_type_parameters_stripped(self):
        neg = RequestNegotiation('POST',
                {'content-type': 'Application/JSON; charset=utf-8'})

        assert neg.preferred_content_type == 'application/json'


    def test_query_param_on_get(self):
        neg = RequestNegotiation('GET', {'Content-Type': 'text/foobar'},
                {'content-type': 'text/fudge'})

        assert neg.accepted_content_types == ('text/foobar', 'text/fudge')
        assert neg.accepts('text/fudge')
        assert neg.accept_only is False


    def test_query_param_ignored_on_post(self):
        neg = RequestNegotiation('POST', {'Content-Type': 'text/foobar'},
                {'content-type': 'text/fudge'})

        assert neg.accepted_content_types == ('text/foobar',)
        assert not neg.accepts('text/fudge')


    def test_query_param_repeated(self):
        neg = RequestNegotiation('GET', {},
                {'content-type': ['text/fudge', 'text/foobar']})

        assert neg.accepted_content_types == ('text/fudge',)


    def test_accept_only(self):
        neg = RequestNegotiation('GET', {'Accept': BROWSER_ACCEPT})

        assert list(neg.accepted_content_types) == BROWSER_ORDER
        assert neg.preferred_content_type == 'text/xml'
        assert neg.accept_only is True


    def test_content_type_and_accept(self):
        neg = RequestNegotiation('GET', {
            'Accept': BROWSER_ACCEPT,
            'Content-Type': 'application/json',
        })

        assert list(neg.accepted_content_types) == \
                ['application/json'] + BROWSER_ORDER
        assert neg.accept_only is False


    def test_query_param_before_accept(self):
        neg = RequestNegotiation('GET', {'Accept': 'text/html'},
                {'content-type': 'text/x-yaml'})

        assert neg.accepted_content_types == ('text/x-yaml', 'text/html')
        assert neg.accept_only is False


    def test_no_duplicates(self):
        neg = RequestNegotiation('GET', {
            'Accept': 'text/plain,text/x-json',
            'Content-Type': 'text/x-json',
        })

        assert neg.accepted_content_types == ('text/x-json', 'text/plain')


    def test_nothing(self):
        neg = RequestNegotiation('GET')

        assert neg.accepted_content_types == ()
        assert neg.preferred_content_type is None
        assert neg.accept_only is False


    def test_wildcards_are_literal(self):
        neg = RequestNegotiation('GET', {'Accept': 'text/*, */*;q=0.1'})

        assert neg.accepts('*/*')
        assert neg.accepts('text/*')
        assert not neg.accepts('text/html')
        assert not neg.accepts('image/svg')


    def test_cached(self):
        headers = {'Accept': 'text/html'}
        neg = RequestNegotiation('GET', headers)
        first = neg.accepted_content_types
        headers['Accept'] = 'text/plain'

        assert neg.accepted_content_types is first
        assert neg.preferred_content_type == 'text/html'



class TestCurrentRequest:

    def test_from_request(self, serving):
        request, _ = serving
        request.headers['Accept'] = 'text/x-yaml'
        request.params['content-type'] = 'text/x-json'

        neg = negotiation()

        assert neg.accepted_content_types == ('text/x-json', 'text/x-yaml')
        assert negotiation() is neg


    def test_mixin(self, serving):
        request, _ = serving
        request.headers['Accept'] = 'application/json'

        class Ctrl(Negotiable):
            pass

        ctrl = Ctrl()

        assert ctrl.accepted_content_types == ('application/json',)
        assert ctrl.preferred_content_type == 'application/json'
        assert ctrl.accept_only
        assert ctrl.accepts('application/json')


    def test_not_cached_before_query_string(self, serving):
        request, _ = serving
        request.headers['Accept'] = 'application/json'
        request.stage = 'get_resource'

        early = negotiation()
        assert early.accept_only

        request.stage = 'before_handler'
        request.params['content-type'] = 'text/x-yaml'
        neg = negotiation()

        assert neg is not early
        assert neg.accepted_content_types == ('text/x-yaml', 'application/json')
        assert not neg.accept_only
        assert negotiation() is neg
