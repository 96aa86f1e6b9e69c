# Copyright (c) 2009-2010 Six Apart Ltd.
# All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
# * Redistributions of source code must retain the above copyright notice,
#   this list of conditions and the following disclaimer.
#
# * Redistributions in binary form must reproduce the above copyright notice,
#   this list of conditions and the following disclaimer in the documentation
#   and/or other materials provided with the distribution.
#
# * Neither the name of Six Apart Ltd. nor the names of its contributors may
#   be used to endorse or promote products derived from this software without
#   specific prior written permission.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
# AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
# IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE
# ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE
# LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR
# CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF
# SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS
# INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN
# CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE)
# ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE, EVEN IF ADVISED OF THE
# POSSIBILITY OF SUCH DAMAGE.

import asyncio
import copy

import httplib2
import mock

from potionobjects import Potion


class FakePotion(Potion):

    """A `Potion` whose transport answers from a dictionary of responses.

    Responses are keyed by ``(method, uri)`` or, for any method, by ``uri``.
    A response that is an exception is raised instead. Set an `asyncio.Event`
    in `gates` to hold back the response for a URI until the event is set.

    """

    def __init__(self, responses=None, **kwargs):
        super(FakePotion, self).__init__(**kwargs)
        self.responses = dict(responses or {})
        self.gates = {}
        self.requests = []

    async def fetch(self, uri, method='GET', data=None):
        self.requests.append((method, uri, data))
        gate = self.gates.get(uri)
        if gate is not None:
            await gate.wait()
        else:
            await asyncio.sleep(0)

        try:
            response = self.responses[(method, uri)]
        except KeyError:
            response = self.responses[uri]
        if isinstance(response, Exception):
            raise response
        return copy.deepcopy(response)

    def requested(self, method='GET'):
        return [uri for m, uri, data in self.requests if m == method]


async def wait_for(predicate, tries=1000):
    """Runs the event loop until `predicate()` is true."""
    for _ in range(tries):
        if predicate():
            return
        await asyncio.sleep(0)
    raise AssertionError('condition never became true')


def mock_http(req, resp_or_content):
    http = mock.NonCallableMock(spec_set=httplib2.Http)

    if not isinstance(req, dict):
        req = dict(uri=req)

    def make_response(response, url):
        default_response = {
            'status':           200,
            'etag':             '7',
            'content-type':     'application/json',
            'content-location': url,
        }

        if isinstance(response, dict):
            if 'content' in response:
                content = response['content']
                del response['content']
            else:
                content = ''

            status = response.get('status', 200)
            if 200 <= status < 300:
                response_info = dict(default_response)
                response_info.update(response)
            else:
                # Homg all bets are off!! Use specified headers only.
                response_info = dict(response)
        else:
            response_info = dict(default_response)
            content = response

        return httplib2.Response(response_info), content

    http.request.return_value = make_response(resp_or_content, req['uri'])
    return http

