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

"""

`HttpPotion` is a `Potion` client that fetches over HTTP through the
`httplib2` library.

"""

import asyncio
from concurrent.futures import ThreadPoolExecutor
import functools
import http.client
import logging
from urllib.parse import urlencode, urljoin

import httplib2

from potionobjects import json
from potionobjects.client import Potion


log = logging.getLogger('potionobjects.http')


class HttpPotion(Potion):

    """A `Potion` client for a JSON REST API served over HTTP.

    Parameter `base_url` is the scheme and host the API's URIs are relative
    to, such as ``https://example.com``. Optional parameter `http` is the
    user agent to use, compatible with `httplib2.Http` instances; other
    keyword parameters are passed to `Potion`.

    Requests run on a single worker thread, since an `httplib2.Http`
    instance is not safe to use from several threads at once.

    """

    response_has_content = {
        http.client.OK:                True,
        http.client.ACCEPTED:          False,
        http.client.CREATED:           True,
        http.client.NO_CONTENT:        False,
        http.client.MOVED_PERMANENTLY: True,
        http.client.FOUND:             True,
        http.client.NOT_MODIFIED:      True,
    }

    content_types = ('application/json',)

    class NotFound(http.client.HTTPException):
        """An HTTPException thrown when the server reports that the requested
        resource was not found."""
        pass

    class Unauthorized(http.client.HTTPException):
        """An HTTPException thrown when the server reports that the requested
        resource is not available through an unauthenticated request.

        This exception corresponds to the HTTP status code 401. Thus when this
        exception is received, the caller may need to try again using the
        available authentication credentials.

        """
        pass

    class Forbidden(http.client.HTTPException):
        """An HTTPException thrown when the server reports that the client, as
        authenticated, is not authorized to request the requested resource.

        This exception corresponds to the HTTP status code 403.

        """
        pass

    class PreconditionFailed(http.client.HTTPException):
        """An HTTPException thrown when the server reports that some of the
        conditions in a conditional request were not true.

        This exception corresponds to the HTTP status code 412.

        """
        pass

    class RequestError(http.client.HTTPException):
        """An HTTPException thrown when the server reports an error in the
        client's request.

        This exception corresponds to the HTTP status code 400.

        """
        pass

    class ServerError(http.client.HTTPException):
        """An HTTPException thrown when the server reports an unexpected error.

        This exception corresponds to the HTTP status code 500.

        """
        pass

    class BadResponse(http.client.HTTPException):
        """An HTTPException thrown when the client receives some other
        non-success HTTP response."""
        pass

    def __init__(self, base_url, http=None, **kwargs):
        super(HttpPotion, self).__init__(**kwargs)
        self.base_url = base_url
        if http is None:
            http = httplib2.Http()
        self.http = http
        self._executor = ThreadPoolExecutor(max_workers=1)

    def close(self):
        self._executor.shutdown(wait=True)

    def get_request(self, uri, method='GET', data=None):
        """Returns the parameters for requesting `uri` as a dictionary of
        keyword arguments suitable for passing to `httplib2.Http.request()`.

        For ``GET`` requests `data` becomes the query string, with values
        other than strings encoded as JSON. For other methods it is the JSON
        request body.

        """
        url = urljoin(self.base_url, uri)
        headers = {'accept': ', '.join(self.content_types)}

        # Use 'uri' because httplib2.request does.
        request = dict(uri=url, method=method, headers=headers)
        if method == 'GET':
            if data:
                query = urlencode(sorted(
                    (k, v if isinstance(v, str) else json.dumps(v))
                    for k, v in data.items()))
                request['uri'] = '%s?%s' % (url, query)
        elif data is not None:
            headers['content-type'] = self.content_types[0]
            request['body'] = json.dumps(data)
        return request

    def raise_for_response(self, url, response, content):
        """Raises exceptions corresponding to invalid HTTP responses.

        Override this method to customize the error handling behavior for
        your target API.

        """
        if response.status == http.client.NOT_FOUND:
            raise self.NotFound('No such resource %s' % (url,))
        if response.status == http.client.UNAUTHORIZED:
            raise self.Unauthorized('Not authorized to fetch %s' % (url,))
        if response.status == http.client.FORBIDDEN:
            raise self.Forbidden('Forbidden from fetching %s' % (url,))
        if response.status == http.client.PRECONDITION_FAILED:
            raise self.PreconditionFailed('Precondition failed for request '
                'to %s' % (url,))

        if response.status in (http.client.INTERNAL_SERVER_ERROR,
                               http.client.BAD_REQUEST):
            if response.status == http.client.BAD_REQUEST:
                err_cls = self.RequestError
            else:
                err_cls = self.ServerError
            # Pull out an error if we can.
            content_type = response.get('content-type', '').split(';', 1)[0].strip()
            if content_type == 'text/plain':
                if isinstance(content, bytes):
                    content = content.decode('utf-8', 'replace')
                error = content.split('\n', 2)[0]
                exc = err_cls('%d %s requesting %s: %s'
                    % (response.status, response.reason, url, error))
                exc.response_error = error
                raise exc
            raise err_cls('%d %s requesting %s'
                % (response.status, response.reason, url))

        try:
            response_has_content = self.response_has_content[response.status]
        except KeyError:
            # we only expect the statuses that we know do or don't have content
            raise self.BadResponse('Unexpected response requesting %s: %d %s'
                % (url, response.status, response.reason))

        if not response_has_content or not content:
            return

        # check that the response body was json
        content_type = response.get('content-type', '').split(';', 1)[0].strip()
        if content_type not in self.content_types:
            raise self.BadResponse(
                'Bad response fetching %s: content-type %s is not an expected type'
                % (url, response.get('content-type')))

    def decode_response(self, url, response, content):
        """Returns the decoded JSON body of a successful response, or `None`
        for responses without content."""
        self.raise_for_response(url, response, content)

        if not self.response_has_content.get(response.status) or not content:
            return None
        return json.loads(content)

    async def fetch(self, uri, method='GET', data=None):
        request = self.get_request(uri, method=method, data=data)
        loop = asyncio.get_running_loop()
        response, content = await loop.run_in_executor(self._executor,
            functools.partial(self.http.request, **request))
        log.debug('%s %s: %d', method, request['uri'], response.status)
        return self.decode_response(request['uri'], response, content)
