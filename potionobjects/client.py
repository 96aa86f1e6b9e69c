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

`Potion` is the client engine: it keeps the registry of resources, fetches
URIs through its transport, hydrates the responses and coordinates the
object cache.

Subclass `Potion` and implement `fetch()` to connect it to a transport, or
use `potionobjects.http.HttpPotion`, which fetches over HTTP with `httplib2`.

"""

import asyncio
import logging
from urllib.parse import urlencode

from potionobjects import json
from potionobjects.hydrator import Hydrator
from potionobjects.item import Store
from potionobjects.naming import CAMEL_CASE
from potionobjects.resources import ResourceRegistry, URIResolver


log = logging.getLogger('potionobjects.client')


class Potion(object):

    """A client for a JSON API whose bodies use the ``$uri``, ``$ref`` and
    ``$date`` conventions.

    Optional parameter `prefix` is the path prefix of every API URI, such as
    ``/api/v1``. It is added to request URIs that lack it and stripped from
    the URIs items are identified by.

    Optional parameter `cache` is an `ObjectCache` holding hydrated items. If
    not given, every `get()` goes to the transport, though concurrent
    requests for the same URI still share one fetch.

    Optional parameter `naming` is the `NamingConvention` between wire keys
    and attribute names, `CAMEL_CASE` by default.

    """

    def __init__(self, prefix='', cache=None, naming=CAMEL_CASE):
        self.prefix = prefix
        self.cache = cache
        self.naming = naming
        self.resources = ResourceRegistry(naming)
        self.resolver = URIResolver(self.resources, prefix)
        self.hydrator = Hydrator(self)
        self._pending = {}

    async def fetch(self, uri, method='GET', data=None):
        """Performs a request and returns the decoded JSON response body.

        Implement this method in a subclass to provide the transport. `uri`
        already includes the API prefix; `data` is the query parameters of a
        ``GET`` or the body of other methods.

        """
        raise NotImplementedError

    def register(self, prefix, cls):
        """Binds the `Item` class `cls` to the URI prefix `prefix`.

        Register every resource before fetching anything under its prefix.

        """
        resource = self.resources.register(prefix, cls)
        cls._potion = self
        cls._resource = resource
        cls._root_uri = prefix
        cls.store = Store(cls)
        log.debug('Registered %s at %s', cls.__name__, prefix)
        return resource

    def register_as(self, prefix):
        """Returns a class decorator registering the class at `prefix`."""
        def decorator(cls):
            self.register(prefix, cls)
            return cls
        return decorator

    def parse_uri(self, uri):
        return self.resolver.parse(uri)

    def expand_uri(self, uri):
        """Returns `uri` with the API prefix, adding it if missing."""
        if self.prefix and not self.resolver.has_prefix(uri):
            uri = self.prefix + uri
        return uri

    async def request(self, uri, method='GET', data=None):
        uri = self.expand_uri(uri)
        log.debug('Requesting %s %s', method, uri)
        return await self.fetch(uri, method=method, data=data)

    async def send(self, uri, method, data=None):
        """Requests `uri` with `method` and returns the hydrated response.

        Unlike `get()`, requests made with `send()` are never shared with
        other callers.

        """
        content = await self.request(uri, method=method, data=data)
        return await self.hydrator.hydrate(content)

    def get(self, uri, params=None):
        """Returns a future of the hydrated resource at `uri`.

        The item cached under `uri` is returned without a request. Otherwise
        every call made before the resource is hydrated shares one fetch, and
        the transport is asked for it only once. A caller cancelling its
        future does not cancel the fetch for the others. A failed request is
        forgotten, so the next call tries again.

        Optional parameter `params` is sent as the request's query
        parameters. Calls with different parameters are not shared.

        """
        loop = asyncio.get_running_loop()
        uri = self.resolver.normalize(uri)

        if self.cache is not None:
            item = self.cache.get(uri)
            if item is not None:
                log.debug('Found %s in the cache', uri)
                future = loop.create_future()
                future.set_result(item)
                return future

        key = uri
        if params:
            key = '%s?%s' % (uri, urlencode(sorted(
                (k, json.dumps(v)) for k, v in params.items())))

        task = self._pending.get(key)
        if task is None:
            task = self._pending[key] = loop.create_task(
                self._load(key, uri, params))
        else:
            log.debug('Sharing pending request for %s', key)

        # Cancelling a caller's future leaves the shared task running.
        return asyncio.shield(task)

    async def _load(self, key, uri, params):
        self.hydrator.start_chain()
        try:
            return await self.send(uri, 'GET', params)
        finally:
            del self._pending[key]

    async def update(self, item, data=None):
        """Sends `data` to the item's URI with a ``PUT`` request and returns
        the hydrated response."""
        if item.uri is None:
            raise ValueError('Cannot update %r with no URI to PUT to' % (item,))
        return await self.send(item.uri, 'PUT', data or {})

    async def save(self, root_uri, data=None):
        """Posts `data` to `root_uri` and returns the hydrated response."""
        return await self.send(root_uri, 'POST', data or {})

    async def destroy(self, item):
        """Deletes the item's remote resource and evicts it from the cache."""
        if item.uri is None:
            raise ValueError('Cannot delete %r with no URI to DELETE' % (item,))
        uri = self.resolver.normalize(item.uri)
        await self.request(uri, method='DELETE')

        if self.cache is not None:
            self.cache.clear(uri)
        log.debug('Deleted %s', uri)
