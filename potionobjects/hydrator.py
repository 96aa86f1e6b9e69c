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

The hydrator turns decoded wire JSON into live values.

Objects carrying a ``$uri`` become instances of the registered `Item` class
for that URI, ``{"$ref": uri}`` stubs are resolved through the client (so its
cache and request coalescing apply), and ``{"$date": millis}`` markers become
UTC datetimes. Lists and plain objects are hydrated element by element, with
nested work running concurrently but results kept in their original order.

"""

import asyncio
import contextvars
import logging

from potionobjects import json


log = logging.getLogger('potionobjects.hydrator')


class Hydrator(object):

    """Hydrates wire values for one `Potion` client.

    Each task hydrating items keeps a chain of the URIs it is in the middle
    of. A reference to a URI in the task's own chain is the back reference
    of a cycle, and resolves at once to the instance under construction.
    A reference that would wait on a fetch which is itself waiting on this
    chain, such as two concurrent fetches referencing each other, resolves
    the same way. Such an instance may be seen before all its properties are
    set; they are all set once the outer hydration completes.

    Every other reference goes through `Potion.get()`, so it waits for the
    referenced item to be complete and fails if its hydration fails.

    """

    def __init__(self, potion):
        self.potion = potion
        self._chain = contextvars.ContextVar('hydrating', default=())
        self._hydrating = {}
        self._waiting = {}

    def start_chain(self):
        """Starts an empty chain of hydrating URIs for the current task."""
        self._chain.set(())

    async def hydrate(self, value):
        if isinstance(value, list):
            values = await asyncio.gather(*[self.hydrate(v) for v in value])
            return list(values)

        if isinstance(value, dict):
            if isinstance(value.get('$uri'), str):
                return await self.hydrate_item(value)
            if len(value) == 1:
                if isinstance(value.get('$ref'), str):
                    return await self.resolve_reference(value['$ref'])
                if '$date' in value:
                    return json.millis_to_datetime(value['$date'])
            return await self.hydrate_mapping(value)

        return value

    async def hydrate_item(self, data):
        """Hydrates an item envelope into an instance of its resource's class.

        An instance of the class already cached under the URI is updated in
        place, so an entity keeps a single instance for as long as it is
        cached.

        """
        uri, resource, params = self.potion.parse_uri(data['$uri'])
        cache = self.potion.cache

        item = self._hydrating.get(uri)
        if item is None and cache is not None:
            item = cache.get(uri)
        if not isinstance(item, resource.cls):
            item = resource.cls.from_properties(uri, {})

        inserted = uri not in self._hydrating
        if inserted:
            self._hydrating[uri] = item
        # Tasks started by gather() copy the context, chain included.
        token = self._chain.set(self._chain.get() + ((uri, item),))
        try:
            keys = [key for key in data if key != '$uri']
            values = await asyncio.gather(*[self.hydrate(data[key])
                for key in keys])
        finally:
            self._chain.reset(token)
            if inserted:
                del self._hydrating[uri]

        properties = dict((resource.attrname_for(key), value)
            for key, value in zip(keys, values))
        item.update_from_properties(properties)

        if cache is not None:
            cache.set(uri, item)
        return item

    async def resolve_reference(self, ref):
        uri = self.potion.parse_uri(ref).uri
        chain = dict(self._chain.get())

        item = chain.get(uri)
        if item is None and uri in self._hydrating:
            if self._waits_on(uri, chain):
                item = self._hydrating[uri]
        if item is not None:
            log.debug('Resolved cyclic reference to %s while it is being '
                'hydrated', uri)
            return item

        for waiter in chain:
            self._waiting.setdefault(waiter, []).append(uri)
        try:
            return await asyncio.shield(self.potion.get(uri))
        finally:
            for waiter in chain:
                targets = self._waiting[waiter]
                targets.remove(uri)
                if not targets:
                    del self._waiting[waiter]

    def _waits_on(self, uri, chain):
        """Returns whether the hydration of `uri` is waiting, directly or
        through other references, on any URI in `chain`."""
        seen = set()
        todo = [uri]
        while todo:
            waiter = todo.pop()
            if waiter in chain:
                return True
            if waiter in seen:
                continue
            seen.add(waiter)
            todo.extend(self._waiting.get(waiter, ()))
        return False

    async def hydrate_mapping(self, data):
        keys = list(data)
        values = await asyncio.gather(*[self.hydrate(data[key])
            for key in keys])
        to_host = self.potion.naming.to_host
        return dict((to_host(key), value) for key, value in zip(keys, values))
