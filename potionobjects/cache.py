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

Object caches hold the items a `Potion` client has hydrated, keyed by their
normalized URIs.

A client works without a cache; give it one to serve repeated fetches and
references from memory. Any object with `get()`, `set()` and `clear()`
methods will do. Eviction, size bounds and persistence are up to the cache.

"""

import abc
import logging


log = logging.getLogger('potionobjects.cache')


class ObjectCache(abc.ABC):

    @abc.abstractmethod
    def get(self, uri):
        """Returns the item cached under `uri`, or `None`."""
        raise NotImplementedError

    @abc.abstractmethod
    def set(self, uri, item):
        """Caches `item` under `uri` and returns it."""
        raise NotImplementedError

    @abc.abstractmethod
    def clear(self, uri):
        """Forgets the item cached under `uri`, if any."""
        raise NotImplementedError


class MemoryCache(ObjectCache):

    """An unbounded cache keeping items in a dictionary."""

    def __init__(self):
        self._items = {}

    def __contains__(self, uri):
        return uri in self._items

    def __len__(self):
        return len(self._items)

    def get(self, uri):
        return self._items.get(uri)

    def set(self, uri, item):
        self._items[uri] = item
        return item

    def clear(self, uri):
        self._items.pop(uri, None)

    def clear_all(self):
        log.debug('Clearing %d cached items', len(self._items))
        self._items.clear()
