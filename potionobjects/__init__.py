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

potionobjects turns the JSON of a REST API into live Python objects.

The API's bodies identify resources by URI: an object with a ``$uri`` member
is the full representation of a resource, ``{"$ref": uri}`` points to a
resource given elsewhere, and ``{"$date": millis}`` is a timestamp. A
`Potion` client hydrates such bodies into instances of the `Item` classes you
register for each resource, keeping one instance per resource URI in its
cache and never fetching the same URI twice at the same time.

potionobjects have:

* asynchronous fetching, hydration and reference resolution with `asyncio`

* one canonical instance per remote resource through an optional object
  cache

* HTTP support through the `httplib2` library in `HttpPotion`


Example
=======

>>> from potionobjects import HttpPotion, Item, MemoryCache, fields
>>> potion = HttpPotion('https://example.com', prefix='/api',
...                     cache=MemoryCache())
>>> @potion.register_as('/user')
... class User(Item):
...     first_name = fields.Field()
...     manager    = fields.Reference('User')
...
>>> user = await User.fetch(5)
>>> user.first_name, user.manager.id
('Ann', 2)

"""

__version__ = '1.0'
__author__ = 'Six Apart Ltd.'

import potionobjects.item
import potionobjects.fields as fields
from potionobjects.cache import MemoryCache, ObjectCache
from potionobjects.client import Potion
from potionobjects.http import HttpPotion
from potionobjects.item import Item, Store
from potionobjects.naming import CAMEL_CASE, IDENTITY
from potionobjects.resources import UnknownResourceError
from potionobjects.routes import Route

__all__ = ('Potion', 'HttpPotion', 'Item', 'Store', 'Route', 'fields',
           'ObjectCache', 'MemoryCache', 'UnknownResourceError',
           'CAMEL_CASE', 'IDENTITY')
