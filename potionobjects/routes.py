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

Routes declare extra endpoints of a resource as attributes of its `Item`
class.

>>> class User(Item):
...     readers = Route.GET('/readers')
...     promote = Route.POST('/promote')
...
>>> await User.readers()           # GET /user/readers
>>> await user.promote(level=2)    # POST /user/5/promote

Through the class, a route's path is relative to the resource's prefix;
through an instance, to the item's URI. ``GET`` routes are fetched with
`Potion.get()`, so they are cached and shared like any other fetch.

"""


class BoundRoute(object):

    def __init__(self, potion, uri, method):
        self.potion = potion
        self.uri = uri
        self.method = method

    def __repr__(self):
        return '<BoundRoute %s %s>' % (self.method, self.uri)

    def __call__(self, **params):
        """Requests the route with `params` as its query or body and returns
        an awaitable of the hydrated response."""
        if self.method == 'GET':
            return self.potion.get(self.uri, params or None)
        return self.potion.send(self.uri, self.method, params)


class Route(object):

    def __init__(self, path, method='GET'):
        self.path = path
        self.method = method

    def __get__(self, instance, owner):
        if instance is None:
            potion, base = owner._potion, owner._root_uri
        else:
            potion, base = instance._potion, instance.uri
            if base is None:
                raise AttributeError('Cannot find URI of %s relative to '
                    'URI-less %r' % (self.path, instance))
        if potion is None:
            raise AttributeError('%s is not registered with a Potion client'
                % (owner.__name__,))
        return BoundRoute(potion, base + self.path, self.method)

    @classmethod
    def GET(cls, path):
        return cls(path, 'GET')

    @classmethod
    def POST(cls, path):
        return cls(path, 'POST')

    @classmethod
    def PUT(cls, path):
        return cls(path, 'PUT')

    @classmethod
    def DELETE(cls, path):
        return cls(path, 'DELETE')
