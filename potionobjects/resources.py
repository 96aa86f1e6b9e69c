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

The resource registry binds URI prefixes to `Item` classes, and the URI
resolver uses it to work out which resource a URI identifies.

Each `Potion` client owns one `ResourceRegistry`. Prefixes are matched in the
order they were registered, so register more specific prefixes first when
one prefix is the start of another's path.

"""

from collections import namedtuple
from urllib.parse import unquote


ParsedURI = namedtuple('ParsedURI', ('uri', 'resource', 'params'))

FieldDescriptor = namedtuple('FieldDescriptor',
    ('attrname', 'api_name', 'read_only', 'field'))


class UnknownResourceError(LookupError):
    """An exception raised when a URI matches no registered resource."""
    pass


class Resource(object):

    """A registered `Item` class and the URI prefix it lives under.

    The resource's field descriptors map attribute names to wire names and
    are built once, when the class is registered.

    """

    def __init__(self, prefix, cls, naming):
        self.prefix = prefix
        self.cls = cls
        self.naming = naming
        self.fields = {}
        for attrname, field in cls.fields.items():
            api_name = field.api_name
            if api_name is None:
                api_name = naming.to_wire(attrname)
            self.fields[attrname] = FieldDescriptor(attrname, api_name,
                field.read_only, field)
        self._attrnames = dict((d.api_name, d.attrname)
            for d in self.fields.values())

    def __repr__(self):
        return '<Resource %s %s>' % (self.prefix, self.cls.__name__)

    def attrname_for(self, api_name):
        """Returns the attribute name for a wire key."""
        try:
            return self._attrnames[api_name]
        except KeyError:
            return self.naming.to_host(api_name)

    def api_name_for(self, attrname):
        """Returns the wire key for an attribute name."""
        try:
            return self.fields[attrname].api_name
        except KeyError:
            return self.naming.to_wire(attrname)


class ResourceRegistry(object):

    def __init__(self, naming):
        self.naming = naming
        self._resources = {}

    def __iter__(self):
        return iter(self._resources.values())

    def __contains__(self, prefix):
        return prefix in self._resources

    def __len__(self):
        return len(self._resources)

    def register(self, prefix, cls):
        """Binds `prefix` to the `Item` class `cls` and returns the new
        `Resource`.

        Registering a prefix again replaces its class but keeps the prefix's
        place in the matching order.

        """
        resource = Resource(prefix, cls, self.naming)
        self._resources[prefix] = resource
        return resource

    def get(self, prefix):
        return self._resources.get(prefix)

    def for_class(self, cls):
        """Returns the `Resource` registered for `cls`, or `None`."""
        for resource in self._resources.values():
            if resource.cls is cls:
                return resource
        return None


class URIResolver(object):

    """Splits URIs into their registered resource and parameters."""

    def __init__(self, registry, prefix=''):
        self.registry = registry
        self.prefix = prefix

    def has_prefix(self, uri):
        """Returns whether `uri` is under the API prefix, matching whole path
        segments only."""
        if not self.prefix:
            return False
        return uri == self.prefix or uri.startswith(self.prefix + '/')

    def normalize(self, uri):
        """Returns `uri` decoded and without the API prefix.

        Normalized URIs are the keys under which hydrated items are cached.

        """
        uri = unquote(uri)
        if self.has_prefix(uri):
            uri = uri[len(self.prefix):]
        return uri

    def parse(self, uri):
        """Returns the `ParsedURI` of `uri`.

        The resource is the first registered one whose prefix followed by a
        slash starts the normalized URI. The parameters are the rest of the
        path split on slashes; the first of them is the item's id.

        Raises `UnknownResourceError` when no resource matches.

        """
        uri = self.normalize(uri)
        for resource in self.registry:
            if uri.startswith(resource.prefix + '/'):
                params = uri[len(resource.prefix) + 1:].split('/')
                return ParsedURI(uri, resource, params)

        raise UnknownResourceError(
            'Uninterpretable or unknown resource URI: %s' % (uri,))
