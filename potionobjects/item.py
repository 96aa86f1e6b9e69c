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

`Item` is the base class of the resources a `Potion` client hydrates.

An `Item` subclass is bound to a client and a URI prefix when it is
registered with `Potion.register()`. Hydrated instances are built from a
property bag and the URI identifying them, and can be updated, saved and
destroyed through the client they came from.

"""

import logging

import potionobjects.fields
import potionobjects.json


log = logging.getLogger('potionobjects.item')

classes_by_name = {}


def find_by_name(name):
    """Finds and returns the `Item` subclass with the given name.

    Parameter `name` should be a bare class name with no module. If there is
    no class by that name, raises `KeyError`.

    """
    return classes_by_name[name]


class ItemMetaclass(type):

    """Metaclass for `Item` classes.

    This metaclass installs all `potionobjects.fields.Property` instances
    declared as attributes of the new class and makes the new class findable
    through `find_by_name()`.

    """

    def __new__(cls, name, bases, attrs):
        fields = {}
        new_fields = {}
        new_properties = {}

        # Inherit all the parent Item classes' fields.
        for base in bases:
            if isinstance(base, ItemMetaclass):
                fields.update(base.fields)

        for attrname, field in attrs.items():
            if isinstance(field, potionobjects.fields.Property):
                new_properties[attrname] = field
                if isinstance(field, potionobjects.fields.Field):
                    new_fields[attrname] = field
            elif attrname in fields:
                # Throw out any parent fields that the subclass defined as
                # something other than a Field.
                del fields[attrname]

        fields.update(new_fields)
        attrs['fields'] = fields
        obj_cls = super(ItemMetaclass, cls).__new__(cls, name, bases, attrs)

        for attrname, field in new_properties.items():
            field.install(attrname, obj_cls)

        # Register the new class so Reference fields can forward-reference it.
        classes_by_name[name] = obj_cls

        return obj_cls


class Item(object, metaclass=ItemMetaclass):

    """A hydrated resource instance.

    Declare the properties a resource expects as fields:

    >>> from potionobjects import Item, fields
    >>> class User(Item):
    ...     first_name = fields.Field()
    ...     created_at = fields.Datetime(read_only=True)
    ...

    Properties that match no declared field are handled according to the
    class's `unknown_fields` policy: ``'keep'`` sets them as attributes,
    ``'ignore'`` drops them and ``'error'`` raises `TypeError`. A class that
    declares no fields at all keeps every property.

    """

    unknown_fields = 'keep'

    _potion = None
    _resource = None
    _root_uri = None
    store = None

    def __init__(self, uri=None, **properties):
        self._uri = uri
        self.update_from_properties(properties)

    def __repr__(self):
        return '<%s %s>' % (type(self).__name__, self._uri)

    @property
    def uri(self):
        return self._uri

    @uri.setter
    def uri(self, uri):
        self._uri = uri

    @property
    def id(self):
        """The item's id, the first parameter of its URI.

        Items with no URI, or whose class is not registered with a client,
        have no id.

        """
        if self._uri is None or self._potion is None:
            return None
        params = self._potion.parse_uri(self._uri).params
        return int(params[0])

    @classmethod
    def from_properties(cls, uri, properties):
        """Builds a new instance from a hydrated property bag."""
        return cls(uri=uri, **properties)

    def update_from_properties(self, properties):
        """Sets the hydrated properties on this item."""
        for key, value in properties.items():
            if key in self.fields:
                setattr(self, key, value)
            elif not self.fields or self.unknown_fields == 'keep':
                self.__dict__[key] = value
            elif self.unknown_fields == 'ignore':
                log.debug('Ignoring unknown property %r of %r', key, self)
            else:
                raise TypeError('%s has no field %r'
                    % (type(self).__name__, key))

    def properties(self):
        """Returns the item's properties as a dictionary of attribute names
        to values."""
        props = dict((k, v) for k, v in self.__dict__.items()
            if not k.startswith('_'))
        return props

    def to_json(self):
        """Encodes the item's writable properties into a wire dictionary.

        Read only fields are omitted; dates and items are written as
        ``$date`` and ``$ref`` markers.

        """
        data = {}
        for key, value in self.properties().items():
            data.update(self._encode_property(key, value))
        return data

    def _encode_property(self, key, value):
        field = self.fields.get(key)
        if field is not None:
            if field.read_only:
                return {}
            return {self._api_name(key): field.encode(value)}
        return {self._api_name(key): potionobjects.json.encode_value(value)}

    def _api_name(self, attrname):
        if self._resource is not None:
            return self._resource.api_name_for(attrname)
        field = self.fields.get(attrname)
        if field is not None and field.api_name is not None:
            return field.api_name
        return attrname

    @classmethod
    def fetch(cls, id, **params):
        return cls.store.fetch(id, **params)

    @classmethod
    def query(cls, **params):
        return cls.store.query(**params)

    async def update(self, **properties):
        """Sends the given properties to the API with a ``PUT`` request and
        returns the hydrated response."""
        data = {}
        for key, value in properties.items():
            data.update(self._encode_property(key, value))
        return await self._potion.update(self, data)

    async def save(self):
        """Creates this item through a ``POST`` to its resource's root URI
        and returns the hydrated response."""
        return await self._potion.save(self._root_uri, self.to_json())

    async def destroy(self):
        return await self._potion.destroy(self)


class Store(object):

    """Fetches and queries the instances of one registered `Item` class."""

    def __init__(self, cls):
        self._potion = cls._potion
        self._root_uri = cls._root_uri

    def fetch(self, id, **params):
        return self._potion.get('%s/%s' % (self._root_uri, id), params or None)

    def query(self, **params):
        return self._potion.get(self._root_uri, params or None)
