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

Fields are class attributes for `Item` subclasses that declare the
properties a resource expects.

A field records the property's wire name, whether the property is read only
(and so never sent back to the API), and how its hydrated value should be
coerced and encoded again. Items that declare no fields accept whatever
properties the API sends.

"""

from datetime import datetime

import potionobjects.item
from potionobjects import json


class Property(object):

    """An attribute that can be installed declaratively on an `Item`.

    The primary kind of `Property` object is the `Field`.

    """

    def install(self, attrname, cls):
        """Signals to the `Property` that it has been installed on the given
        class as an attribute with the given name.

        This implementation does nothing.

        """
        pass


class Field(Property):

    """A property for a value of a resource.

    Use a `Field` instance directly for strings, numbers, booleans and plain
    mappings. Use one of the subclasses when the value is a date or a
    reference to another resource, so it is coerced on the way in and encoded
    as the matching wire marker on the way out.

    """

    def __init__(self, api_name=None, default=None, read_only=False):
        """Sets the field's wire name, default value and read only flag.

        Optional parameter `api_name` is the key of this field in the wire
        format. If not given, the client's naming convention derives it from
        the attribute name when the resource is registered.

        Optional parameter `default` is the value of the attribute when the
        property bag has none. `default` can be a callable, in which case it
        is called with the item.

        Optional parameter `read_only` marks properties the API computes
        itself; they are hydrated but left out of `Item.to_json()`.

        """
        self.api_name = api_name
        self.default = default
        self.read_only = read_only

    def install(self, attrname, cls):
        self.attrname = attrname
        self.of_cls = cls

    def __get__(self, obj, cls):
        if obj is None:
            # Yield the real field instance when gotten through the class.
            return self

        if self.attrname not in obj.__dict__:
            if callable(self.default):
                return self.default(obj)
            return self.default

        return obj.__dict__[self.attrname]

    def __set__(self, obj, value):
        obj.__dict__[self.attrname] = self.decode(value)

    def __delete__(self, obj):
        try:
            del obj.__dict__[self.attrname]
        except KeyError:
            pass

    def decode(self, value):
        """Coerces a hydrated value into the attribute value.

        This implementation returns the `value` parameter unchanged.

        """
        return value

    def encode(self, value):
        """Encodes an attribute value into its wire value."""
        return json.encode_value(value)


class Datetime(Field):

    """A field representing a point in time, sent as a ``$date`` marker."""

    def decode(self, value):
        """Accepts a `datetime` or a number of epoch milliseconds."""
        if value is None or isinstance(value, datetime):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return json.millis_to_datetime(value)
        raise TypeError('Value to decode %r is not a valid date time'
            % (value,))

    def encode(self, value):
        if not isinstance(value, datetime):
            raise TypeError('Value to encode %r is not a datetime' % (value,))
        return {'$date': json.datetime_to_millis(value)}


class Reference(Field):

    """A field holding another `Item`, sent as a ``$ref`` marker.

    `cls` may be an `Item` subclass or the name of one, so resources can
    reference classes declared later.

    """

    def __init__(self, cls, **kwargs):
        super(Reference, self).__init__(**kwargs)
        self.cls = cls

    def get_cls(self):
        cls = self.__dict__['cls']
        if not callable(cls):
            cls = potionobjects.item.find_by_name(cls)
        return cls

    def set_cls(self, cls):
        self.__dict__['cls'] = cls

    cls = property(get_cls, set_cls)

    def decode(self, value):
        if value is None:
            return value
        if not isinstance(value, self.cls):
            raise TypeError('Value %r is not a %s' % (value, self.cls.__name__))
        return value


class List(Field):

    """A field representing a homogeneous list.

    The elements are coerced and encoded through another field specified when
    the `List` is declared.

    """

    def __init__(self, fld, **kwargs):
        super(List, self).__init__(**kwargs)
        self.fld = fld

    def install(self, attrname, cls):
        super(List, self).install(attrname, cls)

        # Make sure our content field knows its owner too.
        self.fld.install(attrname, cls)

    def decode(self, value):
        if value is None:
            return value
        return [self.fld.decode(v) for v in value]

    def encode(self, value):
        return [self.fld.encode(v) for v in value]
