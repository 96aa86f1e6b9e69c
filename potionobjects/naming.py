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

Naming conventions translate between the key names an API uses on the wire
and the attribute names of the hydrated Python objects.

The default convention, `CAMEL_CASE`, turns wire ``snake_case`` (or
``kebab-case``) keys into ``camelCase`` attribute names and back. Keys that
start with ``$`` or ``_`` are never renamed.

The conversion is lossless for keys made of lowercase words joined by single
underscores, where each word after the first starts with a letter. Keys that
do not fit that shape do not round-trip:

* a separator followed by a digit is dropped (``page_2`` becomes ``page2``,
  which converts back to ``page2``);
* kebab-case keys come back as snake_case (``max-age`` becomes ``maxAge``,
  then ``max_age``);
* only the first capital of a run is separated, so ``userID`` becomes
  ``user_iD`` rather than ``user_id``.

Use `IDENTITY` when the wire names are already the attribute names you want,
or declare a `Field` with an explicit ``api_name``.

"""

import re


_to_camel_re = re.compile(r'[_-]([a-z0-9])')
_from_camel_re = re.compile(r'([a-z0-9])([A-Z])')


def _untouchable(key):
    return not key or key[0] in '$_'


def to_camel_case(key):
    """Converts a ``snake_case`` or ``kebab-case`` key to ``camelCase``."""
    if _untouchable(key):
        return key
    return _to_camel_re.sub(lambda m: m.group(1).upper(), key)


def from_camel_case(key, separator='_'):
    """Converts a ``camelCase`` key to ``snake_case`` (or another separator)."""
    if _untouchable(key):
        return key
    return _from_camel_re.sub(
        lambda m: '%s%s%s' % (m.group(1), separator, m.group(2).lower()), key)


class NamingConvention(object):

    """A pair of functions renaming keys between the wire and the host."""

    def __init__(self, name, to_host, to_wire):
        self.name = name
        self._to_host = to_host
        self._to_wire = to_wire

    def to_host(self, key):
        return self._to_host(key)

    def to_wire(self, key):
        return self._to_wire(key)

    def __repr__(self):
        return '<NamingConvention %s>' % self.name


CAMEL_CASE = NamingConvention('camel_case', to_camel_case, from_camel_case)
IDENTITY = NamingConvention('identity', lambda key: key, lambda key: key)
