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

Coding between Python values and the JSON wire format, including the
``$date`` and ``$ref`` markers.

"""

from datetime import datetime, timedelta, timezone

import simplejson

import potionobjects.item


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def millis_to_datetime(millis):
    """Returns the UTC `datetime` for a number of epoch milliseconds."""
    return EPOCH + timedelta(milliseconds=millis)


def datetime_to_millis(value):
    """Returns the epoch milliseconds of a `datetime`.

    Naive `datetime` instances are taken to be in UTC.

    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    delta = value - EPOCH
    return (delta.days * 86400 + delta.seconds) * 1000 + delta.microseconds // 1000


def encode_value(value):
    """Encodes a Python value into its wire value.

    Items become ``$ref`` markers and datetimes become ``$date`` markers,
    inside lists and dictionaries too. Other values are returned unchanged.

    """
    if isinstance(value, potionobjects.item.Item):
        if value.uri is None:
            raise ValueError('Cannot reference %r, which has no URI' % (value,))
        potion = getattr(value, '_potion', None)
        uri = value.uri if potion is None else potion.expand_uri(value.uri)
        return {'$ref': uri}
    if isinstance(value, datetime):
        return {'$date': datetime_to_millis(value)}
    if isinstance(value, (list, tuple)):
        return [encode_value(v) for v in value]
    if isinstance(value, dict):
        return dict((k, encode_value(v)) for k, v in value.items())
    return value


class PotionJSONEncoder(simplejson.JSONEncoder):

    """A JSON encoder that writes items and datetimes as wire markers."""

    def default(self, o):
        encoded = encode_value(o)
        if encoded is o:
            return super(PotionJSONEncoder, self).default(o)
        return encoded


class ForgivingDecoder(simplejson.JSONDecoder):

    """A JSON decoder that replaces undecodable bytes instead of failing.

    Bad characters become the unicode replacement character U+FFFD.

    """

    def decode(self, s, *args, **kwargs):
        if isinstance(s, bytes):
            s = s.decode('utf-8', 'replace')
        return super(ForgivingDecoder, self).decode(s, *args, **kwargs)


def dumps(data):
    return simplejson.dumps(data, cls=PotionJSONEncoder)


def loads(content):
    """Decodes a response body, forgiving bad UTF-8."""
    try:
        return simplejson.loads(content)
    except UnicodeDecodeError:
        return simplejson.loads(content, cls=ForgivingDecoder)
