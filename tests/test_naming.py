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

import unittest

from potionobjects import naming


class TestNaming(unittest.TestCase):

    def test_to_camel_case(self):
        self.assertEqual(naming.to_camel_case('first_name'), 'firstName')
        self.assertEqual(naming.to_camel_case('date_of_birth'), 'dateOfBirth')
        self.assertEqual(naming.to_camel_case('max-age'), 'maxAge')
        self.assertEqual(naming.to_camel_case('name'), 'name')
        self.assertEqual(naming.to_camel_case('firstName'), 'firstName',
            'camelCase keys are left alone')

    def test_from_camel_case(self):
        self.assertEqual(naming.from_camel_case('firstName'), 'first_name')
        self.assertEqual(naming.from_camel_case('dateOfBirth'), 'date_of_birth')
        self.assertEqual(naming.from_camel_case('first_name'), 'first_name')
        self.assertEqual(naming.from_camel_case('maxAge', '-'), 'max-age')

    def test_markers_untouched(self):
        for key in ('$uri', '$ref', '$date', '_private_thing', ''):
            self.assertEqual(naming.to_camel_case(key), key)
            self.assertEqual(naming.from_camel_case(key), key)

    def test_round_trip(self):
        for key in ('first_name', 'a_b_c', 'name', 'created_at'):
            self.assertEqual(
                naming.from_camel_case(naming.to_camel_case(key)), key)

    def test_lossy_keys(self):
        self.assertEqual(naming.to_camel_case('page_2'), 'page2')
        self.assertEqual(naming.from_camel_case('page2'), 'page2')
        self.assertEqual(naming.from_camel_case('userID'), 'user_iD')

    def test_conventions(self):
        self.assertEqual(naming.CAMEL_CASE.to_host('first_name'), 'firstName')
        self.assertEqual(naming.CAMEL_CASE.to_wire('firstName'), 'first_name')
        self.assertEqual(naming.IDENTITY.to_host('first_name'), 'first_name')
        self.assertEqual(naming.IDENTITY.to_wire('firstName'), 'firstName')
