'''
Copyright (c) 2024 Beijing Volcano Engine Technology Ltd.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
'''

import errno
import os
import tempfile
import unittest
from unittest import TestCase

import numpy as np

import fdread


class TestRead(TestCase):
    @classmethod
    def setUpClass(cls):
        cls.tempdir = tempfile.TemporaryDirectory()
        cls.content = bytes(range(256)) * 4
        cls.filepath = os.path.join(cls.tempdir.name, "data.bin")
        with open(cls.filepath, "wb") as f:
            f.write(cls.content)
        cls.empty_filepath = os.path.join(cls.tempdir.name, "empty.bin")
        open(cls.empty_filepath, "wb").close()

    @classmethod
    def tearDownClass(cls):
        cls.tempdir.cleanup()

    def setUp(self):
        fdread.reset_config()
        self.fd = os.open(self.filepath, os.O_RDONLY)
        self.results = []

    def tearDown(self):
        os.close(self.fd)

    def callback(self, *args):
        self.results.append(args)

    def test_empty_descriptor(self):
        fd = os.open(self.empty_filepath, os.O_RDONLY)
        try:
            fdread.read(fd, self.callback)
        finally:
            os.close(fd)
        self.assertEqual(len(self.results), 1)
        err, n, data = self.results[0]
        self.assertIsNone(err)
        self.assertEqual(n, 0)
        self.assertEqual(len(data), 16384)

    def test_default_buffer(self):
        fdread.read(self.fd, self.callback)
        err, n, data = self.results[0]
        self.assertIsNone(err)
        self.assertEqual(n, len(self.content))
        self.assertIsInstance(data, np.ndarray)
        self.assertEqual(data.dtype, np.uint8)
        self.assertEqual(len(data), 16384)
        self.assertEqual(data[:n].tobytes(), self.content)
        self.assertEqual(os.lseek(self.fd, 0, os.SEEK_CUR), len(self.content))

    def test_default_buffer_size_from_config(self):
        fdread.configure(default_buffer_size=16)
        fdread.read(self.fd, self.callback)
        err, n, data = self.results[0]
        self.assertEqual(n, 16)
        self.assertEqual(len(data), 16)
        fdread.reset_config()

    def test_positioned_round_trip(self):
        os.lseek(self.fd, 100, os.SEEK_SET)
        buf = np.zeros(32, dtype=np.uint8)
        fdread.read(self.fd, buf, 0, 32, 512, self.callback)
        err, n, data = self.results[0]
        self.assertIsNone(err)
        self.assertEqual(n, 32)
        self.assertEqual(data.tobytes(), self.content[512:544])
        self.assertEqual(os.lseek(self.fd, 0, os.SEEK_CUR), 100)

    def test_view_spans_offset_and_length(self):
        buf = bytearray(b"\xff" * 16)
        fdread.read(self.fd, buf, 4, 8, 1020, self.callback)
        err, n, data = self.results[0]
        self.assertEqual(n, 4)
        # the view extent is offset..offset+length, not bounded by n
        self.assertEqual(len(data), 8)
        self.assertEqual(data.tobytes(), self.content[1020:] + b"\xff" * 4)
        data[0] = 0
        self.assertEqual(buf[4], 0)

    def test_options_record(self):
        buf = bytearray(10)
        fdread.read(self.fd, {"buffer": buf, "offset": 5, "length": 5, "position": 10}, self.callback)
        err, n, data = self.results[0]
        self.assertIsNone(err)
        self.assertEqual(n, 5)
        self.assertEqual(bytes(buf[5:]), self.content[10:15])
        self.assertEqual(data.tobytes(), self.content[10:15])

        fdread.read(self.fd, fdread.ReadOptions(length=3), self.callback)
        err, n, data = self.results[1]
        self.assertEqual(n, 3)
        self.assertEqual(len(data), 3)

    def test_options_none(self):
        fdread.read(self.fd, None, self.callback)
        err, n, data = self.results[0]
        self.assertEqual(n, len(self.content))
        self.assertEqual(len(data), 16384)

    def test_buffer_with_callback_in_offset_slot(self):
        buf = bytearray(4)
        fdread.read(self.fd, buf, self.callback)
        err, n, data = self.results[0]
        self.assertIsNone(err)
        self.assertEqual(n, 0)
        self.assertEqual(len(data), 0)
        # length defaults to 0 in this shape, the buffer and cursor stay untouched
        self.assertEqual(bytes(buf), b"\x00" * 4)
        self.assertEqual(os.lseek(self.fd, 0, os.SEEK_CUR), 0)

    def test_callback_keyword(self):
        buf = bytearray(4)
        fdread.read(self.fd, buf, 0, 4, None, callback=self.callback)
        self.assertEqual(self.results[0][1], 4)
        self.assertEqual(bytes(buf), self.content[:4])

    def test_io_error_goes_to_callback(self):
        fd = os.open(self.filepath, os.O_RDONLY)
        os.close(fd)
        fdread.read(fd, bytearray(4), 0, 4, None, self.callback)
        self.assertEqual(len(self.results), 1)
        # the error path passes the error only
        self.assertEqual(len(self.results[0]), 1)
        self.assertIsInstance(self.results[0][0], OSError)
        self.assertEqual(self.results[0][0].errno, errno.EBADF)

    def test_callback_runs_before_return(self):
        fdread.read(self.fd, bytearray(1), 0, 1, None, self.callback)
        self.assertEqual(len(self.results), 1)

    def test_callback_error_propagates(self):
        def failing_callback(err, n=None, data=None):
            raise KeyError("from callback")

        with self.assertRaises(KeyError):
            fdread.read(self.fd, bytearray(1), 0, 1, None, failing_callback)


if __name__ == '__main__':
    unittest.main()
