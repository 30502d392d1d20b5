import io, struct, unittest
from unittest import mock
from dbibackend.dissect import dissect
from dbibackend.frame import CommandID
from dbibackend.transport import UsbTransport
from dbibackend.tests.fakedev import request, ack, response

def capture(*transfers):
    return ['%s %s\n' % (direction, data.hex()) for direction, data in transfers]

class FileRangeCapture(unittest.TestCase):
    """Dissect the transfers of a FILE_RANGE command"""
    def runTest(self):
        payload = struct.pack('<IQI', 1000, 0x20, 9) + b'game.nsp\x00'
        lines = capture(('i', request(CommandID.FILE_RANGE, len(payload))),
                        ('o', ack(CommandID.FILE_RANGE, len(payload))),
                        ('i', payload),
                        ('o', response(CommandID.FILE_RANGE, 1000)),
                        ('i', ack(CommandID.FILE_RANGE, 1000)),
                        ('o', b'\xaa' * 1000))
        self.assertListEqual(list(dissect(lines)), [
            'In: magic, type=REQUEST, cmd=FILE_RANGE, size=25',
            'Out: magic, type=ACK, cmd=FILE_RANGE, size=25',
            "In: FileRange size=1000, offset=0x20, name='game.nsp'",
            'Out: magic, type=RESPONSE, cmd=FILE_RANGE, size=1000',
            'In: magic, type=ACK, cmd=FILE_RANGE, size=1000',
            'Out: Data (1000 bytes)',
        ])

class ListCapture(unittest.TestCase):
    def runTest(self):
        lines = capture(('i', request(CommandID.LIST)),
                        ('o', response(CommandID.LIST, 11)),
                        ('i', ack(CommandID.LIST)),
                        ('o', b'a.nsp\nb.nsz')) + ['\n']
        self.assertListEqual(list(dissect(lines)), [
            'In: magic, type=REQUEST, cmd=LIST, size=0',
            'Out: magic, type=RESPONSE, cmd=LIST, size=11',
            'In: magic, type=ACK, cmd=LIST, size=0',
            'Out: Data (11 bytes)',
        ])

class Garbage(unittest.TestCase):
    def runTest(self):
        self.assertEqual(list(dissect(['i ' + (b'X' * 16).hex()])), ['In: Data (16 bytes)'])
        self.assertRaises(ValueError, lambda: list(dissect(['x 00'])))

class UsbCapture(unittest.TestCase):
    """A capture written by UsbTransport dissects frame by frame"""
    def runTest(self):
        ep_in, ep_out = mock.Mock(), mock.Mock()
        dev = UsbTransport(mock.Mock(), ep_in, ep_out)
        dev.capture = io.StringIO()
        ep_in.read.return_value = bytearray(request(CommandID.EXIT))
        dev.read(16)
        dev.write(response(CommandID.EXIT))
        lines = io.StringIO(dev.capture.getvalue()).readlines()
        self.assertListEqual(list(dissect(lines)), [
            'In: magic, type=REQUEST, cmd=EXIT, size=0',
            'Out: magic, type=RESPONSE, cmd=EXIT, size=0',
        ])
