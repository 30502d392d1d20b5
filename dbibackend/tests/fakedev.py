from dbibackend.frame import Frame, CommandType
from dbibackend.transport import Transport, TransportError

def request(cmd, size=0):
    return Frame.from_attr(CommandType.REQUEST, cmd, size).buf()

def ack(cmd, size=0):
    return Frame.from_attr(CommandType.ACK, cmd, size).buf()

def response(cmd, size=0):
    return Frame.from_attr(CommandType.RESPONSE, cmd, size).buf()

class FakeTransport(Transport):
    """Fake console which answers reads from a list of scripted buffers.
       Every transfer is appended to self.transfers as 'i <hex>' (read)
       or 'o <hex>' (write) and every written buffer to self.writes.
       Reading past the script raises TransportError, as if the cable
       had been unplugged."""
    def __init__(self, inbound=()):
        self.inbound = list(inbound)
        self.transfers = []
        self.writes = []
        self.closed = False

    def read(self, size, timeout=0):
        assert(timeout == 0)
        if not self.inbound:
            raise TransportError('device disconnected')
        buf = self.inbound.pop(0)
        assert(len(buf) <= size)
        self.transfers.append('i ' + buf.hex())
        return buf

    def write(self, data, timeout=0):
        assert(timeout == 0)
        data = bytes(data)
        self.transfers.append('o ' + data.hex())
        self.writes.append(data)

    def close(self):
        self.closed = True
