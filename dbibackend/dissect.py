"""Dissector for transfer logs, one transfer per line: 'i <hex>' for data
   read from the device, 'o <hex>' for data written to it. Such logs are
   written by 'dbi-backend --capture FILE'."""
from binascii import unhexlify
from .frame import Frame, FileRangeRequest, CommandType, CommandID, FRAME_SIZE

def dissect(lines):
    """Yield a description of each transfer in lines"""
    expect_request = False
    for line in lines:
        line = line.strip()
        if not line:
            continue
        direction, data = line.split(' ', 1)
        if direction not in ('i', 'o'):
            raise ValueError('bad direction %r' % direction)
        data = unhexlify(data)
        prefix = 'In' if direction == 'i' else 'Out'
        if direction == 'i' and expect_request:
            expect_request = False
            yield '%s: FileRange %r' % (prefix, FileRangeRequest.from_buf(data))
            continue
        if len(data) == FRAME_SIZE:
            frame = Frame.from_buf(data)
            if frame.valid:
                if direction == 'o' and frame.type == CommandType.ACK and \
                   frame.cmd == CommandID.FILE_RANGE:
                    expect_request = True
                yield '%s: %r' % (prefix, frame)
                continue
        yield '%s: Data (%d bytes)' % (prefix, len(data))
