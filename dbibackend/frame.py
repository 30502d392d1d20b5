import re, struct, logging
logger = logging.getLogger(__name__)

MAGIC = b'DBI0'     # Signature starting every frame of the DBI protocol
FRAME_SIZE = 16     # Size of a frame header

def _names(cls):
    """Map the numeric constants of a class to their names"""
    return dict([(value, attr) for attr, value in vars(cls).items()
                 if re.match(r'^[A-Z_]+$', attr) and isinstance(value, int)])

class CommandType:
    REQUEST = 0
    RESPONSE = 1
    ACK = 2

class CommandID:
    EXIT = 0
    LIST_DEPRECATED = 1
    FILE_RANGE = 2
    LIST = 3

_type_names = _names(CommandType)
_cmd_names = _names(CommandID)

class Frame:
    """DBI frame header"""
    magic, type, cmd, size = MAGIC, 0, 0, 0
    _fmt = '<4sIII'  # magic, type, command id, payload length

    @staticmethod
    def from_buf(buf):
        """Construct a Frame object from a bytestring buf. Short buffers are
           zero-padded, so this never fails; check self.valid before trusting
           the other fields."""
        self = Frame()
        self.magic, self.type, self.cmd, self.size = \
            struct.unpack(self._fmt, bytes(buf[:FRAME_SIZE]).ljust(FRAME_SIZE, b'\x00'))
        if self.magic != MAGIC:
            logger.debug('missing magic: ' + bytes(buf[:FRAME_SIZE]).hex())
        return self
    @staticmethod
    def from_attr(type, cmd, size=0):
        """Construct a Frame object with the supplied attributes"""
        self = Frame()
        self.type, self.cmd, self.size = type, cmd, size
        return self

    def buf(self):
        """Return the 16-byte encoded header"""
        return struct.pack(self._fmt, MAGIC, self.type, self.cmd, self.size)

    @property
    def valid(self):
        return self.magic == MAGIC

    def __eq__(self, other):
        if not isinstance(other, Frame):
            return NotImplemented
        return (self.magic, self.type, self.cmd, self.size) == \
               (other.magic, other.type, other.cmd, other.size)

    def __repr__(self):
        return '%s, type=%s, cmd=%s, size=%d' % (
            'magic' if self.valid else 'invalid',
            _type_names.get(self.type, hex(self.type)),
            _cmd_names.get(self.cmd, hex(self.cmd)),
            self.size)

def cmd_name(cmd):
    return _cmd_names.get(cmd, hex(cmd))

class FileRangeRequest:
    """Payload sent by the device after a FILE_RANGE command"""
    _fmt = '<IQI'  # range size, range offset, name length

    def __init__(self, size, offset, name):
        self.size, self.offset, self.name = size, offset, name

    @staticmethod
    def from_buf(buf):
        """Parse the range fields from the first 16 bytes of buf. The name
           spans name_length bytes, or the rest of buf if it is shorter.
           Trailing NULs are dropped."""
        header_len = struct.calcsize(FileRangeRequest._fmt)
        if len(buf) < header_len:
            raise ValueError('file range request too short (%d bytes)' % len(buf))
        size, offset, name_len = struct.unpack(FileRangeRequest._fmt, buf[:header_len])
        name = bytes(buf[header_len:header_len+name_len]).rstrip(b'\x00')
        return FileRangeRequest(size, offset, name.decode('utf-8'))

    def buf(self):
        name = self.name.encode('utf-8')
        return struct.pack(self._fmt, self.size, self.offset, len(name)) + name

    def __repr__(self):
        return 'size=%d, offset=0x%x, name=%r' % (self.size, self.offset, self.name)
