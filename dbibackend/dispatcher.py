import logging
from . import streamer
from .frame import Frame, FileRangeRequest, CommandType, CommandID, FRAME_SIZE, cmd_name
from .catalog import TitleCatalog, NO_CATALOG
logger = logging.getLogger(__name__)

AWAITING_COMMAND = 'awaiting_command'
EXITED = 'exited'

class Session:
    """State kept between commands of a single connection"""
    def __init__(self):
        self.catalog = NO_CATALOG

class CommandDispatcher:
    def __init__(self, transport, work_dir, strict_lookup=True):
        """Serve commands issued by the device through transport, listing
           titles found under work_dir"""
        self.transport = transport
        self.work_dir = work_dir
        self.strict_lookup = strict_lookup
        self.session = Session()
        self._handlers = {
            CommandID.EXIT: self.cmd_exit,
            CommandID.LIST: self.cmd_list,
            CommandID.FILE_RANGE: self.cmd_file_range,
        }

    def send(self, frame):
        """Send a Frame"""
        logger.debug('send frame: ' + repr(frame))
        self.transport.write(frame.buf(), 0)
    def recv(self):
        """Receive a Frame, blocking until one is available"""
        frame = Frame.from_buf(self.transport.read(FRAME_SIZE, 0))
        logger.debug('recv frame: ' + repr(frame))
        return frame
    def recv_ack(self):
        """Wait for the device to acknowledge a response before a payload
           is transferred. The ACK contents are only logged."""
        ack = self.recv()
        if ack.type != CommandType.ACK:
            logger.debug('expected an ACK frame')
        return ack

    def cmd_exit(self, frame):
        logger.info('Exit')
        self.send(Frame.from_attr(CommandType.RESPONSE, CommandID.EXIT, 0))
        return EXITED

    def cmd_list(self, frame):
        logger.info('Get list')
        catalog = TitleCatalog.scan(self.work_dir, self.strict_lookup)
        payload = catalog.name_list()
        self.send(Frame.from_attr(CommandType.RESPONSE, CommandID.LIST, len(payload)))
        self.recv_ack()
        # No zero-length packet is sent for an empty list. Whether the console
        # expects one after a zero-sized RESPONSE has not been checked.
        if payload:
            self.transport.write(payload, 0)
        self.session.catalog = catalog
        return AWAITING_COMMAND

    def cmd_file_range(self, frame):
        logger.info('File range')
        self.send(Frame.from_attr(CommandType.ACK, CommandID.FILE_RANGE, frame.size))
        request = FileRangeRequest.from_buf(self.transport.read(frame.size, 0))
        path = self.session.catalog.resolve(request.name)
        logger.info('%r -> %s' % (request, path))
        self.send(Frame.from_attr(CommandType.RESPONSE, CommandID.FILE_RANGE, request.size))
        self.recv_ack()
        streamer.stream(path, request.offset, request.size, self.transport)
        return AWAITING_COMMAND

    def step(self):
        """Process a single frame sent by the device and return the next
           state. Frames lacking the magic signature are ignored."""
        frame = self.recv()
        if not frame.valid:
            logger.debug('discarding frame without magic')
            return AWAITING_COMMAND
        handler = self._handlers.get(frame.cmd)
        if handler is None:
            logger.warning('Unknown command id: %s' % cmd_name(frame.cmd))
            handler = self.cmd_exit
        return handler(frame)

    def run(self):
        """Serve commands until the device asks to exit. Returns EXITED,
           leaving it to the caller to end the process."""
        logger.info('Entering command loop')
        state = AWAITING_COMMAND
        while state != EXITED:
            state = self.step()
        return state
