import logging
logger = logging.getLogger(__name__)

CHUNK_SIZE = 0x100000   # Largest bulk write issued while streaming a range

def stream(path, offset, total_size, transport, chunk_size=CHUNK_SIZE):
    """Write total_size bytes of the file at path, starting at offset, to
       transport in writes of at most chunk_size bytes. Errors opening or
       reading the file and transport errors are propagated. Returns the
       number of bytes written."""
    logger.debug('streaming %s: offset=0x%x, size=%d' % (path, offset, total_size))
    written = 0
    with open(path, 'rb') as f:
        f.seek(offset)
        while written < total_size:
            read_len = min(chunk_size, total_size - written)
            buf = f.read(read_len)
            if len(buf) != read_len:
                raise IOError('%s: short read at offset 0x%x (%d of %d bytes)' % (
                    path, offset + written, len(buf), read_len))
            transport.write(buf, 0)
            written += read_len
    return written
