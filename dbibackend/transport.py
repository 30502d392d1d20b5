import time, logging
import usb.core, usb.util
logger = logging.getLogger(__name__)

VENDOR_ID = 0x057E
PRODUCT_ID = 0x3000
RETRY_INTERVAL = 1.0

class TransportError(IOError):
    """A bulk transfer failed, usually because the device went away"""

class EndpointNotFound(IOError):
    """The device is attached but lacks a required bulk endpoint"""

class Transport:
    """Blocking byte transport. A timeout of 0 blocks indefinitely."""
    def read(self, size, timeout=0):
        raise NotImplementedError
    def write(self, data, timeout=0):
        raise NotImplementedError
    def close(self):
        pass

def _direction_matcher(direction):
    def match(ep):
        return usb.util.endpoint_direction(ep.bEndpointAddress) == direction
    return match

class UsbTransport(Transport):
    capture = None
    """Text file object to which every transfer is appended as a line
       reading 'i <hex>' (from the device) or 'o <hex>' (to the device),
       the input format of dbibackend.dissect."""

    def __init__(self, dev, ep_in, ep_out):
        self.dev, self.ep_in, self.ep_out = dev, ep_in, ep_out

    def _record(self, direction, data):
        if self.capture is not None:
            self.capture.write('%s %s\n' % (direction, bytes(data).hex()))

    @staticmethod
    def connect(vendor, product):
        """Open the first device matching vendor and product, using the
           bulk endpoints of its first interface. Returns None if no such
           device is attached."""
        dev = usb.core.find(idVendor=vendor, idProduct=product)
        if dev is None:
            return None
        try:
            dev.set_configuration()
            intf = dev.get_active_configuration()[(0, 0)]
        except usb.core.USBError as err:
            raise TransportError('could not configure device %04x:%04x: %s' % (
                vendor, product, err)) from err
        ep_out = usb.util.find_descriptor(intf, custom_match=_direction_matcher(usb.util.ENDPOINT_OUT))
        ep_in = usb.util.find_descriptor(intf, custom_match=_direction_matcher(usb.util.ENDPOINT_IN))
        if ep_out is None:
            raise EndpointNotFound('device %04x:%04x output endpoint not found' % (vendor, product))
        if ep_in is None:
            raise EndpointNotFound('device %04x:%04x input endpoint not found' % (vendor, product))
        logger.info('USB device %04x:%04x connected' % (vendor, product))
        return UsbTransport(dev, ep_in, ep_out)

    def read(self, size, timeout=0):
        try:
            data = bytes(self.ep_in.read(size, timeout))
        except usb.core.USBError as err:
            raise TransportError('read failed: %s' % err) from err
        self._record('i', data)
        return data

    def write(self, data, timeout=0):
        try:
            self.ep_out.write(data, timeout)
        except usb.core.USBError as err:
            raise TransportError('write failed: %s' % err) from err
        self._record('o', data)

    def close(self):
        usb.util.dispose_resources(self.dev)

def open_dev(vendor=VENDOR_ID, product=PRODUCT_ID, retry_interval=RETRY_INTERVAL,
             connect=UsbTransport.connect, sleep=time.sleep):
    """Wait a device to be attached and open it"""
    logger.debug('opening device vendor=%x, product=%x' % (vendor, product))
    while True:
        try:
            transport = connect(vendor, product)
        except TransportError as err:
            logger.warning(str(err))
            transport = None
        if transport is not None:
            return transport
        logger.info('Waiting for device %04x:%04x' % (vendor, product))
        sleep(retry_interval)
