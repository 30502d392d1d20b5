import os, sys, argparse, logging
from . import transport
from .dispatcher import CommandDispatcher
from .catalog import CatalogLookupError
logger = logging.getLogger(__name__)

def _directory(path):
    if not os.path.isdir(path):
        raise argparse.ArgumentTypeError('%s is not a directory' % path)
    return path

def _int(value):
    return int(value, 0)

def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog='dbi-backend',
        description='Serve title packages to a console running DBI over USB.')
    parser.add_argument('directory', type=_directory,
                        help='directory searched recursively for .nsp, .nsz and .xci files')
    parser.add_argument('--vendor', type=_int, default=transport.VENDOR_ID,
                        help='USB vendor id (default: 0x%04x)' % transport.VENDOR_ID)
    parser.add_argument('--product', type=_int, default=transport.PRODUCT_ID,
                        help='USB product id (default: 0x%04x)' % transport.PRODUCT_ID)
    parser.add_argument('--retry-interval', type=float, default=transport.RETRY_INTERVAL,
                        help='seconds between attempts to find the device')
    parser.add_argument('--no-strict-lookup', dest='strict_lookup', action='store_false',
                        help='use unknown title names as paths instead of failing')
    parser.add_argument('--capture', metavar='FILE',
                        help='append every USB transfer to FILE for devtools/dissec.py')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='log every frame')
    return parser.parse_args(argv)

def serve(args, capture=None):
    """Connect to the device and serve commands until it exits, reconnecting
       whenever the connection is lost. Returns the process exit code."""
    while True:
        try:
            dev = transport.open_dev(args.vendor, args.product, args.retry_interval)
        except transport.EndpointNotFound as err:
            logger.error(str(err))
            return 1
        if capture is not None:
            dev.capture = capture
        dispatcher = CommandDispatcher(dev, args.directory, args.strict_lookup)
        try:
            dispatcher.run()
            return 0
        except transport.TransportError as err:
            logger.error('Connection lost: %s' % err)
        except CatalogLookupError as err:
            logger.error('Title %s not found in catalog' % err)
            return 1
        except (IOError, ValueError) as err:
            logger.error(str(err))
            return 1
        finally:
            dev.close()

def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s %(name)s %(levelname)s: %(message)s')
    if args.capture is None:
        return serve(args)
    with open(args.capture, 'a') as capture:
        return serve(args, capture)
