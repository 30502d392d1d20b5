import os, logging
logger = logging.getLogger(__name__)

# Extensions of installable packages, compared in lowercase
TITLE_EXTENSIONS = ('.nsp', '.nsz', '.xci')

class CatalogLookupError(KeyError):
    """A title name was requested which is not present in the catalog"""

class NoCatalog:
    """Catalog slot of a session which has not listed any titles yet.
       Requested names are used verbatim as paths."""
    state = 'none'
    def resolve(self, name):
        return name
    def __repr__(self):
        return 'NoCatalog'

NO_CATALOG = NoCatalog()

class TitleCatalog(dict):
    """Map from a title file base name to its absolute path"""

    def __init__(self, titles=(), strict=True):
        dict.__init__(self, titles)
        self.strict = strict

    @staticmethod
    def scan(directory, strict=True):
        """Walk directory recursively and collect every title package.
           Titles sharing a base name overwrite each other, the last one
           found wins. Keys keep the filesystem traversal order."""
        self = TitleCatalog(strict=strict)
        for root, dirs, files in os.walk(directory):
            for filename in files:
                path = os.path.abspath(os.path.join(root, filename))
                if not os.path.isfile(path):
                    continue
                if os.path.splitext(filename)[1].lower() not in TITLE_EXTENSIONS:
                    continue
                logger.info(path)
                self[filename] = path
        return self

    @property
    def state(self):
        return 'populated' if self else 'empty'

    def name_list(self):
        """Return the newline separated title names sent as a LIST response"""
        return '\n'.join(self.keys()).encode('utf-8')

    def resolve(self, name):
        """Translate a title name requested by the device into a path.
           An empty catalog passes the name through. Names missing from a
           populated catalog raise CatalogLookupError, unless the catalog
           is not strict, in which case the name is used verbatim."""
        if not self:
            return name
        try:
            return self[name]
        except KeyError:
            if self.strict:
                raise CatalogLookupError(name)
            logger.warning('%r not in catalog, using it as a path' % name)
            return name
