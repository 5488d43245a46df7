"""Logic for setting up the DataHive service."""

from configparser import RawConfigParser
from logging import getLogger, getLevelName, Formatter, StreamHandler, INFO
from logging.handlers import WatchedFileHandler
import os
import sys

from storm.zope.interfaces import IZStorm
from storm.zope.zstorm import ZStorm
from twisted.internet import reactor
from twisted.python.threadpool import ThreadPool
from zope.component import getUtility, provideUtility


__all__ = ['getConfig', 'setConfig', 'setupApplication']


_config = None


def getConfig():
    """Get the configuration.

    @return: A configuration instance or C{None} if one hasn't been
        registered.
    """
    return _config


def setConfig(config):
    """Set the configuration.

    @param: A configuration instance.
    """
    global _config
    _config = config


def getDevelopmentMode():
    """Determine if the service is running in development mode.

    @return: C{True} if development mode is enabled, otherwise C{False}.
    """
    return getConfig().getboolean('service', 'development')


def setupApplication(path=None, development=None):
    """Configure logging and the main store and get a ready-to-use L{Facade}.

    @param path: Optionally, the location of the configuration file to load.
    @param development: Optionally, a boolean flag to indicate whether
        development mode should be enabled.
    @return: A L{Facade} instance.
    """
    config = setupConfig(path, development)
    setConfig(config)
    level = getLevelName(config.get('logging', 'level').upper())
    logPath = config.get('logging', 'path')
    if logPath:
        setupLogging(path=logPath, level=level)
    else:
        setupLogging(stream=sys.stderr, level=level)
    setupStore(config)
    return setupFacade(config)


def setupConfig(path=None, development=None):
    """Load a configuration and specialize it for the service instance.

    The following fields are expected to be in the configuration file in the
    C{service} section:

      * max-threads - The maximum number of database threads to use.

    A special C{development} field will be added to the C{service} section of
    the configuration.  By default, it has a C{False} string value.

    The following fields are expected to be in the configuration file in the
    C{store} section:

      * main-uri - The Storm-compatible URI to the main database.

    The following fields are expected to be in the configuration file in the
    C{constraints} section:

      * date-formats - The C{strptime} formats dates in view configurations
        are parsed with, separated by commas.

    The following fields are expected to be in the configuration file in the
    C{logging} section:

      * level - The name of the log level, such as C{INFO}.
      * path - The file to write logs to.  Logs are written to C{stderr} if
        the value is empty.

    Field values are always strings.

    @param path: Optionally, the location of the configuration file to load.
        Default values will be used if a path isn't provided.
    @param development: Optionally, a boolean flag to indicate whether
        development mode should be enabled.
    @return: A configuration instance.
    """
    config = RawConfigParser()
    if path:
        with open(path, 'r') as configFile:
            config.read_file(configFile)
    else:
        config.add_section('service')
        config.set('service', 'max-threads', '1')

        config.add_section('store')
        config.set('store', 'main-uri',
                   'sqlite:///' + getBranchPath('var/datahive.db'))

        config.add_section('constraints')
        config.set('constraints', 'date-formats',
                   '%Y-%m-%dT%H:%M:%S.%f%z, %Y-%m-%dT%H:%M:%S%z')

        config.add_section('logging')
        config.set('logging', 'level', 'INFO')
        config.set('logging', 'path', '')

    if development is None:
        development = False
    config.set('service', 'development', str(development))
    return config


def getBranchPath(path):
    """Get a path rooted in the current branch.

    @param path: A path relative to the current branch.
    @return: A fully-qualified path.
    """
    currentPath = os.path.dirname(__file__)
    fullyQualifiedPath = os.path.join(currentPath, '..', path)
    return os.path.abspath(fullyQualifiedPath)


def setupLogging(stream=None, path=None, level=None, format=None):
    """Setup logging.

    Either a stream or a path can be provided.  When a path is provided a log
    handler that works correctly with C{logrotate} is used.  Generally
    speaking, C{stream} should only be used for non-file streams that don't
    need log rotation.

    @param stream: The stream to write output to.
    @param path: The path to write output to.
    @param level: Optionally, the log level to set on the logger.  Default is
        C{logging.INFO}.
    @param format: A format string for the logger.
    @raise RuntimeError: Raised if neither C{stream} nor C{path} are provided,
        or if both are provided.
    @return: The configured logger, ready to use.
    """
    if (not stream and not path) or (stream and path):
        raise RuntimeError('A stream or path must be provided.')
    if stream:
        handler = StreamHandler(stream)
    else:
        handler = WatchedFileHandler(path)

    if format is None:
        format = '%(asctime)s %(levelname)8s  %(message)s'

    formatter = Formatter(format)
    handler.setFormatter(formatter)
    log = getLogger()
    log.addHandler(handler)
    log.propagate = False
    log.setLevel(level or INFO)
    return log


def setupStore(config):
    """Setup the main store.

    A C{ZStorm} instance is configured and registered as a global utility.

    @param config: A configuration instance.
    @return: A configured C{ZStorm} instance.
    """
    zstorm = ZStorm()
    provideUtility(zstorm)
    uri = config.get('store', 'main-uri')
    zstorm.set_default_uri('main', uri)
    return zstorm


def upgradeStore():
    """Create the main database schema or apply outstanding patches to it.
    """
    from datahive.schema.main import createSchema

    zstorm = getUtility(IZStorm)
    store = zstorm.get('main')
    createSchema().upgrade(store)


def setupFacade(config):
    """Get the L{Facade} instance to use in the service."""
    from datahive.api.facade import Facade
    from datahive.util.transact import Transact

    maxThreads = int(config.get('service', 'max-threads'))
    threadpool = ThreadPool(minthreads=0, maxthreads=maxThreads)
    reactor.callWhenRunning(threadpool.start)
    reactor.addSystemEventTrigger('during', 'shutdown', threadpool.stop)
    transact = Transact(threadpool)
    return Facade(transact)
