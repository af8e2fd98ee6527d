# Part of DynamicProxy, see License file for full copyright and licensing details.

import configparser
import logging
import optparse
import os

from os.path import expandvars, expanduser, abspath

from .. import release

_logger = logging.getLogger(__name__)

LOG_LEVELS = ['info', 'debug', 'debug_calls', 'warn', 'error', 'critical']


class MyOption(optparse.Option, object):
    """ optparse Option with two additional attributes.

    The list of command line options (getopt.Option) is used to create the
    list of the configuration file options. When reading the file, and then
    reading the command line arguments, we don't want optparse.parse results
    to override the configuration file values. But if we provide default
    values to optparse, optparse will return them and we can't know if they
    were really provided by the user or not. A solution is to not use
    optparse's default attribute, but use a custom one (that will be copied
    to create the default values of the configuration file).

    """
    def __init__(self, *opt, **attrs):
        self.my_default = attrs.pop('my_default', None)
        super(MyOption, self).__init__(*opt, **attrs)


class configmanager(object):
    def __init__(self, fname=None):
        """Constructor.

        :param fname: a shortcut allowing to instantiate :class:`configmanager`
                      from Python code without resorting to env variable
        """
        self.options = {}
        self.config_file = fname
        self.rcfile = None

        version = "%s %s" % (release.description, release.version)
        self.parser = parser = optparse.OptionParser(version=version, option_class=MyOption)

        parser.add_option("-c", "--config", dest="config",
                          help="specify alternate config file")

        group = optparse.OptionGroup(parser, "Proxy synthesis")
        group.add_option("--cache-size", dest="proxy_cache_size", my_default=128, type="int",
                         help="number of synthesized proxy types kept in memory, 0 disables the cache")
        parser.add_option_group(group)

        group = optparse.OptionGroup(parser, "Logging Configuration")
        group.add_option("--log-handler", action="append", my_default=[], metavar="PREFIX:LEVEL",
                         help='setup a handler at LEVEL for a given PREFIX. An empty PREFIX indicates the root logger. '
                              'This option can be repeated. Example: "dynamicproxy.proxy:DEBUG"')
        group.add_option("--log-level", dest="log_level", type="choice", choices=LOG_LEVELS, my_default='info',
                         help="specify the level of the logging. Accepted values: %s." % (LOG_LEVELS,))
        parser.add_option_group(group)

        # Copy all optparse options (i.e. MyOption) into self.options.
        self.casts = {}
        for group in [parser] + parser.option_groups:
            for option in group.option_list:
                if option.dest not in ('config', 'help', 'version', None):
                    self.options[option.dest] = option.my_default
                    self.casts[option.dest] = option

        self._parse_config()

    def parse_config(self, args: list[str] | None = None, *, setup_logging: bool = False) -> list[str]:
        """ Parse the configuration file (if any) and the cli arguments.

        Returns the positional arguments left once the options are consumed.

        Typical usage of this function:

            dynamicproxy.tools.config.parse_config(sys.argv[1:], setup_logging=True)
        """
        args = self._parse_config(args)
        if setup_logging:
            from .. import netsvc  # noqa: PLC0415
            netsvc.init_logger()
        return args

    def _parse_config(self, args=None):
        if args is None:
            args = []
        opt, args = self.parser.parse_args(args)

        rcfile = opt.config or os.environ.get('DYNAMICPROXY_RC') or self.config_file
        self.rcfile = rcfile and abspath(expanduser(expandvars(rcfile)))
        self.load()

        # command line options win over the configuration file
        for dest in self.casts:
            value = getattr(opt, dest, None)
            if value is not None:
                self.options[dest] = value
        return args

    def load(self):
        """ Load the ``[options]`` section of the configuration file, if any. """
        if not self.rcfile:
            return
        parser = configparser.RawConfigParser()
        try:
            with open(self.rcfile, encoding='utf-8') as rcfile:
                parser.read_file(rcfile)
        except OSError:
            _logger.warning("could not read config file %s", self.rcfile)
            return
        if not parser.has_section('options'):
            return
        for name, value in parser.items('options'):
            self.options[name] = self._cast(name, value)

    def _cast(self, name, value):
        option = self.casts.get(name)
        if option is None or not isinstance(value, str):
            return value
        if option.type == 'int':
            return int(value)
        if option.action == 'append':
            return [item.strip() for item in value.split(',') if item.strip()]
        return value

    def get(self, key, default=None):
        return self.options.get(key, default)

    def __setitem__(self, key, value):
        self.options[key] = self._cast(key, value)

    def __getitem__(self, key):
        return self.options[key]

    def __contains__(self, key):
        return key in self.options


config = configmanager()
